"""
RandomIFS: Flask entrypoint
"""

import sys
from flask import Flask

from randifs.api.routes import bp as api_bp
from randifs.kernel.fixed_point import DEFAULT_MAX_ROUNDS
from randifs.kernel.ifs_kernel import MAX_SESSIONS

def create_app(config=None):
    app = Flask(__name__)
    app.config.update(
        RANDIFS_MAX_POINTS=100000,
        RANDIFS_MAX_ROUNDS=DEFAULT_MAX_ROUNDS,
        RANDIFS_MAX_SESSIONS=MAX_SESSIONS,
    )
    # FLASK_RANDIFS_MAX_POINTS etc. in the environment override the defaults
    app.config.from_prefixed_env()
    if config:
        app.config.update(config)
    app.register_blueprint(api_bp)
    return app

app = create_app()

if __name__ == "__main__":
    port = 5000
    if "--port" in sys.argv:
        try:
            i = sys.argv.index("--port")
            port = int(sys.argv[i+1])
        except (IndexError, ValueError):
            pass
    print(f"[RandomIFS] running at http://0.0.0.0:{port}")
    app.run(host="0.0.0.0", port=port, debug=False)
