from flask import Blueprint, request, jsonify, current_app

from randifs.kernel.errors import ConfigurationError, SearchExhausted
from randifs.kernel.ifs_kernel import IFSKernel, json_point
from randifs.kernel.presets import PRESETS, preset_names
from randifs.kernel.random_ifs import DEFAULT_NUM_POINTS

bp = Blueprint("api", __name__, url_prefix="/")

# live orbit sessions
kernel = IFSKernel()

def _error(msg, status):
    return jsonify({"ok": False, "error": str(msg)}), status

def _session_or_404(sid):
    if sid not in kernel.sessions:
        return None, _error(f"unknown orbit {sid}", 404)
    return kernel.get(sid), None

# ---------- health / version ----------
@bp.route("/health")
def health():
    return jsonify({"ok": True})

@bp.route("/version")
def version():
    return jsonify({"name": "RandomIFS", "api": 1})

# ---------- presets ----------
@bp.route("/presets")
def presets():
    return jsonify({"presets": {name: PRESETS[name] for name in preset_names()}})

# ---------- orbits ----------
@bp.route("/api/orbits", methods=["POST"])
def create_orbit():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return _error("expected a JSON object", 400)

    start = data.get("start")
    if isinstance(start, dict):
        start = (start.get("x"), start.get("y"))

    num_points = data.get("num_points", DEFAULT_NUM_POINTS)
    max_points = current_app.config["RANDIFS_MAX_POINTS"]
    if isinstance(num_points, int) and num_points > max_points:
        return _error(f"num_points {num_points} exceeds limit {max_points}", 400)

    kernel.max_sessions = current_app.config["RANDIFS_MAX_SESSIONS"]
    try:
        sid = kernel.create(
            transforms=data.get("transforms"),
            window=data.get("window"),
            width=data.get("width"),
            height=data.get("height"),
            preset=data.get("preset"),
            num_points=num_points,
            start=start,
            seed=data.get("seed"),
            max_rounds=current_app.config["RANDIFS_MAX_ROUNDS"],
        )
    except ConfigurationError as e:
        current_app.logger.info("rejected orbit config: %s", e)
        return _error(e, 400)
    except SearchExhausted as e:
        current_app.logger.warning("fixed point search failed: %s", e)
        return _error(e, 422)

    body = kernel.describe(sid)
    body["ok"] = True
    return jsonify(body), 201

@bp.route("/api/orbits", methods=["GET"])
def list_orbits():
    return jsonify(kernel.snapshot())

@bp.route("/api/orbits/<sid>", methods=["GET"])
def get_orbit(sid):
    _, err = _session_or_404(sid)
    if err:
        return err
    return jsonify(kernel.describe(sid))

@bp.route("/api/orbits/<sid>/iterate", methods=["POST"])
def iterate_orbit(sid):
    orbit, err = _session_or_404(sid)
    if err:
        return err
    points = [dict(json_point(p), kind=kind.value) for p, kind in orbit.iterate()]
    return jsonify({
        "points": points,
        "iteration_count": orbit.iteration_count,
        "points_emitted": orbit.points_emitted,
        "cooldown_ms": orbit.calculate_cooldown(),
    })

@bp.route("/api/orbits/<sid>", methods=["DELETE"])
def drop_orbit(sid):
    _, err = _session_or_404(sid)
    if err:
        return err
    kernel.drop(sid)
    return jsonify({"ok": True})
