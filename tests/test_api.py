import pytest
from randifs.randifs_showtime import app
from randifs.api.routes import kernel

@pytest.fixture
def client():
    app.testing = True
    with app.test_client() as client:
        yield client
    kernel.clear()

def _create(client, **body):
    body.setdefault("width", 100)
    body.setdefault("height", 100)
    return client.post("/api/orbits", json=body)

def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"]

    r = client.get("/version")
    assert r.status_code == 200
    assert r.json["name"] == "RandomIFS"

def test_presets_listed(client):
    r = client.get("/presets")
    assert r.status_code == 200
    assert {"sierpinski", "carpet", "vicsek", "fern"} <= set(r.json["presets"])

def test_create_and_iterate(client):
    r = _create(client, preset="sierpinski", num_points=25, seed=42)
    assert r.status_code == 201
    sid = r.json["id"]
    assert r.json["phase"] == "running"
    assert r.json["iteration_count"] == 0

    r = client.post(f"/api/orbits/{sid}/iterate")
    assert r.status_code == 200
    pts = r.json["points"]
    assert len(pts) == 25
    assert [p["kind"] for p in pts[:10]] == ["highlight"] * 10
    assert {p["kind"] for p in pts[10:]} == {"normal"}
    assert r.json["iteration_count"] == 1
    assert r.json["cooldown_ms"] == 500

    r = client.get(f"/api/orbits/{sid}")
    assert r.json["points_emitted"] == 25

def test_create_from_rows_with_start(client):
    rows = [[0.5, 0, 0, 0.5, 0, 0, 0.5], [0.5, 0, 0, 0.5, 0.5, 0.5, 0.5]]
    r = _create(client, transforms=rows, window={"a1": 0, "b1": 1, "a2": 0, "b2": 1},
                start={"x": 0, "y": 0}, num_points=200, seed=1)
    assert r.status_code == 201
    assert r.json["current_point"] == {"x": 0.0, "y": 0.0}
    sid = r.json["id"]
    pts = client.post(f"/api/orbits/{sid}/iterate").json["points"]
    assert all(0 <= p["x"] < 100 and 0 <= p["y"] < 100 for p in pts)

def test_bad_config_is_400(client):
    r = _create(client, transforms=[[1, 0, 0, 1, 0, 0, 0.3]], window={"a1": 0, "b1": 1, "a2": 0, "b2": 1})
    assert r.status_code == 400
    assert not r.json["ok"]

    r = _create(client, preset="koch")
    assert r.status_code == 400

    r = _create(client, preset="sierpinski", width=0)
    assert r.status_code == 400

    r = client.post("/api/orbits", data="not json", content_type="application/json")
    assert r.status_code == 400

def test_num_points_limit(client):
    r = _create(client, preset="sierpinski", num_points=app.config["RANDIFS_MAX_POINTS"] + 1)
    assert r.status_code == 400

def test_exhausted_search_is_422(client):
    app.config["RANDIFS_MAX_ROUNDS"] = 2
    try:
        r = _create(client, transforms=[[1, 0, 0, 1, 0.5, 0.5, 1.0]],
                    window={"a1": 0, "b1": 1, "a2": 0, "b2": 1}, width=50, height=50)
    finally:
        app.config["RANDIFS_MAX_ROUNDS"] = 1000
    assert r.status_code == 422

def test_unknown_orbit_and_delete(client):
    assert client.get("/api/orbits/nope").status_code == 404
    assert client.post("/api/orbits/nope/iterate").status_code == 404

    sid = _create(client, preset="carpet", seed=3).json["id"]
    assert len(client.get("/api/orbits").json["sessions"]) == 1
    assert client.delete(f"/api/orbits/{sid}").status_code == 200
    assert client.get(f"/api/orbits/{sid}").status_code == 404

def test_bad_seed_is_400(client):
    r = _create(client, preset="sierpinski", seed=[1, 2])
    assert r.status_code == 400
    assert not r.json["ok"]

def test_diverging_orbit_stays_servable(client):
    r = _create(client, transforms=[[2, 0, 0, 2, 0, 0, 1.0]], window={"a1": 0, "b1": 1, "a2": 0, "b2": 1},
                start={"x": 1, "y": 1}, num_points=2000, seed=1)
    sid = r.json["id"]
    r = client.post(f"/api/orbits/{sid}/iterate")
    assert r.status_code == 200
    assert r.json["points"][-1]["x"] is None
    r = client.get(f"/api/orbits/{sid}")
    assert r.status_code == 200
    assert r.json["current_point"] == {"x": None, "y": None}

def test_session_cap(client):
    app.config["RANDIFS_MAX_SESSIONS"] = 2
    try:
        for seed in range(4):
            assert _create(client, preset="vicsek", start={"x": 0, "y": 0}, seed=seed).status_code == 201
    finally:
        app.config["RANDIFS_MAX_SESSIONS"] = 256
    assert len(client.get("/api/orbits").json["sessions"]) == 2
