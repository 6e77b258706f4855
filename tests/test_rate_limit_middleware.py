import jobboard.main as main_mod
import jobboard.routers.auth as auth_mod


def test_auth_rate_limit_blocks_excess_requests(monkeypatch, anon_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 2)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    payload = {"email": "x@example.com", "password": "bad", "role": "employer"}
    r1 = anon_client.post("/auth/login", json=payload)
    r2 = anon_client.post("/auth/login", json=payload)
    r3 = anon_client.post("/auth/login", json=payload)

    assert r1.status_code == 401
    assert r2.status_code == 401
    assert r3.status_code == 429
    assert r3.json()["error"] == "Too many requests. Please retry shortly."
    assert int(r3.headers["Retry-After"]) >= 1


def test_rate_limit_is_per_path(monkeypatch, anon_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    anon_client.post("/auth/login", json={"email": "x@example.com", "password": "bad", "role": "employer"})
    resp = anon_client.post("/auth/signup", json={"email": "x@example.com", "password": "short", "role": "employer"})
    assert resp.status_code == 422


def test_zero_limit_disables_rate_limiting(monkeypatch, anon_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 0)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    payload = {"email": "x@example.com", "password": "bad", "role": "employer"}
    codes = {anon_client.post("/auth/login", json=payload).status_code for _ in range(5)}
    assert codes == {401}


def test_other_paths_are_not_limited(monkeypatch, anon_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    assert all(anon_client.get("/health/live").status_code == 200 for _ in range(3))
