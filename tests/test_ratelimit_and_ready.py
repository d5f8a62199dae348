import pytest

from app import db
from app.config import settings
from factories import PASSWORD

@pytest.fixture()
def limited(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(settings, "rate_limit_auth_login_per_min", 3)

def test_login_is_rate_limited_per_account(client, owner, admin, limited):
    for _ in range(3):
        r = client.post("/auth/login", json={"email": owner.email, "password": "wrong"})
        assert r.status_code == 401

    # the right password does not help once the window is spent
    r = client.post("/auth/login", json={"email": owner.email, "password": PASSWORD})
    assert r.status_code == 429
    assert r.json()["detail"] == "rate_limited"

    # same email in another case counts against the same bucket
    r = client.post("/auth/login", json={"email": owner.email.upper(), "password": PASSWORD})
    assert r.status_code == 429

    # another account from the same client is unaffected
    r = client.post("/auth/login", json={"email": admin.email, "password": PASSWORD})
    assert r.status_code == 200

def test_limit_sets_window_ttl(client, owner, fake_redis, limited):
    client.post("/auth/login", json={"email": owner.email, "password": PASSWORD})
    keys = fake_redis.keys("rl:auth:login:*")
    assert len(keys) == 1
    assert 0 < fake_redis.ttl(keys[0]) <= 60

def test_limiter_disabled_never_counts(client, owner, fake_redis):
    for _ in range(5):
        client.post("/auth/login", json={"email": owner.email, "password": "wrong"})
    assert fake_redis.keys("rl:*") == []

def test_ready_ok(client, monkeypatch):
    monkeypatch.setattr(db, "db_ping", lambda: True)
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json() == {
        "status": "ok",
        "env": settings.app_env,
        "checks": {"db": True, "redis": True},
        "failing": [],
    }

def test_ready_reports_failing_dependencies(client, monkeypatch):
    monkeypatch.setattr(db, "db_ping", lambda: False)
    r = client.get("/ready")
    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "unready"
    assert body["checks"] == {"db": False, "redis": True}
    assert body["failing"] == ["db"]

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
