from app.core.settings import settings


def test_ping(client):
    r = client.get(f"{settings.API_V1_STR}/health/ping")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["version"] == settings.APP_VERSION


def test_db_check(client):
    r = client.get(f"{settings.API_V1_STR}/health/db")
    assert r.status_code == 200
