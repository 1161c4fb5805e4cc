from app.core.settings import settings
from app.middleware import ratelimit
from app.schemas.content import PageCreate
from app.services import content_service as svc


def test_section_data_over_limit_is_413(client, db, editor_headers, monkeypatch):
    page = svc.create_page(db, PageCreate(title="Big", content="x"))
    db.commit()
    monkeypatch.setattr(settings, "MAX_SECTION_DATA_KB", 1)

    big = {"stats": [{"value": i, "label": "x" * 50} for i in range(40)]}
    r = client.post(f"/api/v1/pages/{page.id}/sections", json={"type": "stats", "data": big}, headers=editor_headers)
    assert r.status_code == 413
    assert "Payload too large" in r.json()["detail"]


def test_check_data_endpoint(client, editor_headers):
    ok = client.post(
        "/api/v1/pages/sections/check-data",
        json={"type": "stats", "text": '{"stats": [{"value": 1, "label": "Shelters"}]}'},
        headers=editor_headers,
    )
    assert ok.status_code == 200
    assert ok.json()["valid"] is True

    bad = client.post(
        "/api/v1/pages/sections/check-data",
        json={"type": "stats", "text": '{"stats": '},
        headers=editor_headers,
    )
    assert bad.status_code == 422
    assert bad.json()["error"] == "SchemaError"


def test_public_form_is_rate_limited(client, monkeypatch):
    monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
    monkeypatch.setattr(settings, "RATELIMIT_PUBLIC_FORM_PER_MIN", 2)
    form = {"full_name": "A", "email": "a@example.org", "phone": "1", "barangay": "Centro"}

    codes = [client.post("/delivery/v1/volunteers", json=form).status_code for _ in range(3)]
    assert codes[-1] == 429
    assert codes.count(201) <= 2


def test_reads_are_not_limited(client, monkeypatch):
    monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
    monkeypatch.setattr(settings, "RATELIMIT_WRITE_PER_MIN", 1)
    for _ in range(3):
        assert client.get("/delivery/v1/pages").status_code == 200


def test_limiter_forgets_finished_windows(monkeypatch):
    clock = {"now": 600}
    monkeypatch.setattr(ratelimit.time, "time", lambda: clock["now"])
    limiter = ratelimit.RateLimitMiddleware(app=None)

    assert limiter._hit("dl:10.0.0.1", 1) is True
    assert limiter._hit("dl:10.0.0.1", 1) is False
    assert limiter._hit("dl:10.0.0.2", 1) is True

    clock["now"] = 661
    assert limiter._hit("dl:10.0.0.3", 1) is True
    assert set(limiter._store) == {"dl:10.0.0.3"}
    assert limiter._hit("dl:10.0.0.1", 1) is True
