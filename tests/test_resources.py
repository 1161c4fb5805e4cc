import httpx
import pytest

from app.core.errors import RemoteUnavailableError, ValidationError
from app.models.analytics import AnalyticsEvent, AnalyticsEventType
from app.models.resource import Resource
from app.schemas.resource import ResourceCreate
from app.services import resource_service as svc


def _form(**kw):
    data = {
        "title": "Family Evacuation Guide",
        "description": "Step by step guide for preparing a household evacuation plan before typhoon season.",
        "file_url": "https://files.example.org/docs/evacuation-guide.pdf",
        "file_type": "pdf",
        "file_size": 1024,
        "category": "guide",
        "subcategory": "households",
        "tags": ["typhoon", "evacuation"],
        "status": "published",
    }
    data.update(kw)
    return data


def _mk(db, **kw):
    res, _ = svc.create_resource(db, ResourceCreate(**_form(**kw)))
    db.commit()
    return res


# ---------- Validation ----------
def test_clean_form_has_no_warnings():
    errors, warnings = svc.validate_resource_form(svc.sanitize_resource_form(_form()))
    assert errors == {}
    assert warnings == []


def test_warnings_are_advisory():
    form = svc.sanitize_resource_form(_form(
        tags=[],
        file_url="http://files.example.org/a.pdf",
        description="Short but valid.",
        subcategory="  ",
        file_size=60 * 1024 * 1024,
    ))
    errors, warnings = svc.validate_resource_form(form)
    assert errors == {}
    assert "Consider adding tags to improve discoverability" in warnings
    assert "Consider using HTTPS URLs for better security" in warnings
    assert "Consider adding a more detailed description" in warnings
    assert "Consider adding a subcategory for better organization" in warnings
    assert "Large file size (over 50MB) may affect download experience" in warnings


def test_too_many_tags_warns():
    _, warnings = svc.validate_resource_form(svc.sanitize_resource_form(_form(tags=[f"t{i}" for i in range(11)])))
    assert warnings == ["Too many tags may reduce effectiveness (max 10 recommended)"]


def test_errors_block_save(db):
    with pytest.raises(ValidationError) as ei:
        svc.create_resource(db, ResourceCreate(**_form(title="ab", file_url="not a url", category="poster")))
    assert ei.value.errors["title"] == "Title must be at least 3 characters long"
    assert ei.value.errors["file_url"] == "Please enter a valid URL"
    assert "category" in ei.value.errors
    assert db.query(Resource).count() == 0


def test_create_endpoint_returns_warnings(client, editor_headers):
    r = client.post("/api/v1/resources", json=_form(tags=[]), headers=editor_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["resource"]["download_count"] == 0
    assert body["warnings"] == ["Consider adding tags to improve discoverability"]


def test_invalid_create_is_422(client, editor_headers):
    r = client.post("/api/v1/resources", json=_form(description="short"), headers=editor_headers)
    assert r.status_code == 422
    assert r.json()["errors"]["description"] == "Description must be at least 10 characters long"


def test_bulk_publish(client, db, editor_headers):
    a = _mk(db, status="draft")
    b = _mk(db, status="draft", title="Barangay Hazard Map")
    r = client.post("/api/v1/resources/bulk", json={"ids": [a.id, b.id], "action": "publish"}, headers=editor_headers)
    assert r.json() == {"action": "publish", "count": 2}
    db.expire_all()
    assert {x.status for x in db.query(Resource).all()} == {"published"}


# ---------- Download ----------
def test_download_success_counts_once(client, db, mock_http):
    res = _mk(db)
    seen = mock_http(lambda req: httpx.Response(200, headers={"content-length": "2048", "content-type": "application/pdf"}))

    r = client.post(f"/delivery/v1/resources/{res.id}/download")
    assert r.status_code == 200
    body = r.json()
    assert body["download_count"] == 1
    assert body["filename"] == "evacuation-guide.pdf"
    assert body["size"] == 2048
    assert body["url"] == res.file_url
    assert seen[0].method == "HEAD"

    db.expire_all()
    assert db.get(Resource, res.id).download_count == 1
    assert db.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == AnalyticsEventType.RESOURCE_DOWNLOAD).count() == 1


def test_two_downloads_count_two(client, db, mock_http):
    res = _mk(db)
    mock_http(lambda req: httpx.Response(200, headers={"content-type": "application/pdf"}))

    assert client.post(f"/delivery/v1/resources/{res.id}/download").json()["download_count"] == 1
    assert client.post(f"/delivery/v1/resources/{res.id}/download").json()["download_count"] == 2

    db.expire_all()
    assert db.get(Resource, res.id).download_count == 2
    assert db.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == AnalyticsEventType.RESOURCE_DOWNLOAD).count() == 2


def test_download_failure_is_502_with_fallback(client, db, mock_http):
    res = _mk(db)
    mock_http(lambda req: httpx.Response(404))

    r = client.post(f"/delivery/v1/resources/{res.id}/download")
    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "RemoteUnavailableError"
    assert body["fallback"] == {"action": "open_in_new_tab", "url": res.file_url}

    db.expire_all()
    assert db.get(Resource, res.id).download_count == 0
    assert db.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == AnalyticsEventType.DOWNLOAD_FAILED).count() == 1


def test_download_network_error(db):
    res = _mk(db)

    def boom(request):
        raise httpx.ConnectError("refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(boom)) as c:
        with pytest.raises(RemoteUnavailableError) as ei:
            svc.download(db, res.id, client=c)
    assert ei.value.fallback_url == res.file_url


def test_draft_resource_not_downloadable(client, db, mock_http):
    res = _mk(db, status="draft")
    mock_http(lambda req: httpx.Response(200))
    assert client.post(f"/delivery/v1/resources/{res.id}/download").status_code == 404


def test_filename_falls_back_to_title(db):
    res = _mk(db, file_url="https://drive.example.org/file/d/abc123/view", title="Flood Map 2024")
    assert svc._filename_for(res) == "flood-map-2024"


def test_public_list_only_published(client, db):
    _mk(db)
    _mk(db, status="draft", title="Internal draft")
    body = client.get("/delivery/v1/resources").json()
    assert [r["title"] for r in body] == ["Family Evacuation Guide"]
