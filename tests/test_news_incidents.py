import re
from datetime import date

from app.models.analytics import AnalyticsEvent, AnalyticsEventType
from app.models.incident import IncidentReport
from app.services import incident_service


# ---------- News ----------
def test_only_published_news_is_public(client, editor_headers):
    pub = client.post(
        "/api/v1/news",
        json={"title": "Typhoon preparedness drill", "excerpt": "Barangay-wide drill", "status": "published"},
        headers=editor_headers,
    ).json()
    draft = client.post("/api/v1/news", json={"title": "Upcoming seminar"}, headers=editor_headers).json()

    assert pub["published_on"] == date.today().isoformat()
    assert draft["published_on"] is None

    listing = client.get("/delivery/v1/news").json()
    assert listing["total"] == 1
    assert [n["title"] for n in listing["items"]] == ["Typhoon preparedness drill"]

    assert client.get(f"/delivery/v1/news/{pub['id']}").status_code == 200
    assert client.get(f"/delivery/v1/news/{draft['id']}").status_code == 404
    assert client.get("/api/v1/news", headers=editor_headers).json()["total"] == 2


def test_publishing_news_stamps_date_and_keeps_explicit_one(client, editor_headers):
    a = client.post("/api/v1/news", json={"title": "Relief operations"}, headers=editor_headers).json()
    r = client.patch(f"/api/v1/news/{a['id']}", json={"status": "published"}, headers=editor_headers)
    assert r.json()["published_on"] == date.today().isoformat()

    b = client.post(
        "/api/v1/news",
        json={"title": "Archive story", "status": "published", "published_on": "2024-11-02"},
        headers=editor_headers,
    ).json()
    assert b["published_on"] == "2024-11-02"

    titles = [n["title"] for n in client.get("/delivery/v1/news").json()["items"]]
    assert titles == ["Relief operations", "Archive story"]


def test_news_list_etag(client, editor_headers):
    client.post("/api/v1/news", json={"title": "Advisory", "status": "published"}, headers=editor_headers)
    first = client.get("/delivery/v1/news")
    etag = first.headers["etag"]
    assert client.get("/delivery/v1/news", headers={"If-None-Match": etag}).status_code == 304


# ---------- Incident reports ----------
def test_public_report_gets_reference_number(client, db):
    r = client.post(
        "/delivery/v1/incidents",
        json={
            "reporter_name": " Juan Dela Cruz ",
            "contact_number": "0917 123 4567",
            "location": "Barangay Sukip",
            "incident_type": "landslide",
            "description": "Road blocked near the school",
            "urgency": "HIGH",
        },
    )
    assert r.status_code == 201
    body = r.json()
    assert re.fullmatch(r"RD-\d{4}-\d{4}", body["reference_number"])
    assert body["status"] == "pending"

    row = db.query(IncidentReport).one()
    assert row.reporter_name == "Juan Dela Cruz"
    assert row.urgency == "high"
    assert db.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == AnalyticsEventType.INCIDENT_REPORTED).count() == 1

    status = client.get(f"/delivery/v1/incidents/{body['reference_number'].lower()}")
    assert status.json() == {"reference_number": body["reference_number"], "status": "pending"}


def test_blank_reporter_is_422(client):
    r = client.post("/delivery/v1/incidents", json={"reporter_name": "  ", "contact_number": "1"})
    assert r.status_code == 422


def test_unknown_reference_is_404(client):
    assert client.get("/delivery/v1/incidents/RD-2020-0001").status_code == 404


def test_staff_triage(client, editor_headers, admin_headers):
    ref = client.post(
        "/delivery/v1/incidents", json={"reporter_name": "Ana", "contact_number": "1", "urgency": "low"}
    ).json()["reference_number"]

    reports = client.get("/api/v1/incidents?status=pending", headers=editor_headers).json()
    assert [x["reference_number"] for x in reports] == [ref]

    r = client.patch(f"/api/v1/incidents/{reports[0]['id']}", json={"status": "in-progress"}, headers=editor_headers)
    assert r.json()["status"] == "in-progress"
    assert client.get(f"/delivery/v1/incidents/{ref}").json()["status"] == "in-progress"

    assert client.delete(f"/api/v1/incidents/{reports[0]['id']}", headers=editor_headers).status_code == 403
    assert client.delete(f"/api/v1/incidents/{reports[0]['id']}", headers=admin_headers).status_code == 204


def test_reference_numbers_skip_taken_values(db, monkeypatch):
    db.add(IncidentReport(reference_number="RD-2026-0007", reporter_name="A", contact_number="1"))
    db.flush()
    draws = iter([6, 6, 41])
    monkeypatch.setattr(incident_service.secrets, "randbelow", lambda n: next(draws))

    assert incident_service.new_reference_number(db, year=2026) == "RD-2026-0042"
