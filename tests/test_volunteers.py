from app.models.analytics import AnalyticsEvent, AnalyticsEventType

FORM = {
    "full_name": "Juan Dela Cruz",
    "email": "Juan@Example.org",
    "phone": "0917 000 0000",
    "barangay": "Malidong",
    "skills": ["first aid", " ", "radio"],
    "availability": "weekends",
}


def test_submit_application(client, db):
    r = client.post("/delivery/v1/volunteers", json=FORM)
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "pending"
    assert body["email"] == "juan@example.org"
    assert body["skills"] == ["first aid", "radio"]
    assert db.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == AnalyticsEventType.VOLUNTEER_SIGNUP).count() == 1


def test_blank_barangay_rejected(client):
    r = client.post("/delivery/v1/volunteers", json={**FORM, "barangay": "   "})
    assert r.status_code == 422


def test_review_flow(client, editor_headers):
    app_id = client.post("/delivery/v1/volunteers", json=FORM).json()["id"]

    listed = client.get("/api/v1/volunteers?status=pending", headers=editor_headers).json()
    assert [a["id"] for a in listed] == [app_id]

    r = client.post(f"/api/v1/volunteers/{app_id}/status", json={"status": "approved"}, headers=editor_headers)
    assert r.json()["status"] == "approved"
    assert client.get("/api/v1/volunteers?status=pending", headers=editor_headers).json() == []


def test_unknown_application_is_404(client, editor_headers):
    assert client.get("/api/v1/volunteers/42", headers=editor_headers).status_code == 404
