import json
from pathlib import Path

from app.schemas.emergency import EvacuationCenterCreate
from app.services import evacuation_service as svc

SEED_FILE = Path(__file__).resolve().parents[1] / "scripts" / "data" / "evacuation_centers.json"


def _center(client, headers, name, barangay, capacity, **extra):
    r = client.post(
        "/api/v1/evacuation-centers",
        json={"name": name, "barangay": barangay, "capacity": capacity, **extra},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_public_directory_with_totals(client, editor_headers):
    _center(client, editor_headers, "West Coast College", "Poblacion", 250, latitude=13.037648, longitude=123.450466)
    _center(client, editor_headers, "Sukip Barangay Hall", "Sukip", 45, facilities=[" Hall ", "", "Office"])
    _center(client, editor_headers, "Closed Gym", "Agol", 500, is_active=False)

    body = client.get("/delivery/v1/evacuation-centers").json()
    assert body["total_centers"] == 2
    assert body["total_capacity"] == 295
    assert body["barangays"] == ["Poblacion", "Sukip"]
    assert [c["name"] for c in body["items"]] == ["Sukip Barangay Hall", "West Coast College"]
    assert body["items"][0]["facilities"] == ["Hall", "Office"]
    assert body["items"][0]["map_url"] is None
    assert body["items"][1]["map_url"] == "https://www.google.com/maps?q=13.037648,123.450466"


def test_barangay_filter_and_sorting(client, editor_headers):
    _center(client, editor_headers, "Sukip Elementary School", "Sukip", 80)
    _center(client, editor_headers, "Sukip Day Care Center", "Sukip", 20)
    _center(client, editor_headers, "Municipal Multi-Purpose Hall", "Poblacion", 120)

    sukip = client.get("/delivery/v1/evacuation-centers?barangay=Sukip").json()
    assert sukip["total_centers"] == 2
    assert sukip["total_capacity"] == 100
    assert sukip["barangays"] == ["Poblacion", "Sukip"]

    by_capacity = client.get("/delivery/v1/evacuation-centers?sort=capacity").json()
    assert [c["capacity"] for c in by_capacity["items"]] == [120, 80, 20]

    found = client.get("/delivery/v1/evacuation-centers?q=day care").json()
    assert [c["name"] for c in found["items"]] == ["Sukip Day Care Center"]

    assert client.get("/delivery/v1/evacuation-centers?sort=size").status_code == 422


def test_admin_crud(client, editor_headers):
    c = _center(client, editor_headers, "Agol Elementary School", "Agol", 100)

    r = client.patch(f"/api/v1/evacuation-centers/{c['id']}", json={"capacity": 110, "contact": None}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["capacity"] == 110

    assert client.patch(
        f"/api/v1/evacuation-centers/{c['id']}", json={"capacity": -1}, headers=editor_headers
    ).status_code == 422

    assert client.delete(f"/api/v1/evacuation-centers/{c['id']}", headers=editor_headers).status_code == 204
    assert client.get(f"/api/v1/evacuation-centers/{c['id']}", headers=editor_headers).status_code == 404


def test_admin_routes_require_staff(client):
    assert client.get("/api/v1/evacuation-centers").status_code == 401


def test_seed_file_loads(db):
    rows = json.loads(SEED_FILE.read_text(encoding="utf-8"))
    for row in rows:
        svc.create_center(db, EvacuationCenterCreate(**row))
    db.flush()

    out = svc.directory(db)
    assert out.total_centers == 36
    assert out.total_capacity == 3755
    assert len(out.barangays) == 23

    sukip = svc.directory(db, barangay="Sukip")
    assert sukip.total_capacity == 145
