from datetime import datetime, timedelta, timezone


def _iso(delta_hours):
    return (datetime.now(timezone.utc) + timedelta(hours=delta_hours)).isoformat()


# ---------- Emergency ----------
def test_active_alerts_most_severe_first(client, editor_headers):
    for title, severity, extra in (
        ("Low", "low", {}),
        ("Critical", "critical", {}),
        ("Expired", "critical", {"expires_at": _iso(-1)}),
        ("Off", "high", {"is_active": False}),
        ("Not on home", "high", {"show_on_homepage": False}),
    ):
        r = client.post(
            "/api/v1/alerts",
            json={"type": "typhoon", "severity": severity, "title": title, "message": "Stay alert", **extra},
            headers=editor_headers,
        )
        assert r.status_code == 201

    public = client.get("/delivery/v1/alerts").json()
    assert [a["title"] for a in public] == ["Critical", "Not on home", "Low"]
    home = client.get("/delivery/v1/alerts?homepage=true").json()
    assert [a["title"] for a in home] == ["Critical", "Low"]


def test_hotlines_directory(client, editor_headers):
    client.post("/api/v1/hotlines", json={"contact_name": "MDRRMO", "phone_number": "911", "display_order": 2}, headers=editor_headers)
    client.post("/api/v1/hotlines", json={"contact_name": "BFP", "phone_number": "160", "category": "fire", "display_order": 1}, headers=editor_headers)
    client.post("/api/v1/hotlines", json={"contact_name": "Old", "phone_number": "000", "is_active": False}, headers=editor_headers)

    names = [h["contact_name"] for h in client.get("/delivery/v1/hotlines").json()]
    assert names == ["BFP", "MDRRMO"]
    assert [h["contact_name"] for h in client.get("/delivery/v1/hotlines?category=fire").json()] == ["BFP"]


# ---------- Organization ----------
def test_organization_tree_and_cycles(client, editor_headers):
    mayor = client.post("/api/v1/organization/units", json={"name": "Municipal Mayor"}, headers=editor_headers).json()
    office = client.post(
        "/api/v1/organization/units", json={"name": "MDRRMO", "parent_id": mayor["id"]}, headers=editor_headers
    ).json()
    assert office["level"] == 1

    r = client.patch(f"/api/v1/organization/units/{mayor['id']}", json={"parent_id": office["id"]}, headers=editor_headers)
    assert r.status_code == 422

    tree = client.get("/delivery/v1/organization").json()
    assert tree[0]["name"] == "Municipal Mayor"
    assert tree[0]["children"][0]["name"] == "MDRRMO"

    client.delete(f"/api/v1/organization/units/{mayor['id']}", headers=editor_headers)
    tree = client.get("/delivery/v1/organization").json()
    assert [(n["name"], n["level"]) for n in tree] == [("MDRRMO", 0)]


def _levels(nodes, depth=0, out=None):
    out = [] if out is None else out
    for n in nodes:
        out.append((n["name"], n["level"], depth))
        _levels(n["children"], depth + 1, out)
    return out


def test_reparenting_updates_descendant_levels(client, editor_headers):
    def unit(name, parent=None):
        body = {"name": name} if parent is None else {"name": name, "parent_id": parent["id"]}
        return client.post("/api/v1/organization/units", json=body, headers=editor_headers).json()

    mayor = unit("Mayor")
    office = unit("MDRRMO", mayor)
    ops = unit("Operations", office)
    unit("Rescue", ops)

    r = client.patch(f"/api/v1/organization/units/{office['id']}", json={"parent_id": None}, headers=editor_headers)
    assert r.status_code == 200
    rows = _levels(client.get("/delivery/v1/organization").json())
    assert rows == [("Mayor", 0, 0), ("MDRRMO", 0, 0), ("Operations", 1, 1), ("Rescue", 2, 2)]

    client.patch(f"/api/v1/organization/units/{office['id']}", json={"parent_id": mayor["id"]}, headers=editor_headers)
    client.delete(f"/api/v1/organization/units/{mayor['id']}", headers=editor_headers)
    rows = _levels(client.get("/delivery/v1/organization").json())
    assert rows == [("MDRRMO", 0, 0), ("Operations", 1, 1), ("Rescue", 2, 2)]


def test_personnel_listing(client, editor_headers):
    client.post("/api/v1/personnel", json={"name": "Ana", "position": "Head", "order_index": 2}, headers=editor_headers)
    client.post("/api/v1/personnel", json={"name": "Ben", "position": "Officer", "order_index": 1}, headers=editor_headers)
    assert [p["name"] for p in client.get("/delivery/v1/personnel").json()] == ["Ben", "Ana"]


# ---------- Site ----------
def test_navigation_two_levels(client, editor_headers):
    top = client.post("/api/v1/navigation", json={"label": "About", "path": "/about"}, headers=editor_headers).json()
    child = client.post(
        "/api/v1/navigation", json={"label": "Team", "path": "/about/team", "parent_id": top["id"]}, headers=editor_headers
    ).json()
    nested = client.post(
        "/api/v1/navigation", json={"label": "Deep", "path": "/x", "parent_id": child["id"]}, headers=editor_headers
    )
    assert nested.status_code == 422

    menu = client.get("/delivery/v1/navigation").json()
    assert menu[0]["label"] == "About"
    assert [c["label"] for c in menu[0]["children"]] == ["Team"]


def test_item_with_children_cannot_become_a_submenu(client, editor_headers):
    def item(label, parent=None):
        body = {"label": label, "path": f"/{label.lower()}"}
        if parent:
            body["parent_id"] = parent["id"]
        return client.post("/api/v1/navigation", json=body, headers=editor_headers).json()

    top = item("Top")
    a = item("A")
    item("B", a)

    r = client.patch(f"/api/v1/navigation/{a['id']}", json={"parent_id": top["id"]}, headers=editor_headers)
    assert r.status_code == 422
    assert r.json()["errors"] == {"parent_id": "item has children"}

    menu = client.get("/delivery/v1/navigation").json()
    assert all(not c["children"] for n in menu for c in n["children"])
    assert [n["label"] for n in menu] == ["Top", "A"]


def test_settings_public_subset(client, admin_headers, editor_headers):
    client.put("/api/v1/settings/site_name", json={"value": "MDRRMO Pio Duran", "is_public": True}, headers=admin_headers)
    client.put("/api/v1/settings/smtp_host", json={"value": "mail.internal"}, headers=admin_headers)

    assert client.get("/delivery/v1/settings").json() == {"site_name": "MDRRMO Pio Duran"}
    assert client.get("/api/v1/settings", headers=editor_headers).status_code == 403


# ---------- Analytics ----------
def test_dashboard_counts(client, editor_headers):
    page = client.post(
        "/api/v1/pages", json={"title": "Home", "content": "<p>x</p>", "status": "published"}, headers=editor_headers
    ).json()
    client.get(f"/delivery/v1/pages/{page['slug']}")
    client.get(f"/delivery/v1/pages/{page['slug']}")

    dash = client.get("/api/v1/analytics/dashboard", headers=editor_headers).json()
    assert dash["totals"]["published_pages"] == 1
    assert dash["totals"]["page_views"] == 2
    assert dash["events_by_type"] == {"page_view": 2}
    assert dash["top_pages"][0]["slug"] == "home"
    assert sum(d["count"] for d in dash["daily_page_views"]) == 2
