import pytest

from app.core.errors import ConflictError, NotFoundError, SchemaError, ValidationError
from app.schemas.content import PageCreate, PageUpdate, SectionCreate, SectionUpdate
from app.services import content_service as svc
from app.services.delivery_service import render_page
from app.services.publish_service import transition_page_status
from app.services.registry_service import parse_section_data


def _mk_page(db, title="Disaster Preparedness", **kw):
    kw.setdefault("content", "<p>Be ready.</p>")
    page = svc.create_page(db, PageCreate(title=title, **kw))
    db.commit()
    return page


def _add(db, page, type_="content", **kw):
    s = svc.add_section(db, page.id, SectionCreate(type=type_, **kw))
    db.commit()
    return s


# ---------- Pages ----------
def test_create_page_derives_slug_and_starts_as_draft(db):
    page = _mk_page(db, "Typhoon Season 2024")
    assert page.slug == "typhoon-season-2024"
    assert page.status == "draft"
    assert page.published_at is None
    assert page.view_count == 0


def test_create_page_requires_title_and_content(db):
    with pytest.raises(ValidationError) as ei:
        svc.create_page(db, PageCreate(title="  ", content=""))
    assert set(ei.value.errors) == {"title", "content"}


def test_duplicate_slug_conflicts(db):
    _mk_page(db, "About Us")
    with pytest.raises(ConflictError):
        svc.create_page(db, PageCreate(title="Something", slug="about-us", content="x"))


def test_create_published_sets_published_at(db):
    page = _mk_page(db, "Hotlines", status="published")
    assert page.status == "published"
    assert page.published_at is not None


def test_published_slug_is_stable(db):
    page = _mk_page(db, "Evacuation Centers", status="published")
    with pytest.raises(ConflictError):
        svc.update_page(db, page.id, PageUpdate(slug="shelters"))

    transition_page_status(db, page, "draft")
    assert page.published_at is None
    svc.update_page(db, page.id, PageUpdate(slug="shelters"))
    assert page.slug == "shelters"


def test_unknown_page_is_not_found(db):
    with pytest.raises(NotFoundError):
        svc.get_page(db, 999)


# ---------- Sections ----------
def test_sections_append_in_order(db):
    page = _mk_page(db)
    a = _add(db, page, title="A")
    b = _add(db, page, title="B")
    c = _add(db, page, title="C")
    assert [a.order_index, b.order_index, c.order_index] == [1, 2, 3]
    assert [s.title for s in svc.list_sections(db, page.id)] == ["A", "B", "C"]


def test_equal_order_index_breaks_ties_by_id(db):
    page = _mk_page(db)
    first = _add(db, page, title="first", order_index=5)
    second = _add(db, page, title="second", order_index=5)
    assert [s.id for s in svc.list_sections(db, page.id)] == [first.id, second.id]


def test_reorder_up_then_down_restores_order(db):
    page = _mk_page(db)
    ids = [_add(db, page, title=t).id for t in ("A", "B", "C")]

    after_up = svc.reorder_section(db, page.id, ids[1], "up")
    assert [s.id for s in after_up] == [ids[1], ids[0], ids[2]]

    after_down = svc.reorder_section(db, page.id, ids[1], "down")
    assert [s.id for s in after_down] == ids


def test_reorder_down_then_up_restores_order(db):
    page = _mk_page(db)
    ids = [_add(db, page, title=t).id for t in ("A", "B", "C")]

    after_down = svc.reorder_section(db, page.id, ids[1], "down")
    assert [s.id for s in after_down] == [ids[0], ids[2], ids[1]]

    after_up = svc.reorder_section(db, page.id, ids[1], "up")
    assert [s.id for s in after_up] == ids


def test_reorder_at_boundary_is_noop(db):
    page = _mk_page(db)
    ids = [_add(db, page, title=t).id for t in ("A", "B")]
    assert [s.id for s in svc.reorder_section(db, page.id, ids[0], "up")] == ids
    assert [s.id for s in svc.reorder_section(db, page.id, ids[1], "down")] == ids


def test_reorder_with_tied_indexes_still_moves(db):
    page = _mk_page(db)
    a = _add(db, page, title="A", order_index=1)
    b = _add(db, page, title="B", order_index=1)
    out = svc.reorder_section(db, page.id, b.id, "up")
    assert [s.id for s in out] == [b.id, a.id]
    assert [s.id for s in svc.list_sections(db, page.id)] == [b.id, a.id]


def test_reorder_rejects_bad_direction(db):
    page = _mk_page(db)
    s = _add(db, page)
    with pytest.raises(ValidationError):
        svc.reorder_section(db, page.id, s.id, "sideways")


def test_toggle_twice_restores_state(db):
    page = _mk_page(db)
    s = _add(db, page)
    assert svc.toggle_section(db, page.id, s.id).is_active is False
    assert svc.toggle_section(db, page.id, s.id).is_active is True


def test_duplicate_appends_copy(db):
    page = _mk_page(db)
    src = _add(db, page, type_="cards", title="Services", data={"cards": [{"title": "Rescue", "description": "24/7"}]})
    _add(db, page, title="Tail")
    copy = svc.duplicate_section(db, page.id, src.id)
    assert copy.title == "Services (Copy)"
    assert copy.data == src.data
    assert copy.order_index == 3


def test_section_of_other_page_is_not_found(db):
    p1 = _mk_page(db, "One")
    p2 = _mk_page(db, "Two")
    s = _add(db, p1)
    with pytest.raises(NotFoundError):
        svc.get_section(db, p2.id, s.id)


def test_deleting_page_removes_sections(db):
    page = _mk_page(db)
    _add(db, page)
    svc.delete_page(db, page.id)
    db.commit()
    assert db.query(svc.PageSection).count() == 0


# ---------- Section data ----------
def test_unknown_section_type_rejected(db):
    page = _mk_page(db)
    with pytest.raises(ValidationError) as ei:
        svc.add_section(db, page.id, SectionCreate(type="carousel"))
    assert "type" in ei.value.errors


def test_malformed_json_rejected_with_position(db):
    page = _mk_page(db)
    with pytest.raises(SchemaError) as ei:
        svc.add_section(db, page.id, SectionCreate(type="stats", data='{"stats": [}'))
    assert "line 1" in ei.value.message


def test_non_object_json_rejected():
    with pytest.raises(SchemaError):
        parse_section_data("[1, 2]")
    assert parse_section_data("   ") == {}


def test_schema_violation_reports_path(db):
    page = _mk_page(db)
    with pytest.raises(SchemaError) as ei:
        svc.add_section(db, page.id, SectionCreate(type="cards", data={"cards": [{"title": "No description"}]}))
    assert ei.value.path == "cards.0"


def test_type_change_revalidates_data(db):
    page = _mk_page(db)
    s = _add(db, page, type_="content", data={"note": "free-form"})
    with pytest.raises(SchemaError):
        svc.update_section(db, page.id, s.id, SectionUpdate(type="stats"))


def test_editor_text_is_stored_as_object(db):
    page = _mk_page(db)
    s = _add(db, page, type_="stats", data='{"stats": [{"value": "12", "label": "Barangays"}]}')
    assert s.data == {"stats": [{"value": "12", "label": "Barangays"}]}


# ---------- Rendering ----------
def test_stats_before_cards_render_in_that_order(db):
    page = _mk_page(db, "Our Work", status="published")
    _add(db, page, type_="cards", order_index=2, data={"cards": [{"title": "Rescue", "description": "Round the clock"}]})
    _add(db, page, type_="stats", order_index=1, data={"stats": [{"value": 34, "label": "Evacuation centers"}]})

    out = render_page(db, page.slug)
    assert [s.type for s in out.sections] == ["stats", "cards"]
    assert out.html.index('class="stats"') < out.html.index('class="cards"')
    assert "<strong>34</strong><span>Evacuation centers</span>" in out.html


def test_inactive_sections_are_not_rendered(db):
    page = _mk_page(db, "Hidden", status="published")
    keep = _add(db, page, title="Visible")
    hide = _add(db, page, title="Hidden")
    svc.toggle_section(db, page.id, hide.id)
    out = render_page(db, page.slug)
    assert [s.id for s in out.sections] == [keep.id]


def test_render_escapes_data_values(db):
    page = _mk_page(db, "Escaping", status="published")
    _add(db, page, type_="cards", data={"cards": [{"title": "<script>x</script>", "description": "d"}]})
    out = render_page(db, page.slug)
    assert "<script>x</script>" not in out.html
    assert "&lt;script&gt;" in out.html


def test_draft_does_not_render_publicly(db):
    page = _mk_page(db, "Test Draft")
    with pytest.raises(NotFoundError):
        render_page(db, page.slug)
    assert render_page(db, page.slug, include_drafts=True).slug == "test-draft"
