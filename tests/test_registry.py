import pytest

from markupsafe import Markup

from app import content_registry
from app.content_registry import SectionMeta, SectionRegistry, build_default_registry, register_section_type
from app.web.ui.section_renderer import SectionView, render_gallery, render_timeline, render_unknown

DEFAULT_TYPES = ["hero", "content", "cards", "stats", "gallery", "contact", "accordion", "grid", "timeline"]


def test_default_types():
    assert build_default_registry().keys() == DEFAULT_TYPES


def test_duplicate_registration_rejected():
    reg = SectionRegistry()
    meta = SectionMeta("faq", "FAQ", "Questions", render_unknown)
    reg.register(meta)
    with pytest.raises(ValueError):
        reg.register(meta)
    reg.register(SectionMeta("faq", "FAQ v2", "Questions", render_unknown), replace=True)
    assert reg.get("faq").label == "FAQ v2"
    assert "faq" in reg


def test_section_types_endpoint(client, editor_headers):
    r = client.get("/api/v1/pages/section-types", headers=editor_headers)
    assert r.status_code == 200
    body = r.json()
    assert [t["key"] for t in body] == DEFAULT_TYPES
    cards = next(t for t in body if t["key"] == "cards")
    assert cards["schema"]["required"] == ["cards"]


def test_gallery_skips_images_without_url():
    html = render_gallery(SectionView(id=3, type="gallery", data={"images": [{"alt": "x"}, {"src": "/a.jpg", "caption": "A"}]}))
    assert html.count("<img") == 1
    assert "<figcaption>A</figcaption>" in html


def test_timeline_accepts_items_key():
    html = render_timeline(SectionView(id=4, type="timeline", data={"items": [{"date": "2006", "title": "Reming"}]}))
    assert "<time>2006</time><h3>Reming</h3>" in html


def test_unknown_type_keeps_anchor():
    html = render_unknown(SectionView(id=9, type="legacy", title="Old"))
    assert html.startswith('<section id="section-9" class="section section-legacy section-unknown">')


FAQ_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {"questions": {"type": "array", "items": {"type": "object", "required": ["q", "a"]}}},
    "required": ["questions"],
}


def _render_faq(view):
    rows = Markup("").join(Markup("<dt>{0}</dt><dd>{1}</dd>").format(x["q"], x["a"]) for x in view.data["questions"])
    return str(Markup('<section id="{0}" class="section section-faq"><dl>{1}</dl></section>').format(view.anchor, rows))


@pytest.fixture
def isolated_registry(monkeypatch):
    reg = content_registry.section_registry
    monkeypatch.setattr(reg, "_metas", dict(reg._metas))
    return reg


def test_registered_type_validates_and_renders(client, editor_headers, isolated_registry):
    register_section_type(SectionMeta("faq", "FAQ", "Questions and answers", _render_faq, FAQ_SCHEMA))

    page = client.post(
        "/api/v1/pages", json={"title": "FAQ", "content": "<p>faq</p>", "status": "published"}, headers=editor_headers
    ).json()
    bad = client.post(f"/api/v1/pages/{page['id']}/sections", json={"type": "faq", "data": {}}, headers=editor_headers)
    assert bad.status_code == 422
    assert bad.json()["error"] == "SchemaError"

    ok = client.post(
        f"/api/v1/pages/{page['id']}/sections",
        json={"type": "faq", "data": {"questions": [{"q": "Where to go?", "a": "Nearest <center>"}]}},
        headers=editor_headers,
    )
    assert ok.status_code == 201

    html = client.get("/delivery/v1/pages/faq").json()["html"]
    assert "<dt>Where to go?</dt><dd>Nearest &lt;center&gt;</dd>" in html
    assert "faq" in [t["key"] for t in client.get("/api/v1/pages/section-types", headers=editor_headers).json()]


def test_registration_without_replace_keeps_default(isolated_registry):
    with pytest.raises(ValueError):
        register_section_type(SectionMeta("hero", "Hero 2", "x", render_unknown))
    assert isolated_registry.get("hero").label == "Hero Section"
