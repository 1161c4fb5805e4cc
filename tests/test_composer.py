import pytest

from app.schemas.content import ComposeBlock
from app.services.composer import compose


def _b(kind, content):
    return ComposeBlock(type=kind, content=content)


def test_blocks_in_order_with_style_and_script_last():
    html = compose([
        _b("css", ".x { color: red; }"),
        _b("heading", "Evacuation"),
        _b("javascript", "console.log(1);"),
        _b("text", "line one\nline two"),
    ])
    assert html == (
        "<h2>Evacuation</h2>\n"
        "<p>line one<br>line two</p>\n"
        "<style>\n.x { color: red; }\n</style>\n"
        "<script>\nconsole.log(1);\n</script>"
    )


def test_text_is_escaped_but_html_block_is_verbatim():
    html = compose([_b("text", "<b>bold</b>"), _b("html", "<b>bold</b>")])
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert html.endswith("<b>bold</b>")


def test_list_strips_bullets_and_blank_lines():
    html = compose([_b("list", "• Go bag\n- Flashlight\n\n* Water")])
    assert html == "<ul><li>Go bag</li><li>Flashlight</li><li>Water</li></ul>"


def test_image_quote_code():
    html = compose([
        _b("image", " https://cdn.example.org/map.png "),
        _b("quote", "Be ready"),
        _b("code", "a < b"),
    ])
    assert '<img src="https://cdn.example.org/map.png" alt="Content image">' in html
    assert "<blockquote>Be ready</blockquote>" in html
    assert "<pre><code>a &lt; b</code></pre>" in html


def test_blank_css_is_omitted():
    assert compose([_b("heading", "Hi"), _b("css", "   ")]) == "<h2>Hi</h2>"


def test_compose_endpoint(client, editor_headers):
    r = client.post(
        "/api/v1/pages/compose",
        json={"blocks": [{"type": "heading", "content": "Hello"}]},
        headers=editor_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"html": "<h2>Hello</h2>"}


def test_compose_into_page_saves_content(client, editor_headers):
    page = client.post("/api/v1/pages", json={"title": "Go Bag", "content": "<p>old</p>"}, headers=editor_headers).json()

    r = client.post(
        f"/api/v1/pages/{page['id']}/compose",
        json={"blocks": [{"type": "heading", "content": "Go Bag"}, {"type": "list", "content": "Water\nFlashlight"}]},
        headers=editor_headers,
    )
    assert r.status_code == 200
    assert r.json()["content"] == "<h2>Go Bag</h2>\n<ul><li>Water</li><li>Flashlight</li></ul>"


@pytest.mark.parametrize("blocks", [[], [{"type": "css", "content": "   "}]])
def test_compose_into_page_rejects_empty_result(client, editor_headers, blocks):
    page = client.post("/api/v1/pages", json={"title": "Keep Me", "content": "<p>keep</p>"}, headers=editor_headers).json()

    r = client.post(f"/api/v1/pages/{page['id']}/compose", json={"blocks": blocks}, headers=editor_headers)
    assert r.status_code == 422
    assert r.json()["errors"] == {"content": "Content is required"}
    assert client.get(f"/api/v1/pages/{page['id']}", headers=editor_headers).json()["content"] == "<p>keep</p>"
