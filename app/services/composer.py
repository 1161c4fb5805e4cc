# app/services/composer.py
# Raw block composer: ordered blocks -> one HTML string (+ one <style>, one <script>)
from __future__ import annotations
import re
from typing import Callable, Dict, Iterable, List

from markupsafe import Markup, escape

from app.schemas.content import ComposeBlock

_BULLET = re.compile(r"^[•\-\*]\s*")


def _heading(text: str) -> str:
    return str(Markup("<h2>{0}</h2>").format(text))

def _text(text: str) -> str:
    # newlines become <br> after escaping
    return str(Markup("<p>{0}</p>").format(Markup("<br>").join(escape(line) for line in text.split("\n"))))

def _image(url: str) -> str:
    return str(Markup('<img src="{0}" alt="Content image">').format(url.strip()))

def _list(text: str) -> str:
    items = [_BULLET.sub("", line.strip()) for line in text.split("\n") if line.strip()]
    lis = Markup("").join(Markup("<li>{0}</li>").format(i) for i in items)
    return str(Markup("<ul>{0}</ul>").format(lis))

def _quote(text: str) -> str:
    return str(Markup("<blockquote>{0}</blockquote>").format(text))

def _code(text: str) -> str:
    return str(Markup("<pre><code>{0}</code></pre>").format(text))

def _html(text: str) -> str:
    # admin-authored markup is inserted verbatim
    return text


_HTML_BLOCKS: Dict[str, Callable[[str], str]] = {
    "heading": _heading,
    "text": _text,
    "image": _image,
    "list": _list,
    "quote": _quote,
    "code": _code,
    "html": _html,
}


def compose(blocks: Iterable[ComposeBlock]) -> str:
    """
    Concatenate blocks in the given order. CSS and JavaScript blocks are pooled
    into a single trailing <style> and a single trailing <script> (each emitted
    only when non-empty). Same input, same output.
    """
    html_parts: List[str] = []
    css_parts: List[str] = []
    js_parts: List[str] = []

    for b in blocks:
        content = b.content or ""
        if b.type == "css":
            css_parts.append(content)
        elif b.type == "javascript":
            js_parts.append(content)
        else:
            html_parts.append(_HTML_BLOCKS[b.type](content))

    out = "\n".join(html_parts)
    css = "\n".join(css_parts)
    js = "\n".join(js_parts)
    if css.strip():
        out = f"{out}\n<style>\n{css}\n</style>" if out else f"<style>\n{css}\n</style>"
    if js.strip():
        out = f"{out}\n<script>\n{js}\n</script>" if out else f"<script>\n{js}\n</script>"
    return out
