# app/web/ui/section_renderer.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from markupsafe import Markup

# ===================== Input model =====================

@dataclass
class SectionView:
    """What a renderer sees of a PageSection. `data` is already schema-valid."""
    id: int
    type: str
    title: Optional[str] = None
    content: Optional[str] = None   # admin-authored HTML (trusted)
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def anchor(self) -> str:
        return f"section-{self.id}"

# ===================== Utils =====================

def _s(v: Any) -> str:
    if v is None:
        return ""
    return str(v)

def _items(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    val = data.get(key)
    if not isinstance(val, list):
        return []
    return [x for x in val if isinstance(x, dict)]

def _heading(title: Optional[str], tag: str = "h2") -> Markup:
    if not title:
        return Markup("")
    return Markup("<{0}>{1}</{0}>").format(Markup(tag), title)

def _wrap(view: SectionView, inner: Iterable[Markup], extra_class: str = "") -> str:
    cls = f"section section-{view.type}"
    if extra_class:
        cls = f"{cls} {extra_class}"
    body = Markup("").join(inner)
    return str(Markup('<section id="{0}" class="{1}">{2}</section>').format(view.anchor, cls, body))

def _content(view: SectionView) -> Markup:
    if not view.content:
        return Markup("")
    return Markup('<div class="section-content">{0}</div>').format(Markup(view.content))

# ===================== Renderers =====================

def render_hero(view: SectionView) -> str:
    d = view.data
    title = d.get("title") or view.title
    parts: List[Markup] = [_heading(title, "h1")]
    if d.get("subtitle"):
        parts.append(Markup('<p class="subtitle">{0}</p>').format(d["subtitle"]))
    if d.get("image"):
        parts.append(Markup('<img src="{0}" alt="{1}">').format(d["image"], _s(title)))
    parts.append(_content(view))
    return _wrap(view, parts)

def render_content(view: SectionView) -> str:
    return _wrap(view, [_heading(view.title), _content(view)])

def render_cards(view: SectionView) -> str:
    cards = []
    for c in _items(view.data, "cards"):
        icon = Markup("")
        if c.get("icon"):
            icon = Markup('<span class="icon" data-icon="{0}"></span>').format(c["icon"])
        cards.append(
            Markup('<div class="card">{0}<h3>{1}</h3><p>{2}</p></div>').format(
                icon, _s(c.get("title")), _s(c.get("description"))
            )
        )
    grid = Markup('<div class="cards">{0}</div>').format(Markup("").join(cards))
    return _wrap(view, [_heading(view.title), _content(view), grid])

def render_stats(view: SectionView) -> str:
    stats = []
    for s in _items(view.data, "stats"):
        desc = Markup("")
        if s.get("description"):
            desc = Markup("<small>{0}</small>").format(s["description"])
        stats.append(
            Markup('<div class="stat"><strong>{0}</strong><span>{1}</span>{2}</div>').format(
                _s(s.get("value")), _s(s.get("label")), desc
            )
        )
    grid = Markup('<div class="stats">{0}</div>').format(Markup("").join(stats))
    return _wrap(view, [_heading(view.title), grid])

def render_gallery(view: SectionView) -> str:
    images = []
    for img in _items(view.data, "images"):
        url = img.get("url") or img.get("src")
        if not url:
            continue
        images.append(
            Markup('<figure><img src="{0}" alt="{1}">{2}</figure>').format(
                url,
                _s(img.get("alt")),
                Markup("<figcaption>{0}</figcaption>").format(img["caption"]) if img.get("caption") else Markup(""),
            )
        )
    grid = Markup('<div class="gallery">{0}</div>').format(Markup("").join(images))
    return _wrap(view, [_heading(view.title), _content(view), grid])

_CONTACT_FIELDS = (("phone", "Phone"), ("email", "Email"), ("address", "Address"), ("hours", "Office Hours"))

def render_contact(view: SectionView) -> str:
    rows = []
    for key, label in _CONTACT_FIELDS:
        if view.data.get(key):
            rows.append(Markup("<dt>{0}</dt><dd>{1}</dd>").format(label, view.data[key]))
    dl = Markup('<dl class="contact">{0}</dl>').format(Markup("").join(rows)) if rows else Markup("")
    return _wrap(view, [_heading(view.title), _content(view), dl])

def render_accordion(view: SectionView) -> str:
    items = []
    for it in _items(view.data, "items"):
        tags = [t for t in it.get("tags") or [] if isinstance(t, str)]
        tag_html = Markup("")
        if tags:
            tag_html = Markup('<ul class="tags">{0}</ul>').format(
                Markup("").join(Markup("<li>{0}</li>").format(t) for t in tags)
            )
        items.append(
            Markup("<details><summary>{0}</summary><p>{1}</p>{2}</details>").format(
                _s(it.get("title")), _s(it.get("description")), tag_html
            )
        )
    return _wrap(view, [_heading(view.title), Markup("").join(items)])

def render_grid(view: SectionView) -> str:
    cells = []
    for it in _items(view.data, "items"):
        count = Markup("")
        if it.get("count") is not None:
            count = Markup('<span class="count">{0}</span>').format(it["count"])
        desc = Markup("")
        if it.get("description"):
            desc = Markup("<p>{0}</p>").format(it["description"])
        cells.append(
            Markup('<div class="grid-item"><h3>{0}</h3>{1}{2}</div>').format(_s(it.get("title")), desc, count)
        )
    grid = Markup('<div class="grid">{0}</div>').format(Markup("").join(cells))
    return _wrap(view, [_heading(view.title), grid])

def render_timeline(view: SectionView) -> str:
    events = []
    for ev in _items(view.data, "events") or _items(view.data, "items"):
        events.append(
            Markup('<li><time>{0}</time><h3>{1}</h3><p>{2}</p></li>').format(
                _s(ev.get("date")), _s(ev.get("title")), _s(ev.get("description"))
            )
        )
    ol = Markup('<ol class="timeline">{0}</ol>').format(Markup("").join(events))
    return _wrap(view, [_heading(view.title), _content(view), ol])

def render_unknown(view: SectionView) -> str:
    # legacy rows whose type was unregistered after save
    return _wrap(view, [_heading(view.title), _content(view)], extra_class="section-unknown")
