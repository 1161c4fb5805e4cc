from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from app.web.ui import section_renderer as r


SectionRenderer = Callable[["r.SectionView"], str]

_DRAFT = "https://json-schema.org/draft/2020-12/schema"

# Shapes for free-form types: any object, renderer tolerates missing keys
_FREEFORM: Dict[str, Any] = {"$schema": _DRAFT, "type": "object"}


def _list_of(container_key: str, item_props: Dict[str, Any], required: List[str]) -> Dict[str, Any]:
    return {
        "$schema": _DRAFT,
        "type": "object",
        "properties": {
            container_key: {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": item_props,
                    "required": required,
                },
            }
        },
        "required": [container_key],
    }


_TEXT = {"type": "string"}
_TEXT_OR_NUMBER = {"type": ["string", "number"]}

CARDS_SCHEMA = _list_of(
    "cards",
    {"title": _TEXT, "description": _TEXT, "icon": _TEXT},
    ["title", "description"],
)
STATS_SCHEMA = _list_of(
    "stats",
    {"value": _TEXT_OR_NUMBER, "label": _TEXT, "description": _TEXT},
    ["value", "label"],
)
ACCORDION_SCHEMA = _list_of(
    "items",
    {"title": _TEXT, "description": _TEXT, "tags": {"type": "array", "items": _TEXT}},
    ["title", "description"],
)
GRID_SCHEMA = _list_of(
    "items",
    {"title": _TEXT, "description": _TEXT, "count": _TEXT_OR_NUMBER},
    ["title"],
)


@dataclass
class SectionMeta:
    key: str
    label: str
    description: str
    renderer: SectionRenderer
    # JSON Schema (draft 2020-12) for PageSection.data
    schema: Dict[str, Any] = field(default_factory=lambda: dict(_FREEFORM))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "description": self.description,
            "schema": self.schema,
        }


class SectionRegistry:
    """
    Maps a section type tag to its schema + renderer pair.
    Adding a section type is a `register()` call; nothing else switches on the tag.
    """

    def __init__(self) -> None:
        self._metas: Dict[str, SectionMeta] = {}

    def register(self, meta: SectionMeta, *, replace: bool = False) -> SectionMeta:
        if meta.key in self._metas and not replace:
            raise ValueError(f"Section type '{meta.key}' is already registered")
        self._metas[meta.key] = meta
        return meta

    def get(self, key: str) -> Optional[SectionMeta]:
        return self._metas.get(key)

    def keys(self) -> List[str]:
        return list(self._metas.keys())

    def all(self) -> List[SectionMeta]:
        return list(self._metas.values())

    def __contains__(self, key: object) -> bool:
        return key in self._metas


def build_default_registry() -> SectionRegistry:
    reg = SectionRegistry()
    reg.register(SectionMeta("hero", "Hero Section", "Large banner with title and subtitle", r.render_hero))
    reg.register(SectionMeta("content", "Content Block", "Rich text content section", r.render_content))
    reg.register(SectionMeta("cards", "Card Grid", "Grid of cards with icons and descriptions", r.render_cards, CARDS_SCHEMA))
    reg.register(SectionMeta("stats", "Statistics", "Numerical statistics display", r.render_stats, STATS_SCHEMA))
    reg.register(SectionMeta("gallery", "Image Gallery", "Photo gallery grid", r.render_gallery))
    reg.register(SectionMeta("contact", "Contact Form", "Contact information and form", r.render_contact))
    reg.register(SectionMeta("accordion", "Accordion", "Collapsible content sections", r.render_accordion, ACCORDION_SCHEMA))
    reg.register(SectionMeta("grid", "Info Grid", "Grid layout for information", r.render_grid, GRID_SCHEMA))
    reg.register(SectionMeta("timeline", "Timeline", "Chronological timeline display", r.render_timeline))
    return reg


section_registry = build_default_registry()


def register_section_type(meta: SectionMeta, *, replace: bool = False) -> SectionMeta:
    return section_registry.register(meta, replace=replace)
