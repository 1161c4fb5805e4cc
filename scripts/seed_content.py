# scripts/seed_content.py
# Starter pages, hotlines, evacuation centers and navigation for a fresh database. Idempotent by slug / name.
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.emergency import EmergencyHotline, EvacuationCenter
from app.models.site import NavigationItem
from app.schemas.content import PageCreate, SectionCreate
from app.schemas.emergency import EvacuationCenterCreate
from app.services.content_service import add_section, create_page, get_page_by_slug
from app.services.evacuation_service import create_center
from app.utils.slugs import derive_slug

PAGES = [
    {
        "page": PageCreate(
            title="About MDRRMO",
            slug="about",
            template="about",
            content="<p>The Municipal Disaster Risk Reduction and Management Office of Pio Duran.</p>",
            hero_title="About Us",
            status="published",
        ),
        "sections": [
            SectionCreate(type="hero", data={"title": "About MDRRMO", "subtitle": "Safer communities through preparedness"}),
            SectionCreate(
                type="stats",
                title="At a glance",
                data={"stats": [
                    {"value": 33, "label": "Barangays covered"},
                    {"value": 24, "label": "Hours on duty"},
                ]},
            ),
            SectionCreate(
                type="cards",
                title="What we do",
                data={"cards": [
                    {"title": "Prevention", "description": "Hazard mapping and risk assessment", "icon": "shield"},
                    {"title": "Response", "description": "Search, rescue and evacuation", "icon": "siren"},
                ]},
            ),
        ],
    },
    {
        "page": PageCreate(
            title="Disaster Preparedness Plan",
            template="disaster-plan",
            content="<p>Municipal contingency plan for typhoons, floods and volcanic activity.</p>",
        ),
        "sections": [
            SectionCreate(
                type="accordion",
                title="Before, during and after",
                data={"items": [
                    {"title": "Before", "description": "Prepare a go bag and know your evacuation center."},
                    {"title": "During", "description": "Follow official advisories."},
                    {"title": "After", "description": "Return home only when cleared."},
                ]},
            ),
        ],
    },
]

HOTLINES = [
    ("MDRRMO Operations Center", "0917 000 0001", "disaster", 1),
    ("Bureau of Fire Protection", "160", "fire", 2),
    ("Philippine National Police", "911", "police", 3),
]

NAVIGATION = [
    ("Home", "/", 0), ("About", "/about", 1), ("Resources", "/resources", 2),
    ("Evacuation Centers", "/evacuation-centers", 3), ("Volunteer", "/volunteer", 4),
]

EVACUATION_CENTERS_FILE = ROOT / "scripts" / "data" / "evacuation_centers.json"


def seed(db: Session) -> None:
    for entry in PAGES:
        payload: PageCreate = entry["page"]
        existing = get_page_by_slug(db, derive_slug(payload.slug or payload.title))
        if existing:
            print(f"[SKIP] page {existing.slug}")
            continue
        page = create_page(db, payload)
        for s in entry["sections"]:
            add_section(db, page.id, s)
        print(f"[OK] page {page.slug} ({page.status}, {len(entry['sections'])} sections)")

    for name, number, category, order in HOTLINES:
        if db.scalar(select(EmergencyHotline).where(EmergencyHotline.contact_name == name)):
            continue
        db.add(EmergencyHotline(contact_name=name, phone_number=number, category=category, display_order=order))

    centers = json.loads(EVACUATION_CENTERS_FILE.read_text(encoding="utf-8"))
    added = 0
    for c in centers:
        if db.scalar(select(EvacuationCenter).where(EvacuationCenter.name == c["name"])):
            continue
        create_center(db, EvacuationCenterCreate(**c))
        added += 1
    print(f"[OK] evacuation centers: {added} added, {len(centers) - added} already present")

    for label, path, order in NAVIGATION:
        if db.scalar(select(NavigationItem).where(NavigationItem.path == path)):
            continue
        db.add(NavigationItem(label=label, path=path, order_index=order))


def main() -> None:
    p = argparse.ArgumentParser(description="Seed starter content")
    p.add_argument("--dry-run", action="store_true", help="roll back instead of committing")
    args = p.parse_args()

    db: Session = SessionLocal()
    try:
        seed(db)
        if args.dry_run:
            db.rollback()
            print("[DRY-RUN] rolled back")
        else:
            db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    main()
