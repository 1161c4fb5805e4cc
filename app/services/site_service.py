# app/services/site_service.py
# Navigation menu tree + key/value site settings
from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.site import NavigationItem, SiteSetting
from app.schemas.site import NavigationCreate, NavigationNode, NavigationUpdate, SettingIn


# -------- Navigation --------
def list_navigation(db: Session) -> Sequence[NavigationItem]:
    return db.scalars(select(NavigationItem).order_by(NavigationItem.order_index, NavigationItem.id)).all()


def get_navigation_item(db: Session, item_id: int) -> NavigationItem:
    row = db.get(NavigationItem, item_id)
    if not row:
        raise NotFoundError(f"Navigation item {item_id} not found")
    return row


def _check_parent(db: Session, item_id: Optional[int], parent_id: Optional[int]) -> None:
    if parent_id is None:
        return
    if item_id is not None and parent_id == item_id:
        raise ValidationError("An item cannot be its own parent", errors={"parent_id": "creates a cycle"})
    parent = get_navigation_item(db, parent_id)
    if parent.parent_id is not None:
        # menus are two levels deep
        raise ValidationError("Submenus cannot be nested", errors={"parent_id": "must be a top-level item"})
    if item_id is not None and db.scalar(
        select(NavigationItem.id).where(NavigationItem.parent_id == item_id).limit(1)
    ) is not None:
        raise ValidationError("An item with submenu entries must stay top-level", errors={"parent_id": "item has children"})


def create_navigation_item(db: Session, payload: NavigationCreate) -> NavigationItem:
    _check_parent(db, None, payload.parent_id)
    row = NavigationItem(**payload.model_dump())
    db.add(row)
    db.flush()
    return row


def update_navigation_item(db: Session, item_id: int, patch: NavigationUpdate) -> NavigationItem:
    row = get_navigation_item(db, item_id)
    data = patch.model_dump(exclude_unset=True)
    if "parent_id" in data:
        _check_parent(db, item_id, data["parent_id"])
    for k, v in data.items():
        if v is not None or k in ("parent_id", "icon"):
            setattr(row, k, v)
    db.flush()
    return row


def delete_navigation_item(db: Session, item_id: int) -> None:
    row = get_navigation_item(db, item_id)
    for child in db.scalars(select(NavigationItem).where(NavigationItem.parent_id == item_id)).all():
        db.delete(child)
    db.delete(row)
    db.flush()


def navigation_tree(db: Session) -> List[NavigationNode]:
    rows = db.scalars(
        select(NavigationItem)
        .where(NavigationItem.is_active == True)  # noqa: E712
        .order_by(NavigationItem.order_index, NavigationItem.id)
    ).all()
    nodes: Dict[int, NavigationNode] = {
        r.id: NavigationNode(id=r.id, label=r.label, path=r.path, icon=r.icon, is_featured=r.is_featured)
        for r in rows
    }
    roots: List[NavigationNode] = []
    for r in rows:
        if r.parent_id is None:
            roots.append(nodes[r.id])
        elif r.parent_id in nodes:
            nodes[r.parent_id].children.append(nodes[r.id])
    return roots


# -------- Settings --------
def list_settings(db: Session, *, public_only: bool = False) -> Sequence[SiteSetting]:
    stmt = select(SiteSetting)
    if public_only:
        stmt = stmt.where(SiteSetting.is_public == True)  # noqa: E712
    return db.scalars(stmt.order_by(SiteSetting.key)).all()


def public_settings(db: Session) -> Dict[str, object]:
    return {s.key: s.value for s in list_settings(db, public_only=True)}


def get_setting(db: Session, key: str) -> SiteSetting:
    row = db.scalar(select(SiteSetting).where(SiteSetting.key == key))
    if not row:
        raise NotFoundError(f"Setting '{key}' not found")
    return row


def upsert_setting(db: Session, key: str, payload: SettingIn) -> SiteSetting:
    key = key.strip()
    if not key:
        raise ValidationError("Setting key is required", errors={"key": "must not be blank"})
    row = db.scalar(select(SiteSetting).where(SiteSetting.key == key))
    if row is None:
        row = SiteSetting(key=key)
        db.add(row)
    row.value = payload.value
    row.description = payload.description
    row.is_public = payload.is_public
    db.flush()
    return row


def delete_setting(db: Session, key: str) -> None:
    db.delete(get_setting(db, key))
    db.flush()
