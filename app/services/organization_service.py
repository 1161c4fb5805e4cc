# app/services/organization_service.py
# Key personnel directory + organizational hierarchy tree
from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.organization import KeyPersonnel, OrganizationalUnit
from app.schemas.organization import (
    OrgTreeNode, OrgUnitCreate, OrgUnitUpdate, PersonnelCreate, PersonnelUpdate,
)


# -------- Personnel --------
def list_personnel(db: Session, *, active_only: bool = True, department: Optional[str] = None) -> Sequence[KeyPersonnel]:
    stmt = select(KeyPersonnel)
    if active_only:
        stmt = stmt.where(KeyPersonnel.is_active == True)  # noqa: E712
    if department:
        stmt = stmt.where(KeyPersonnel.department == department)
    return db.scalars(stmt.order_by(KeyPersonnel.order_index, KeyPersonnel.id)).all()


def get_personnel(db: Session, person_id: int) -> KeyPersonnel:
    row = db.get(KeyPersonnel, person_id)
    if not row:
        raise NotFoundError(f"Personnel {person_id} not found")
    return row


def create_personnel(db: Session, payload: PersonnelCreate) -> KeyPersonnel:
    row = KeyPersonnel(**payload.model_dump())
    db.add(row)
    db.flush()
    return row


def update_personnel(db: Session, person_id: int, patch: PersonnelUpdate) -> KeyPersonnel:
    row = get_personnel(db, person_id)
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is not None or k in ("department", "email", "phone", "photo_url", "bio"):
            setattr(row, k, v)
    db.flush()
    return row


def delete_personnel(db: Session, person_id: int) -> None:
    db.delete(get_personnel(db, person_id))
    db.flush()


# -------- Hierarchy --------
def get_unit(db: Session, unit_id: int) -> OrganizationalUnit:
    row = db.get(OrganizationalUnit, unit_id)
    if not row:
        raise NotFoundError(f"Organizational unit {unit_id} not found")
    return row


def _level_for(db: Session, parent_id: Optional[int]) -> int:
    if parent_id is None:
        return 0
    return get_unit(db, parent_id).level + 1


def _would_cycle(db: Session, unit_id: int, parent_id: Optional[int]) -> bool:
    seen = set()
    cur = parent_id
    while cur is not None and cur not in seen:
        if cur == unit_id:
            return True
        seen.add(cur)
        cur = get_unit(db, cur).parent_id
    return False


def _relevel_subtree(db: Session, root: OrganizationalUnit) -> None:
    stack = [root]
    while stack:
        node = stack.pop()
        for child in db.scalars(select(OrganizationalUnit).where(OrganizationalUnit.parent_id == node.id)).all():
            child.level = node.level + 1
            stack.append(child)


def list_units(db: Session) -> Sequence[OrganizationalUnit]:
    return db.scalars(
        select(OrganizationalUnit).order_by(OrganizationalUnit.level, OrganizationalUnit.order_index, OrganizationalUnit.id)
    ).all()


def create_unit(db: Session, payload: OrgUnitCreate) -> OrganizationalUnit:
    row = OrganizationalUnit(**payload.model_dump(), level=_level_for(db, payload.parent_id))
    db.add(row)
    db.flush()
    return row


def update_unit(db: Session, unit_id: int, patch: OrgUnitUpdate) -> OrganizationalUnit:
    row = get_unit(db, unit_id)
    data = patch.model_dump(exclude_unset=True)
    if "parent_id" in data:
        if _would_cycle(db, unit_id, data["parent_id"]):
            raise ValidationError("A unit cannot be its own ancestor", errors={"parent_id": "creates a cycle"})
        row.parent_id = data["parent_id"]
        row.level = _level_for(db, data["parent_id"])
        db.flush()
        _relevel_subtree(db, row)
    for k in ("name", "position", "order_index", "is_active"):
        if k in data and (data[k] is not None or k == "position"):
            setattr(row, k, data[k])
    db.flush()
    return row


def delete_unit(db: Session, unit_id: int) -> None:
    # children move to the top level
    row = get_unit(db, unit_id)
    for child in db.scalars(select(OrganizationalUnit).where(OrganizationalUnit.parent_id == unit_id)).all():
        child.parent_id = None
        child.level = 0
        db.flush()
        _relevel_subtree(db, child)
    db.delete(row)
    db.flush()


def organization_tree(db: Session, *, active_only: bool = True) -> List[OrgTreeNode]:
    stmt = select(OrganizationalUnit).order_by(OrganizationalUnit.order_index, OrganizationalUnit.id)
    if active_only:
        stmt = stmt.where(OrganizationalUnit.is_active == True)  # noqa: E712
    rows = db.scalars(stmt).all()

    nodes: Dict[int, OrgTreeNode] = {
        r.id: OrgTreeNode(id=r.id, name=r.name, position=r.position, level=r.level) for r in rows
    }
    roots: List[OrgTreeNode] = []
    for r in rows:
        parent = nodes.get(r.parent_id) if r.parent_id is not None else None
        if parent is not None:
            parent.children.append(nodes[r.id])
        else:
            # orphans of inactive parents surface at the top level
            roots.append(nodes[r.id])
    return roots
