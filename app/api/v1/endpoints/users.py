# app/api/v1/endpoints/users.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_admin
from app.models.auth import User, UserRole, UserStatus
from app.schemas.admin import UserCreate, UserOut, UserUpdate
from app.services.passwords import hash_password

router = APIRouter(prefix="/users", tags=["users"])


def _other_active_admins(db: Session, user_id: int) -> int:
    rows = db.scalars(
        select(User.id).where(
            User.id != user_id,
            User.role == UserRole.admin,
            User.status == UserStatus.active,
        )
    ).all()
    return len(rows)


@router.get("", response_model=List[UserOut])
def list_users(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    q: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    stmt = select(User).order_by(User.id.asc())
    if q:
        term = f"%{q.strip()}%"
        stmt = stmt.where(User.email.ilike(term))
    return db.execute(stmt.limit(limit).offset(offset)).scalars().all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    email = payload.email.lower().strip()
    if db.scalar(select(User).where(User.email == email)):
        raise HTTPException(status_code=409, detail="Email already exists")

    u = User(
        email=email,
        full_name=payload.full_name,
        role=UserRole(payload.role),
        status=UserStatus(payload.status),
        hashed_password=hash_password(payload.password),
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    patch: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")

    demoting = (patch.role is not None and patch.role != "admin") or (patch.status == "inactive")
    if demoting and u.is_admin and _other_active_admins(db, u.id) == 0:
        raise HTTPException(status_code=409, detail="Cannot demote or deactivate the last active admin")

    if patch.full_name is not None:
        u.full_name = patch.full_name
    if patch.role is not None:
        u.role = UserRole(patch.role)
    if patch.status is not None:
        u.status = UserStatus(patch.status)
    if patch.password:
        u.hashed_password = hash_password(patch.password)

    db.commit()
    db.refresh(u)
    return u


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    if u.id == current_user.id:
        raise HTTPException(status_code=409, detail="You cannot delete your own account")
    db.delete(u)
    db.commit()
    return Response(status_code=204)
