# app/api/v1/auth.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from jose import JWTError
from pydantic import BaseModel, EmailStr
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import get_current_user
from app.models.auth import User
from app.security.jwt import create_access_token, create_refresh_token, decode_token
from app.services.passwords import hash_password, needs_rehash, verify_password

router = APIRouter(tags=["auth"])  # prefix is set in api/v1/router.py


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------
class LoginIn(BaseModel):
    email: EmailStr
    password: str

class TokenOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class RefreshIn(BaseModel):
    refresh_token: str

class MeOut(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    role: str
    status: str
    last_login: Optional[datetime] = None


def _role(user: User) -> str:
    return user.role.value if hasattr(user.role, "value") else str(user.role)


def _tokens_for(user: User) -> TokenOut:
    extra = {"email": user.email, "role": _role(user)}
    return TokenOut(
        access_token=create_access_token(user.id, extra),
        refresh_token=create_refresh_token(user.id, extra),
    )


# ---------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------
@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(User.email == payload.email.lower()))
    if not user or not verify_password(payload.password, user.hashed_password or ""):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User inactive")

    if needs_rehash(user.hashed_password):
        user.hashed_password = hash_password(payload.password)
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    return _tokens_for(user)


@router.post("/refresh", response_model=TokenOut)
def refresh(body: RefreshIn, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token, expected_type="refresh")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    try:
        user = db.get(User, int(payload.get("sub")))
    except (TypeError, ValueError):
        user = None
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return _tokens_for(user)


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    return MeOut(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
        role=_role(current_user),
        status=current_user.status.value if hasattr(current_user.status, "value") else str(current_user.status),
        last_login=current_user.last_login,
    )


@router.post("/logout", status_code=204)
def logout(_: User = Depends(get_current_user)):
    # stateless JWT: the client drops its tokens
    return Response(status_code=204)
