# app/deps/auth.py
from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.auth import User, UserRole
from app.security.jwt import decode_token
from app.services.authz import ADMIN_ROLES, CONTENT_ROLES, user_has_role

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)


# -----------------------------
# Helpers
# -----------------------------
def _load_user_from_sub(db: Session, sub: str | int | None) -> Optional[User]:
    try:
        uid = int(sub)
    except (TypeError, ValueError):
        return None
    user = db.get(User, uid)
    if not user or not user.is_active:
        return None
    return user


def _user_from_token(db: Session, token: str) -> User:
    try:
        payload = decode_token(token, expected_type="access")
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = _load_user_from_sub(db, payload.get("sub"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user


# -----------------------------
# Public dependencies
# -----------------------------
def get_current_user(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> User:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return _user_from_token(db, creds.credentials)


def get_current_user_optional(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[User]:
    if not creds or not creds.credentials:
        return None
    try:
        return _user_from_token(db, creds.credentials)
    except HTTPException:
        # Treat bad token as anonymous when optional
        return None


def require_role(*roles: UserRole) -> Callable:
    """
    Usage:
        @router.get(..., dependencies=[Depends(require_role(UserRole.admin))])
    """
    def _dep(current_user: User = Depends(get_current_user)) -> User:
        if not user_has_role(current_user, roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return current_user

    return _dep


require_editor = require_role(*CONTENT_ROLES)
require_admin = require_role(*ADMIN_ROLES)
