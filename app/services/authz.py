# app/services/authz.py
# Role checks for the back office: admins manage users and settings, editors manage content
from __future__ import annotations
from typing import Iterable

from app.models.auth import User, UserRole

CONTENT_ROLES = (UserRole.admin, UserRole.editor)
ADMIN_ROLES = (UserRole.admin,)


def user_has_role(user: User, roles: Iterable[UserRole | str]) -> bool:
    if not user or not user.is_active:
        return False
    wanted = {r.value if isinstance(r, UserRole) else str(r) for r in roles}
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    return role in wanted
