# scripts/seed_admin.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# --- Ensure repo root is on sys.path so "app.*" imports work when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.auth import User, UserRole, UserStatus
from app.services.passwords import hash_password


def run(email: str, password: str, full_name: str | None, role: str) -> None:
    db: Session = SessionLocal()
    try:
        email = email.strip().lower()
        u = db.scalar(select(User).where(User.email == email))
        if u:
            u.hashed_password = hash_password(password)
            u.role = UserRole(role)
            u.status = UserStatus.active
            action = "Updated"
        else:
            u = User(
                email=email,
                full_name=full_name,
                hashed_password=hash_password(password),
                role=UserRole(role),
                status=UserStatus.active,
            )
            db.add(u)
            action = "Created"
        db.commit()
        print(f"[OK] {action} {u.role.value} {u.email} (id={u.id})")
    finally:
        db.close()


def main() -> None:
    p = argparse.ArgumentParser(description="Create or reset a back office user")
    p.add_argument("--email", required=True)
    p.add_argument("--password", required=True)
    p.add_argument("--full-name", default=None)
    p.add_argument("--role", choices=[r.value for r in UserRole], default=UserRole.admin.value)
    args = p.parse_args()
    run(args.email, args.password, args.full_name, args.role)


if __name__ == "__main__":
    main()
