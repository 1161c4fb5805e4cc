# scripts/sync_weather.py
# Cron entry point: */30 * * * * python scripts/sync_weather.py
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.errors import RemoteUnavailableError
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.services.weather_service import sync_weather


def run() -> int:
    configure_logging()
    db = SessionLocal()
    try:
        out = sync_weather(db)
        db.commit()
        print(f"[OK] {out.current.location}: {out.current.condition}, {len(out.forecast)} forecast days")
        return 0
    except RemoteUnavailableError as e:
        db.rollback()
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(run())
