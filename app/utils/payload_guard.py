from __future__ import annotations

import json
from fastapi import HTTPException

from app.core.settings import settings


def enforce_section_data_size(data) -> None:
    """
    Enforces a maximum serialized JSON size (in KB) for a section's 'data'.
    Accepts the dict or the raw editor text. Raises HTTP 413 on overflow.
    """
    limit_kb = float(getattr(settings, "MAX_SECTION_DATA_KB", 0) or 0)
    if limit_kb <= 0 or data is None:
        return
    if isinstance(data, str):
        b = data.encode("utf-8")
    else:
        try:
            # compact JSON to measure true wire-size
            b = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError):
            raise HTTPException(status_code=400, detail="Invalid JSON in data")
    kb = len(b) / 1024.0
    if kb > limit_kb:
        raise HTTPException(
            status_code=413,
            detail=f"Payload too large: data is {kb:.1f}KB, limit is {limit_kb:.0f}KB",
        )
