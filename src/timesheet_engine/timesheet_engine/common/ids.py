from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Short prefixed identifier, e.g. ``TS-3F9A1C2B``."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"
