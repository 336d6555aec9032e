from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Opaque record id such as ``leave-3f2a9c1d7e4b``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
