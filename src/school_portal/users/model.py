from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no persistence code). ``id`` never changes and
    ``email`` is unique across users.
    """

    id: str
    name: str
    email: str
    role: Role
    password_hash: str
    registered_photo_url: str = ""
    mobile: Optional[str] = None
    child_id: Optional[str] = None
    enable_scan_on_login: bool = False
