from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: portal user (student or social worker).

    Note: plain data object; credentials are never stored on it.
    """

    user_id: str
    name: str
    email: str
    role: Role
    avatar_url: Optional[str] = None
    is_profile_completed: bool = False
    school_details: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.SOCIAL_WORKER
