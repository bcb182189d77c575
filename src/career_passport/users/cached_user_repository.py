from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..store.storage import StorageSession
from .model import User
from .repository import UserRepository


def user_from_wire(r: dict) -> User:
    return User(
        user_id=str(r["id"]),
        name=r.get("name") or "",
        email=str(r.get("email") or "").lower(),
        role=Role(r.get("role") or Role.STUDENT.value),
        avatar_url=r.get("avatarUrl"),
        is_profile_completed=bool(r.get("isProfileCompleted", False)),
        school_details=r.get("schoolDetails"),
        phone_number=r.get("phoneNumber"),
    )


def user_to_wire(u: User) -> dict:
    data = {
        "id": u.user_id,
        "name": u.name,
        "email": u.email,
        "role": u.role.value,
        "avatarUrl": u.avatar_url,
        "isProfileCompleted": u.is_profile_completed,
        "schoolDetails": u.school_details,
        "phoneNumber": u.phone_number,
    }
    return {k: v for k, v in data.items() if v is not None}


class CachedUserRepository(UserRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def get_by_id(self, user_id: str) -> Optional[User]:
        r = self._storage.cache.find("users", user_id)
        return user_from_wire(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        for r in self._storage.cache.users:
            if str(r.get("email", "")).lower() == wanted:
                return user_from_wire(r)
        return None

    def list_by_role(self, role: Role) -> Sequence[User]:
        return [user_from_wire(r) for r in self._storage.cache.users if r.get("role") == role.value]

    def save(self, user: User) -> None:
        wire = user_to_wire(user)
        self._storage.cache.upsert("users", wire)
        self._storage.save("user", wire)

    def register(self, user: User, password: str) -> None:
        self._storage.register(user_to_wire(user), password)
