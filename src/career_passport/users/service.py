from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import AVATAR_URL_TEMPLATE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..entries.service import EntryService
from ..store.storage import StorageSession
from ..system.service import SettingsService
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

ROLE_LABELS = {Role.STUDENT: "student", Role.SOCIAL_WORKER: "social worker"}


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    role: Role
    is_profile_completed: bool


class AuthService:
    """Use case: authenticate, register and log out portal users."""

    def __init__(self, storage: StorageSession, users: UserRepository, settings: SettingsService):
        self._storage = storage
        self._users = users
        self._settings = settings

    def login(self, email: str, password: str, *, required_role: Optional[Role] = None) -> SessionUser:
        email = require_non_empty(email, "Email")
        if not password:
            raise AuthenticationError("Wrong email or password")

        user_id = self._storage.login(email, password)
        user = self._users.get_by_id(user_id)
        if not user:
            self._storage.logout()
            raise AuthenticationError("No profile found for this account. Please make sure you have registered.")

        if required_role and user.role != required_role:
            self._storage.logout()
            raise AuthenticationError(f"This account is not a {ROLE_LABELS[required_role]} account.")

        return self._to_session(user)

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        now: Optional[datetime] = None,
    ) -> SessionUser:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", 6)

        if role == Role.SOCIAL_WORKER and not self._settings.is_authorized_worker(email):
            logger.info("Refused social worker registration for unlisted email %s", email)
            raise AuthorizationError(
                "This email is not authorized as a social worker. Ask the administrator to add it to the list."
            )

        user = User(
            user_id=f"u_{epoch_millis(now or now_local())}",
            name=name,
            email=email,
            role=role,
            avatar_url=AVATAR_URL_TEMPLATE.format(seed=quote(name)),
            is_profile_completed=False,
        )

        self._users.register(user, password)
        return self._to_session(user)

    def logout(self) -> None:
        self._storage.logout()

    def current_user(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def complete_profile(
        self,
        *,
        user_id: str,
        name: Optional[str],
        school_details: Optional[str],
        phone_number: Optional[str],
    ) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")

        updated = replace(
            user,
            name=(name or "").strip() or user.name,
            school_details=(school_details or "").strip(),
            phone_number=(phone_number or "").strip(),
            is_profile_completed=True,
        )
        self._users.save(updated)
        return updated

    @staticmethod
    def _to_session(user: User) -> SessionUser:
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            role=user.role,
            is_profile_completed=user.is_profile_completed,
        )


@dataclass(frozen=True)
class StudentRow:
    user: User
    passport_count: int


SORT_KEYS = {"name", "email", "school_details", "phone_number", "passport_count"}


class UserService:
    """Use case: social workers browse the student directory."""

    def __init__(self, users: UserRepository, entries: EntryService):
        self._users = users
        self._entries = entries

    def list_students(
        self,
        *,
        current_role: Role,
        search: str = "",
        sort_key: str = "passport_count",
        descending: bool = True,
    ) -> list[StudentRow]:
        if current_role != Role.SOCIAL_WORKER:
            raise AuthorizationError("You do not have permission")
        if sort_key not in SORT_KEYS:
            raise ValidationError("Unknown sort column")

        counts = self._entries.count_by_student()
        term = (search or "").strip()

        rows = []
        for u in self._users.list_by_role(Role.STUDENT):
            if term and not (term in u.name or term in u.email or term in (u.school_details or "")):
                continue
            rows.append(StudentRow(user=u, passport_count=counts.get(u.user_id, 0)))

        def _key(row: StudentRow):
            if sort_key == "passport_count":
                return row.passport_count
            return getattr(row.user, sort_key) or ""

        rows.sort(key=_key, reverse=descending)
        return rows
