from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.constants import AVATAR_URL_TEMPLATE
from ..core.enums import Role, SyncState
from ..core.exceptions import AuthenticationError, SaveFailedError
from ..remote.connection import ScriptConnection
from ..remote.envelope import login_payload, save_payload
from .cache import LocalCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    user_id: str
    password: str


@dataclass(frozen=True)
class AdminAccount:
    """Fail-safe administrator that can always log in and repair the sheet.

    The password is configured as a werkzeug hash, never in clear text.
    """

    email: str
    password_hash: str
    user_id: str = "u_admin"
    name: str = "Administrator"

    def matches(self, email: str, password: str) -> bool:
        if not self.email or not self.password_hash:
            return False
        if (email or "").strip().lower() != self.email.strip().lower():
            return False
        try:
            return check_password_hash(self.password_hash, password or "")
        except ValueError:
            # e.g. a malformed hash in configuration
            return False

    def to_wire(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email.lower(),
            "role": Role.SOCIAL_WORKER.value,
            "avatarUrl": AVATAR_URL_TEMPLATE.format(seed="Admin"),
            "isProfileCompleted": True,
        }


class StorageSession:
    """Credentials plus cache for one logged-in portal user.

    Every write goes through `save`: the caller has already patched the
    cache, this records the write as pending and then confirms it or marks
    it unconfirmed. Nothing is rolled back.
    """

    def __init__(
        self,
        connection: ScriptConnection,
        cache: LocalCache,
        *,
        admin: Optional[AdminAccount] = None,
        default_worker_emails: Optional[list[str]] = None,
    ):
        self._conn = connection
        self._cache = cache
        self._admin = admin
        self._default_emails = list(default_worker_emails or [])
        self._creds: Optional[Credentials] = None
        self.local_mode = False

    @property
    def cache(self) -> LocalCache:
        return self._cache

    @property
    def is_authenticated(self) -> bool:
        return self._creds is not None

    def login(self, email: str, password: str) -> str:
        """Log in, hydrate the cache and return the user id."""

        payload = login_payload(email, password)
        res = self._conn.call(payload)
        is_admin = bool(self._admin and self._admin.matches(email, password))

        if not res.ok and is_admin:
            logger.warning("Login failed for administrator account, bootstrapping admin user")
            admin_user = self._admin.to_wire()
            save_res = self._conn.call(save_payload(email, password, "user", admin_user))
            if save_res.ok:
                res = self._conn.call(payload)
            else:
                logger.warning("Admin bootstrap save failed, entering local mode")
                self._creds = Credentials(email, password)
                self._cache.clear()
                self._cache.users = [admin_user]
                self.local_mode = True
                return admin_user["id"]

        if not res.ok or not isinstance(res.data, dict):
            raise AuthenticationError(res.message or "Wrong email or password")

        self._creds = Credentials(email, password)
        self.local_mode = False

        # Keep a user registered moments ago if the sheet has not caught up yet.
        local_user = self._find_user_by_email(email)
        self._cache.hydrate(res.data, default_emails=self._default_emails)
        if local_user and not self._cache.find("users", local_user["id"]):
            logger.info("Remote listing lags behind registration, keeping local user %s", local_user["id"])
            self._cache.users.append(local_user)

        found = self._find_user_by_email(email)
        if found:
            return found["id"]

        if is_admin:
            logger.warning("Login succeeded but admin user is missing from listing, admitting admin")
            admin_user = self._admin.to_wire()
            self._cache.users.append(admin_user)
            return admin_user["id"]

        self._creds = None
        raise AuthenticationError("No profile found for this account. Please make sure you have registered.")

    def register(self, user: dict, password: str) -> None:
        """Create the account remotely with its own credentials, then log in."""

        res = self._conn.call(save_payload(user["email"], password, "user", user))
        if not res.ok:
            raise AuthenticationError(res.message or "Registration failed, please try again later")

        self._creds = Credentials(user["email"], password)
        self._cache.upsert("users", user)
        if isinstance(res.data, dict) and res.data.get("users"):
            self._cache.users = list(res.data["users"])
            if not self._cache.find("users", user["id"]):
                self._cache.users.append(user)

    def logout(self) -> None:
        self._creds = None
        self.local_mode = False
        self._cache.clear()

    def save(self, data_type: str, item: dict, *, item_id: Optional[str] = None) -> None:
        item_id = str(item_id if item_id is not None else item.get("id", data_type))

        if not self._creds:
            logger.error("Cannot save %s %s: not logged in", data_type, item_id)
            self._cache.mark(data_type, item_id, SyncState.UNCONFIRMED, "Not logged in")
            raise SaveFailedError(data_type, "Not logged in")

        self._cache.mark(data_type, item_id, SyncState.PENDING)
        res = self._conn.call(save_payload(self._creds.user_id, self._creds.password, data_type, item))
        if res.ok:
            self._cache.mark(data_type, item_id, SyncState.CONFIRMED)
            return

        logger.warning("Remote did not confirm %s %s: %s", data_type, item_id, res.message)
        self._cache.mark(data_type, item_id, SyncState.UNCONFIRMED, res.message)
        raise SaveFailedError(data_type, res.message)

    def _find_user_by_email(self, email: str) -> Optional[dict]:
        wanted = (email or "").strip().lower()
        for u in self._cache.users:
            if str(u.get("email", "")).lower() == wanted:
                return dict(u)
        return None
