from __future__ import annotations

import copy
from typing import Any, Optional

import pytest

from career_passport.remote.envelope import ApiResponse
from career_passport.store.cache import LocalCache
from career_passport.store.storage import StorageSession

STUDENT = {
    "id": "u_student",
    "name": "Amy",
    "email": "amy@example.org",
    "role": "STUDENT",
    "isProfileCompleted": True,
    "schoolDetails": "Grade 10",
}

WORKER = {
    "id": "u_worker",
    "name": "Wendy",
    "email": "worker@example.org",
    "role": "SOCIAL_WORKER",
    "isProfileCompleted": True,
}

COURSE = {
    "id": "c1",
    "title": "Bakery visit",
    "description": "",
    "startDate": "2025-03-10",
    "endDate": "2025-03-10",
    "sessionDates": ["2025-03-10"],
    "startTime": "09:00",
    "location": "Main St bakery",
    "locationLat": 25.0330,
    "locationLng": 121.5654,
    "checkInRadius": 100,
    "category": "Career experience",
    "instructor": "TBD",
    "capacity": 20,
    "enrolledCount": 0,
    "tags": [],
}


class FakeScriptConnection:
    """In-memory stand-in for the sheet-backed script endpoint."""

    url = "https://script.google.com/macros/s/fake/exec"

    def __init__(self, data: Optional[dict] = None, accounts: Optional[dict[str, str]] = None):
        self.data: dict[str, Any] = {
            "users": [],
            "courses": [],
            "entries": [],
            "announcements": [],
            "attendance": [],
            "categories": ["Self discovery", "Career experience"],
            "settings": None,
            "cloudConfig": None,
        }
        self.data.update(copy.deepcopy(data or {}))
        self.accounts = dict(accounts or {})
        self.calls: list[dict] = []
        self.fail_saves = False
        self.fail_logins = False

    def saves(self, data_type: Optional[str] = None) -> list[dict]:
        items = [c["data"] for c in self.calls if c["action"] == "save"]
        return [i for i in items if data_type is None or i["dataType"] == data_type]

    def call(self, payload: dict) -> ApiResponse:
        self.calls.append(copy.deepcopy(payload))
        user_id = str(payload.get("userId", "")).lower()

        if payload["action"] == "login":
            if self.fail_logins or self.accounts.get(user_id) != payload.get("password"):
                return ApiResponse(status="fail", message="Wrong email or password")
            return ApiResponse(status="success", data=copy.deepcopy(self.data))

        if payload["action"] == "save":
            if self.fail_saves:
                return ApiResponse(status="error", message="Server error (script error)")
            item = dict(payload["data"])
            data_type = item.pop("dataType")
            if data_type == "user":
                self.accounts.setdefault(str(item["email"]).lower(), payload.get("password"))
                self.data["users"] = [u for u in self.data["users"] if u["id"] != item["id"]] + [item]
            return ApiResponse(status="success", message="saved")

        return ApiResponse(status="error", message="Unknown action")


@pytest.fixture
def fake_conn() -> FakeScriptConnection:
    return FakeScriptConnection(
        data={"users": [STUDENT, WORKER], "courses": [COURSE]},
        accounts={"amy@example.org": "secret1", "worker@example.org": "secret2"},
    )


@pytest.fixture
def student_storage(fake_conn) -> StorageSession:
    storage = StorageSession(fake_conn, LocalCache())
    storage.login("amy@example.org", "secret1")
    return storage


@pytest.fixture
def worker_storage(fake_conn) -> StorageSession:
    storage = StorageSession(fake_conn, LocalCache(), default_worker_emails=["worker@example.org"])
    storage.login("worker@example.org", "secret2")
    return storage
