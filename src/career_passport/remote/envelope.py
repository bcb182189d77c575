from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ApiResponse:
    """Envelope returned by the script endpoint: `{status, message?, data?}`."""

    status: str
    message: Optional[str] = None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def error_response(message: str) -> ApiResponse:
    return ApiResponse(status="error", message=message)


def parse_envelope(text: str) -> ApiResponse:
    """Decode a response body.

    The script host answers with an HTML page when the script itself
    crashes; that and any non-JSON body map to an `error` envelope.
    """
    body = (text or "").lstrip()
    if body.lower().startswith(("<!doctype html", "<html")):
        return error_response("Server error (script error)")

    try:
        raw = json.loads(body)
    except json.JSONDecodeError:
        return error_response("Server returned an unreadable response")

    if not isinstance(raw, dict):
        return error_response("Server returned an unreadable response")

    status = str(raw.get("status") or "error")
    if status not in {"success", "fail", "error"}:
        status = "error"
    return ApiResponse(status=status, message=raw.get("message"), data=raw.get("data"))


def login_payload(user_id: str, password: str) -> dict:
    return {"action": "login", "userId": user_id, "password": password}


def save_payload(user_id: str, password: str, data_type: str, item: dict) -> dict:
    return {
        "action": "save",
        "userId": user_id,
        "password": password,
        "data": {**item, "dataType": data_type},
    }
