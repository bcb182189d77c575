from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .envelope import ApiResponse, error_response, parse_envelope

logger = logging.getLogger(__name__)


@dataclass
class RemoteConfig:
    url: str
    timeout: Optional[float] = None


class ScriptConnection:
    """Singleton-like client for the spreadsheet-backed script endpoint.

    Note: one POST per call, no retries. The endpoint only accepts
    `text/plain` bodies (avoids the CORS preflight the script cannot answer).
    """

    _instance: Optional["ScriptConnection"] = None

    def __init__(self, config: RemoteConfig, *, http: Optional[requests.Session] = None):
        self._config = config
        self._http = http or requests.Session()

    @classmethod
    def get_instance(cls, config: RemoteConfig) -> "ScriptConnection":
        if cls._instance is None:
            cls._instance = ScriptConnection(config)
        return cls._instance

    @property
    def url(self) -> str:
        return self._config.url

    def call(self, payload: dict[str, Any]) -> ApiResponse:
        action = payload.get("action")
        if not self._config.url:
            logger.error("Remote endpoint URL is not configured; %s skipped", action)
            return error_response("Remote endpoint is not configured")

        try:
            response = self._http.post(
                self._config.url,
                data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self._config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Remote %s call failed: %s", action, e)
            return error_response("Network connection failed")

        result = parse_envelope(response.text)
        if result.status != "success":
            logger.warning("Remote %s returned %s: %s", action, result.status, result.message)
        return result
