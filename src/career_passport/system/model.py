from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SystemSettings:
    """Landing page appearance plus the social-worker allow list."""

    landing_title: str
    landing_subtitle: str
    landing_image_url: str
    sync_webhook_url: str = ""
    authorized_worker_emails: tuple[str, ...] = field(default_factory=tuple)
    deployed_url: str = ""


@dataclass(frozen=True)
class CloudConfig:
    enabled: bool
    google_script_url: str
    last_sync_time: Optional[str] = None
