from __future__ import annotations

from typing import Protocol, Sequence

from .model import CloudConfig, SystemSettings


class SettingsRepository(Protocol):
    def get_settings(self) -> SystemSettings:
        raise NotImplementedError

    def save_settings(self, settings: SystemSettings) -> None:
        raise NotImplementedError

    def get_categories(self) -> Sequence[str]:
        raise NotImplementedError

    def save_categories(self, categories: Sequence[str]) -> None:
        raise NotImplementedError

    def get_cloud_config(self) -> CloudConfig:
        raise NotImplementedError

    def save_cloud_config(self, config: CloudConfig) -> None:
        raise NotImplementedError
