from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PassportEntry


class EntryRepository(Protocol):
    def list_all(self) -> Sequence[PassportEntry]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[PassportEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[PassportEntry]:
        raise NotImplementedError

    def save(self, entry: PassportEntry) -> None:
        raise NotImplementedError

    def delete(self, entry_id: str) -> bool:
        raise NotImplementedError
