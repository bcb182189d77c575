from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def list_all(self) -> Sequence[Course]:
        raise NotImplementedError

    def get_by_id(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    def save(self, course: Course) -> None:
        raise NotImplementedError

    def delete(self, course_id: str) -> bool:
        raise NotImplementedError
