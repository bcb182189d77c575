from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .announcements.cached_announcement_repository import CachedAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.cached_attendance_repository import CachedAttendanceRepository
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .core.constants import LATE_GRACE_MINUTES
from .courses.cached_course_repository import CachedCourseRepository
from .courses.service import CourseService
from .entries.cached_entry_repository import CachedEntryRepository
from .entries.service import EntryService
from .remote.connection import RemoteConfig, ScriptConnection
from .reports.service import ReportService
from .store.cache import LocalCache
from .store.registry import WorkspaceRegistry
from .store.storage import AdminAccount, StorageSession
from .system.cached_settings_repository import CachedSettingsRepository
from .system.service import SettingsService
from .users.cached_user_repository import CachedUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Workspace:
    """Everything one logged-in browser session works with."""

    storage: StorageSession

    users_repo: CachedUserRepository
    courses_repo: CachedCourseRepository
    entries_repo: CachedEntryRepository
    announcements_repo: CachedAnnouncementRepository
    attendance_repo: CachedAttendanceRepository
    settings_repo: CachedSettingsRepository

    auth_service: AuthService
    user_service: UserService
    course_service: CourseService
    entry_service: EntryService
    announcement_service: AnnouncementService
    attendance_service: AttendanceService
    settings_service: SettingsService
    report_service: ReportService


@dataclass(frozen=True)
class Container:
    conn: ScriptConnection
    admin: Optional[AdminAccount]
    default_worker_emails: tuple[str, ...]
    workspaces: WorkspaceRegistry[Workspace]


def build_workspace(
    conn: ScriptConnection,
    *,
    admin: Optional[AdminAccount] = None,
    default_worker_emails: Sequence[str] = (),
) -> Workspace:
    storage = StorageSession(
        conn,
        LocalCache(),
        admin=admin,
        default_worker_emails=list(default_worker_emails),
    )

    users_repo = CachedUserRepository(storage)
    courses_repo = CachedCourseRepository(storage)
    entries_repo = CachedEntryRepository(storage)
    announcements_repo = CachedAnnouncementRepository(storage)
    attendance_repo = CachedAttendanceRepository(storage)
    settings_repo = CachedSettingsRepository(storage)

    settings_service = SettingsService(settings_repo, default_worker_emails=default_worker_emails)
    entry_service = EntryService(entries_repo)
    auth_service = AuthService(storage, users_repo, settings_service)
    user_service = UserService(users_repo, entry_service)
    course_service = CourseService(courses_repo)
    announcement_service = AnnouncementService(announcements_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        courses_repo,
        strategy_factory=AttendanceStrategyFactory(),
        grace_minutes=LATE_GRACE_MINUTES,
    )
    report_service = ReportService(users_repo, user_service, course_service, attendance_service)

    return Workspace(
        storage=storage,
        users_repo=users_repo,
        courses_repo=courses_repo,
        entries_repo=entries_repo,
        announcements_repo=announcements_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        auth_service=auth_service,
        user_service=user_service,
        course_service=course_service,
        entry_service=entry_service,
        announcement_service=announcement_service,
        attendance_service=attendance_service,
        settings_service=settings_service,
        report_service=report_service,
    )


def build_container(
    *,
    remote_config: dict,
    admin_email: str = "",
    admin_password_hash: str = "",
    authorized_worker_emails: Sequence[str] = (),
    connection: Optional[ScriptConnection] = None,
    workspace_idle_ttl: Optional[float] = None,
) -> Container:
    config = RemoteConfig(
        url=str(remote_config.get("url") or ""),
        timeout=remote_config.get("timeout"),
    )
    conn = connection or ScriptConnection.get_instance(config)

    admin = AdminAccount(email=admin_email, password_hash=admin_password_hash) if admin_email else None
    emails = tuple(e.strip().lower() for e in authorized_worker_emails if e and e.strip())
    if admin and admin.email.lower() not in emails:
        emails = emails + (admin.email.lower(),)

    workspaces: WorkspaceRegistry[Workspace] = WorkspaceRegistry(
        lambda: build_workspace(conn, admin=admin, default_worker_emails=emails),
        idle_ttl=workspace_idle_ttl,
    )
    return Container(conn=conn, admin=admin, default_worker_emails=emails, workspaces=workspaces)
