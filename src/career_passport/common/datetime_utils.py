from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS, as the sheet sometimes stores it) into time."""
    value = (value or "").strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_iso() -> str:
    return now_local().date().strftime("%Y-%m-%d")


def epoch_millis(moment: datetime | None = None) -> int:
    return int((moment or now_local()).timestamp() * 1000)


def to_wire_datetime(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def from_wire_datetime(value: str) -> datetime:
    """Parse ISO timestamps written by either the browser or this server.

    Browser clients send `...Z` suffixed UTC strings; those are converted to
    naive local time so they compare with `now_local()`.
    """
    v = (value or "").strip()
    if v.endswith("Z"):
        return datetime.fromisoformat(v[:-1] + "+00:00").astimezone().replace(tzinfo=None)
    parsed = datetime.fromisoformat(v)
    if parsed.tzinfo is not None:
        return parsed.astimezone().replace(tzinfo=None)
    return parsed
