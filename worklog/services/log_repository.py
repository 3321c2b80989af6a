"""
Log Repository - one account's mapping of date key to LogEntry.

Architecture Decision: Repository Pattern
The session owns this in-memory mapping while the account is current;
persistence goes through PersistenceSync, never through the repository.
"""

import datetime
from typing import Dict, Mapping, Optional

from worklog.domain.duration import calculate_duration
from worklog.domain.models import AccountSettings, DailyHours, LogEntry, MonthlySummary
from worklog.services.calendar_service import month_days, month_start

DATE_KEY_FORMAT = "%Y-%m-%d"


def date_key(day: datetime.date) -> str:
    """Canonical YYYY-MM-DD key of a calendar day"""
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> datetime.date:
    """Parse a YYYY-MM-DD key; raises ValueError on anything else"""
    return datetime.datetime.strptime(key, DATE_KEY_FORMAT).date()


def progress_fraction(monthly_total: float, max_hours: float) -> float:
    """
    Share of the monthly maximum already worked, capped at 1.0.

    The total itself is never clamped; a zero or negative maximum gives 0.
    """
    if max_hours <= 0:
        return 0.0
    return min(1.0, monthly_total / max_hours)


class LogRepository:
    """
    Date-keyed work log of a single account.
    """

    def __init__(self, account_id: str, entries: Optional[Mapping[str, LogEntry]] = None):
        self.account_id = account_id
        self._entries: Dict[str, LogEntry] = dict(entries or {})

    @classmethod
    def from_payload(cls, account_id: str, payload: Optional[Mapping]) -> 'LogRepository':
        """Build from stored wire data ({date key: entry dict})"""
        repo = cls(account_id)
        if payload:
            repo.replace_all({key: LogEntry.model_validate(value) for key, value in payload.items()})
        return repo

    @property
    def entries(self) -> Mapping[str, LogEntry]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, day: datetime.date) -> Optional[LogEntry]:
        return self._entries.get(date_key(day))

    def upsert(self, day: datetime.date, start: Optional[str], end: Optional[str],
               break_minutes: int = 0, is_office: bool = False) -> LogEntry:
        """
        Create or overwrite the entry for a day.

        The duration is always recomputed from start/end/break.
        """
        entry = LogEntry(start=start, end=end, break_minutes=int(break_minutes), is_office=is_office)
        entry.duration = calculate_duration(entry.start, entry.end, entry.break_minutes)
        self._entries[date_key(day)] = entry
        return entry

    def remove(self, day: datetime.date) -> bool:
        """Delete the entry for a day. Returns False if there was none."""
        return self._entries.pop(date_key(day), None) is not None

    def replace_all(self, entries: Mapping[str, LogEntry]) -> None:
        """Replace the whole mapping, recomputing every duration"""
        self._entries = {
            key: entry.model_copy(update={
                "duration": calculate_duration(entry.start, entry.end, entry.break_minutes)
            })
            for key, entry in entries.items()
        }

    def draft_for(self, day: datetime.date, settings: AccountSettings) -> LogEntry:
        """Existing entry for the day, or a new one pre-filled from the account defaults"""
        existing = self.get(day)
        if existing is not None:
            return existing.model_copy()
        return LogEntry(start=settings.default_start, end=settings.default_end,
                        break_minutes=settings.default_break, is_office=False)

    def monthly_aggregate(self, month: datetime.date,
                          settings: Optional[AccountSettings] = None) -> MonthlySummary:
        """
        Aggregate the entries of one calendar month.

        Args:
            month: Any date inside the month
            settings: Optional account settings providing the target band

        Returns:
            MonthlySummary with a trend point for every day of the month
        """
        first = month_start(month)
        prefix = first.strftime("%Y-%m")
        month_entries = {key: entry for key, entry in self._entries.items() if key.startswith(prefix)}

        total = round(sum(entry.duration for entry in month_entries.values()), 2)
        office_days = sum(1 for entry in month_entries.values() if entry.is_office)

        daily = []
        for day in month_days(first):
            entry = month_entries.get(date_key(day))
            daily.append(DailyHours(day=day.day, hours=entry.duration if entry else 0.0))

        summary = MonthlySummary(
            month=first,
            total_hours=total,
            active_days=len(month_entries),
            office_days=office_days,
            daily=daily,
        )
        if settings is not None:
            summary.min_hours = settings.min_hours
            summary.max_hours = settings.max_hours
            summary.progress = progress_fraction(total, settings.max_hours)
        return summary

    def to_payload(self) -> Dict[str, dict]:
        """Wire form: {date key: entry dict}, sorted by date"""
        return {key: self._entries[key].to_payload() for key in sorted(self._entries)}
