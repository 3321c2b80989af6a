"""
Export Service - CSV and JSON export, JSON import.

Architecture Decision: Why JSON for backups?
- Human-readable format for easy inspection and manual edits
- Same shape as the stored payloads, so a backup restores one account 1:1

CSV exports are meant for spreadsheets: one row per day of the month and a
byte-order mark on download so multi-byte text is decoded correctly.
"""

import csv
import datetime
import io
import json
import logging
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError

from worklog.domain.duration import calculate_duration
from worklog.domain.models import AccountSettings, LogEntry
from worklog.i18n import tr
from worklog.services.calendar_service import CalendarService, month_days
from worklog.services.log_repository import date_key, parse_date_key

logger = logging.getLogger(__name__)

CSV_DATE_FORMAT = "%Y/%m/%d"


class ImportFormatError(ValueError):
    """Raised when an import file cannot be parsed into logs/settings"""


class ImportPayload(BaseModel):
    """Parsed, validated content of a JSON backup"""
    logs: Optional[Dict[str, LogEntry]] = None
    settings: Optional[AccountSettings] = None
    account_id: Optional[str] = None


def _format_number(value) -> str:
    """Blank for zero/absent, otherwise without a trailing .0"""
    if not value:
        return ""
    return f"{value:g}"


class ExportService:
    """
    Renders an account's log as CSV or JSON and parses JSON backups.
    """

    def __init__(self, calendar_service: CalendarService):
        self.calendar = calendar_service

    def to_csv(self, entries: Mapping[str, LogEntry], month: datetime.date, account_name: str) -> str:
        """
        Render one calendar month as CSV text.

        Args:
            entries: Date key -> LogEntry mapping (other months are ignored)
            month: Any date inside the month to export
            account_name: Shown in the first row

        Returns:
            CSV content without byte-order mark
        """
        output = io.StringIO()
        writer = csv.writer(output, lineterminator='\n')

        writer.writerow([f"{tr('csv.account')}: {account_name}"])
        writer.writerow([
            tr('csv.date'), tr('csv.weekday'), tr('csv.start'), tr('csv.end'),
            tr('csv.break'), tr('csv.duration'), tr('csv.office'), tr('csv.holiday'),
        ])

        for day in month_days(month):
            entry = entries.get(date_key(day))
            writer.writerow([
                day.strftime(CSV_DATE_FORMAT),
                self.calendar.weekday_label(day),
                (entry.start or "") if entry else "",
                (entry.end or "") if entry else "",
                _format_number(entry.break_minutes) if entry else "",
                _format_number(entry.duration) if entry else "",
                tr('csv.office_mark') if entry and entry.is_office else "",
                self.calendar.get_holiday_name(day) or "",
            ])

        return output.getvalue()

    @staticmethod
    def csv_bytes(text: str) -> bytes:
        """Encode CSV text for download (UTF-8 with byte-order mark)"""
        return text.encode('utf-8-sig')

    @staticmethod
    def csv_filename(account_name: str, month: datetime.date) -> str:
        return f"work_log_{account_name}_{month.strftime('%Y%m')}.csv"

    @staticmethod
    def json_filename(day: datetime.date) -> str:
        return f"backup_{day.strftime('%Y%m%d')}.json"

    def to_json(self, entries: Mapping[str, LogEntry], settings: AccountSettings, account_id: str) -> str:
        """Pretty-printed backup of one account"""
        data = {
            "logs": {key: entries[key].to_payload() for key in sorted(entries)},
            "settings": settings.to_payload(),
            "accountId": account_id,
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    def parse_import(self, text: str) -> ImportPayload:
        """
        Parse and validate a JSON backup completely before anything is applied.

        Durations are recomputed from the imported start/end/break.

        Raises:
            ImportFormatError: If the text is not a valid backup
        """
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise ImportFormatError(f"Not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ImportFormatError("Backup must be a JSON object")

        logs = None
        raw_logs = data.get("logs")
        if raw_logs is not None:
            if not isinstance(raw_logs, dict):
                raise ImportFormatError("'logs' must be an object keyed by date")
            logs = {}
            for key, value in raw_logs.items():
                try:
                    parse_date_key(key)
                    entry = LogEntry.model_validate(value)
                except (ValueError, ValidationError) as e:
                    raise ImportFormatError(f"Invalid log entry {key!r}: {e}") from e
                entry.duration = calculate_duration(entry.start, entry.end, entry.break_minutes)
                logs[key] = entry

        settings = None
        raw_settings = data.get("settings")
        if raw_settings is not None:
            try:
                settings = AccountSettings.model_validate(raw_settings)
            except ValidationError as e:
                raise ImportFormatError(f"Invalid settings: {e}") from e

        account_id = data.get("accountId")
        return ImportPayload(logs=logs, settings=settings,
                             account_id=str(account_id) if account_id is not None else None)
