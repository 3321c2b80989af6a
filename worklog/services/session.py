"""
Work Log Session - the single entry point the UI talks to.

Architecture Decision: Explicit save points
Every mutator (accounts, logs, settings) ends with one explicit call into
PersistenceSync instead of persisting on change detection. Observers
registered with `on_change` are told when the session state changed, so
the UI stays decoupled from the core.
"""

import datetime
import logging
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from worklog.domain.models import AccountSettings, CalendarDay, LogEntry, MonthlySummary, ResourceKey
from worklog.i18n import set_language, tr
from worklog.infra.cache import LocalCache
from worklog.infra.config import get_settings
from worklog.infra.durable_store import create_durable_store
from worklog.services.account_registry import AccountRegistry
from worklog.services.calendar_service import CalendarService, MONTH
from worklog.services.export_service import ExportService, ImportFormatError
from worklog.services.log_repository import LogRepository, date_key
from worklog.services.sync_service import PersistenceSync

logger = logging.getLogger(__name__)


class WorkLogSession:
    """
    Owns the current account's log mapping and settings.

    Switching accounts replaces both; nothing of the previous account is
    kept in memory.
    """

    def __init__(self, sync: PersistenceSync, calendar_service: CalendarService,
                 default_account_name: Optional[str] = None):
        self.sync = sync
        self.calendar = calendar_service
        self.exporter = ExportService(calendar_service)
        self.default_account_name = default_account_name or tr("account.default_name")

        self.registry = AccountRegistry(default_name=self.default_account_name)
        self.logs = LogRepository(self.registry.current_id)
        self.settings = AccountSettings()

        self._listeners: List[Callable[['WorkLogSession'], None]] = []
        # Bumped on every activation / local mutation to detect stale durable reads
        self._activation = 0
        self._mutations = 0

    @classmethod
    def from_settings(cls, settings=None) -> 'WorkLogSession':
        """Build a session wired to the configured cache and durable tiers"""
        settings = settings or get_settings()
        prefs = settings.preferences
        set_language(prefs.language)

        sync = PersistenceSync(LocalCache(settings.cache_file), create_durable_store(settings))
        return cls(sync, CalendarService.from_preferences(prefs),
                   default_account_name=prefs.default_account_name)

    # --- Observers ---

    def on_change(self, callback: Callable[['WorkLogSession'], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    # --- Loading ---

    def _parse_accounts(self, payload) -> Optional[AccountRegistry]:
        if not payload:
            return None
        try:
            return AccountRegistry.from_payload(payload, default_name=self.default_account_name)
        except (ValidationError, TypeError) as e:
            logger.warning(f"Ignoring invalid account list: {e}")
            return None

    def _parse_logs(self, account_id: str, payload) -> Optional[LogRepository]:
        if payload is None:
            return None
        try:
            return LogRepository.from_payload(account_id, payload)
        except (ValidationError, AttributeError) as e:
            logger.warning(f"Ignoring invalid logs for account {account_id}: {e}")
            return None

    def _parse_settings(self, payload) -> Optional[AccountSettings]:
        if payload is None:
            return None
        try:
            return AccountSettings.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid settings: {e}")
            return None

    async def open(self) -> None:
        """
        Load the account list and activate the first account.

        The cache tier gives the initial list; the durable tier replaces it
        when it has one and its first account becomes current. A stored list
        that cannot be parsed is never overwritten.
        """
        key = ResourceKey.accounts()
        cached_payload = self.sync.read_cached(key)
        registry = self._parse_accounts(cached_payload)
        if registry is not None:
            self.registry = registry

        durable_payload = await self.sync.read_durable(key)
        durable = self._parse_accounts(durable_payload)
        if durable is not None:
            self.registry.replace_all(durable.accounts)
            self.registry.select(self.registry.accounts[0].id)

        unreadable = (cached_payload and registry is None) or (durable_payload and durable is None)
        if not unreadable:
            self.sync.save(key, self.registry.to_payload())
        elif durable is not None:
            self.sync.refresh_cache(key, self.registry.to_payload())
        await self._activate(self.registry.current_id)

    async def _activate(self, account_id: str) -> None:
        """
        Load an account: cache tier first, then the durable tier overrides.

        A durable result is dropped if another activation started or the
        user changed data while it was being read.
        """
        self._activation += 1
        activation = self._activation
        mutations = self._mutations

        logs_key = ResourceKey.logs(account_id)
        settings_key = ResourceKey.settings(account_id)

        cached_logs = self._parse_logs(account_id, self.sync.read_cached(logs_key))
        cached_settings = self._parse_settings(self.sync.read_cached(settings_key))
        self.logs = cached_logs if cached_logs is not None else LogRepository(account_id)
        self.settings = cached_settings if cached_settings is not None else AccountSettings()
        self._notify()

        durable_logs = self._parse_logs(account_id, await self.sync.read_durable(logs_key))
        durable_settings = self._parse_settings(await self.sync.read_durable(settings_key))

        if activation != self._activation or mutations != self._mutations:
            logger.debug(f"Discarding superseded durable load for account {account_id}")
            return

        changed = False
        if durable_logs is not None:
            self.logs = durable_logs
            self.sync.refresh_cache(logs_key, self.logs.to_payload())
            changed = True
        if durable_settings is not None:
            self.settings = durable_settings
            self.sync.refresh_cache(settings_key, self.settings.to_payload())
            changed = True
        if changed:
            self._notify()

    # --- Accounts ---

    @property
    def current_account(self):
        return self.registry.current

    async def switch_account(self, account_id: str) -> None:
        """
        Make another account current.

        Raises:
            ValueError: If the account does not exist
        """
        if self.registry.get(account_id) is None:
            raise ValueError(f"Account {account_id} not found")
        # The current account and its logs stay paired until the switch
        await self.sync.flush(self.registry.current_id)
        self.registry.select(account_id)
        await self._activate(account_id)

    async def create_account(self, name: str):
        """Create an account and switch to it. Blank names are ignored (returns None)."""
        previous = self.registry.current_id
        account = self.registry.create(name)
        if account is None:
            return None
        self.sync.save(ResourceKey.accounts(), self.registry.to_payload())
        await self.sync.flush(previous)
        await self._activate(account.id)
        return account

    async def delete_account(self, account_id: str) -> bool:
        """
        Delete an account. The last remaining account cannot be deleted.

        Stored logs and settings of the deleted account are left in place.
        """
        was_current = account_id == self.registry.current_id
        if not self.registry.delete(account_id):
            return False
        self.sync.save(ResourceKey.accounts(), self.registry.to_payload())
        if was_current:
            await self.sync.flush(account_id)
            await self._activate(self.registry.current_id)
        else:
            self._notify()
        return True

    # --- Logs ---

    def draft_log(self, day: datetime.date) -> LogEntry:
        """Entry to show in the day editor"""
        return self.logs.draft_for(day, self.settings)

    def save_log(self, day: datetime.date, start: Optional[str], end: Optional[str],
                 break_minutes: int = 0, is_office: bool = False) -> LogEntry:
        entry = self.logs.upsert(day, start, end, break_minutes, is_office)
        self._mutations += 1
        self._persist_logs(day)
        self._notify()
        return entry

    def delete_log(self, day: datetime.date) -> bool:
        if not self.logs.remove(day):
            return False
        self._mutations += 1
        self._persist_logs(day)
        self._notify()
        return True

    def _persist_logs(self, month: datetime.date) -> None:
        account = self.registry.current
        self.sync.save(ResourceKey.logs(account.id), self.logs.to_payload())
        if not self.sync.has_durable:
            return
        try:
            csv_text = self.exporter.to_csv(self.logs.entries, month, account.name)
        except Exception:
            # The CSV is a side-effect backup; the log save above already happened
            logger.exception(f"Failed to build CSV backup for account {account.id}")
            return
        self.sync.save_backup(ResourceKey.backup(account.id), csv_text)

    # --- Settings ---

    def update_settings(self, **changes) -> AccountSettings:
        """
        Change the current account's settings.

        Raises:
            pydantic.ValidationError: If a value is invalid (nothing is changed)
        """
        self.settings = AccountSettings.model_validate({**self.settings.model_dump(), **changes})
        self._mutations += 1
        self.sync.save(ResourceKey.settings(self.registry.current_id), self.settings.to_payload())
        self._notify()
        return self.settings

    # --- Display data ---

    def monthly_summary(self, month: datetime.date) -> MonthlySummary:
        return self.logs.monthly_aggregate(month, self.settings)

    def calendar_view(self, reference_date: datetime.date, mode: str = MONTH,
                      today: Optional[datetime.date] = None) -> List[CalendarDay]:
        """Calendar cells for the view, with the entry of each day attached"""
        entries = self.logs.entries
        return [
            CalendarDay(
                date=day,
                in_month=self.calendar.is_in_month(day, reference_date) if mode == MONTH else True,
                is_today=self.calendar.is_today(day, today),
                holiday=self.calendar.get_holiday_name(day),
                entry=entries.get(date_key(day)),
            )
            for day in self.calendar.window(reference_date, mode)
        ]

    # --- Export / import ---

    def export_csv(self, month: datetime.date) -> Tuple[str, bytes]:
        """CSV download of one month: (file name, bytes with BOM)"""
        account = self.registry.current
        text = self.exporter.to_csv(self.logs.entries, month, account.name)
        return self.exporter.csv_filename(account.name, month), self.exporter.csv_bytes(text)

    def export_json(self, today: Optional[datetime.date] = None) -> Tuple[str, bytes]:
        """JSON backup download of the current account: (file name, bytes)"""
        text = self.exporter.to_json(self.logs.entries, self.settings, self.registry.current_id)
        return self.exporter.json_filename(today or datetime.date.today()), text.encode('utf-8')

    def import_json(self, text: str) -> bool:
        """
        Restore logs and/or settings of the current account from a JSON backup.

        Returns:
            True on success; False if the file was invalid (nothing changed)
        """
        try:
            payload = self.exporter.parse_import(text)
        except ImportFormatError as e:
            logger.warning(f"Import failed: {e}")
            return False

        account_id = self.registry.current_id
        if payload.logs is not None:
            self.logs.replace_all(payload.logs)
            self._persist_logs(datetime.date.today())
        if payload.settings is not None:
            self.settings = payload.settings
            self.sync.save(ResourceKey.settings(account_id), self.settings.to_payload())
        self._mutations += 1
        self._notify()
        logger.info(f"Imported backup into account {account_id}")
        return True

    async def flush(self) -> None:
        await self.sync.flush()

    async def close(self) -> None:
        await self.sync.close()
