"""Services layer - Business logic"""

from .calendar_service import CalendarService
from .log_repository import LogRepository
from .account_registry import AccountRegistry
from .sync_service import PersistenceSync
from .export_service import ExportService, ImportFormatError
from .report_service import ReportService
from .session import WorkLogSession

__all__ = ["CalendarService", "LogRepository", "AccountRegistry", "PersistenceSync",
           "ExportService", "ImportFormatError", "ReportService", "WorkLogSession"]
