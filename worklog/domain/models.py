"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Pydantic provides runtime data validation, ensuring data integrity when loading
from the cache tier, the durable tier or an imported JSON backup. Field aliases
keep the stored payloads readable by older exports (camelCase keys).
"""

import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator


class Account(BaseModel):
    """
    A named project/client namespace.

    Every log entry and settings record belongs to exactly one account.
    """
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Account name must not be blank")
        return value


class LogEntry(BaseModel):
    """
    One day's recorded work.

    `duration` is derived from start/end/break and is recomputed whenever
    the entry is saved or imported.
    """
    model_config = ConfigDict(populate_by_name=True)

    start: Optional[str] = None
    end: Optional[str] = None
    break_minutes: int = Field(default=0, ge=0, alias="breakTime")
    is_office: bool = Field(default=False, alias="isOffice")
    duration: float = Field(default=0.0, ge=0)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("duration", mode="before")
    @classmethod
    def _stale_duration_is_zero(cls, value):
        # Recomputed from start/end/break after loading
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            return 0.0

    def to_payload(self) -> dict:
        """Serialize with the stored (camelCase) field names"""
        return self.model_dump(by_alias=True)


class AccountSettings(BaseModel):
    """Per-account defaults and monthly target band."""
    model_config = ConfigDict(populate_by_name=True)

    default_start: str = Field(default="09:00", alias="defaultStart")
    default_end: str = Field(default="18:00", alias="defaultEnd")
    default_break: int = Field(default=60, ge=0, alias="defaultBreak")
    min_hours: float = Field(default=140, ge=0, alias="minHours")
    max_hours: float = Field(default=180, ge=0, alias="maxHours")
    theme_color: str = Field(default="#6366f1", alias="themeColor")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class DailyHours(BaseModel):
    """One point of the monthly trend"""
    day: int
    hours: float = 0.0


class MonthlySummary(BaseModel):
    """
    Aggregated figures for one calendar month of an account.

    `progress` is capped at 1.0 for display; `total_hours` never is.
    """
    month: datetime.date
    total_hours: float = 0.0
    active_days: int = 0
    office_days: int = 0
    daily: List[DailyHours] = Field(default_factory=list)
    min_hours: float = 0.0
    max_hours: float = 0.0
    progress: float = 0.0


class CalendarDay(BaseModel):
    """One cell of the calendar view"""
    date: datetime.date
    in_month: bool = True
    is_today: bool = False
    holiday: Optional[str] = None
    entry: Optional[LogEntry] = None


class Encoding(str, Enum):
    """How a stored resource is encoded on the durable tier"""
    JSON = "json"
    RAW_TEXT = "raw_text"


class ResourceKey(BaseModel):
    """
    Typed identifier of a persisted resource.

    The encoding travels with the key, so stores never have to guess the
    format from the key's spelling.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    encoding: Encoding = Encoding.JSON
    account_id: Optional[str] = None

    @classmethod
    def accounts(cls) -> "ResourceKey":
        return cls(name="accounts")

    @classmethod
    def logs(cls, account_id: str) -> "ResourceKey":
        return cls(name=f"logs-{account_id}", account_id=account_id)

    @classmethod
    def settings(cls, account_id: str) -> "ResourceKey":
        return cls(name=f"settings-{account_id}", account_id=account_id)

    @classmethod
    def backup(cls, account_id: str) -> "ResourceKey":
        return cls(name=f"backup-{account_id}.csv", encoding=Encoding.RAW_TEXT,
                   account_id=account_id)

    @property
    def is_raw(self) -> bool:
        return self.encoding == Encoding.RAW_TEXT

    def __str__(self) -> str:
        return self.name


class SaveResult(BaseModel):
    """Outcome of a durable-tier write"""
    success: bool
    error: Optional[str] = None


class AppPreferences(BaseModel):
    """
    Application-wide preferences.

    Loaded from settings.yaml; everything per account lives in AccountSettings.
    """
    model_config = ConfigDict(from_attributes=True)

    # Locale
    language: str = Field(default="auto", description="Export language: 'ja', 'en', or 'auto'")
    holiday_country: str = Field(default="JP", description="ISO country code for public holidays")
    holiday_subdiv: Optional[str] = Field(default=None, description="Optional subdivision code")
    first_weekday: int = Field(default=6, ge=0, le=6, description="First day of week (0=Monday, 6=Sunday)")

    # Persistence
    durable_backend: str = Field(default="sqlite", description="Durable tier: 'sqlite', 'files' or 'none'")
    cache_file_enabled: bool = Field(default=True, description="Mirror the cache tier to a JSON file")
    default_account_name: Optional[str] = Field(default=None, description="Name of the seeded account")
