"""
Calendar Service - Calendar windows, navigation and public holidays.

Architecture Decision: Strategy Pattern
The holiday calendar is a pure lookup provided by the `holidays` library,
so other countries only need a different country code.
"""

import calendar
import datetime
from typing import List, Optional

import holidays

from worklog.i18n import get_language, tr

MONTH = "month"
WEEK = "week"
VIEW_MODES = (MONTH, WEEK)


def _pick_language(lang: str, supported) -> Optional[str]:
    """Match an app language code ('en') to one the holiday calendar supports ('en_US')"""
    if not lang or not supported:
        return None
    for candidate in supported:
        if candidate == lang or candidate.split('_')[0] == lang:
            return candidate
    return None


def add_months(day: datetime.date, months: int) -> datetime.date:
    """
    Shift a date by whole months.

    The day of month is kept when the target month has it, otherwise it
    falls to that month's last day.
    """
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def month_start(day: datetime.date) -> datetime.date:
    return day.replace(day=1)


def month_days(day: datetime.date) -> List[datetime.date]:
    """Every date of the month containing `day`"""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return [datetime.date(day.year, day.month, d) for d in range(1, last_day + 1)]


class CalendarService:
    """
    Builds the dates shown by the calendar view and answers per-day
    questions (same month, today, holiday).
    """

    def __init__(self, country: str = 'JP', subdiv: Optional[str] = None,
                 first_weekday: int = calendar.SUNDAY, language: Optional[str] = None):
        """
        Initialize the calendar.

        Args:
            country: ISO country code for public holidays (e.g., 'JP')
            subdiv: Optional subdivision (state/prefecture) code
            first_weekday: First day of the week, 0=Monday ... 6=Sunday
            language: Holiday label language, defaults to the app language
        """
        self.country = country
        self.subdiv = subdiv
        self.first_weekday = first_weekday
        self._calendar = calendar.Calendar(firstweekday=first_weekday)

        base = holidays.country_holidays(country, subdiv=subdiv)
        holiday_lang = _pick_language(language or get_language(), base.supported_languages)
        if holiday_lang and holiday_lang != base.default_language:
            self.holidays = holidays.country_holidays(country, subdiv=subdiv, language=holiday_lang)
        else:
            self.holidays = base

    @classmethod
    def from_preferences(cls, prefs) -> 'CalendarService':
        return cls(country=prefs.holiday_country, subdiv=prefs.holiday_subdiv,
                   first_weekday=prefs.first_weekday)

    def window(self, reference_date: datetime.date, mode: str = MONTH) -> List[datetime.date]:
        """
        Dates to display for a view.

        Args:
            reference_date: Any date inside the month/week to show
            mode: 'month' or 'week'

        Returns:
            Ordered list of dates; always complete weeks (multiple of 7)
        """
        if mode == MONTH:
            weeks = self._calendar.monthdatescalendar(reference_date.year, reference_date.month)
            return [day for week in weeks for day in week]
        elif mode == WEEK:
            start = self.week_start(reference_date)
            return [start + datetime.timedelta(days=i) for i in range(7)]
        raise ValueError(f"Unknown view mode: {mode}")

    def week_start(self, day: datetime.date) -> datetime.date:
        offset = (day.weekday() - self.first_weekday) % 7
        return day - datetime.timedelta(days=offset)

    def next(self, reference_date: datetime.date, mode: str = MONTH) -> datetime.date:
        """Advance by one month or one week"""
        return self._step(reference_date, mode, 1)

    def previous(self, reference_date: datetime.date, mode: str = MONTH) -> datetime.date:
        """Go back by one month or one week"""
        return self._step(reference_date, mode, -1)

    def _step(self, reference_date: datetime.date, mode: str, direction: int) -> datetime.date:
        if mode == MONTH:
            return add_months(reference_date, direction)
        elif mode == WEEK:
            return reference_date + datetime.timedelta(weeks=direction)
        raise ValueError(f"Unknown view mode: {mode}")

    def is_in_month(self, day: datetime.date, reference_date: datetime.date) -> bool:
        """Check if `day` belongs to the month being viewed"""
        return (day.year, day.month) == (reference_date.year, reference_date.month)

    def is_today(self, day: datetime.date, today: Optional[datetime.date] = None) -> bool:
        return day == (today or datetime.date.today())

    def get_holiday_name(self, day: datetime.date) -> Optional[str]:
        """
        Get the name of the holiday for a given date.

        Returns:
            Holiday name or None if not a holiday
        """
        return self.holidays.get(day)

    def is_holiday(self, day: datetime.date) -> bool:
        return day in self.holidays

    def is_weekend(self, day: datetime.date) -> bool:
        """Check if date is a weekend"""
        return day.weekday() > 4

    def weekday_label(self, day: datetime.date) -> str:
        """Localized short weekday name"""
        return tr(f"weekday.{day.weekday()}")
