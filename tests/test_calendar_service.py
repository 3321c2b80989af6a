"""
Tests for calendar windows, navigation and holiday lookup.
"""

import calendar
import datetime
import pytest
from worklog.services.calendar_service import CalendarService, add_months, month_days


class TestMonthWindow:

    def test_june_2024_spans_complete_sunday_weeks(self, calendar_service):
        """June 1st 2024 is a Saturday and June 30th a Sunday."""
        days = calendar_service.window(datetime.date(2024, 6, 15), "month")

        assert days[0] == datetime.date(2024, 5, 26)
        assert days[-1] == datetime.date(2024, 7, 6)
        assert len(days) == 42

    @pytest.mark.parametrize("reference", [
        datetime.date(2024, 2, 1),
        datetime.date(2024, 2, 29),
        datetime.date(2023, 12, 31),
        datetime.date(2025, 3, 10),
    ])
    def test_contains_every_day_of_month_in_whole_weeks(self, calendar_service, reference):
        days = calendar_service.window(reference, "month")

        assert len(days) % 7 == 0
        assert days[0].weekday() == calendar.SUNDAY
        for day in month_days(reference):
            assert day in days
        # Leading/trailing days never make a full week of their own
        in_month = [d for d in days if calendar_service.is_in_month(d, reference)]
        assert len(days) - len(in_month) < 14
        assert days == sorted(days)

    def test_monday_start_without_padding(self):
        """February 2021 starts on a Monday and ends on a Sunday."""
        service = CalendarService(country="JP", first_weekday=calendar.MONDAY)
        days = service.window(datetime.date(2021, 2, 10), "month")

        assert days[0] == datetime.date(2021, 2, 1)
        assert days[-1] == datetime.date(2021, 2, 28)
        assert len(days) == 28


class TestWeekWindow:

    def test_week_containing_reference(self, calendar_service):
        days = calendar_service.window(datetime.date(2024, 6, 12), "week")

        assert days == [datetime.date(2024, 6, 9) + datetime.timedelta(days=i) for i in range(7)]

    def test_reference_on_week_start(self, calendar_service):
        days = calendar_service.window(datetime.date(2024, 6, 9), "week")
        assert days[0] == datetime.date(2024, 6, 9)

    def test_unknown_mode_raises(self, calendar_service):
        with pytest.raises(ValueError):
            calendar_service.window(datetime.date(2024, 6, 9), "year")


class TestNavigation:

    def test_next_month(self, calendar_service):
        assert calendar_service.next(datetime.date(2024, 6, 15), "month") == datetime.date(2024, 7, 15)

    def test_previous_month_crosses_year(self, calendar_service):
        assert calendar_service.previous(datetime.date(2024, 1, 15), "month") == datetime.date(2023, 12, 15)

    def test_month_step_from_long_month_shifts_day(self, calendar_service):
        feb = calendar_service.next(datetime.date(2024, 1, 31), "month")
        assert feb == datetime.date(2024, 2, 29)
        assert calendar_service.next(feb, "month") == datetime.date(2024, 3, 29)

    def test_week_steps(self, calendar_service):
        assert calendar_service.next(datetime.date(2024, 6, 28), "week") == datetime.date(2024, 7, 5)
        assert calendar_service.previous(datetime.date(2024, 6, 3), "week") == datetime.date(2024, 5, 27)

    def test_add_months_multiple(self):
        assert add_months(datetime.date(2024, 11, 30), 3) == datetime.date(2025, 2, 28)
        assert add_months(datetime.date(2024, 3, 31), -13) == datetime.date(2023, 2, 28)


class TestDayFlags:

    def test_in_month(self, calendar_service):
        reference = datetime.date(2024, 6, 1)
        assert calendar_service.is_in_month(datetime.date(2024, 6, 30), reference)
        assert not calendar_service.is_in_month(datetime.date(2024, 5, 31), reference)
        assert not calendar_service.is_in_month(datetime.date(2023, 6, 10), reference)

    def test_today(self, calendar_service):
        today = datetime.date(2024, 6, 15)
        assert calendar_service.is_today(today, today=today)
        assert not calendar_service.is_today(datetime.date(2024, 6, 14), today=today)
        assert calendar_service.is_today(datetime.date.today())

    def test_new_year_is_holiday(self, calendar_service):
        new_year = datetime.date(2024, 1, 1)
        assert calendar_service.is_holiday(new_year)
        assert calendar_service.get_holiday_name(new_year)

    def test_regular_day_has_no_holiday_label(self, calendar_service):
        assert calendar_service.get_holiday_name(datetime.date(2024, 6, 12)) is None
        assert not calendar_service.is_holiday(datetime.date(2024, 6, 12))

    def test_english_holiday_labels(self):
        service = CalendarService(country="JP", language="en")
        assert service.get_holiday_name(datetime.date(2024, 1, 1))

    def test_weekday_label(self, calendar_service):
        assert calendar_service.weekday_label(datetime.date(2024, 6, 15)) == "土"
        assert calendar_service.weekday_label(datetime.date(2024, 6, 16)) == "日"

    def test_weekend(self, calendar_service):
        assert calendar_service.is_weekend(datetime.date(2024, 6, 15))
        assert not calendar_service.is_weekend(datetime.date(2024, 6, 14))


def test_month_days_covers_leap_february():
    days = month_days(datetime.date(2024, 2, 10))
    assert len(days) == 29
    assert days[0] == datetime.date(2024, 2, 1)
    assert days[-1] == datetime.date(2024, 2, 29)
