"""
Tests for the WeekAgenda orchestration layer.
"""

import logging
from datetime import date, datetime
from typing import List

import pendulum
import pytest

from weekagenda.domain.exceptions import InvalidParameters
from weekagenda.domain.models import AppointmentView, SkipReason
from weekagenda.services.week_agenda import WeekAgenda, validate_parameters

MONDAY = pendulum.datetime(2024, 1, 1)


def _record(start: str, end: str, title: str = "") -> dict:
    return {
        "start_date": pendulum.parse(start),
        "end_date": pendulum.parse(end),
        "title": title,
    }


class StubSurface:
    """Minimal stub matching RenderSurfaceProtocol."""

    def __init__(self):
        self.target = None
        self.headers: List[str] = []
        self.views: List[AppointmentView] = []

    def build(self, target, headers):
        self.target = target
        self.headers = headers

    def add_appointment(self, view):
        self.views.append(view)


class TestValidateParameters:
    """Tests for boundary validation."""

    def test_valid_parameters(self):
        """Test that usable arguments report no problems."""
        assert validate_parameters("week", MONDAY, []) == []
        assert validate_parameters("week", date(2024, 1, 1), ()) == []

    @pytest.mark.parametrize("target, start_date, agenda, count", [
        ("", MONDAY, [], 1),
        (None, MONDAY, [], 1),
        ("week", "2024-01-01", [], 1),
        ("week", MONDAY, {"start_date": MONDAY}, 1),
        ("week", MONDAY, "agenda", 1),
        (42, None, None, 3),
    ])
    def test_problems_are_reported(self, target, start_date, agenda, count):
        """Test that every unusable argument is named."""
        assert len(validate_parameters(target, start_date, agenda)) == count

    def test_constructor_raises_invalid_parameters(self):
        """Test that the agenda refuses to build with bad arguments."""
        with pytest.raises(InvalidParameters) as exc_info:
            WeekAgenda("", "tomorrow", None)

        assert len(exc_info.value.problems) == 3
        assert "target" in str(exc_info.value)


class TestWeekConstruction:
    """Tests for the 7-day window."""

    def test_builds_seven_consecutive_days(self):
        """Test bucket keys start at the start day's midnight."""
        week = WeekAgenda("week", pendulum.datetime(2024, 1, 1, 15, 30), [])

        assert week.start_day == MONDAY
        assert len(week.days) == 7
        assert [b.key for b in week.days] == [date(2024, 1, d) for d in range(1, 8)]
        assert week.end_day == pendulum.datetime(2024, 1, 7)

    def test_accepts_plain_dates(self):
        """Test that date and naive datetime start values are normalized."""
        assert WeekAgenda("week", date(2024, 1, 1), []).start_day == MONDAY
        assert WeekAgenda("week", datetime(2024, 1, 1, 8), []).start_day == MONDAY

    def test_day_headers(self):
        """Test one label per day."""
        week = WeekAgenda("week", MONDAY, [])

        headers = week.day_headers()

        assert headers[0] == "Mon Jan 01 2024"
        assert headers[6] == "Sun Jan 07 2024"
        assert len(headers) == 7

    def test_day_headers_custom_format(self):
        """Test a configured header format."""
        week = WeekAgenda("week", MONDAY, [])

        assert week.day_headers("DD.MM.")[:2] == ["01.01.", "02.01."]


class TestFillAgenda:
    """Tests for filing raw records into days."""

    def test_appointment_lands_in_its_day(self):
        """Test a Wednesday appointment in bucket 2."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-03 09:00", "2024-01-03 10:00", "Standup"),
        ])

        assert [len(b) for b in week.days] == [0, 0, 1, 0, 0, 0, 0]
        assert week.bucket_for(date(2024, 1, 3)).appointments[0].title == "Standup"
        assert week.skipped == []

    def test_out_of_window_appointment_is_dropped(self, caplog):
        """Test that records outside the week are absorbed silently."""
        record = _record("2024-01-11 09:00", "2024-01-11 10:00", "Later")

        with caplog.at_level(logging.DEBUG, logger="weekagenda.services.week_agenda"):
            week = WeekAgenda("week", MONDAY, [record])

        assert "11.01.2024 09:00 - 10:00 Later" in caplog.text

        assert all(len(b) == 0 for b in week.days)
        assert len(week.skipped) == 1
        assert week.skipped[0].reason == SkipReason.OUT_OF_WINDOW
        assert week.skipped[0].record is record

    def test_invalid_records_do_not_stop_the_batch(self, caplog):
        """Test that bad records are skipped and the rest is filed."""
        agenda = [
            {"start_date": "not a date", "end_date": MONDAY, "title": "Broken"},
            "not a record",
            _record("2024-01-01 09:00", "2024-01-01 10:00", "Fine"),
        ]

        with caplog.at_level(logging.DEBUG, logger="weekagenda.services.week_agenda"):
            week = WeekAgenda("week", MONDAY, agenda)

        assert len(week.days[0]) == 1
        assert [s.index for s in week.skipped] == [0, 1]
        assert all(s.reason == SkipReason.INVALID_APPOINTMENT for s in week.skipped)
        assert "Skipping agenda record 0" in caplog.text

    def test_fill_agenda_returns_added_count(self):
        """Test that more records can be filed after construction."""
        week = WeekAgenda("week", MONDAY, [])

        added = week.fill_agenda([
            _record("2024-01-02 09:00", "2024-01-02 10:00"),
            _record("2024-01-09 09:00", "2024-01-09 10:00"),
        ])

        assert added == 1
        assert len(week.days[1]) == 1

    def test_buckets_match_by_calendar_day_across_timezones(self):
        """Test that a local midnight appointment files under its own date."""
        start = pendulum.datetime(2024, 1, 1, 0, 30, tz="Europe/Berlin")

        week = WeekAgenda("week", MONDAY, [
            {"start_date": start, "end_date": start.add(hours=1), "title": "Early"},
        ])

        assert len(week.days[0]) == 1


class TestLayout:
    """Tests for grouping and projection across the week."""

    def test_single_appointment_layout(self):
        """Test a lone appointment on day 2."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-03 09:00", "2024-01-03 10:00", "Standup"),
        ])

        views = week.layout(row_height=240)

        assert len(views) == 1
        view = views[0]
        assert view.day_index == 2
        assert view.position == 0
        assert view.slot_index == 0
        assert view.slot_count == 1
        assert view.width_percent == 98
        assert view.left_percent == 1
        assert view.top == 90
        assert view.height == 10
        assert view.formatted_start_time == "09:00"

    def test_overlapping_appointments_layout(self):
        """Test two overlapping appointments side by side."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-02 09:30", "2024-01-02 10:30", "Review"),
            _record("2024-01-02 09:00", "2024-01-02 10:00", "Standup"),
        ])

        views = week.layout(row_height=480)

        assert [v.title for v in views] == ["Standup", "Review"]
        assert [v.slot_index for v in views] == [0, 1]
        assert [v.slot_count for v in views] == [2, 2]
        assert [v.width_percent for v in views] == [48, 48]
        assert [v.left_percent for v in views] == [1, 51]
        assert all(v.day_index == 1 for v in views)

    def test_repaired_appointment_layout(self):
        """Test that a repaired appointment keeps a 2 hour height."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-01T23:00", "2024-01-01T22:00", "Deploy"),
        ])

        view = week.layout(row_height=24)[0]

        assert view.top == 23
        assert view.height == 2

    def test_views_ordered_by_day_then_start(self):
        """Test view order and position within the day."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-05 08:00", "2024-01-05 09:00", "fri"),
            _record("2024-01-01 14:00", "2024-01-01 15:00", "mon late"),
            _record("2024-01-01 08:00", "2024-01-01 09:00", "mon early"),
        ])

        views = week.layout(row_height=48)

        assert [(v.day_index, v.position, v.title) for v in views] == [
            (0, 0, "mon early"),
            (0, 1, "mon late"),
            (4, 0, "fri"),
        ]

    def test_layout_is_idempotent(self):
        """Test that laying out twice gives identical views."""
        week = WeekAgenda("week", MONDAY, [
            _record("2024-01-01 09:00", "2024-01-01 10:00", "a"),
            _record("2024-01-01 09:30", "2024-01-01 10:30", "b"),
            _record("2024-01-01 09:45", "2024-01-01 11:00", "c"),
        ])

        assert week.layout(row_height=480) == week.layout(row_height=480)

    def test_render_feeds_surface(self):
        """Test that the surface receives headers and every view."""
        surface = StubSurface()
        week = WeekAgenda("team-week", MONDAY, [
            _record("2024-01-01 09:00", "2024-01-01 10:00", "a"),
            _record("2024-01-04 09:00", "2024-01-04 10:00", "b"),
        ])

        views = week.render(surface, row_height=480)

        assert surface.target == "team-week"
        assert surface.headers == week.day_headers()
        assert surface.views == views
        assert [v.day_index for v in surface.views] == [0, 3]
