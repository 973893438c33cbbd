# tests/test_hours.py
from shedsite.services.hours import (
    DEFAULT_DETAILED,
    DEFAULT_SUMMARY,
    format_business_hours,
    format_detailed_hours,
)

WEEK = {
    "monday": "7AM-6PM",
    "tuesday": "7AM-6PM",
    "wednesday": "7AM-6PM",
    "thursday": "7AM-6PM",
    "friday": "7AM-6PM",
    "saturday": "8AM-4PM",
    "sunday": "Closed",
}


def test_defaults_without_hours():
    assert format_business_hours(None) == DEFAULT_SUMMARY
    assert format_business_hours({}) == DEFAULT_SUMMARY
    assert format_detailed_hours(None) == DEFAULT_DETAILED


def test_same_weekday_hours_are_grouped():
    assert format_business_hours(WEEK) == "Mon-Fri: 7AM-6PM | Sat: 8AM-4PM"
    assert format_business_hours(dict(WEEK, sunday="10AM-2PM")) == (
        "Mon-Fri: 7AM-6PM | Sat: 8AM-4PM | Sun: 10AM-2PM"
    )
    assert format_business_hours(dict(WEEK, saturday="Closed")) == "Mon-Fri: 7AM-6PM"


def test_different_weekday_hours_are_listed():
    hours = {"monday": "9AM-5PM", "tuesday": "10AM-2PM"}
    assert format_business_hours(hours) == "Mon: 9AM-5PM | Tue: 10AM-2PM"


def test_nothing_open():
    assert format_business_hours({"saturday": "Closed"}) == "Hours vary by day"


def test_detailed_hours_one_line_per_day():
    lines = format_detailed_hours(dict(WEEK, wednesday=""))
    assert len(lines) == 7
    assert lines[0] == "Mon: 7AM-6PM"
    assert lines[2] == "Wed: Closed"
    assert lines[-1] == "Sun: Closed"
