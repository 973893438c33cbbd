# =============================================================================
# File: shedsite/services/hours.py
# Purpose: Business hours formatting for header, footer and contact section.
# =============================================================================
from __future__ import annotations

from typing import Any, List, Mapping

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]

DAY_LABELS = [
    ("monday", "Mon"),
    ("tuesday", "Tue"),
    ("wednesday", "Wed"),
    ("thursday", "Thu"),
    ("friday", "Fri"),
    ("saturday", "Sat"),
    ("sunday", "Sun"),
]

DEFAULT_SUMMARY = "Mon-Fri: 7AM-6PM | Sat: 8AM-4PM"
DEFAULT_DETAILED = [
    "Mon-Fri: 7:00 AM - 6:00 PM",
    "Sat: 8:00 AM - 4:00 PM",
    "Sun: Closed",
]


def _is_open(value: Any) -> bool:
    return bool(value) and value != "Closed"


def format_business_hours(hours: Mapping[str, str] | None) -> str:
    """One-line summary, e.g. "Mon-Fri: 7AM-6PM | Sat: 8AM-4PM"."""
    if not hours or not isinstance(hours, Mapping):
        return DEFAULT_SUMMARY

    saturday = hours.get("saturday")
    sunday = hours.get("sunday")

    weekday_hours = hours.get("monday")
    all_same = all(hours.get(day) == weekday_hours for day in WEEKDAYS)

    if all_same and weekday_hours:
        formatted = f"Mon-Fri: {weekday_hours}"
        if _is_open(saturday):
            formatted += f" | Sat: {saturday}"
        if _is_open(sunday):
            formatted += f" | Sun: {sunday}"
        return formatted

    parts: List[str] = []
    for day in WEEKDAYS:
        if _is_open(hours.get(day)):
            parts.append(f"{day[:3].capitalize()}: {hours[day]}")
    if _is_open(saturday):
        parts.append(f"Sat: {saturday}")
    if _is_open(sunday):
        parts.append(f"Sun: {sunday}")

    return " | ".join(parts) or "Hours vary by day"


def format_detailed_hours(hours: Mapping[str, str] | None) -> List[str]:
    """One line per day, "Closed" for missing days."""
    if not hours or not isinstance(hours, Mapping):
        return list(DEFAULT_DETAILED)

    lines = []
    for key, label in DAY_LABELS:
        value = hours.get(key)
        lines.append(f"{label}: {value}" if _is_open(value) else f"{label}: Closed")
    return lines
