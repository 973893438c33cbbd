# =============================================================================
# File: shedsite/services/exports.py
# Purpose: CSV exports of leads (quote requests, contact submissions).
# =============================================================================
from __future__ import annotations

import csv
import datetime as dt
import io
from typing import Any, Iterable, List, Sequence

from shedsite.models import ContactSubmission, QuoteRequest

QUOTE_HEADERS = [
    "Date", "Name", "Email", "Phone", "Project Type", "Material", "Size",
    "Budget", "Status", "Custom Message", "Has Images",
]

CONTACT_HEADERS = ["Date", "Name", "Email", "Phone", "Subject", "Status"]


def _date(value: dt.datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def quote_row(q: QuoteRequest) -> List[str]:
    return [
        _date(q.created_at),
        q.customer_name,
        q.email,
        q.phone or "",
        q.project_type,
        q.material_type or "",
        q.size or "",
        q.budget_range or "",
        q.status,
        q.custom_message or "",
        "Yes" if q.inspiration_images else "No",
    ]


def contact_row(c: ContactSubmission) -> List[str]:
    return [
        _date(c.created_at),
        c.name,
        c.email,
        c.phone or "",
        c.subject or "",
        c.status,
    ]


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Header row + data rows, every field quoted, rows joined with '\\n'."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if v is None else v for v in row])
    return buf.getvalue().rstrip("\n")


def quotes_csv(quotes: Iterable[QuoteRequest]) -> str:
    return to_csv(QUOTE_HEADERS, (quote_row(q) for q in quotes))


def contacts_csv(contacts: Iterable[ContactSubmission]) -> str:
    return to_csv(CONTACT_HEADERS, (contact_row(c) for c in contacts))


def export_filename(kind: str, today: dt.date | None = None) -> str:
    """"quote-requests" -> "quote-requests-2025-01-31.csv"."""
    today = today or dt.date.today()
    return f"{kind}-{today.isoformat()}.csv"
