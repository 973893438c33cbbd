# =============================================================================
# File: shedsite/services/dashboard.py
# Purpose: Admin dashboard counters.
# =============================================================================
from __future__ import annotations

import datetime as dt
from typing import Dict

from sqlalchemy.orm import Session

from shedsite.models import ContactSubmission, PastProject, QuoteRequest, Review

RECENT_DAYS = 7


def dashboard_stats(session: Session, now: dt.datetime | None = None) -> Dict[str, int]:
    """Totals + leads received during the last RECENT_DAYS days."""
    now = now or dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    since = now - dt.timedelta(days=RECENT_DAYS)

    return {
        "total_quotes": session.query(QuoteRequest).count(),
        "total_contacts": session.query(ContactSubmission).count(),
        "total_projects": session.query(PastProject).count(),
        "total_reviews": session.query(Review).count(),
        "recent_quotes": (
            session.query(QuoteRequest).filter(QuoteRequest.created_at > since).count()
        ),
        "recent_contacts": (
            session.query(ContactSubmission).filter(ContactSubmission.created_at > since).count()
        ),
    }
