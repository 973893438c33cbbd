# =============================================================================
# File: shedsite/services/content.py
# Purpose: Read helpers for home-page content, settings singleton and
#          the public project gallery.
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from shedsite.models import (
    BusinessSettings,
    HomeContent,
    PastProject,
    Review,
    VideoCarousel,
)

PROJECT_FILTERS = ["All", "Garage", "Home Addition", "Exterior Renovation", "Custom Shed"]

HOME_REVIEWS_LIMIT = 6
HOME_PROJECTS_LIMIT = 8


def get_settings(session: Session) -> BusinessSettings | None:
    """The business settings singleton (first row), if any."""
    return session.query(BusinessSettings).order_by(BusinessSettings.id.asc()).first()


def get_section(session: Session, section_name: str) -> HomeContent | None:
    return session.query(HomeContent).filter_by(section_name=section_name).first()


def active_videos(session: Session) -> List[VideoCarousel]:
    return (
        session.query(VideoCarousel)
        .filter(VideoCarousel.is_active == True)  # noqa: E712
        .order_by(VideoCarousel.order_index.asc(), VideoCarousel.id.asc())
        .all()
    )


def featured_reviews(session: Session, limit: int = HOME_REVIEWS_LIMIT) -> List[Review]:
    return (
        session.query(Review)
        .filter(Review.is_approved == True, Review.is_featured == True)  # noqa: E712
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
        .all()
    )


def recent_projects(session: Session, limit: int = HOME_PROJECTS_LIMIT) -> List[PastProject]:
    return (
        session.query(PastProject)
        .order_by(PastProject.created_at.desc(), PastProject.id.desc())
        .limit(limit)
        .all()
    )


def filter_projects(projects: Iterable[PastProject], project_type: str | None) -> List[PastProject]:
    """"All" (or nothing) keeps everything, otherwise substring match on project_type."""
    if not project_type or project_type == "All":
        return list(projects)
    return [p for p in projects if project_type in (p.project_type or "")]


def settings_payload(settings: BusinessSettings | None) -> Dict[str, Any]:
    if settings is None:
        return {}
    return {
        "business_name": settings.business_name,
        "phone": settings.phone or "",
        "email": settings.email or "",
        "address": settings.address or "",
        "hours": settings.hours or {},
        "facebook_url": settings.facebook_url or "",
        "instagram_url": settings.instagram_url or "",
    }
