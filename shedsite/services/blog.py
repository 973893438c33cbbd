# =============================================================================
# File: shedsite/services/blog.py
# Purpose: Blog post helpers (slug generation, publish state).
# =============================================================================
from __future__ import annotations

import datetime as dt
import re

from sqlalchemy.orm import Session

from shedsite.models import BlogPost

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Build a URL slug from a post title.

    "Hello, World!" -> "hello-world"
    """
    slug = _NON_ALNUM.sub("-", (title or "").lower())
    return slug.strip("-")


def apply_publish_state(
    post: BlogPost,
    is_published: bool,
    published_at: dt.datetime | None = None,
    now: dt.datetime | None = None,
) -> BlogPost:
    """
    Set is_published / published_at together.

    - published: keep the given date, else the existing one, else now
    - unpublished: published_at is cleared
    """
    now = now or dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    post.is_published = is_published
    if is_published:
        post.published_at = published_at or post.published_at or now
    else:
        post.published_at = None
    return post


def toggle_publish(post: BlogPost, now: dt.datetime | None = None) -> BlogPost:
    """Flip the publish flag; publishing stamps the current time."""
    now = now or dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    if post.is_published:
        post.is_published = False
        post.published_at = None
    else:
        post.is_published = True
        post.published_at = now
    return post


def slug_taken(session: Session, slug: str, exclude_id: int | None = None) -> bool:
    q = session.query(BlogPost).filter(BlogPost.slug == slug)
    if exclude_id is not None:
        q = q.filter(BlogPost.id != exclude_id)
    return q.first() is not None


def published_posts(session: Session) -> list[BlogPost]:
    """Published posts, newest first."""
    return (
        session.query(BlogPost)
        .filter(BlogPost.is_published == True)  # noqa: E712
        .order_by(BlogPost.published_at.desc(), BlogPost.id.desc())
        .all()
    )


def get_published_post(session: Session, slug: str) -> BlogPost | None:
    return (
        session.query(BlogPost)
        .filter_by(slug=slug, is_published=True)
        .first()
    )
