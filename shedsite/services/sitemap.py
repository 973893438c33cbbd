"""
Sitemap generation and search-engine submission.

The sitemap lists the three static public pages, one entry per published
blog post and one per featured project. Submission pings are best effort: a
failing engine is reported, never raised.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote
from xml.sax.saxutils import escape

import httpx
from sqlalchemy.orm import Session

from shedsite.models import BlogPost, PastProject, ShedListing

log = logging.getLogger(__name__)

PING_ENDPOINTS = [
    ("Google", "https://www.google.com/ping?sitemap={url}"),
    ("Bing", "https://www.bing.com/ping?sitemap={url}"),
]


@dataclass
class SitemapUrl:
    loc: str
    lastmod: str
    changefreq: str
    priority: float


def static_urls(base_url: str, today: dt.date) -> List[SitemapUrl]:
    base = base_url.rstrip("/")
    lastmod = today.isoformat()
    return [
        SitemapUrl(f"{base}/", lastmod, "weekly", 1.0),
        SitemapUrl(f"{base}/sheds", lastmod, "weekly", 0.9),
        SitemapUrl(f"{base}/blog", lastmod, "daily", 0.8),
    ]


def blog_urls(base_url: str, posts: List[BlogPost], today: dt.date) -> List[SitemapUrl]:
    base = base_url.rstrip("/")
    urls = []
    for post in posts:
        if not post.is_published:
            continue
        stamp = post.updated_at or post.published_at
        lastmod = stamp.date().isoformat() if stamp else today.isoformat()
        urls.append(SitemapUrl(f"{base}/blog/{post.slug}", lastmod, "monthly", 0.6))
    return urls


def project_urls(base_url: str, projects: List[PastProject], today: dt.date) -> List[SitemapUrl]:
    base = base_url.rstrip("/")
    urls = []
    for project in projects:
        lastmod = project.updated_at.date().isoformat() if project.updated_at else today.isoformat()
        urls.append(SitemapUrl(f"{base}/projects/{project.id}", lastmod, "monthly", 0.5))
    return urls


def render_sitemap(urls: List[SitemapUrl]) -> str:
    entries = "\n".join(
        "  <url>\n"
        f"    <loc>{escape(u.loc)}</loc>\n"
        f"    <lastmod>{u.lastmod}</lastmod>\n"
        f"    <changefreq>{u.changefreq}</changefreq>\n"
        f"    <priority>{u.priority}</priority>\n"
        "  </url>"
        for u in urls
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}\n"
        "</urlset>"
    )


def generate_sitemap(session: Session, base_url: str, today: dt.date | None = None) -> str:
    """Build the sitemap XML for the site rooted at base_url."""
    today = today or dt.date.today()
    urls = static_urls(base_url, today)

    posts = (
        session.query(BlogPost)
        .filter(BlogPost.is_published == True)  # noqa: E712
        .order_by(BlogPost.published_at.desc(), BlogPost.id.desc())
        .all()
    )
    urls.extend(blog_urls(base_url, posts, today))

    projects = (
        session.query(PastProject)
        .filter(PastProject.is_featured == True)  # noqa: E712
        .order_by(PastProject.id.asc())
        .all()
    )
    urls.extend(project_urls(base_url, projects, today))
    return render_sitemap(urls)


def sitemap_stats(session: Session) -> Dict[str, int]:
    blog_posts = session.query(BlogPost).filter(BlogPost.is_published == True).count()  # noqa: E712
    projects = session.query(PastProject).filter(PastProject.is_featured == True).count()  # noqa: E712
    sheds = session.query(ShedListing).filter(ShedListing.is_active == True).count()  # noqa: E712
    return {
        "total_urls": len(static_urls("", dt.date.today())) + blog_posts + projects,
        "blog_posts": blog_posts,
        "featured_projects": projects,
        "active_sheds": sheds,
    }


def submit_sitemap(
    sitemap_url: str,
    client: Optional[httpx.Client] = None,
    timeout: float = 10.0,
) -> List[Dict[str, object]]:
    """Ping the search engines with the sitemap URL.

    Any response counts as submitted; transport errors count as failed.
    """
    owns_client = client is None
    client = client or httpx.Client(timeout=timeout, follow_redirects=True)
    results = []
    try:
        for engine, template in PING_ENDPOINTS:
            url = template.format(url=quote(sitemap_url, safe=""))
            try:
                resp = client.get(url)
                log.info("Sitemap ping %s -> HTTP %s", engine, resp.status_code)
                results.append({"engine": engine, "success": True, "status": "Submitted"})
            except httpx.HTTPError as e:
                log.warning("Sitemap ping %s failed: %s", engine, e)
                results.append({"engine": engine, "success": False, "status": "Failed"})
    finally:
        if owns_client:
            client.close()
    return results
