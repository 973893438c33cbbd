# shedsite/frontend.py
"""
Public site routes:
- Home page (hero, videos, reviews, projects gallery, contact form)
- Shed catalog with facet filters + shed details
- Quote request form (optionally prefilled from a shed)
- Blog list and blog post pages
- Sitemap and public URLs for uploaded images
"""

import logging

from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    send_from_directory,
    url_for,
    Response,
)
from sqlalchemy.exc import SQLAlchemyError

from .db import SessionLocal
from .models import ContactSubmission, PastProject, QuoteRequest, ShedListing
from .services.blog import get_published_post, published_posts
from .services.content import (
    PROJECT_FILTERS,
    active_videos,
    featured_reviews,
    filter_projects,
    get_section,
    recent_projects,
)
from .services.sheds import (
    COLOR_SWATCHES,
    SIZE_CATEGORIES,
    active_sheds,
    facet_toggles,
    facet_values,
    filter_sheds,
    filters_from_args,
    has_active_filters,
    quote_defaults_for_shed,
)
from .services.sitemap import generate_sitemap
from .storage import (
    IMAGES_BUCKET,
    BucketNotFoundError,
    get_storage,
    upload_error_message,
)
from .validation import (
    BUDGET_RANGES,
    PROJECT_TYPES,
    TIMELINES,
    validate_contact,
    validate_quote_request,
)

log = logging.getLogger(__name__)

frontend_bp = Blueprint("frontend", __name__)


# ---------------------------------------------------------------------------
# Home + contact form
# ---------------------------------------------------------------------------


def _home_context(session) -> dict:
    project_type = request.args.get("type") or "All"
    projects = recent_projects(session)
    return {
        "hero": get_section(session, "hero"),
        "videos": active_videos(session),
        "reviews": featured_reviews(session),
        "projects": filter_projects(projects, project_type),
        "project_filters": PROJECT_FILTERS,
        "active_project_filter": project_type,
    }


@frontend_bp.get("/")
def home():
    """Public home page."""
    with SessionLocal() as s:
        ctx = _home_context(s)
        return render_template("public/home.html", form={}, errors={}, **ctx)


@frontend_bp.post("/contact")
def contact():
    """Store a contact form submission (status "unread")."""
    data, errors = validate_contact(request.form)

    with SessionLocal() as s:
        if errors:
            ctx = _home_context(s)
            return render_template(
                "public/home.html", form=request.form, errors=errors, **ctx
            ), 400

        try:
            s.add(ContactSubmission(status="unread", **data))
            s.commit()
        except SQLAlchemyError:
            s.rollback()
            log.exception("Error saving contact submission")
            ctx = _home_context(s)
            errors = {"form": "Sorry, your message could not be sent. Please try again."}
            return render_template(
                "public/home.html", form=request.form, errors=errors, **ctx
            ), 500

    flash("Thank you! We'll get back to you shortly.", "success")
    return redirect(url_for("frontend.home") + "#contact")


@frontend_bp.get("/projects/<int:project_id>")
def project_detail(project_id: int):
    """Past project page with the full photo gallery."""
    with SessionLocal() as s:
        project = s.get(PastProject, project_id)
        if not project:
            abort(404)
        return render_template("public/project_detail.html", project=project)


# ---------------------------------------------------------------------------
# Shed catalog
# ---------------------------------------------------------------------------


@frontend_bp.get("/sheds")
def sheds():
    """Catalog of active sheds with sidebar filters from the query string."""
    filters = filters_from_args(request.args)

    with SessionLocal() as s:
        all_sheds = active_sheds(s)
        facets = facet_values(all_sheds)
        return render_template(
            "public/sheds.html",
            hero=get_section(s, "sheds_hero"),
            sheds=filter_sheds(all_sheds, filters),
            total=len(all_sheds),
            filters=filters,
            facets=facets,
            facet_args=facet_toggles(filters, facets),
            has_filters=has_active_filters(filters),
            size_categories=SIZE_CATEGORIES,
            color_swatches=COLOR_SWATCHES,
            quote_form=quote_defaults_for_shed(None, filters),
            project_types=PROJECT_TYPES,
            budget_ranges=BUDGET_RANGES,
            timelines=TIMELINES,
        )


@frontend_bp.get("/sheds/<int:shed_id>")
def shed_detail(shed_id: int):
    with SessionLocal() as s:
        shed = s.get(ShedListing, shed_id)
        if not shed or not shed.is_active:
            abort(404)
        return render_template("public/shed_detail.html", shed=shed)


# ---------------------------------------------------------------------------
# Quote requests
# ---------------------------------------------------------------------------


def _render_quote(form, errors, shed=None, status=200):
    return render_template(
        "public/quote.html",
        form=form,
        errors=errors,
        shed=shed,
        project_types=PROJECT_TYPES,
        budget_ranges=BUDGET_RANGES,
        timelines=TIMELINES,
    ), status


def _selected_shed(session, raw_id):
    try:
        shed_id = int(raw_id)
    except (TypeError, ValueError):
        return None
    shed = session.get(ShedListing, shed_id)
    if shed is None or not shed.is_active:
        return None
    return shed


@frontend_bp.get("/quote")
def quote():
    """Quote form, prefilled from ?shed=<id> or from the catalog filters."""
    with SessionLocal() as s:
        shed = _selected_shed(s, request.args.get("shed"))
        defaults = quote_defaults_for_shed(shed, filters_from_args(request.args))
        return _render_quote(defaults, {}, shed=shed)


@frontend_bp.post("/quote")
def submit_quote():
    """Validate and store a quote request (status "pending")."""
    data, errors = validate_quote_request(request.form)

    with SessionLocal() as s:
        shed = _selected_shed(s, request.form.get("shed_id"))
        if errors:
            return _render_quote(request.form, errors, shed=shed, status=400)

        # Inspiration images are uploaded one by one before the insert
        files = request.files.getlist("inspiration_images")
        stored, failures = get_storage().upload_many(IMAGES_BUCKET, "inspiration", files)
        for filename, err in failures:
            log.error("Inspiration upload %s failed: %s", filename, err)
            flash(upload_error_message(filename, err), "error")

        try:
            s.add(QuoteRequest(status="pending", inspiration_images=stored, **data))
            s.commit()
        except SQLAlchemyError:
            s.rollback()
            log.exception("Error submitting quote request")
            errors = {"form": "Sorry, there was an error submitting your request. Please try again."}
            return _render_quote(request.form, errors, shed=shed, status=500)

    flash("Thank you! Your quote request has been submitted.", "success")
    return redirect(url_for("frontend.quote"))


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------


@frontend_bp.get("/blog")
def blog():
    with SessionLocal() as s:
        return render_template("public/blog.html", posts=published_posts(s))


@frontend_bp.get("/blog/<slug>")
def blog_post(slug: str):
    with SessionLocal() as s:
        post = get_published_post(s, slug)
        if not post:
            abort(404)
        return render_template("public/blog_post.html", post=post)


# ---------------------------------------------------------------------------
# Sitemap + uploaded files
# ---------------------------------------------------------------------------


@frontend_bp.get("/sitemap.xml")
def sitemap():
    with SessionLocal() as s:
        xml = generate_sitemap(s, current_app.config["SITE_URL"])
    return Response(xml, mimetype="application/xml")


@frontend_bp.get("/uploads/<bucket>/<path:path>")
def uploaded_file(bucket: str, path: str):
    """Public URL of a stored object."""
    try:
        directory = get_storage().bucket_path(bucket)
    except BucketNotFoundError:
        abort(404)
    return send_from_directory(directory, path)
