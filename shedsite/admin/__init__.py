# shedsite/admin/__init__.py
"""
Admin back-office.

Every manager screen follows the same pattern: list rows (newest first),
validated form for create / edit, insert-or-update, redirect to the list.
"""
import logging
from functools import wraps

from flask import (
    Blueprint, current_app, redirect, Response, flash,
    url_for, abort, render_template, request)

from shedsite.auth import authenticate, get_current_admin, login_admin, logout_admin
from shedsite.db import SessionLocal
from shedsite.services.dashboard import dashboard_stats
from shedsite.services.sitemap import generate_sitemap, sitemap_stats, submit_sitemap

log = logging.getLogger(__name__)

# Blueprint for the admin panel
admin_bp = Blueprint(
    "admin",
    __name__,
    url_prefix="/admin",
)


def admin_required(view_func):
    """
    Ensure:
    - ADMIN_ENABLED config flag is True
    - an admin is logged in
    """
    @wraps(view_func)
    def wrapper(*args, **kwargs):

        # 1) Is the admin panel globally enabled?
        if not current_app.config.get("ADMIN_ENABLED", False):
            abort(404)

        with SessionLocal() as session:
            admin = get_current_admin(session)
        if not admin:
            return redirect(url_for("admin.login", next=request.path))

        return view_func(*args, **kwargs)

    return wrapper


# ---------------------------------------------------------------------------
# Login / logout
# ---------------------------------------------------------------------------


@admin_bp.route("/login", methods=["GET", "POST"])
def login():
    if not current_app.config.get("ADMIN_ENABLED", False):
        abort(404)

    if request.method == "GET":
        return render_template("admin/login.html", errors=[])

    email = request.form.get("email", "").strip().lower()
    password = request.form.get("password", "") or ""

    errors: list[str] = []
    if not email or not password:
        errors.append("Email and password are required.")

    with SessionLocal() as session:
        user = authenticate(session, email, password) if not errors else None
        if not errors and user is None:
            errors.append("Invalid email or password.")

        if errors:
            return render_template("admin/login.html", errors=errors, email=email), 401

        login_admin(user)
        log.info("Admin %s logged in", user.email)

    next_url = request.args.get("next") or ""
    if not next_url.startswith("/admin"):
        next_url = url_for("admin.dashboard")
    return redirect(next_url)


@admin_bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_admin()
    return redirect(url_for("admin.login"))


# ---------------------------------------------------------------------------
# Dashboard + sitemap
# ---------------------------------------------------------------------------


@admin_bp.get("/")
@admin_required
def dashboard():
    with SessionLocal() as s:
        stats = dashboard_stats(s)
        sitemap = sitemap_stats(s)
    return render_template("admin/dashboard.html", stats=stats, sitemap=sitemap)


@admin_bp.get("/sitemap.xml")
@admin_required
def download_sitemap():
    """Sitemap as a file download."""
    with SessionLocal() as s:
        xml = generate_sitemap(s, current_app.config["SITE_URL"])
    return Response(
        xml,
        mimetype="application/xml",
        headers={"Content-Disposition": "attachment; filename=sitemap.xml"},
    )


@admin_bp.post("/sitemap/ping")
@admin_required
def ping_sitemap():
    """Best-effort submission of the public sitemap URL to search engines."""
    sitemap_url = current_app.config["SITE_URL"].rstrip("/") + "/sitemap.xml"
    results = submit_sitemap(sitemap_url, timeout=current_app.config["SITEMAP_PING_TIMEOUT"])
    for r in results:
        flash(f"{r['engine']}: {r['status']}", "success" if r["success"] else "error")
    return redirect(url_for("admin.dashboard"))


# Manager screens register their routes on admin_bp
from . import quotes, contacts, projects, sheds, reviews, blog, home_content, settings  # noqa: E402,F401
