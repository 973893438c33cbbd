# shedsite/admin/home_content.py
"""Home page sections (hero, sheds_hero) and the video carousel."""
from flask import abort, flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import HOME_SECTIONS, HomeContent, VideoCarousel
from shedsite.services.content import get_section
from shedsite.validation import validate_home_content, validate_video

from . import admin_bp, admin_required
from .helpers import apply, back_to, commit_or_flash, form_values, get_or_404, upload_images

SECTION_FIELDS = ("title", "subtitle", "content", "cta_text", "cta_link", "is_active")
VIDEO_FIELDS = ("title", "description", "video_url", "thumbnail_url", "order_index", "is_active")

SECTION_LABELS = {
    "hero": "Home page hero",
    "sheds_hero": "Shed catalog hero",
}


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _sections_context(session, errors=None, posted=None):
    sections = []
    for name in HOME_SECTIONS:
        row = get_section(session, name)
        form = form_values(row, SECTION_FIELDS) or {"is_active": True}
        if posted is not None and posted[0] == name:
            form = posted[1]
        sections.append({
            "name": name,
            "label": SECTION_LABELS.get(name, name),
            "row": row,
            "form": form,
            "errors": (errors or {}) if posted and posted[0] == name else {},
        })
    return sections


@admin_bp.get("/home-content")
@admin_required
def home_content():
    with SessionLocal() as s:
        sections = _sections_context(s)
    return render_template("admin/home_content.html", sections=sections)


@admin_bp.post("/home-content/<section_name>")
@admin_required
def home_content_save(section_name: str):
    """Insert or update a section by name."""
    if section_name not in HOME_SECTIONS:
        abort(404)

    with SessionLocal() as s:
        data, errors = validate_home_content(request.form)
        if errors:
            sections = _sections_context(s, errors, (section_name, request.form))
            return render_template("admin/home_content.html", sections=sections), 400

        row = get_section(s, section_name)
        if row is None:
            row = HomeContent(section_name=section_name, **data)
            s.add(row)
        else:
            apply(row, data)

        if request.form.get("remove_image"):
            row.image_url = None
        uploaded = upload_images("home", field="image")
        if uploaded:
            row.image_url = uploaded[-1]

        if commit_or_flash(s, "Error saving content. Please try again."):
            flash(f"{SECTION_LABELS.get(section_name, section_name)} saved.", "success")

    return redirect(url_for("admin.home_content"))


# ---------------------------------------------------------------------------
# Video carousel
# ---------------------------------------------------------------------------


@admin_bp.get("/videos")
@admin_required
def videos_list():
    with SessionLocal() as s:
        videos = (
            s.query(VideoCarousel)
            .order_by(VideoCarousel.order_index.asc(), VideoCarousel.id.asc())
            .all()
        )
    return render_template("admin/videos.html", videos=videos)


@admin_bp.route("/videos/new", methods=["GET", "POST"])
@admin_bp.route("/videos/<int:video_id>/edit", methods=["GET", "POST"])
@admin_required
def video_form(video_id: int | None = None):
    with SessionLocal() as s:
        video = get_or_404(s, VideoCarousel, video_id) if video_id else None

        if request.method == "GET":
            return render_template(
                "admin/video_form.html",
                video=video,
                form=form_values(video, VIDEO_FIELDS) or {"is_active": True, "order_index": 0},
                errors={},
            )

        data, errors = validate_video(request.form)
        if errors:
            return render_template(
                "admin/video_form.html", video=video, form=request.form, errors=errors
            ), 400

        uploaded = upload_images("videos", field="thumbnail")
        if uploaded:
            data["thumbnail_url"] = uploaded[-1]

        if video is None:
            video = VideoCarousel(**data)
            s.add(video)
        else:
            apply(video, data)

        if not commit_or_flash(s, "Error saving video. Please try again."):
            return render_template(
                "admin/video_form.html", video=video, form=request.form, errors={}
            ), 500

    flash("Video saved.", "success")
    return redirect(url_for("admin.videos_list"))


@admin_bp.post("/videos/<int:video_id>/toggle")
@admin_required
def video_toggle(video_id: int):
    with SessionLocal() as s:
        video = get_or_404(s, VideoCarousel, video_id)
        video.is_active = not video.is_active
        commit_or_flash(s, "Error updating video. Please try again.")
    return redirect(back_to("admin.videos_list"))


@admin_bp.post("/videos/<int:video_id>/delete")
@admin_required
def video_delete(video_id: int):
    with SessionLocal() as s:
        video = get_or_404(s, VideoCarousel, video_id)
        s.delete(video)
        if commit_or_flash(s, "Error deleting video. Please try again."):
            flash("Video deleted.", "success")
    return redirect(url_for("admin.videos_list"))
