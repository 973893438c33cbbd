# shedsite/admin/blog.py
from flask import flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import BlogPost
from shedsite.services.blog import apply_publish_state, slug_taken, toggle_publish
from shedsite.validation import validate_blog_post

from . import admin_bp, admin_required
from .helpers import back_to, commit_or_flash, form_values, get_or_404, newest_first, upload_images

FIELDS = ("title", "slug", "excerpt", "content", "author", "is_published", "published_at")


def _render_form(post, form, errors, status=200):
    return render_template(
        "admin/blog_form.html", post=post, form=form, errors=errors
    ), status


@admin_bp.get("/blog")
@admin_required
def blog_list():
    with SessionLocal() as s:
        posts = newest_first(s, BlogPost)
    return render_template("admin/blog.html", posts=posts)


@admin_bp.route("/blog/new", methods=["GET", "POST"])
@admin_bp.route("/blog/<int:post_id>/edit", methods=["GET", "POST"])
@admin_required
def blog_form(post_id: int | None = None):
    with SessionLocal() as s:
        post = get_or_404(s, BlogPost, post_id) if post_id else None

        if request.method == "GET":
            return _render_form(post, form_values(post, FIELDS), {})

        data, errors = validate_blog_post(request.form)
        if data["slug"] and slug_taken(s, data["slug"], exclude_id=post.id if post else None):
            errors["slug"] = "This slug is already used by another post"
        if errors:
            return _render_form(post, request.form, errors, 400)

        is_published = data.pop("is_published")
        published_at = data.pop("published_at")

        if post is None:
            post = BlogPost(**data)
            s.add(post)
        else:
            for key, value in data.items():
                setattr(post, key, value)

        if request.form.get("remove_featured_image"):
            post.featured_image = None
        uploaded = upload_images("blog", field="featured_image")
        if uploaded:
            post.featured_image = uploaded[-1]

        apply_publish_state(post, is_published, published_at)

        if not commit_or_flash(s, "Error saving blog post. Please try again."):
            return _render_form(post, request.form, {}, 500)

    flash("Blog post saved.", "success")
    return redirect(url_for("admin.blog_list"))


@admin_bp.post("/blog/<int:post_id>/publish")
@admin_required
def blog_toggle_publish(post_id: int):
    with SessionLocal() as s:
        post = get_or_404(s, BlogPost, post_id)
        toggle_publish(post)
        commit_or_flash(s, "Error updating blog post. Please try again.")
    return redirect(back_to("admin.blog_list"))


@admin_bp.post("/blog/<int:post_id>/delete")
@admin_required
def blog_delete(post_id: int):
    with SessionLocal() as s:
        post = get_or_404(s, BlogPost, post_id)
        s.delete(post)
        if commit_or_flash(s, "Error deleting blog post. Please try again."):
            flash("Blog post deleted.", "success")
    return redirect(url_for("admin.blog_list"))
