# shedsite/admin/reviews.py
from flask import abort, flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import Review
from shedsite.validation import validate_review

from . import admin_bp, admin_required
from .helpers import apply, back_to, commit_or_flash, form_values, get_or_404, newest_first

FIELDS = ("customer_name", "rating", "review_text", "project_type", "is_featured", "is_approved")
TOGGLE_FIELDS = ("is_approved", "is_featured")


@admin_bp.get("/reviews")
@admin_required
def reviews_list():
    with SessionLocal() as s:
        reviews = newest_first(s, Review)
    return render_template("admin/reviews.html", reviews=reviews)


@admin_bp.route("/reviews/new", methods=["GET", "POST"])
@admin_bp.route("/reviews/<int:review_id>/edit", methods=["GET", "POST"])
@admin_required
def review_form(review_id: int | None = None):
    with SessionLocal() as s:
        review = get_or_404(s, Review, review_id) if review_id else None

        if request.method == "GET":
            return render_template(
                "admin/review_form.html",
                review=review,
                form=form_values(review, FIELDS) or {"rating": 5},
                errors={},
            )

        data, errors = validate_review(request.form)
        if errors:
            return render_template(
                "admin/review_form.html", review=review, form=request.form, errors=errors
            ), 400

        if review is None:
            review = Review(**data)
            s.add(review)
        else:
            apply(review, data)

        if not commit_or_flash(s, "Error saving review. Please try again."):
            return render_template(
                "admin/review_form.html", review=review, form=request.form, errors={}
            ), 500

    flash("Review saved.", "success")
    return redirect(url_for("admin.reviews_list"))


@admin_bp.post("/reviews/<int:review_id>/toggle/<field>")
@admin_required
def review_toggle(review_id: int, field: str):
    """Flip is_approved or is_featured."""
    if field not in TOGGLE_FIELDS:
        abort(404)

    with SessionLocal() as s:
        review = get_or_404(s, Review, review_id)
        setattr(review, field, not getattr(review, field))
        commit_or_flash(s, "Error updating review. Please try again.")
    return redirect(back_to("admin.reviews_list"))


@admin_bp.post("/reviews/<int:review_id>/delete")
@admin_required
def review_delete(review_id: int):
    with SessionLocal() as s:
        review = get_or_404(s, Review, review_id)
        s.delete(review)
        if commit_or_flash(s, "Error deleting review. Please try again."):
            flash("Review deleted.", "success")
    return redirect(url_for("admin.reviews_list"))
