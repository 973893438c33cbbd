# shedsite/admin/sheds.py
from flask import flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import ShedListing
from shedsite.validation import validate_shed

from . import admin_bp, admin_required
from .helpers import (
    apply, back_to, commit_or_flash, form_values, get_or_404, kept_images, newest_first,
    upload_images,
)

FIELDS = (
    "title", "description", "material_type", "color", "size", "shed_style",
    "price", "is_featured", "is_active",
)


def _shed_form_values(shed: ShedListing | None) -> dict:
    if shed is None:
        # new listings start active
        return {"is_active": True}
    values = form_values(shed, FIELDS)
    specs = shed.specifications or {}
    values["standard_features"] = "\n".join(specs.get("standard_features") or [])
    values["optional_upgrades"] = "\n".join(specs.get("optional_upgrades") or [])
    return values


@admin_bp.get("/sheds")
@admin_required
def sheds_list():
    with SessionLocal() as s:
        sheds = newest_first(s, ShedListing)
    return render_template("admin/sheds.html", sheds=sheds)


@admin_bp.route("/sheds/new", methods=["GET", "POST"])
@admin_bp.route("/sheds/<int:shed_id>/edit", methods=["GET", "POST"])
@admin_required
def shed_form(shed_id: int | None = None):
    with SessionLocal() as s:
        shed = get_or_404(s, ShedListing, shed_id) if shed_id else None

        if request.method == "GET":
            return render_template(
                "admin/shed_form.html", shed=shed, form=_shed_form_values(shed), errors={}
            )

        data, errors = validate_shed(request.form)
        if errors:
            return render_template(
                "admin/shed_form.html", shed=shed, form=request.form, errors=errors
            ), 400

        images = kept_images(shed.images if shed else None)
        data["images"] = images + upload_images("sheds")

        if shed is None:
            shed = ShedListing(**data)
            s.add(shed)
        else:
            apply(shed, data)

        if not commit_or_flash(s, "Error saving shed listing. Please try again."):
            return render_template(
                "admin/shed_form.html", shed=shed, form=request.form, errors={}
            ), 500

    flash("Shed listing saved.", "success")
    return redirect(url_for("admin.sheds_list"))


@admin_bp.post("/sheds/<int:shed_id>/toggle")
@admin_required
def shed_toggle(shed_id: int):
    """Show / hide a listing in the public catalog."""
    with SessionLocal() as s:
        shed = get_or_404(s, ShedListing, shed_id)
        shed.is_active = not shed.is_active
        commit_or_flash(s, "Error updating shed listing. Please try again.")
    return redirect(back_to("admin.sheds_list"))


@admin_bp.post("/sheds/<int:shed_id>/delete")
@admin_required
def shed_delete(shed_id: int):
    with SessionLocal() as s:
        shed = get_or_404(s, ShedListing, shed_id)
        s.delete(shed)
        if commit_or_flash(s, "Error deleting shed listing. Please try again."):
            flash("Shed listing deleted.", "success")
    return redirect(url_for("admin.sheds_list"))
