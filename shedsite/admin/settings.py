# shedsite/admin/settings.py
from flask import flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import BusinessSettings
from shedsite.services.content import get_settings
from shedsite.validation import WEEKDAYS, validate_business_settings

from . import admin_bp, admin_required
from .helpers import apply, commit_or_flash, form_values

FIELDS = ("business_name", "phone", "email", "address", "facebook_url", "instagram_url")


def _settings_form_values(settings: BusinessSettings | None) -> dict:
    values = form_values(settings, FIELDS)
    hours = (settings.hours if settings else None) or {}
    for day in WEEKDAYS:
        values[f"hours_{day}"] = hours.get(day, "")
    return values


@admin_bp.route("/settings", methods=["GET", "POST"])
@admin_required
def business_settings():
    """Edit the business settings singleton (created on first save)."""
    with SessionLocal() as s:
        settings = get_settings(s)

        if request.method == "GET":
            return render_template(
                "admin/settings.html",
                form=_settings_form_values(settings),
                errors={},
                weekdays=WEEKDAYS,
            )

        data, errors = validate_business_settings(request.form)
        if errors:
            return render_template(
                "admin/settings.html", form=request.form, errors=errors, weekdays=WEEKDAYS
            ), 400

        if settings is None:
            s.add(BusinessSettings(**data))
        else:
            apply(settings, data)

        if not commit_or_flash(s, "Error saving settings. Please try again."):
            return render_template(
                "admin/settings.html", form=request.form, errors={}, weekdays=WEEKDAYS
            ), 500

    flash("Business settings updated successfully!", "success")
    return redirect(url_for("admin.business_settings"))
