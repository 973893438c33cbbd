# shedsite/routes/api_settings.py
from flask import Blueprint, jsonify

from shedsite.db import SessionLocal
from shedsite.services.content import get_settings, settings_payload
from shedsite.services.hours import format_business_hours, format_detailed_hours

bp = Blueprint("settings_api", __name__)


@bp.get("/settings")
def business_settings():
    """Business contact info + formatted opening hours (header / footer)."""
    with SessionLocal() as s:
        settings = get_settings(s)
        if settings is None:
            return jsonify({"error": "settings_not_configured"}), 404

        payload = settings_payload(settings)
        payload["hours_summary"] = format_business_hours(settings.hours)
        payload["hours_detailed"] = format_detailed_hours(settings.hours)
    return jsonify(payload)
