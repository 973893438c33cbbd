# shedsite/routes/api_sheds.py
from flask import Blueprint, jsonify, request

from shedsite.db import SessionLocal
from shedsite.services.sheds import (
    active_sheds,
    facet_values,
    filter_sheds,
    filters_from_args,
    serialize_shed,
)
from shedsite.storage import IMAGES_BUCKET, public_url

bp = Blueprint("sheds_api", __name__)


@bp.get("/sheds")
def list_sheds():
    """
    Active shed listings, featured first.

    Query params (all optional, case-insensitive substring match):
    material_type, color, size, shed_style
    """
    filters = filters_from_args(request.args)

    with SessionLocal() as s:
        sheds = active_sheds(s)
        visible = filter_sheds(sheds, filters)
        payload = {
            "filters": filters,
            "facets": facet_values(sheds),
            "count": len(visible),
            "sheds": [
                serialize_shed(shed, image_url=lambda p: public_url(IMAGES_BUCKET, p))
                for shed in visible
            ],
        }
    return jsonify(payload)
