# =============================================================================
# File: shedsite/admin/helpers.py
# Purpose: Shared plumbing for the admin managers (lookups, saving, uploads).
# =============================================================================
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Type

from flask import abort, flash, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shedsite.storage import IMAGES_BUCKET, get_storage, upload_error_message

log = logging.getLogger(__name__)


def get_or_404(session: Session, model: Type, obj_id: int):
    obj = session.get(model, obj_id)
    if obj is None:
        abort(404)
    return obj


def newest_first(session: Session, model: Type) -> List[Any]:
    """Every row of `model`, newest first."""
    return (
        session.query(model)
        .order_by(model.created_at.desc(), model.id.desc())
        .all()
    )


def apply(obj: Any, data: Dict[str, Any]) -> Any:
    for key, value in data.items():
        setattr(obj, key, value)
    return obj


def commit_or_flash(session: Session, message: str) -> bool:
    """
    Commit the session.

    On a database error: rollback, log, flash `message` and return False so
    the caller can redisplay the form.
    """
    try:
        session.commit()
        return True
    except SQLAlchemyError:
        session.rollback()
        log.exception(message)
        flash(message, "error")
        return False


def form_values(obj: Any, fields: Iterable[str]) -> Dict[str, Any]:
    """Current values of a model for prefilling its edit form."""
    if obj is None:
        return {}
    values = {}
    for name in fields:
        value = getattr(obj, name, None)
        values[name] = "" if value is None else value
    return values


def upload_images(prefix: str, field: str = "images") -> List[str]:
    """
    Upload the files posted in `field` to the images bucket.

    Failed files are reported with flash(); the others are kept.
    """
    files = request.files.getlist(field)
    stored, failures = get_storage().upload_many(IMAGES_BUCKET, prefix, files)
    for filename, err in failures:
        log.error("Upload of %s failed: %s", filename, err)
        flash(upload_error_message(filename, err), "error")
    return stored


def kept_images(current: List[str] | None) -> List[str]:
    """Existing images minus the ones ticked for removal."""
    removed = set(request.form.getlist("remove_images"))
    return [path for path in (current or []) if path not in removed]


def back_to(default_endpoint: str, **values) -> str:
    """The posted "next" admin URL, else the given endpoint."""
    next_url = request.form.get("next") or ""
    if next_url.startswith("/admin"):
        return next_url
    return url_for(default_endpoint, **values)
