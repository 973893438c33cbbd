# =============================================================================
# File: shedsite/validation.py
# Purpose: Form validation for public forms and admin managers.
#
# Every validator takes a mapping (request.form or a plain dict) and returns
# (data, errors): data is the cleaned dict ready for the model, errors maps a
# field name to the message shown next to it. No errors -> valid.
# =============================================================================
from __future__ import annotations

import datetime as dt
import math
from typing import Any, Dict, Mapping, Tuple
from urllib.parse import urlparse

from .services.blog import slugify

FormResult = Tuple[Dict[str, Any], Dict[str, str]]

WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)

PROJECT_TYPES = [
    "Custom Shed",
    "Garage Addition",
    "Home Addition",
    "Exterior Renovation",
    "Other",
]

BUDGET_RANGES = [
    "Under $2,000",
    "$2,000 - $5,000",
    "$5,000 - $10,000",
    "$10,000 - $20,000",
    "$20,000 - $50,000",
    "Over $50,000",
]

TIMELINES = [
    "ASAP",
    "Within 1 month",
    "2-3 months",
    "3-6 months",
    "More than 6 months",
    "Flexible",
]


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def validate_email(email: str) -> bool:
    """Basic email format validation."""
    if not email:
        return False
    email = email.strip()
    if " " in email or email.count("@") != 1:
        return False
    local, domain = email.split("@")
    if not local or "." not in domain:
        return False
    return not domain.startswith(".") and not domain.endswith(".")


def _text(form: Mapping[str, Any], key: str) -> str:
    value = form.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _optional(form: Mapping[str, Any], key: str) -> str | None:
    return _text(form, key) or None


def _flag(form: Mapping[str, Any], key: str, default: bool = False) -> bool:
    """Checkbox value: present + truthy -> True."""
    if key not in form:
        return default
    value = form.get(key)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "on", "yes")


def _lines(form: Mapping[str, Any], key: str) -> list[str]:
    value = form.get(key)
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value or "").splitlines()
    return [str(item).strip() for item in items if str(item).strip()]


def _require(errors: Dict[str, str], data: Dict[str, Any], key: str, message: str) -> None:
    if not data.get(key):
        errors[key] = message


def _min_length(errors: Dict[str, str], data: Dict[str, Any], key: str, n: int, message: str) -> None:
    if len(data.get(key) or "") < n:
        errors[key] = message


# ---------------------------------------------------------------------------
# Public forms
# ---------------------------------------------------------------------------


def validate_quote_request(form: Mapping[str, Any]) -> FormResult:
    data = {
        "customer_name": _text(form, "customer_name"),
        "email": _text(form, "email").lower(),
        "phone": _optional(form, "phone"),
        "project_type": _text(form, "project_type"),
        "material_type": _optional(form, "material_type"),
        "color": _optional(form, "color"),
        "size": _optional(form, "size"),
        "shed_style": _optional(form, "shed_style"),
        "description": _text(form, "description"),
        "budget_range": _optional(form, "budget_range"),
        "timeline": _optional(form, "timeline"),
        "custom_message": _optional(form, "custom_message"),
    }
    errors: Dict[str, str] = {}

    _min_length(errors, data, "customer_name", 2, "Name must be at least 2 characters")
    if not validate_email(data["email"]):
        errors["email"] = "Please enter a valid email address"
    if data["project_type"] not in PROJECT_TYPES:
        errors["project_type"] = "Please select a project type"
    _min_length(errors, data, "description", 10, "Please provide more details about your project")

    return data, errors


def validate_contact(form: Mapping[str, Any]) -> FormResult:
    data = {
        "name": _text(form, "name"),
        "email": _text(form, "email").lower(),
        "phone": _optional(form, "phone"),
        "subject": _optional(form, "subject"),
        "message": _text(form, "message"),
    }
    errors: Dict[str, str] = {}

    _min_length(errors, data, "name", 2, "Name must be at least 2 characters")
    if not validate_email(data["email"]):
        errors["email"] = "Please enter a valid email address"
    _min_length(errors, data, "message", 10, "Message must be at least 10 characters")

    return data, errors


# ---------------------------------------------------------------------------
# Admin forms
# ---------------------------------------------------------------------------


def validate_shed(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "title": _text(form, "title"),
        "description": _optional(form, "description"),
        "material_type": _text(form, "material_type"),
        "color": _text(form, "color"),
        "size": _text(form, "size"),
        "shed_style": _text(form, "shed_style"),
        "price": None,
        "is_featured": _flag(form, "is_featured"),
        "is_active": _flag(form, "is_active"),
        "specifications": {
            "standard_features": _lines(form, "standard_features"),
            "optional_upgrades": _lines(form, "optional_upgrades"),
        },
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "title", "Title is required")
    _require(errors, data, "material_type", "Material type is required")
    _require(errors, data, "color", "Color is required")
    _require(errors, data, "size", "Size is required")
    _require(errors, data, "shed_style", "Shed style is required")

    raw_price = _text(form, "price")
    if raw_price:
        try:
            price = float(raw_price.replace(",", "").lstrip("$"))
        except ValueError:
            errors["price"] = "Price must be a number"
        else:
            if not math.isfinite(price):
                errors["price"] = "Price must be a number"
            elif price < 0:
                errors["price"] = "Price must be positive"
            else:
                data["price"] = price

    return data, errors


def validate_project(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "title": _text(form, "title"),
        "description": _optional(form, "description"),
        "project_type": _text(form, "project_type"),
        "location": _optional(form, "location"),
        "completion_date": None,
        "is_featured": _flag(form, "is_featured"),
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "title", "Title is required")
    _require(errors, data, "project_type", "Project type is required")

    raw_date = _text(form, "completion_date")
    if raw_date:
        try:
            data["completion_date"] = dt.date.fromisoformat(raw_date)
        except ValueError:
            errors["completion_date"] = "Completion date must be YYYY-MM-DD"

    return data, errors


def validate_review(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "customer_name": _text(form, "customer_name"),
        "rating": None,
        "review_text": _text(form, "review_text"),
        "project_type": _optional(form, "project_type"),
        "is_featured": _flag(form, "is_featured"),
        "is_approved": _flag(form, "is_approved"),
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "customer_name", "Customer name is required")

    try:
        rating = int(_text(form, "rating"))
    except ValueError:
        errors["rating"] = "Rating is required"
    else:
        if rating < 1:
            errors["rating"] = "Rating is required"
        elif rating > 5:
            errors["rating"] = "Rating cannot exceed 5"
        else:
            data["rating"] = rating

    _min_length(errors, data, "review_text", 10, "Review text must be at least 10 characters")

    return data, errors


def validate_blog_post(form: Mapping[str, Any]) -> FormResult:
    title = _text(form, "title")
    slug = _text(form, "slug") or slugify(title)
    data: Dict[str, Any] = {
        "title": title,
        "slug": slug,
        "excerpt": _optional(form, "excerpt"),
        "content": _text(form, "content"),
        "author": _text(form, "author"),
        "is_published": _flag(form, "is_published"),
        "published_at": None,
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "title", "Title is required")
    _require(errors, data, "slug", "Slug is required")
    _min_length(errors, data, "content", 10, "Content is required")
    _require(errors, data, "author", "Author is required")

    raw_published = _text(form, "published_at")
    if raw_published:
        try:
            data["published_at"] = dt.datetime.fromisoformat(raw_published)
        except ValueError:
            errors["published_at"] = "Publish date must be an ISO date/time"

    return data, errors


def validate_business_settings(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "business_name": _text(form, "business_name"),
        "phone": _optional(form, "phone"),
        "email": _optional(form, "email"),
        "address": _optional(form, "address"),
        "facebook_url": _optional(form, "facebook_url"),
        "instagram_url": _optional(form, "instagram_url"),
        "hours": {day: _text(form, f"hours_{day}") for day in WEEKDAYS},
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "business_name", "Business name is required")
    if data["email"] and not validate_email(data["email"]):
        errors["email"] = "Please enter a valid email"

    return data, errors


def validate_home_content(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "title": _text(form, "title"),
        "subtitle": _optional(form, "subtitle"),
        "content": _optional(form, "content"),
        "cta_text": _optional(form, "cta_text"),
        "cta_link": _optional(form, "cta_link"),
        "is_active": _flag(form, "is_active"),
    }
    errors: Dict[str, str] = {}
    _require(errors, data, "title", "Title is required")
    return data, errors


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_video(form: Mapping[str, Any]) -> FormResult:
    data: Dict[str, Any] = {
        "title": _text(form, "title"),
        "description": _optional(form, "description"),
        "video_url": _text(form, "video_url"),
        "thumbnail_url": _optional(form, "thumbnail_url"),
        "order_index": 0,
        "is_active": _flag(form, "is_active"),
    }
    errors: Dict[str, str] = {}

    _require(errors, data, "title", "Title is required")
    if not _is_http_url(data["video_url"]):
        errors["video_url"] = "Please enter a valid video URL"

    raw_order = _text(form, "order_index")
    if raw_order:
        try:
            order_index = int(raw_order)
        except ValueError:
            errors["order_index"] = "Order must be a whole number"
        else:
            if order_index < 0:
                errors["order_index"] = "Order must be 0 or greater"
            else:
                data["order_index"] = order_index

    return data, errors
