# =============================================================================
# File: shedsite/services/sheds.py
# Purpose: Shed catalog helpers: facet filters, facet values, quote prefill.
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Sequence

from sqlalchemy.orm import Session

from shedsite.models import ShedListing

# Facets shown in the catalog sidebar, in display order
FILTER_KEYS = ("material_type", "color", "size", "shed_style")

SIZE_CATEGORIES: Dict[str, List[str]] = {
    "Small": ["8x8", "8x10", "8x12"],
    "Medium": ["10x10", "10x12", "10x16"],
    "Large": ["12x12", "12x16", "12x20", "14x20"],
    "Other": ["Other"],
}

COLOR_SWATCHES: Dict[str, str] = {
    "Black": "#000000",
    "Charcoal": "#36454F",
    "Navy Blue": "#000080",
    "Red": "#DC2626",
    "White": "#FFFFFF",
    "Brown": "#8B4513",
    "Green": "#22C55E",
    "Gray": "#6B7280",
    "Natural": "#D2B48C",
}


def empty_filters() -> Dict[str, str]:
    return {key: "" for key in FILTER_KEYS}


def filters_from_args(args: Mapping[str, Any]) -> Dict[str, str]:
    """Read the facet filters from a query string mapping."""
    filters = empty_filters()
    for key in FILTER_KEYS:
        filters[key] = (args.get(key) or "").strip()
    return filters


def toggle_filter(filters: Mapping[str, str], key: str, value: str) -> Dict[str, str]:
    """Select `value` for `key`, or clear it if it is already selected."""
    if key not in FILTER_KEYS:
        raise KeyError(key)
    updated = dict(filters)
    updated[key] = "" if filters.get(key) == value else value
    return updated


def facet_toggles(
    filters: Mapping[str, str], facets: Mapping[str, Sequence[str]]
) -> Dict[str, Dict[str, Dict[str, str]]]:
    """
    Query args for every facet link: key -> value -> filters after toggling.

    Empty facets are left out so links stay short.
    """
    toggles: Dict[str, Dict[str, Dict[str, str]]] = {}
    for key in FILTER_KEYS:
        toggles[key] = {}
        for value in facets.get(key) or []:
            toggled = toggle_filter(filters, key, value)
            toggles[key][value] = {k: v for k, v in toggled.items() if v}
    return toggles


def _get(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def matches_filters(row: Any, filters: Mapping[str, str]) -> bool:
    """
    True when the row matches every selected facet.

    A facet matches when the row's value contains the selected value,
    case-insensitively. Empty facets are ignored.
    """
    for key in FILTER_KEYS:
        wanted = (filters.get(key) or "").lower()
        if not wanted:
            continue
        value = _get(row, key)
        if not value or wanted not in str(value).lower():
            return False
    return True


def filter_sheds(sheds: Iterable[Any], filters: Mapping[str, str]) -> List[Any]:
    return [s for s in sheds if matches_filters(s, filters)]


def has_active_filters(filters: Mapping[str, str]) -> bool:
    return any(filters.get(key) for key in FILTER_KEYS)


def unique_values(sheds: Sequence[Any], key: str) -> List[str]:
    """Distinct non-empty values of `key`, in first-seen order."""
    seen: List[str] = []
    for s in sheds:
        value = _get(s, key)
        if value and value not in seen:
            seen.append(value)
    return seen


def facet_values(sheds: Sequence[Any]) -> Dict[str, List[str]]:
    return {key: unique_values(sheds, key) for key in FILTER_KEYS}


def active_sheds(session: Session) -> List[ShedListing]:
    """Active listings, featured first."""
    return (
        session.query(ShedListing)
        .filter(ShedListing.is_active == True)  # noqa: E712
        .order_by(ShedListing.is_featured.desc(), ShedListing.created_at.desc(), ShedListing.id.desc())
        .all()
    )


def quote_defaults_for_shed(
    shed: ShedListing | None, filters: Mapping[str, str] | None = None
) -> Dict[str, str]:
    """
    Prefill values for the quote form.

    The shed's attributes are copied (the quote keeps no reference to it);
    without a shed, the currently selected catalog filters are used.
    """
    filters = filters or {}
    if shed is None:
        defaults = {key: filters.get(key) or "" for key in FILTER_KEYS}
        defaults.update({"project_type": "", "description": ""})
        return defaults

    return {
        "project_type": "Custom Shed",
        "material_type": shed.material_type or "",
        "color": shed.color or "",
        "size": shed.size or "",
        "shed_style": shed.shed_style or "",
        "description": f"I'm interested in the {shed.title}",
    }


def serialize_shed(shed: ShedListing, image_url=None) -> Dict[str, Any]:
    """JSON shape used by the public API."""
    images = shed.images or []
    return {
        "id": shed.id,
        "title": shed.title,
        "description": shed.description or "",
        "material_type": shed.material_type,
        "color": shed.color,
        "size": shed.size,
        "shed_style": shed.shed_style,
        "price": shed.price,
        "images": [image_url(p) for p in images] if image_url else list(images),
        "specifications": shed.specifications or {},
        "is_featured": shed.is_featured,
    }
