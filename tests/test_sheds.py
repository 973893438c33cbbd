# tests/test_sheds.py
import pytest

from shedsite.models import ShedListing
from shedsite.services.sheds import (
    empty_filters,
    facet_toggles,
    filter_sheds,
    filters_from_args,
    has_active_filters,
    quote_defaults_for_shed,
    toggle_filter,
    unique_values,
)

ROWS = [
    {"title": "A", "material_type": "Wood", "color": "Red", "size": "10x12", "shed_style": "Barn"},
    {"title": "B", "material_type": "Metal", "color": "Charcoal", "size": "8x10", "shed_style": "Lean-To"},
    {"title": "C", "material_type": "Wood Composite", "color": "White", "size": "12x16", "shed_style": "Modern"},
]


def titles(rows):
    return [r["title"] for r in rows]


def test_empty_filters_keep_everything():
    assert titles(filter_sheds(ROWS, empty_filters())) == ["A", "B", "C"]


def test_filter_is_case_insensitive_substring():
    filters = dict(empty_filters(), material_type="wood")
    assert titles(filter_sheds(ROWS, filters)) == ["A", "C"]

    filters = dict(empty_filters(), size="10")
    assert titles(filter_sheds(ROWS, filters)) == ["A", "B"]


def test_filters_combine():
    filters = dict(empty_filters(), material_type="Wood", color="red")
    assert titles(filter_sheds(ROWS, filters)) == ["A"]

    filters = dict(empty_filters(), material_type="Metal", color="White")
    assert filter_sheds(ROWS, filters) == []


def test_toggle_filter():
    filters = toggle_filter(empty_filters(), "color", "Red")
    assert filters["color"] == "Red"
    assert has_active_filters(filters)

    filters = toggle_filter(filters, "color", "Red")
    assert filters["color"] == ""
    assert not has_active_filters(filters)

    with pytest.raises(KeyError):
        toggle_filter(filters, "price", "100")


def test_filters_from_args_ignores_unknown_keys():
    filters = filters_from_args({"color": " Red ", "foo": "bar"})
    assert filters == {"material_type": "", "color": "Red", "size": "", "shed_style": ""}


def test_unique_values_first_seen_order():
    rows = ROWS + [{"material_type": "Metal"}, {"material_type": ""}]
    assert unique_values(rows, "material_type") == ["Wood", "Metal", "Wood Composite"]


def test_quote_defaults_from_shed():
    shed = ShedListing(
        title="Classic Barn", material_type="Wood", color="Red", size="10x12", shed_style="Barn"
    )
    defaults = quote_defaults_for_shed(shed)
    assert defaults["project_type"] == "Custom Shed"
    assert defaults["description"] == "I'm interested in the Classic Barn"
    assert defaults["size"] == "10x12"


def test_quote_defaults_from_filters():
    defaults = quote_defaults_for_shed(None, dict(empty_filters(), color="Gray"))
    assert defaults["color"] == "Gray"
    assert defaults["material_type"] == ""
    assert defaults["description"] == ""


def test_facet_toggles():
    filters = dict(empty_filters(), color="Red")
    facets = {"material_type": ["Wood"], "color": ["Red", "Gray"], "size": [], "shed_style": []}
    toggles = facet_toggles(filters, facets)

    assert toggles["color"]["Red"] == {}
    assert toggles["color"]["Gray"] == {"color": "Gray"}
    assert toggles["material_type"]["Wood"] == {"material_type": "Wood", "color": "Red"}
    assert toggles["size"] == {}
