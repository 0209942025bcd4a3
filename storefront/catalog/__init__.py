"""Catalog package: category tree and attribute facets."""
from .tree import (
    build_category_tree,
    flatten_category_tree,
    find_category,
    parent_options,
    parse_category_records,
)
from .facets import (
    Facet,
    FacetItem,
    SelectionState,
    format_display_value,
    resolve_facets,
    select_facet_value,
    is_selected,
    parse_attribute_values,
)

__all__ = [
    "build_category_tree",
    "flatten_category_tree",
    "find_category",
    "parent_options",
    "parse_category_records",
    "Facet",
    "FacetItem",
    "SelectionState",
    "format_display_value",
    "resolve_facets",
    "select_facet_value",
    "is_selected",
    "parse_attribute_values",
]
