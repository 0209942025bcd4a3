"""
Attribute Facets - group a product's attribute values for option pickers.

resolve_facets() turns raw attribute-value records into named facets
("Color": [Red, Blue]); select_facet_value() is the pure single-choice
update used by the picker session.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Iterable

from pydantic import ValidationError

from storefront.errors import ERROR_INVALID_ATTRIBUTE_VALUE
from storefront.logging import get_logger
from storefront.models import AttributeValueRecord

logger = get_logger(__name__)

# facet name -> chosen display value
SelectionState = Dict[str, str]


@dataclass
class FacetItem:
    """One selectable value inside a facet."""
    display_value: str
    color: Optional[str] = None


@dataclass
class Facet:
    """Named group of selectable attribute values."""
    name: str
    items: List[FacetItem] = field(default_factory=list)


def format_display_value(raw_value: str, unit: Optional[str] = None) -> str:
    """Append the unit when there is one: ("10", "cm") -> "10 cm"."""
    if unit:
        return f"{raw_value} {unit}"
    return raw_value


def resolve_facets(
    attribute_values: Optional[Iterable[AttributeValueRecord]],
) -> Optional[List[Facet]]:
    """
    Group attribute values into facets.

    Facets appear in order of first appearance of their attribute name and
    items keep input order. Identical display values are kept, two SKUs may
    legitimately share a color.

    Returns:
        List of facets, or None when there are no attribute values at all
        (the caller hides the whole options section in that case)
    """
    if attribute_values is None:
        return None

    facets: Dict[str, Facet] = {}
    for value in attribute_values:
        facet = facets.get(value.attribute_name)
        if facet is None:
            facet = facets[value.attribute_name] = Facet(name=value.attribute_name)
        facet.items.append(
            FacetItem(
                display_value=format_display_value(value.raw_value, value.unit),
                color=value.color or None,
            )
        )

    if not facets:
        return None
    return list(facets.values())


def select_facet_value(
    state: Mapping[str, str],
    facet_name: str,
    display_value: str,
) -> SelectionState:
    """
    Return a new selection with ``facet_name`` set to ``display_value``.

    Each facet holds a single choice, so a second selection replaces the
    first. Other facets are left alone. The value is not checked against
    the facet's items; that is up to the caller.
    """
    new_state = dict(state)
    new_state[facet_name] = display_value
    return new_state


def is_selected(state: Mapping[str, str], facet_name: str, display_value: str) -> bool:
    """Whether ``display_value`` is the current choice for ``facet_name``."""
    return state.get(facet_name) == display_value


def parse_attribute_values(product: Optional[Mapping[str, Any]]) -> List[AttributeValueRecord]:
    """
    Extract attribute values from a product payload.

    Expects the API shape::

        {"attributeValues": [
            {"attributeValue": {"value": "10", "color": None,
                                "attribute": {"name": "Size", "unit": "cm"}}}
        ]}

    Entries that don't match are logged and skipped.
    """
    if not product:
        return []

    entries = product.get("attributeValues")
    if not isinstance(entries, list):
        return []

    records = []
    for entry in entries:
        attribute_value = entry.get("attributeValue") if isinstance(entry, dict) else None
        attribute = attribute_value.get("attribute") if isinstance(attribute_value, dict) else None
        if not isinstance(attribute, dict):
            logger.warning(f"{ERROR_INVALID_ATTRIBUTE_VALUE}: missing attribute")
            continue
        try:
            records.append(
                AttributeValueRecord(
                    attribute_name=attribute.get("name"),
                    raw_value=attribute_value.get("value"),
                    unit=attribute.get("unit"),
                    color=attribute_value.get("color"),
                )
            )
        except ValidationError as e:
            logger.warning(f"{ERROR_INVALID_ATTRIBUTE_VALUE}: {e.error_count()} errors")
    return records
