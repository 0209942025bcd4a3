"""
Category Tree - flat parent-referencing categories to an ordered forest.

Shared by the admin tree editor and storefront navigation. The builder is
two linear passes (index, then link) and never recurses, so deep trees,
children listed before their parents and cyclic parent chains are all
handled without stack growth.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from storefront.errors import ERROR_INVALID_CATEGORY
from storefront.logging import get_logger, log_safe
from storefront.models import CategoryNode, CategoryRecord

logger = get_logger(__name__)


def _last_occurrences(records: List[CategoryRecord]) -> List[CategoryRecord]:
    """Drop all but the last record for each id, keeping input order."""
    last_index = {record.id: i for i, record in enumerate(records)}
    return [record for i, record in enumerate(records) if last_index[record.id] == i]


def _by_sort_order(node: CategoryNode) -> int:
    return node.sort_order


def build_category_tree(
    records: Optional[Iterable[CategoryRecord]],
    sort_by_order: bool = False,
) -> List[CategoryNode]:
    """
    Build a nested forest from a flat list of categories.

    Each record is copied into a new node, input records are never mutated.
    Children keep their relative input order; with ``sort_by_order`` every
    sibling list (roots included) is stably sorted by ``sort_order``.

    Duplicate ids: the last occurrence wins, both for field values and for
    placement, and the node is emitted once.

    A record whose ``parent_id`` is unknown is promoted to a root. Records
    that form a parent cycle are linked to each other and are therefore not
    reachable from any root.

    Args:
        records: Flat categories in any order (None is treated as empty)
        sort_by_order: Sort siblings ascending by ``sort_order``

    Returns:
        Root nodes
    """
    if not records:
        return []

    unique = _last_occurrences(list(records))
    index = {record.id: CategoryNode.from_record(record) for record in unique}

    roots: List[CategoryNode] = []
    orphans = 0
    for record in unique:
        node = index[record.id]
        parent = index.get(record.parent_id) if record.parent_id is not None else None
        if parent is None:
            if record.parent_id is not None:
                orphans += 1
            roots.append(node)
        else:
            parent.children.append(node)

    if sort_by_order:
        roots.sort(key=_by_sort_order)
        for node in index.values():
            node.children.sort(key=_by_sort_order)

    if orphans:
        logger.debug(f"Promoted {orphans} orphan categories to roots")

    return roots


def iter_category_tree(roots: Iterable[CategoryNode]) -> Iterator[Tuple[CategoryNode, int]]:
    """Yield ``(node, level)`` pairs in pre-order, roots at level 0."""
    stack = [(node, 0) for node in reversed(list(roots))]
    seen = set()
    while stack:
        node, level = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node, level
        for child in reversed(node.children):
            stack.append((child, level + 1))


def flatten_category_tree(roots: Iterable[CategoryNode]) -> List[Tuple[CategoryNode, int]]:
    """Flatten a forest for the indented category selector."""
    return list(iter_category_tree(roots))


def find_category(roots: Iterable[CategoryNode], category_id: str) -> Optional[CategoryNode]:
    """Find a node anywhere in the forest by id."""
    for node, _level in iter_category_tree(roots):
        if node.id == category_id:
            return node
    return None


def parent_options(
    records: Iterable[CategoryRecord],
    exclude_id: Optional[str] = None,
) -> List[CategoryRecord]:
    """
    Categories that can be chosen as a parent in the category form.

    Only top-level categories qualify, and a category can't be its own parent.
    """
    return [
        record for record in records
        if record.id != exclude_id and not record.parent_id
    ]


def parse_category_records(raw: Optional[Iterable[dict]]) -> List[CategoryRecord]:
    """
    Validate raw category payloads from the API.

    Invalid entries are logged and skipped so one bad row doesn't hide
    the whole navigation.
    """
    if not raw:
        return []

    records = []
    for item in raw:
        try:
            records.append(CategoryRecord.model_validate(item))
        except ValidationError as e:
            raw_id = item.get("id") if isinstance(item, dict) else None
            logger.warning(
                f"{ERROR_INVALID_CATEGORY} {log_safe(raw_id)}: "
                f"{e.error_count()} errors"
            )
    return records
