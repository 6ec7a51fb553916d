"""Assemble the category forest shown to a user.

The store hands back a flat list of rows: the two system roots plus the
user's own categories. ``build_category_forest`` attaches every row under its
parent breadth-first from the roots, using an explicit worklist so deep trees
never hit the recursion limit.
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable
from uuid import UUID

from moneytree.core.exceptions import CategoryCycleError

if TYPE_CHECKING:
    from moneytree.models.category import Category

logger = logging.getLogger(__name__)


@dataclass
class CategoryNode:
    """A category together with its direct children."""

    category: "Category"
    children: list["CategoryNode"] = field(default_factory=list)

    def walk(self) -> Iterable["CategoryNode"]:
        """Yield this node and all transitive children, breadth-first."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def depth_first(self) -> Iterable[tuple["CategoryNode", int]]:
        """Yield ``(node, depth)`` in pre-order, children in their stored order.

        The node itself has depth 0. Each node comes directly after its
        parent or after the last descendant of its previous sibling.
        """
        stack = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    @property
    def is_leaf(self) -> bool:
        return not self.children


def build_category_forest(rows: Iterable["Category"]) -> list[CategoryNode]:
    """Build one tree per system root from a flat set of category rows.

    Children keep the order in which they appear in ``rows``.

    Raises:
        CategoryCycleError: If a category is reached twice or parent links loop.
    """
    rows = list(rows)
    roots = [row for row in rows if row.is_root]
    children_by_parent: dict[UUID, list["Category"]] = defaultdict(list)
    for row in rows:
        if not row.is_root and row.parent_id is not None:
            children_by_parent[row.parent_id].append(row)

    visited: set[UUID] = set()
    forest: list[CategoryNode] = []
    queue: deque[CategoryNode] = deque()

    for root in roots:
        if root.id in visited:
            raise CategoryCycleError(root.id)
        visited.add(root.id)
        node = CategoryNode(root)
        forest.append(node)
        queue.append(node)

    while queue:
        parent = queue.popleft()
        for child in children_by_parent.get(parent.category.id, []):
            if child.id in visited:
                logger.error("Category visited twice while building tree", extra={"category_id": str(child.id)})
                raise CategoryCycleError(child.id)
            visited.add(child.id)
            node = CategoryNode(child)
            parent.children.append(node)
            queue.append(node)

    unreachable = [row for row in rows if row.id not in visited]
    if unreachable:
        _check_unreachable(unreachable, {row.id: row for row in rows})
        logger.warning(
            "Dropping categories not attached to a system root",
            extra={"count": len(unreachable)},
        )

    return forest


def _check_unreachable(unreachable: list["Category"], by_id: dict[UUID, "Category"]) -> None:
    """Raise if any unreachable row sits on a parent-link loop.

    A row with a single parent can only be cut off from the roots by a loop
    or by a parent missing from the visible set; the latter is dropped.
    """
    for row in unreachable:
        seen: set[UUID] = set()
        current = row
        while current is not None:
            if current.id in seen:
                logger.error("Category parent links form a cycle", extra={"category_id": str(current.id)})
                raise CategoryCycleError(current.id)
            seen.add(current.id)
            current = by_id.get(current.parent_id) if current.parent_id is not None else None
