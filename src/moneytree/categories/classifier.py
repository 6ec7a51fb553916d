"""Income/expense classification of categories.

A category is income when following its parent links ends at the Income root
and expense when it ends at the Expense root. The walk goes all the way up,
so categories nested at any depth are classified by the root they belong to.
"""

import logging
from typing import TYPE_CHECKING, Iterable
from uuid import UUID

from moneytree.categories.kinds import Classification
from moneytree.core.exceptions import CategoryCycleError, DataIntegrityError, NotFoundError

if TYPE_CHECKING:
    from moneytree.models.category import Category

logger = logging.getLogger(__name__)


class CategoryClassifier:
    """Classifies categories from the set of rows visible to one user."""

    def __init__(self, categories: Iterable["Category"]):
        self._by_id: dict[UUID, "Category"] = {c.id: c for c in categories}
        self._cache: dict[UUID, Classification] = {}

    def classify(self, category_id: UUID) -> Classification:
        """Return whether ``category_id`` counts as income or expense.

        Raises:
            NotFoundError: If the category is not in the visible set.
            CategoryCycleError: If parent links loop.
            DataIntegrityError: If a parent is missing or the walk ends at a
                category that is not a system root.
        """
        if category_id not in self._by_id:
            raise NotFoundError("CAT_007", details={"category_id": str(category_id)})

        path: list[UUID] = []
        seen: set[UUID] = set()
        current = self._by_id[category_id]
        while True:
            if current.id in self._cache:
                result = self._cache[current.id]
                break
            if current.id in seen:
                logger.error("Category parent links form a cycle", extra={"category_id": str(current.id)})
                raise CategoryCycleError(current.id)
            seen.add(current.id)
            path.append(current.id)

            if current.root_kind is not None:
                result = Classification.for_root(current.root_kind)
                break
            if current.parent_id is None:
                raise DataIntegrityError(f"Category {current.id} has no parent and is not a system root")
            parent = self._by_id.get(current.parent_id)
            if parent is None:
                raise DataIntegrityError(
                    f"Category {current.id} references parent {current.parent_id} outside the visible tree"
                )
            current = parent

        for visited_id in path:
            self._cache[visited_id] = result
        return result

    def ids_for(self, classification: Classification) -> list[UUID]:
        """All non-root category ids with the given classification."""
        return [
            category.id
            for category in self._by_id.values()
            if not category.is_root and self.classify(category.id) is classification
        ]
