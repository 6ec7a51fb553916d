"""Leaf rule for transaction categories."""

from uuid import UUID

from moneytree.core.exceptions import InvalidStateError
from moneytree.repositories.category import CategoryRepository


async def require_leaf(category_repo: CategoryRepository, category_id: UUID) -> None:
    """Raise InvalidStateError unless ``category_id`` has no children."""
    if await category_repo.has_children(category_id):
        raise InvalidStateError("CAT_009", details={"category_id": str(category_id)})
