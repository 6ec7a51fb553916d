"""Ownership rules for creating, changing, deleting and using categories.

Every check takes the authenticated user's id explicitly and either returns
the category it resolved or raises a domain error. The checks only read; the
caller performs the write in the same session afterwards.
"""

from uuid import UUID

from moneytree.categories.kinds import SystemOwned, UserOwned
from moneytree.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from moneytree.models.category import Category
from moneytree.repositories.category import CategoryRepository


class CategoryAccessPolicy:
    """Decides whether a user may create under, edit, delete or use a category."""

    def __init__(self, category_repo: CategoryRepository):
        self.category_repo = category_repo

    async def authorize_create(self, parent_id: UUID | None, user_id: UUID) -> Category:
        """Check that ``user_id`` may add a child under ``parent_id``.

        Returns:
            The parent category

        Raises:
            InvalidStateError: If no parent is given (user categories are never roots)
            NotFoundError: If the parent does not exist
            ForbiddenError: If the parent belongs to another user
        """
        if parent_id is None:
            raise InvalidStateError("CAT_003")

        parent = await self.category_repo.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError("CAT_001", details={"parent_id": str(parent_id)})

        match parent.owner:
            case SystemOwned():
                return parent
            case UserOwned(user_id=owner_id) if owner_id == user_id:
                return parent
            case _:
                raise ForbiddenError("CAT_002", details={"parent_id": str(parent_id)})

    async def authorize_mutate(self, category_id: UUID, user_id: UUID) -> Category:
        """Check that ``user_id`` may edit or delete ``category_id``.

        Raises:
            ForbiddenError: If the category is a system root
            NotFoundError: If no such category is owned by the user
        """
        category = await self.category_repo.get_by_id(category_id)
        if category is not None and category.is_root:
            raise ForbiddenError("CAT_004", details={"category_id": str(category_id)})

        if category is None or category.owner != UserOwned(user_id):
            raise NotFoundError("CAT_005", details={"category_id": str(category_id)})
        return category

    async def authorize_delete(self, category_id: UUID, user_id: UUID) -> Category:
        """Check that ``user_id`` may delete ``category_id`` right now.

        Deletion proceeds bottom-up: a category with children (owned by
        anyone) or with transactions filed under it cannot be removed.

        Raises:
            ForbiddenError: If the category is a system root
            NotFoundError: If no such category is owned by the user
            InvalidStateError: If the category has children or transactions
        """
        category = await self.authorize_mutate(category_id, user_id)
        if await self.category_repo.has_children(category_id):
            raise InvalidStateError("CAT_006", details={"category_id": str(category_id)})
        if await self.category_repo.has_transactions(category_id):
            raise InvalidStateError("CAT_010", details={"category_id": str(category_id)})
        return category

    async def authorize_use(self, category_id: UUID, user_id: UUID) -> Category:
        """Check that ``user_id`` may file a transaction under ``category_id``.

        Raises:
            NotFoundError: If the category does not exist
            ForbiddenError: If the category belongs to another user
        """
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError("CAT_007", details={"category_id": str(category_id)})

        match category.owner:
            case SystemOwned():
                return category
            case UserOwned(user_id=owner_id) if owner_id == user_id:
                return category
            case _:
                raise ForbiddenError("CAT_008", details={"category_id": str(category_id)})
