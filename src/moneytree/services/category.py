"""Category service: tree listing and owner-checked mutations."""
import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.categories.access import CategoryAccessPolicy
from moneytree.categories.tree import CategoryNode, build_category_forest
from moneytree.models.category import Category
from moneytree.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)


class CategoryService:
    """Service layer for category-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize category service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.category_repo = CategoryRepository(db)
        self.access = CategoryAccessPolicy(self.category_repo)

    async def get_tree(self, user_id: UUID) -> list[CategoryNode]:
        """Get the category forest visible to a user.

        Args:
            user_id: User ID

        Returns:
            One node per system root, with the user's categories nested below
        """
        categories = await self.category_repo.get_visible(user_id)
        return build_category_forest(categories)

    async def create_category(
        self,
        user_id: UUID,
        name: str,
        parent_id: UUID | None,
        color: str | None = None,
        icon: str | None = None,
    ) -> Category:
        """Create a category under an existing parent.

        Args:
            user_id: Creating (and owning) user
            name: Display name
            parent_id: System root or one of the user's categories
            color: Optional display color
            icon: Optional icon name

        Returns:
            The created category

        Raises:
            NotFoundError: If the parent is missing, or was deleted before
                the insert committed
        """
        parent = await self.access.authorize_create(parent_id, user_id)

        attrs = {"color": color, "icon": icon}
        category = Category(
            owner_id=user_id,
            parent_id=parent.id,
            name=name,
            **{key: value for key, value in attrs.items() if value is not None},
        )
        try:
            created = await self.category_repo.save(category)
        except IntegrityError:
            # The parent may have been deleted since it was checked.
            await self.db.rollback()
            await self.access.authorize_create(parent_id, user_id)
            raise
        logger.info(
            "Category created",
            extra={"user_id": str(user_id), "category_id": str(created.id)},
        )
        return created

    async def update_category(self, user_id: UUID, category_id: UUID, data: dict) -> Category:
        """Rename or restyle one of the user's categories.

        Args:
            user_id: User ID
            category_id: Category ID
            data: Changed fields (name, color, icon); None values are ignored

        Returns:
            The updated category
        """
        category = await self.access.authorize_mutate(category_id, user_id)

        changes = {
            key: value
            for key, value in data.items()
            if key in ("name", "color", "icon") and value is not None
        }
        updated = await self.category_repo.apply(category, changes)
        logger.info(
            "Category updated",
            extra={"user_id": str(user_id), "category_id": str(category_id), "fields": sorted(changes)},
        )
        return updated

    async def delete_category(self, user_id: UUID, category_id: UUID) -> None:
        """Delete one of the user's childless categories.

        Args:
            user_id: User ID
            category_id: Category ID

        Raises:
            InvalidStateError: If the category has children or transactions,
                including ones added after the checks passed
        """
        category = await self.access.authorize_delete(category_id, user_id)
        try:
            await self.category_repo.remove(category)
        except IntegrityError:
            # A child or transaction may have been added since the checks ran.
            await self.db.rollback()
            await self.access.authorize_delete(category_id, user_id)
            raise
        logger.info(
            "Category deleted",
            extra={"user_id": str(user_id), "category_id": str(category_id)},
        )
