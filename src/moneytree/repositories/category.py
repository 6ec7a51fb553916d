"""Category repository with owner-scoped and tree queries."""
import logging
from uuid import UUID

from sqlalchemy import or_, select

from moneytree.categories.defaults import DEFAULT_CATEGORIES, SYSTEM_ROOTS
from moneytree.categories.kinds import RootKind
from moneytree.core.exceptions import DataIntegrityError
from moneytree.models.category import Category
from moneytree.models.transaction import Transaction
from moneytree.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model.

    Reads by id are unscoped so the access policy can tell "missing" apart
    from "belongs to someone else".
    """

    model = Category

    async def get_visible(self, user_id: UUID) -> list[Category]:
        """System roots plus the user's own categories, oldest first."""
        result = await self.db.execute(
            select(Category)
            .where(or_(Category.owner_id == user_id, Category.owner_id.is_(None)))
            .order_by(Category.created_at, Category.name)
        )
        return list(result.scalars().all())

    async def has_children(self, category_id: UUID) -> bool:
        """Check whether any category, of any owner, has this one as parent."""
        result = await self.db.execute(
            select(Category.id).where(Category.parent_id == category_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def has_transactions(self, category_id: UUID) -> bool:
        """Check whether any transaction is filed under this category."""
        result = await self.db.execute(
            select(Transaction.id).where(Transaction.category_id == category_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_roots(self) -> dict[RootKind, Category]:
        """Both system roots keyed by kind."""
        result = await self.db.execute(select(Category).where(Category.root_kind.is_not(None)))
        return {root.root_kind: root for root in result.scalars().all()}

    async def ensure_system_roots(self) -> dict[RootKind, Category]:
        """Create whichever system roots are missing. Safe to call repeatedly."""
        roots = await self.get_roots()
        missing = [kind for kind in RootKind if kind not in roots]
        for kind in missing:
            root = Category(
                owner_id=None,
                parent_id=None,
                name=kind.label,
                root_kind=kind,
                **SYSTEM_ROOTS[kind],
            )
            self.db.add(root)
            roots[kind] = root
        if missing:
            await self.db.commit()
            logger.info("Seeded system root categories", extra={"root_kinds": [k.value for k in missing]})
        return roots

    async def seed_defaults(self, user_id: UUID) -> list[Category]:
        """Add the standard leaf categories for a new user under each root.

        Rows are added to the session without committing so the caller can
        commit them together with the user.
        """
        roots = await self.get_roots()
        created = []
        for kind, defaults in DEFAULT_CATEGORIES.items():
            if kind not in roots:
                raise DataIntegrityError(f"System root '{kind.value}' has not been seeded")
            for attrs in defaults:
                category = Category(owner_id=user_id, parent_id=roots[kind].id, **attrs)
                self.db.add(category)
                created.append(category)
        return created
