"""Transaction service: owner-scoped CRUD with category checks."""
import logging
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.categories.access import CategoryAccessPolicy
from moneytree.categories.classifier import CategoryClassifier
from moneytree.categories.kinds import Classification
from moneytree.categories.leaf import require_leaf
from moneytree.core.exceptions import NotFoundError
from moneytree.models.transaction import Transaction
from moneytree.repositories.category import CategoryRepository
from moneytree.repositories.transaction import (
    TransactionFilters,
    TransactionRepository,
    TransactionRow,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for transaction-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize transaction service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)
        self.access = CategoryAccessPolicy(self.category_repo)

    async def list_transactions(
        self,
        user_id: UUID,
        filters: TransactionFilters,
        classification: Classification | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[TransactionRow], int]:
        """List a user's transactions with filters and pagination.

        Args:
            user_id: User ID
            filters: Date range and category filters
            classification: Keep only income or only expense transactions
            page: Page number (1-indexed)
            limit: Items per page

        Returns:
            Tuple of (rows on this page, total matching count)
        """
        if classification is not None:
            classifier = CategoryClassifier(await self.category_repo.get_visible(user_id))
            filters.category_ids = classifier.ids_for(classification)
        return await self.transaction_repo.list_for_user(user_id, filters, page, limit)

    async def get_transaction(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        """Get one of the user's transactions.

        Raises:
            NotFoundError: If no such transaction belongs to the user
        """
        transaction = await self.transaction_repo.get_owned(user_id, transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001", details={"transaction_id": str(transaction_id)})
        return transaction

    async def create_transaction(
        self,
        user_id: UUID,
        category_id: UUID,
        amount: int,
        txn_date: date,
        description: str = "",
    ) -> Transaction:
        """Record a transaction under a usable leaf category.

        Args:
            user_id: Owning user
            category_id: Leaf category, system-owned or owned by the user
            amount: Signed amount in minor units
            txn_date: Calendar date
            description: Optional note

        Returns:
            The created transaction
        """
        await self._check_category(user_id, category_id)

        transaction = Transaction(
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            txn_date=txn_date,
            description=description or "",
        )
        try:
            transaction = await self.transaction_repo.save(transaction)
        except IntegrityError:
            await self._recheck_category(user_id, category_id)
            raise
        logger.info(
            "Transaction created",
            extra={"user_id": str(user_id), "transaction_id": str(transaction.id)},
        )
        return transaction

    async def update_transaction(
        self, user_id: UUID, transaction_id: UUID, data: dict
    ) -> Transaction:
        """Change any of category, amount, date and description independently.

        The category checks run only when a category is being set.

        Args:
            user_id: User ID
            transaction_id: Transaction ID
            data: Changed fields; None values are ignored

        Returns:
            The updated transaction
        """
        transaction = await self.get_transaction(user_id, transaction_id)

        changes = {
            key: value
            for key, value in data.items()
            if key in ("category_id", "amount", "txn_date", "description") and value is not None
        }
        if "category_id" in changes:
            await self._check_category(user_id, changes["category_id"])

        try:
            updated = await self.transaction_repo.apply(transaction, changes)
        except IntegrityError:
            if "category_id" not in changes:
                raise
            await self._recheck_category(user_id, changes["category_id"])
            raise
        logger.info(
            "Transaction updated",
            extra={"user_id": str(user_id), "transaction_id": str(transaction_id), "fields": sorted(changes)},
        )
        return updated

    async def delete_transaction(self, user_id: UUID, transaction_id: UUID) -> None:
        """Delete one of the user's transactions.

        Raises:
            NotFoundError: If no such transaction belongs to the user
        """
        transaction = await self.get_transaction(user_id, transaction_id)
        await self.transaction_repo.remove(transaction)
        logger.info(
            "Transaction deleted",
            extra={"user_id": str(user_id), "transaction_id": str(transaction_id)},
        )

    async def _check_category(self, user_id: UUID, category_id: UUID) -> None:
        await self.access.authorize_use(category_id, user_id)
        await require_leaf(self.category_repo, category_id)

    async def _recheck_category(self, user_id: UUID, category_id: UUID) -> None:
        """Roll back a failed write and report why the category became unusable.

        Returns normally when the category still passes, so the caller can
        re-raise the original error.
        """
        await self.db.rollback()
        await self._check_category(user_id, category_id)
