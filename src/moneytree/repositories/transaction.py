"""Transaction repository with filtering and aggregation queries."""
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import func, select

from moneytree.models.category import Category
from moneytree.models.transaction import Transaction
from moneytree.repositories.base import BaseRepository


@dataclass
class TransactionFilters:
    """Optional filters for listing a user's transactions."""

    start_date: date | None = None
    end_date: date | None = None
    category_id: UUID | None = None
    category_ids: list[UUID] | None = None


@dataclass
class TransactionRow:
    """A transaction joined with its category's display attributes."""

    transaction: Transaction
    category_name: str
    category_color: str


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with filtering and summary queries."""

    model = Transaction

    async def get_owned(self, user_id: UUID, transaction_id: UUID) -> Transaction | None:
        """Get transaction only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id, Transaction.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        filters: TransactionFilters,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[TransactionRow], int]:
        """
        Get one page of a user's transactions, newest first.
        Returns (rows, total matching count).
        """
        query = (
            select(Transaction, Category.name, Category.color)
            .join(Category, Transaction.category_id == Category.id)
            .where(Transaction.user_id == user_id)
        )

        if filters.start_date:
            query = query.where(Transaction.txn_date >= filters.start_date)
        if filters.end_date:
            query = query.where(Transaction.txn_date <= filters.end_date)
        if filters.category_id:
            query = query.where(Transaction.category_id == filters.category_id)
        if filters.category_ids is not None:
            query = query.where(Transaction.category_id.in_(filters.category_ids))

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        offset = (page - 1) * limit
        result = await self.db.execute(
            query.order_by(Transaction.txn_date.desc(), Transaction.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        rows = [
            TransactionRow(transaction=txn, category_name=name, category_color=color)
            for txn, name, color in result.all()
        ]
        return rows, total

    async def sum_by_category(
        self, user_id: UUID, start_date: date, end_date: date
    ) -> dict[UUID, int]:
        """
        Sum a user's transaction amounts per category within [start_date, end_date].
        Returns dict of {category_id: total_amount}.
        """
        result = await self.db.execute(
            select(Transaction.category_id, func.sum(Transaction.amount).label("total"))
            .where(
                Transaction.user_id == user_id,
                Transaction.txn_date >= start_date,
                Transaction.txn_date <= end_date,
            )
            .group_by(Transaction.category_id)
        )
        return {row.category_id: int(row.total or 0) for row in result}
