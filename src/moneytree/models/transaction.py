"""Transaction model representing a single income or expense entry."""
from datetime import date
from uuid import UUID

from sqlalchemy import BigInteger, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from moneytree.models.base import BaseModel


class Transaction(BaseModel):
    """Transaction filed under a leaf category.

    ``amount`` is signed and stored in currency minor units. Whether it counts
    as income or expense is derived from the category's position in the tree.
    """

    __tablename__ = "transactions"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    txn_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    __table_args__ = (
        Index("ix_transactions_user_id_txn_date", "user_id", "txn_date"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, category_id={self.category_id}, amount={self.amount})>"
