"""Pydantic schemas for transaction API requests and responses."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from moneytree.schemas.common import MoneyMeta, PaginationMeta


class TransactionCreateRequest(BaseModel):
    """Request to record a transaction."""

    category_id: UUID = Field(..., description="Leaf category to file the transaction under")
    amount: int = Field(..., description="Signed amount in currency minor units")
    txn_date: date = Field(..., description="Calendar date of the transaction")
    description: str = Field("", max_length=500, description="Optional free-text note")


class TransactionUpdateRequest(BaseModel):
    """Partial update; only fields that are sent are changed."""

    category_id: UUID | None = Field(None, description="New leaf category")
    amount: int | None = Field(None, description="Signed amount in currency minor units")
    txn_date: date | None = Field(None, description="Calendar date of the transaction")
    description: str | None = Field(None, max_length=500, description="Free-text note")


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: UUID
    category_id: UUID
    amount: int = Field(description="Signed amount in currency minor units")
    txn_date: date
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListItem(TransactionResponse):
    """Transaction with its category's display attributes."""

    category_name: str
    category_color: str


class TransactionListResult(BaseModel):
    """Paginated list of transactions."""

    transactions: list[TransactionListItem]
    pagination: PaginationMeta
    money: MoneyMeta
