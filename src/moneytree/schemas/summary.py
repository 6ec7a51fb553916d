"""Pydantic schemas for the income/expense summary."""

from datetime import date

from pydantic import BaseModel, Field

from moneytree.schemas.common import MoneyMeta


class SummaryPeriod(BaseModel):
    """Inclusive date window a summary covers."""

    start_date: date
    end_date: date


class SummaryResponse(BaseModel):
    """Income and expense totals for a period."""

    income: int = Field(description="Sum of income amounts (minor units)")
    expense: int = Field(description="Sum of expense amounts (minor units)")
    balance: int = Field(description="income - expense")
    period: SummaryPeriod
    money: MoneyMeta
