"""Income/expense summary endpoint."""

import calendar
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from moneytree.api.deps import get_current_user, get_summary_service
from moneytree.config import settings
from moneytree.models.user import User
from moneytree.schemas.common import MoneyMeta
from moneytree.schemas.summary import SummaryPeriod, SummaryResponse
from moneytree.services.summary import SummaryService

router = APIRouter(prefix="/summary", tags=["summary"])


def current_month(today: date | None = None) -> tuple[date, date]:
    """First and last day of the month containing ``today``."""
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


@router.get(
    "",
    response_model=SummaryResponse,
    summary="Get income/expense summary",
    description="""
    Sum the authenticated user's transactions between two dates (inclusive),
    split into income and expense by category. Defaults to the current month;
    when only one bound is given, the other defaults to the end or start of
    that bound's month.
    """,
)
async def get_summary(
    start_date: Annotated[
        date | None, Query(description="Period start (inclusive)")
    ] = None,
    end_date: Annotated[
        date | None, Query(description="Period end (inclusive)")
    ] = None,
    current_user: User = Depends(get_current_user),
    service: SummaryService = Depends(get_summary_service),
) -> SummaryResponse:
    """
    Get income, expense and balance for a period.

    Raises:
        HTTPException: 400 if start_date is after end_date
    """
    # A missing bound defaults to the month of the bound that was given.
    month_start, month_end = current_month(start_date or end_date)
    start_date = start_date or month_start
    end_date = end_date or month_end
    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must not be after end_date",
        )

    totals = await service.summarize(current_user.id, start_date, end_date)
    return SummaryResponse(
        income=totals.income,
        expense=totals.expense,
        balance=totals.balance,
        period=SummaryPeriod(start_date=start_date, end_date=end_date),
        money=MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit),
    )
