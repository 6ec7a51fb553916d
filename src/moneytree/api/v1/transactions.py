"""Transaction endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from moneytree.api.deps import get_current_user, get_transaction_service
from moneytree.categories.kinds import Classification
from moneytree.config import settings
from moneytree.models.user import User
from moneytree.repositories.transaction import TransactionFilters
from moneytree.schemas.common import MoneyMeta, PaginationMeta
from moneytree.schemas.transaction import (
    TransactionCreateRequest,
    TransactionListItem,
    TransactionListResult,
    TransactionResponse,
    TransactionUpdateRequest,
)
from moneytree.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with filters",
    description="""
    Query the authenticated user's transactions.

    ## Filters
    - **start_date**, **end_date**: Date range filter (inclusive)
    - **category_id**: Filter by category
    - **type**: `income` or `expense`, by the category's root

    Results are ordered newest first and paginated.
    """,
)
async def list_transactions(
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page (1-100)")] = 20,
    start_date: Annotated[
        date | None, Query(description="Filter from date (inclusive)")
    ] = None,
    end_date: Annotated[
        date | None, Query(description="Filter to date (inclusive)")
    ] = None,
    category_id: Annotated[UUID | None, Query(description="Filter by category")] = None,
    type: Annotated[
        Classification | None, Query(description="Filter by income or expense")
    ] = None,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResult:
    """
    List transactions with filtering and pagination.

    Args:
        page: Page number (1-indexed)
        limit: Items per page
        start_date: Optional start date filter
        end_date: Optional end date filter
        category_id: Optional category filter
        type: Optional income/expense filter
        current_user: Authenticated user
        service: Transaction service

    Returns:
        Paginated list of transactions
    """
    filters = TransactionFilters(
        start_date=start_date, end_date=end_date, category_id=category_id
    )
    rows, total = await service.list_transactions(
        current_user.id, filters, classification=type, page=page, limit=limit
    )

    items = [
        TransactionListItem(
            **TransactionResponse.model_validate(row.transaction).model_dump(),
            category_name=row.category_name,
            category_color=row.category_color,
        )
        for row in rows
    ]
    total_pages = (total + limit - 1) // limit if total > 0 else 0

    return TransactionListResult(
        transactions=items,
        pagination=PaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
        ),
        money=MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit),
    )


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Get one of the authenticated user's transactions."""
    transaction = await service.get_transaction(current_user.id, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
    description="Record a transaction under a leaf category you may use.",
    responses={
        400: {"description": "Category is not a leaf"},
        403: {"description": "Category belongs to another user"},
        404: {"description": "Category not found"},
    },
)
async def create_transaction(
    data: TransactionCreateRequest,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Create a transaction for the authenticated user."""
    transaction = await service.create_transaction(
        user_id=current_user.id,
        category_id=data.category_id,
        amount=data.amount,
        txn_date=data.txn_date,
        description=data.description,
    )
    return TransactionResponse.model_validate(transaction)


@router.patch(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Update transaction",
    description="Change category, amount, date or description; omitted fields are kept.",
    responses={
        400: {"description": "Category is not a leaf"},
        403: {"description": "Category belongs to another user"},
        404: {"description": "Transaction or category not found"},
    },
)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Partially update a transaction."""
    transaction = await service.update_transaction(
        current_user.id, transaction_id, data.model_dump(exclude_unset=True)
    )
    return TransactionResponse.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> Response:
    """Delete one of the authenticated user's transactions."""
    await service.delete_transaction(current_user.id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
