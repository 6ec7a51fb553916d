"""Service writes whose checks passed against rows that changed before commit.

Each test lets the first check see the state before a concurrent change,
then lets the store reject the write. The service must roll back and report
the domain error a fresh check gives.
"""
from datetime import date
from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.core.exceptions import InvalidStateError, NotFoundError
from moneytree.models.category import Category
from moneytree.models.transaction import Transaction
from moneytree.models.user import User
from moneytree.repositories.category import CategoryRepository
from moneytree.services.category import CategoryService
from moneytree.services.transaction import TransactionService


def _stale_once(monkeypatch, target, name: str, stale_result) -> list:
    """Make ``target.name`` return ``stale_result`` once, then behave normally."""
    real = getattr(target, name)
    calls = []

    async def check(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return stale_result
        return await real(*args, **kwargs)

    monkeypatch.setattr(target, name, check)
    return calls


async def _own(db_session: AsyncSession, user: User, name: str) -> Category:
    visible = await CategoryRepository(db_session).get_visible(user.id)
    return next(category for category in visible if category.name == name)


async def _category_exists(db_session: AsyncSession, category_id: UUID) -> bool:
    found = await db_session.scalar(select(Category.id).where(Category.id == category_id))
    return found is not None


class TestCategoryServiceStaleChecks:
    """Create and delete racing with other writes to the same tree."""

    @pytest.mark.asyncio
    async def test_create_under_parent_deleted_after_check(
        self, db_session: AsyncSession, test_user: User, monkeypatch
    ):
        service = CategoryService(db_session)
        user_id = test_user.id
        parent = await _own(db_session, test_user, "Investments")
        parent_id = parent.id
        await service.delete_category(user_id, parent_id)
        calls = _stale_once(monkeypatch, service.access, "authorize_create", parent)

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_category(user_id, "Dividends", parent_id)

        assert exc_info.value.error_code == "CAT_001"
        assert len(calls) == 2
        created = await db_session.scalar(select(Category.id).where(Category.name == "Dividends"))
        assert created is None

    @pytest.mark.asyncio
    async def test_delete_after_child_added(
        self, db_session: AsyncSession, test_user: User, monkeypatch
    ):
        service = CategoryService(db_session)
        user_id = test_user.id
        salary = await _own(db_session, test_user, "Salary")
        salary_id = salary.id
        await service.create_category(user_id, "Bonus", salary_id)
        _stale_once(monkeypatch, service.access, "authorize_delete", salary)

        with pytest.raises(InvalidStateError) as exc_info:
            await service.delete_category(user_id, salary_id)

        assert exc_info.value.error_code == "CAT_006"
        assert await _category_exists(db_session, salary_id)

    @pytest.mark.asyncio
    async def test_delete_after_transaction_filed(
        self, db_session: AsyncSession, test_user: User, monkeypatch
    ):
        service = CategoryService(db_session)
        user_id = test_user.id
        food = await _own(db_session, test_user, "Food")
        food_id = food.id
        await TransactionService(db_session).create_transaction(user_id, food_id, 1250, date(2025, 3, 4))
        _stale_once(monkeypatch, service.access, "authorize_delete", food)

        with pytest.raises(InvalidStateError) as exc_info:
            await service.delete_category(user_id, food_id)

        assert exc_info.value.error_code == "CAT_010"
        assert await _category_exists(db_session, food_id)


class TestTransactionServiceStaleChecks:
    """Filing a transaction into a category that is deleted meanwhile."""

    @pytest.mark.asyncio
    async def test_create_in_category_deleted_after_check(
        self, db_session: AsyncSession, test_user: User, monkeypatch
    ):
        service = TransactionService(db_session)
        user_id = test_user.id
        housing_id = (await _own(db_session, test_user, "Housing")).id
        await CategoryService(db_session).delete_category(user_id, housing_id)
        _stale_once(monkeypatch, service, "_check_category", None)

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_transaction(user_id, housing_id, 500, date(2025, 3, 4))

        assert exc_info.value.error_code == "CAT_007"
        assert await db_session.scalar(select(func.count()).select_from(Transaction)) == 0

    @pytest.mark.asyncio
    async def test_move_to_category_deleted_after_check(
        self, db_session: AsyncSession, test_user: User, monkeypatch
    ):
        service = TransactionService(db_session)
        user_id = test_user.id
        food_id = (await _own(db_session, test_user, "Food")).id
        transport_id = (await _own(db_session, test_user, "Transport")).id
        created = await service.create_transaction(user_id, food_id, 900, date(2025, 3, 4))
        transaction_id = created.id
        await CategoryService(db_session).delete_category(user_id, transport_id)
        _stale_once(monkeypatch, service, "_check_category", None)

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_transaction(user_id, transaction_id, {"category_id": transport_id})

        assert exc_info.value.error_code == "CAT_007"
        stored = await db_session.scalar(
            select(Transaction.category_id).where(Transaction.id == transaction_id)
        )
        assert stored == food_id
