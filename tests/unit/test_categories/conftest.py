from uuid import UUID, uuid4

import pytest

from moneytree.categories.kinds import RootKind
from moneytree.models.category import Category


def _make_category(
    name: str,
    parent: Category | None = None,
    owner_id: UUID | None = None,
    root_kind: RootKind | None = None,
    parent_id: UUID | None = None,
) -> Category:
    return Category(
        id=uuid4(),
        name=name,
        owner_id=owner_id,
        parent_id=parent.id if parent is not None else parent_id,
        root_kind=root_kind,
        color="#000000",
        icon="folder",
    )


@pytest.fixture
def make_category():
    """Factory for transient (never persisted) Category rows."""
    return _make_category


@pytest.fixture
def income_root() -> Category:
    return _make_category("Income", root_kind=RootKind.INCOME)


@pytest.fixture
def expense_root() -> Category:
    return _make_category("Expense", root_kind=RootKind.EXPENSE)


@pytest.fixture
def user_id() -> UUID:
    return uuid4()
