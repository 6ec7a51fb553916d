"""Income/expense summaries over a date window."""
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.categories.classifier import CategoryClassifier
from moneytree.categories.kinds import Classification
from moneytree.repositories.category import CategoryRepository
from moneytree.repositories.transaction import TransactionRepository


@dataclass(frozen=True)
class Summary:
    """Totals per classification for one user and period."""

    income: int = 0
    expense: int = 0

    @property
    def balance(self) -> int:
        return self.income - self.expense

    def __add__(self, other: "Summary") -> "Summary":
        return Summary(income=self.income + other.income, expense=self.expense + other.expense)


class SummaryService:
    """Sums a user's transactions by income/expense classification."""

    def __init__(self, db: AsyncSession):
        self.category_repo = CategoryRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def summarize(self, user_id: UUID, start_date: date, end_date: date) -> Summary:
        """Sum transaction amounts per classification within [start_date, end_date].

        A classification with no matching transactions totals 0.
        """
        totals = await self.transaction_repo.sum_by_category(user_id, start_date, end_date)
        if not totals:
            return Summary()

        classifier = CategoryClassifier(await self.category_repo.get_visible(user_id))
        income = expense = 0
        for category_id, total in totals.items():
            if classifier.classify(category_id) is Classification.INCOME:
                income += total
            else:
                expense += total
        return Summary(income=income, expense=expense)
