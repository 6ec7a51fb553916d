"""Root kinds, classifications and category ownership."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class RootKind(str, Enum):
    """The two system roots every category descends from."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Classification(str, Enum):
    """Derived income/expense label of a category."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def for_root(cls, kind: RootKind) -> "Classification":
        return cls.INCOME if kind is RootKind.INCOME else cls.EXPENSE


@dataclass(frozen=True)
class SystemOwned:
    """Owner of the system roots; usable by every user, mutable by none."""


@dataclass(frozen=True)
class UserOwned:
    """Owner of a category created by a user."""

    user_id: UUID


Owner = SystemOwned | UserOwned
