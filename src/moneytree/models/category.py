"""Category model: one node of the income/expense category tree."""
from uuid import UUID

from sqlalchemy import CheckConstraint, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from moneytree.categories.kinds import Owner, RootKind, SystemOwned, UserOwned
from moneytree.models.base import BaseModel


class Category(BaseModel):
    """A category owned by a user, or one of the two system roots.

    System roots carry a ``root_kind`` and have neither owner nor parent.
    Every other category has exactly one parent and one owning user, both
    fixed at creation.
    """

    __tablename__ = "categories"

    owner_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    color: Mapped[str] = mapped_column(String(20), default="#000000", nullable=False)
    icon: Mapped[str] = mapped_column(String(50), default="folder", nullable=False)
    root_kind: Mapped[RootKind | None] = mapped_column(
        Enum(RootKind, name="root_kind", values_callable=lambda kinds: [k.value for k in kinds]),
        unique=True,
        nullable=True,
    )

    __table_args__ = (
        # Roots have neither owner nor parent; every other category has both.
        CheckConstraint(
            "(root_kind IS NULL AND owner_id IS NOT NULL AND parent_id IS NOT NULL)"
            " OR (root_kind IS NOT NULL AND owner_id IS NULL AND parent_id IS NULL)",
            name="ck_categories_root_shape",
        ),
    )

    @property
    def owner(self) -> Owner:
        if self.owner_id is None:
            return SystemOwned()
        return UserOwned(self.owner_id)

    @property
    def is_root(self) -> bool:
        return self.root_kind is not None

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, parent_id={self.parent_id})>"
