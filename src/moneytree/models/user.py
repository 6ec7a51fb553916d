"""Account that owns categories and transactions."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from moneytree.models.base import BaseModel


class User(BaseModel):
    """A registered account. Deactivated users can no longer authenticate."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(default=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, active={self.is_active})>"
