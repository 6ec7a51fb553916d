"""User lookups for registration and login."""
from sqlalchemy import exists, select

from moneytree.models.user import User
from moneytree.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Users are looked up by id (tokens) or by email (login, registration)."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        return await self.db.scalar(select(User).where(User.email == email))

    async def email_exists(self, email: str) -> bool:
        return bool(await self.db.scalar(select(exists().where(User.email == email))))
