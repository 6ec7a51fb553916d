"""Authentication service with business logic."""

import logging

from fastapi import HTTPException, status
from jose import JWTError

from moneytree.core.exceptions import ConflictError
from moneytree.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from moneytree.models.user import User
from moneytree.repositories.category import CategoryRepository
from moneytree.repositories.user import UserRepository
from moneytree.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository, category_repo: CategoryRepository):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            category_repo: Category repository used to seed new accounts
        """
        self.user_repo = user_repo
        self.category_repo = category_repo

    async def register(self, email: str, password: str) -> User:
        """
        Register a new user and seed their default categories.

        The user row and the seeded categories are committed together.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Created user object

        Raises:
            ConflictError: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("AUTH_001")

        user = User(email=email, password_hash=hash_password(password))
        await self.user_repo.add(user)

        seeded = await self.category_repo.seed_defaults(user.id)
        await self.user_repo.save(user)

        logger.info(
            "User registered",
            extra={"user_id": str(user.id), "seeded_categories": len(seeded)},
        )
        return user

    async def login(self, email: str, password: str) -> TokenPair:
        """Check email and password and issue a token pair.

        Raises:
            HTTPException: 401 for unknown email or wrong password, 403 for a
                deactivated account
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )
        return self._issue_tokens(user)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """Issue a new token pair from a refresh token.

        Access tokens are rejected here, as refresh tokens are everywhere else.
        """
        invalid = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
        try:
            user_id = get_user_id_from_token(refresh_token, REFRESH_TOKEN)
        except (JWTError, ValueError):
            raise invalid

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise invalid
        return self._issue_tokens(user)

    @staticmethod
    def _issue_tokens(user: User) -> TokenPair:
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is deactivated",
            )
        return TokenPair(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )
