"""FastAPI dependencies: request-scoped services and the authenticated user."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.core.security import get_user_id_from_token
from moneytree.db.session import get_db
from moneytree.models.user import User
from moneytree.repositories.category import CategoryRepository
from moneytree.repositories.user import UserRepository
from moneytree.services.auth import AuthService
from moneytree.services.category import CategoryService
from moneytree.services.summary import SummaryService
from moneytree.services.transaction import TransactionService

# Missing credentials are reported by get_current_user as 401.
bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(UserRepository(db), CategoryRepository(db))


async def get_category_service(db: DbSession) -> CategoryService:
    return CategoryService(db)


async def get_transaction_service(db: DbSession) -> TransactionService:
    return TransactionService(db)


async def get_summary_service(db: DbSession) -> SummaryService:
    return SummaryService(db)


async def get_current_user(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Resolve the bearer access token to an active user.

    The user id resolved here is passed explicitly into every service call.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, not an
            access token, or names an unknown user; 403 if the user is
            deactivated
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except (JWTError, ValueError):
        raise unauthorized

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise unauthorized
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )
    return user
