"""Authentication service for customers and administrators."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(Exception):
    """Raised when registering an email that already has an account."""

    pass


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: str) -> User | None:
        """Get user by ID.

        Args:
            user_id: UUID of the user

        Returns:
            User or None
        """
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def register_customer(
        self,
        name: str,
        email: str,
        password: str,
        phone: str | None = None,
    ) -> User:
        """Create a customer account.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        if await self.get_user_by_email(email):
            raise EmailAlreadyRegisteredError(email)

        user = User(
            name=name,
            email=email.lower(),
            phone=phone,
            hashed_password=hash_password(password),
            role=UserRole.CUSTOMER.value,
            is_active=True,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"Registered customer {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user with email and password.

        Returns:
            User if credentials valid and account active, None otherwise
        """
        user = await self.get_user_by_email(email)

        if not user or not user.is_active:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    def create_token(self, user: User) -> str:
        """Create JWT access token for a user."""
        return create_access_token(
            subject=str(user.id),
            additional_claims={
                "role": user.role_value,
                "email": user.email,
            },
        )
