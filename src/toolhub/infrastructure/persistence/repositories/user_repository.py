"""User repository for database operations."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def list_all(self) -> list[UserModel]:
        """Get every user, oldest first."""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at)
        )
        return list(result.scalars().all())

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address.

        Args:
            email: User's email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: str | None = None) -> bool:
        """Check if an email is already registered.

        Args:
            email: Email to check.
            exclude_id: Optional user ID to ignore (the user being updated).

        Returns:
            True if another user holds the email, False otherwise.
        """
        query = select(UserModel.id).where(UserModel.email == email)
        if exclude_id is not None:
            query = query.where(UserModel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def update(self, user: UserModel, values: dict[str, Any]) -> UserModel:
        """Update columns of a user.

        Args:
            user: User model to update.
            values: Column name to new value mapping.

        Returns:
            The updated user model.
        """
        for key, value in values.items():
            setattr(user, key, value)
        await self.session.flush()
        return user

    async def delete(self, user_id: str) -> None:
        """Delete a user by ID."""
        await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self.session.flush()
