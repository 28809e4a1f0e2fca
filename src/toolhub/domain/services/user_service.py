"""Service for registering, authenticating and managing users.

Email uniqueness is checked before every insert or email change. The check
and the write are not atomic, so a unique-constraint violation raised by the
database on commit is reported as the same conflict.
"""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.core.logging import get_logger
from toolhub.domain.entities import UserRole
from toolhub.infrastructure.auth import (
    PasswordCheck,
    hash_password_async,
    verify_password_async,
)
from toolhub.infrastructure.persistence.models import UserModel
from toolhub.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class EmailAlreadyRegisteredError(Exception):
    """Raised when an email is already held by another user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class UserNotFoundError(Exception):
    """Raised when no user exists for the given email or ID."""

    pass


class InvalidPasswordError(Exception):
    """Raised when the password does not match the stored hash."""

    pass


class PasswordVerificationError(Exception):
    """Raised when the password check itself could not be performed."""

    pass


class UserService:
    """Business operations on users, bound to one database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = UserRepository(session)

    async def list_users(self) -> list[UserModel]:
        return await self.repository.list_all()

    async def get_user(self, user_id: str) -> UserModel | None:
        return await self.repository.get_by_id(user_id)

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.VIEWER,
    ) -> UserModel:
        """Create a user with a hashed password.

        Args:
            first_name: Given name.
            last_name: Family name.
            email: Email address; must not be registered yet.
            password: Plaintext password, hashed before storage.
            role: Role to assign. Self-service signup always passes the default.

        Returns:
            The persisted user.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
            PasswordHashingError: If hashing fails.
        """
        role = UserRole(role)
        if await self.repository.email_exists(email):
            logger.warning("Attempt to register with an existing email address", email=email)
            raise EmailAlreadyRegisteredError(email)

        user = UserModel(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=await hash_password_async(password),
            active=True,
            role=role,
        )
        try:
            await self.repository.create(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Email uniqueness violated on insert", email=email, error=str(e.orig))
            raise EmailAlreadyRegisteredError(email) from e

        logger.info("User created", user_id=user.id, email=email, role=role.value)
        return user

    async def update_user(
        self,
        user: UserModel,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> UserModel:
        """Replace a user's profile and rotate the password hash.

        Raises:
            EmailAlreadyRegisteredError: If the new email belongs to another user.
        """
        if email != user.email and await self.repository.email_exists(email, exclude_id=user.id):
            raise EmailAlreadyRegisteredError(email)

        values = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password": await hash_password_async(password),
        }
        try:
            await self.repository.update(user, values)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise EmailAlreadyRegisteredError(email) from e

        logger.info("User updated", user_id=user.id)
        return user

    async def delete_user(self, user_id: str) -> None:
        await self.repository.delete(user_id)
        await self.session.commit()
        logger.info("User deleted", user_id=user_id)

    async def authenticate(self, email: str, password: str) -> UserModel:
        """Check a user's credentials.

        Returns:
            The user whose credentials matched.

        Raises:
            UserNotFoundError: No user has this email.
            InvalidPasswordError: The password is wrong.
            PasswordVerificationError: The stored hash could not be checked.
        """
        user = await self.repository.get_by_email(email)
        if user is None:
            logger.warning("User not found with that email", email=email)
            raise UserNotFoundError(email)

        check = await verify_password_async(user.password, password)
        if check is PasswordCheck.MISMATCH:
            logger.warning("Invalid password", user_id=user.id)
            raise InvalidPasswordError(user.id)
        if check is PasswordCheck.ERROR:
            raise PasswordVerificationError(f"Could not verify password for user {user.id}")
        return user
