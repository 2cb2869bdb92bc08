"""Account Service: register, login, and deposit top-up.

Invariants:
    - Emails are stored lower-cased; uniqueness checked before insert and
      enforced by the unique constraints on commit (both surface as 400)
    - Login issues a fresh token and stores it on the user row
    - Top-up is a single UPDATE on the deposit column; concurrent top-ups never lose an amount
"""

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.config import Settings
from bookpost.core.credentials import (
    hash_password, issue_access_token, verify_password,
)
from bookpost.core.errors import BadRequestError, ResourceNotFoundError
from bookpost.models.user import User
from bookpost.schemas.user import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AccountService:
    """User account operations."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def register(self, body: UserRegister) -> User:
        """Create a user; 400 when email or username is taken."""
        email = body.email.lower()
        conflict = await self._find_conflict(email, body.username)
        if conflict:
            raise BadRequestError(conflict)

        user = User(
            email=email,
            username=body.username,
            full_name=body.full_name,
            password_hash=hash_password(body.password, self.settings.bcrypt_rounds),
            age=body.age,
            address=body.address,
            birth_date=body.birth_date,
            contact_no=body.contact_no,
            deposit=0,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # another registration with the same email/username committed first
            await self.db.rollback()
            conflict = await self._find_conflict(email, body.username)
            raise BadRequestError(conflict or "Email already registered")
        await self.db.refresh(user)
        logger.info(f"User {user.id} registered", extra={"user_id": user.id})
        return user

    async def _find_conflict(self, email: str, username: str) -> str | None:
        """Message for the first taken identifier, None when both are free."""
        result = await self.db.execute(
            select(User.email, User.username).where(
                or_(User.email == email, User.username == username),
            ),
        )
        rows = result.all()
        if any(row.email == email for row in rows):
            return "Email already registered"
        if rows:
            return "Username already taken"
        return None

    async def login(self, body: UserLogin) -> str:
        """Verify credentials and return a signed token."""
        result = await self.db.execute(
            select(User).where(User.email == body.email.lower()),
        )
        user = result.scalar_one_or_none()
        if not user:
            raise ResourceNotFoundError("Email")
        if not verify_password(body.password, user.password_hash):
            raise BadRequestError("Incorrect password")

        token = issue_access_token(
            user.id,
            user.email,
            self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expire_hours=self.settings.jwt_expire_hours,
        )
        user.jwt_token = token
        await self.db.commit()
        return token

    async def topup(self, user_id: int, amount: int) -> int:
        """Add amount to the caller's deposit; returns the new balance."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(deposit=User.deposit + amount)
            .returning(User.deposit),
        )
        deposit = result.scalar_one_or_none()
        if deposit is None:
            raise ResourceNotFoundError("User", user_id)
        await self.db.commit()
        logger.info(
            f"Deposit topped up by {amount}", extra={"user_id": user_id},
        )
        return deposit
