# sitepulse/adapters/outbound/persistence/repositories/token_repository.py

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sitepulse.adapters.outbound.persistence.models.token_model import AccessToken
from sitepulse.application.ports.outbound import ITokenRepository
from sitepulse.domain.exceptions import DatabaseOperationException, DuplicateTokenException
from sitepulse.domain.models.token_domain_model import IssuedToken

logger = logging.getLogger(__name__)


class AsyncTokenRepository(ITokenRepository):
    """Repository for issued access tokens (the token store)."""

    @staticmethod
    async def insert(db: AsyncSession, token: str, client_id: str, expires_at: datetime) -> IssuedToken:
        """
        Store a newly issued token.

        Args:
            db: Async database session
            token: Token value
            client_id: Owning client
            expires_at: Absolute expiry (naive UTC)

        Returns:
            The stored token

        Raises:
            DuplicateTokenException: If the token value already exists
            DatabaseOperationException: In case of any other database error
        """
        try:
            db.add(AccessToken(token=token, client_id=client_id, expires_at=expires_at))
            await db.commit()
            return IssuedToken(token=token, client_id=client_id, expires_at=expires_at)
        except IntegrityError as e:
            await db.rollback()
            raise DuplicateTokenException(original_error=e)
        except SQLAlchemyError as e:
            await db.rollback()
            raise DatabaseOperationException(
                detail="Error storing access token",
                original_error=e
            )

    @staticmethod
    async def find_valid(db: AsyncSession, token: str, now: datetime) -> Optional[IssuedToken]:
        """
        Look up a token that has not expired at ``now``.

        Rows past their expiry are treated as absent even if the cleanup
        task has not removed them yet.
        """
        try:
            query = select(AccessToken).where(
                AccessToken.token == token,
                AccessToken.expires_at > now,
            )
            result = await db.execute(query)
            record = result.scalar_one_or_none()
            if record is None:
                return None
            return IssuedToken(token=record.token, client_id=record.client_id, expires_at=record.expires_at)
        except SQLAlchemyError as e:
            raise DatabaseOperationException(
                detail="Error looking up access token",
                original_error=e
            )

    @staticmethod
    async def extend_expiry(db: AsyncSession, token: str, new_expires_at: datetime) -> bool:
        """
        Move a token's expiry to ``new_expires_at``.

        Returns:
            False if the token no longer exists, which is not an error
        """
        try:
            stmt = (
                update(AccessToken)
                .where(AccessToken.token == token)
                .values(expires_at=new_expires_at)
            )
            result = await db.execute(stmt)
            await db.commit()
            return bool(result.rowcount)
        except SQLAlchemyError as e:
            await db.rollback()
            raise DatabaseOperationException(
                detail="Error extending access token expiry",
                original_error=e
            )

    @staticmethod
    async def cleanup_expired(db: AsyncSession, now: datetime) -> int:
        """
        Remove expired tokens to keep the table size manageable.

        Returns:
            Number of records deleted
        """
        try:
            stmt = delete(AccessToken).where(AccessToken.expires_at <= now)
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount or 0
        except SQLAlchemyError as e:
            await db.rollback()
            raise DatabaseOperationException(
                detail="Error cleaning up expired access tokens",
                original_error=e
            )


# Create instance
token_repository = AsyncTokenRepository()
