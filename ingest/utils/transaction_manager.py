"""Transaction management utilities."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class TransactionManager:
    """Context manager for database transactions with automatic rollback."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit transaction context with commit or rollback."""
        if exc_type is None:
            await self.db.commit()
            logger.debug("Transaction committed successfully")
        else:
            await self.db.rollback()
            logger.warning(f"Transaction rolled back due to {exc_type.__name__}: {exc_val}")

        return False  # Don't suppress exceptions


@asynccontextmanager
async def atomic_operation(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    Atomic operation context manager.

    Usage:
        async with atomic_operation(db) as session:
            # Operations are automatically committed or rolled back
            session.add(user)
    """
    async with TransactionManager(db):
        yield db
