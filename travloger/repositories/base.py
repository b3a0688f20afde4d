import logging
from typing import Any

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Thin base class that holds the database session.

    Every concrete repository receives an ``AsyncSession`` at
    construction time so that multiple repositories can share the same
    unit-of-work within a single request.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def _execute(self, statement: Any, params: Any = None) -> Any:
        """Execute *statement*, reporting an unreachable database as a
        :class:`ConfigurationError`."""
        try:
            if params is None:
                return await self._db.execute(statement)
            return await self._db.execute(statement, params)
        except (OperationalError, InterfaceError, OSError) as exc:
            logger.error("Database unavailable: %s", exc)
            raise ConfigurationError("Database unavailable") from exc

    async def flush(self) -> None:
        """Flush pending changes without committing."""
        await self._db.flush()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._db.commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self._db.rollback()
