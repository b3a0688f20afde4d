import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.exc import InterfaceError, OperationalError

from travloger.core.exceptions import ConfigurationError
from travloger.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SchemaRepository(BaseRepository):
    """Introspects which scoring tables exist in the connected database."""

    async def get_existing_tables(self, table_names: List[str]) -> List[str]:
        def _present(sync_conn) -> List[str]:
            inspector = inspect(sync_conn)
            return [name for name in table_names if inspector.has_table(name)]

        try:
            connection = await self._db.connection()
            return await connection.run_sync(_present)
        except (OperationalError, InterfaceError, OSError) as exc:
            logger.error("Database unavailable: %s", exc)
            raise ConfigurationError("Database unavailable") from exc
