"""State lookup service — keeps the ``state`` table in step with user rows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from users_api.database.repository import StateRepository

if TYPE_CHECKING:
    from users_api.database.engine import Database

logger = logging.getLogger(__name__)


class StateLookupService:
    """Inserts state names into the lookup table on first sight.

    Each call runs in its own session and transaction so that a failure
    here never rolls back (or blocks) the user write that triggered it.
    The check is read-then-write: two concurrent first inserts of the
    same name can both succeed.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def ensure(self, name: str | None) -> bool:
        """Make sure a State row called *name* exists.

        Returns ``True`` when the row exists afterwards, ``False`` when
        *name* was empty or the store call failed (the failure is logged).
        """
        if not name or not isinstance(name, str):
            return False
        try:
            async with self._database.session() as session:
                await StateRepository(session).ensure(name)
                await session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to record state %r in lookup table", name)
            return False
        return True
