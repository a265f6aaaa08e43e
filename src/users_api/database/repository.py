"""User and State repositories — data access layer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.models.state import State
from users_api.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Encapsulates all database queries related to users.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> User | None:
        """Look up a user by exact (case-sensitive) email."""
        stmt = select(User).where(User.email == email).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[User]:
        result = await self._session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def create(self, data: Mapping[str, Any]) -> User:
        """Insert a new user row built from *data*."""
        user = User(**data)
        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)
        return user

    async def update(self, user_id: int, data: Mapping[str, Any]) -> User | None:
        """Apply *data* to the user with *user_id*.

        Returns the updated row, or ``None`` if no user has that id.
        """
        user = await self._session.get(User, user_id)
        if user is None:
            return None
        for key, value in data.items():
            setattr(user, key, value)
        await self._session.flush()
        await self._session.refresh(user)
        return user

    async def delete_many(self, ids: Iterable[int]) -> int:
        """Delete every user whose id is in *ids*; return the number removed."""
        stmt = delete(User).where(User.id.in_(list(ids)))
        result = await self._session.execute(stmt)
        return result.rowcount

    async def count_per_state(self) -> list[tuple[str, int]]:
        """Count users per known state name.

        States without any user are included with a zero count.
        """
        stmt = (
            select(State.name, func.count(User.email))
            .select_from(State)
            .outerjoin(User, User.state == State.name)
            .group_by(State.id)
            .order_by(State.id)
        )
        result = await self._session.execute(stmt)
        return [(name, count) for name, count in result.all()]


class StateRepository:
    """Queries over the ``state`` lookup table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_name(self, name: str) -> State | None:
        stmt = select(State).where(State.name == name).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[State]:
        result = await self._session.execute(select(State).order_by(State.id))
        return list(result.scalars().all())

    async def ensure(self, name: str) -> State:
        """Return the State row called *name*, inserting it if absent."""
        existing = await self.find_by_name(name)
        if existing is not None:
            return existing
        state = State(name=name)
        self._session.add(state)
        await self._session.flush()
        logger.info("Added state %r to lookup table", name)
        return state
