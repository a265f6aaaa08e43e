"""Users router — CRUD over ``users`` plus the per-state aggregate.

Endpoints
---------
POST   /users                 → create a user
GET    /users/email/{email}   → user by email
PUT    /users                 → update one user by ``id``
PUT    /users/update          → update many users, each by its own ``id``
DELETE /users                 → delete users by a JSON-encoded list of ids
GET    /findUsersPerState     → user count for every known state

Request bodies are Pydantic models; a failing body is answered with 400
by the ``RequestValidationError`` handler before any handler code runs.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import EmailStr, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.database.engine import Database, get_database, get_session
from users_api.database.repository import StateRepository, UserRepository
from users_api.errors import field_error, internal_error_response, not_found_response
from users_api.schemas.user import (
    ID_LIST,
    DeleteIds,
    DeleteResult,
    StateCount,
    UserCreate,
    UserOut,
    UsersBatch,
    UserUpdate,
)
from users_api.services.state_lookup import StateLookupService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


# ──────────────────────────────────────────────────────────────
# POST /users — create
# ──────────────────────────────────────────────────────────────
@router.post("/users", response_model=UserOut)
async def create_user(
    body: UserCreate,
    session: AsyncSession = Depends(get_session),
    database: Database = Depends(get_database),
):
    """Create a user; the email must not be in use yet."""
    repo = UserRepository(session)
    if await repo.email_exists(body.email):
        raise field_error("email", "E-mail already in use")

    # Runs in its own transaction before any write on this session
    await StateLookupService(database).ensure(body.state)

    try:
        user = await repo.create(body.model_dump())
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        return internal_error_response(exc)

    logger.info("Created user id=%s email=%s", user.id, user.email)
    return UserOut.model_validate(user)


# ──────────────────────────────────────────────────────────────
# GET /users/email/{email} — lookup
# ──────────────────────────────────────────────────────────────
@router.get("/users/email/{email}", response_model=UserOut)
async def find_user_by_email(
    email: EmailStr, session: AsyncSession = Depends(get_session)
):
    """Return the user whose email matches."""
    try:
        user = await UserRepository(session).find_by_email(email)
    except SQLAlchemyError as exc:
        return internal_error_response(exc)

    if user is None:
        logger.info("No user with email %s", email)
        return not_found_response()
    return UserOut.model_validate(user)


# ──────────────────────────────────────────────────────────────
# PUT /users — update one
# ──────────────────────────────────────────────────────────────
@router.put("/users", response_model=UserOut)
async def update_user(
    body: UserUpdate,
    session: AsyncSession = Depends(get_session),
    database: Database = Depends(get_database),
):
    """Update the user identified by ``id``; ``email`` is never written."""
    changes = body.changes()
    await StateLookupService(database).ensure(changes.get("state"))

    try:
        user = await UserRepository(session).update(body.id, changes)
        if user is None:
            logger.info("Update skipped, no user with id=%s", body.id)
            return not_found_response()
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        return internal_error_response(exc)

    logger.info("Updated user id=%s (%s)", body.id, ", ".join(changes) or "no fields")
    return UserOut.model_validate(user)


# ──────────────────────────────────────────────────────────────
# PUT /users/update — update many
# ──────────────────────────────────────────────────────────────
@router.put("/users/update")
async def update_many_users(
    body: UsersBatch, database: Database = Depends(get_database)
) -> dict:
    """Update each entry of ``users`` independently.

    Every entry gets its own transaction; an unmatched or failing entry is
    logged and skipped without affecting the others. The response does
    not report per-entry outcomes.
    """
    lookup = StateLookupService(database)
    updated = 0
    for index, entry in enumerate(body.users):
        if await _update_entry(database, lookup, index, entry):
            updated += 1

    logger.info("Batch update: %d of %d entries applied", updated, len(body.users))
    return {"success": "updated"}


async def _update_entry(
    database: Database, lookup: StateLookupService, index: int, entry: UserUpdate
) -> bool:
    changes = entry.changes()
    await lookup.ensure(changes.get("state"))

    try:
        async with database.session() as session:
            user = await UserRepository(session).update(entry.id, changes)
            if user is None:
                logger.warning("Batch entry %d: no user with id=%s", index, entry.id)
                return False
            await session.commit()
    except SQLAlchemyError:
        logger.exception("Batch entry %d: update of user id=%s failed", index, entry.id)
        return False
    return True


# ──────────────────────────────────────────────────────────────
# DELETE /users — delete many
# ──────────────────────────────────────────────────────────────
@router.delete("/users", response_model=DeleteResult)
async def delete_users(body: DeleteIds, session: AsyncSession = Depends(get_session)):
    """Delete users whose ids are listed in the JSON string ``ids``."""
    try:
        ids = ID_LIST.validate_json(body.ids)
    except ValidationError:
        logger.info("Rejected delete, ids=%r is not an array of ids", body.ids)
        return JSONResponse(status_code=400, content={"errors": "not an array of ids"})

    try:
        count = await UserRepository(session).delete_many(ids)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        return internal_error_response(exc)

    logger.info("Deleted %d user(s) for ids %s", count, ids)
    return DeleteResult(count=count)


# ──────────────────────────────────────────────────────────────
# GET /findUsersPerState — aggregate
# ──────────────────────────────────────────────────────────────
@router.get("/findUsersPerState", response_model=list[StateCount])
async def find_users_per_state(session: AsyncSession = Depends(get_session)):
    """Count users for every state in the lookup table (zero included)."""
    try:
        if logger.isEnabledFor(logging.DEBUG):
            states = await StateRepository(session).list_all()
            users = await UserRepository(session).list_all()
            logger.debug("States: %s", [s.name for s in states])
            logger.debug("User states: %s", [u.state for u in users])

        rows = await UserRepository(session).count_per_state()
    except SQLAlchemyError as exc:
        return internal_error_response(exc)

    return [StateCount(state=name, count=str(count)) for name, count in rows]
