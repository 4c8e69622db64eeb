"""
catalog_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for DB sessions and the password hasher.
- Build request-scoped services from those dependencies.
- Encapsulate app.state access patterns (engine/sessionmaker/hasher).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_api.auth.passwords import PasswordHasher
from catalog_api.services.products import ProductService
from catalog_api.services.users import UserService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the lifespan handler of `catalog_api.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is explicit in the service layer; the
    # context manager rolls back anything left uncommitted.
    async with session_factory() as session:
        yield session


def user_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
) -> UserService:
    return UserService(session=session, hasher=hasher)


def product_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
) -> ProductService:
    return ProductService(session=session, hasher=hasher)
