"""
catalog_api.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Look up users by primary key and by username (the unique key).
- Insert users, surfacing duplicate usernames as `UniqueViolation`.
- Apply field updates and refresh `account_updated`.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.errors import UniqueViolation, is_unique_violation
from catalog_api.db.models import User, utcnow


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def add(
        self,
        *,
        first_name: str,
        last_name: str,
        username: str,
        password_hash: str,
    ) -> User:
        now = utcnow()
        user = User(
            first_name=first_name,
            last_name=last_name,
            username=username,
            password=password_hash,
            account_created=now,
            account_updated=now,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if is_unique_violation(e):
                raise UniqueViolation(f"username already exists: {username}") from e
            raise
        return user

    async def update(self, user: User, fields: dict[str, Any]) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        user.account_updated = utcnow()
        await self._session.flush()
        return user
