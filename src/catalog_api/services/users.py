"""
catalog_api.services.users

User (principal) command handlers.

Responsibilities:
- Create accounts: validate, enforce username uniqueness, store a bcrypt hash.
- Read and fully update an account, only by the account itself.

Check order for id-addressed calls: id shape -> credentials -> existence ->
ownership -> body validation -> write.
"""

from __future__ import annotations

import asyncio
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.auth.credentials import CredentialVerifier
from catalog_api.auth.models import Decision
from catalog_api.auth.ownership import authorize
from catalog_api.auth.passwords import PasswordHasher
from catalog_api.db.errors import UniqueViolation
from catalog_api.db.models import User
from catalog_api.db.repositories.users import UserRepo
from catalog_api.observability.logging import get_logger
from catalog_api.schemas import UserOut
from catalog_api.services.errors import BadInput, Forbidden, NotFound
from catalog_api.validation import (
    ResourceType,
    WriteMode,
    clean_fields,
    decode_body,
    parse_resource_id,
    validate,
)

log = get_logger(__name__)

DUPLICATE_USERNAME = "User with this email already exists"


class UserService:
    def __init__(self, *, session: AsyncSession, hasher: PasswordHasher) -> None:
        self._session = session
        self._hasher = hasher
        self._users = UserRepo(session)
        self._verifier = CredentialVerifier(users=self._users, hasher=hasher)

    async def create(self, raw_body: bytes) -> UserOut:
        body = decode_body(raw_body)
        violations = validate(WriteMode.create, ResourceType.user, body)
        if violations:
            raise BadInput(violations)

        fields = clean_fields(WriteMode.create, ResourceType.user, body)
        if await self._users.get_by_username(fields["username"]) is not None:
            raise BadInput(message=DUPLICATE_USERNAME)

        password_hash = await asyncio.to_thread(self._hasher.hash, fields["password"])
        try:
            user = await self._users.add(
                first_name=fields["first_name"],
                last_name=fields["last_name"],
                username=fields["username"],
                password_hash=password_hash,
            )
        except UniqueViolation as e:
            # Lost a race with a concurrent signup for the same username.
            raise BadInput(message=DUPLICATE_USERNAME) from e
        await self._session.commit()

        log.info("user_created", user_id=str(user.id))
        return UserOut.model_validate(user)

    async def get(self, raw_user_id: str, authorization: str | None) -> UserOut:
        user = await self._load_own_account(raw_user_id, authorization)
        return UserOut.model_validate(user)

    async def replace(self, raw_user_id: str, authorization: str | None, raw_body: bytes) -> None:
        user = await self._load_own_account(raw_user_id, authorization)

        body = decode_body(raw_body)
        violations = validate(WriteMode.replace, ResourceType.user, body)
        if violations:
            raise BadInput(violations)

        fields = clean_fields(WriteMode.replace, ResourceType.user, body)
        fields["password"] = await asyncio.to_thread(self._hasher.hash, fields["password"])
        await self._users.update(user, fields)
        await self._session.commit()
        log.info("user_updated", user_id=str(user.id))

    async def _load_own_account(self, raw_user_id: str, authorization: str | None) -> User:
        user_id = parse_resource_id(raw_user_id)
        principal = await self._verifier.verify(authorization)

        user = await self._users.get(user_id)
        if user is None:
            raise NotFound()
        if authorize(principal, user.id) is Decision.forbid:
            log.info("access_forbidden", user_id=str(user_id), principal_id=str(principal.id))
            raise Forbidden()
        return user


# --- Module Notes -----------------------------------------------------------
# Users are never deleted and have no partial update; `username` is fixed at
# creation (the replace policy rejects it).
