"""
catalog_api.auth.credentials

Credential verification for HTTP Basic auth.

Responsibilities:
- Decode an `Authorization: Basic ...` header into a `CredentialPair`.
- Look up the claimed user and verify the password against its bcrypt hash.
- Fail uniformly so callers cannot tell unknown usernames from wrong passwords.
"""

from __future__ import annotations

import asyncio
import base64
import binascii

from catalog_api.auth.models import CredentialPair
from catalog_api.auth.passwords import PasswordHasher
from catalog_api.db.models import User
from catalog_api.db.repositories.users import UserRepo
from catalog_api.observability.logging import get_logger
from catalog_api.services.errors import Unauthenticated

log = get_logger(__name__)


def parse_basic_authorization(header: str | None) -> CredentialPair | None:
    """
    Return the credential pair carried by a Basic auth header, or None when the
    header is missing, uses another scheme, or is not valid base64 `user:pass`.
    """

    if not header:
        return None
    scheme, _, encoded = header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep or not username:
        return None
    return CredentialPair(username=username, password=password)


class CredentialVerifier:
    def __init__(self, *, users: UserRepo, hasher: PasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    async def verify(self, authorization: str | None) -> User:
        """
        Return the full user record for valid credentials; raise `Unauthenticated` otherwise.
        The returned row carries the password hash and must not be serialized directly.
        """

        creds = parse_basic_authorization(authorization)
        if creds is None:
            reason = "missing credentials" if not authorization else "malformed credentials"
            log.info("authentication_failed", reason=reason)
            raise Unauthenticated(reason)

        user = await self._users.get_by_username(creds.username)
        # Always run one bcrypt comparison so lookup misses are not faster than bad passwords.
        stored = user.password if user is not None else self._hasher.dummy_hash
        matches = await asyncio.to_thread(self._hasher.verify, creds.password, stored)

        if user is None or not matches:
            reason = "unknown user" if user is None else "password mismatch"
            log.info("authentication_failed", reason=reason)
            raise Unauthenticated(reason)
        return user


# --- Module Notes -----------------------------------------------------------
# bcrypt is CPU bound; `asyncio.to_thread` keeps the event loop serving other
# requests while a comparison runs.
