"""
catalog_api.services.products

Product (owned resource) command handlers.

Responsibilities:
- Create products owned by the authenticated user.
- Read, replace, merge and delete products, only by their owner.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.auth.credentials import CredentialVerifier
from catalog_api.auth.models import Decision
from catalog_api.auth.ownership import authorize
from catalog_api.auth.passwords import PasswordHasher
from catalog_api.db.models import Product
from catalog_api.db.repositories.products import ProductRepo
from catalog_api.db.repositories.users import UserRepo
from catalog_api.observability.logging import get_logger
from catalog_api.schemas import ProductOut
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


class ProductService:
    def __init__(self, *, session: AsyncSession, hasher: PasswordHasher) -> None:
        self._session = session
        self._products = ProductRepo(session)
        self._verifier = CredentialVerifier(users=UserRepo(session), hasher=hasher)

    async def create(self, authorization: str | None, raw_body: bytes) -> ProductOut:
        # The owner comes from the credentials, so authenticate before looking at the body.
        principal = await self._verifier.verify(authorization)

        fields = self._validated(WriteMode.create, raw_body)
        product = await self._products.add(owner_user_id=principal.id, fields=fields)
        await self._session.commit()

        log.info("product_created", product_id=str(product.id), owner_user_id=str(principal.id))
        return ProductOut.model_validate(product)

    async def get(self, raw_product_id: str, authorization: str | None) -> ProductOut:
        product = await self._load_owned(raw_product_id, authorization)
        return ProductOut.model_validate(product)

    async def replace(
        self, raw_product_id: str, authorization: str | None, raw_body: bytes
    ) -> None:
        await self._mutate(WriteMode.replace, raw_product_id, authorization, raw_body)

    async def merge(self, raw_product_id: str, authorization: str | None, raw_body: bytes) -> None:
        await self._mutate(WriteMode.merge, raw_product_id, authorization, raw_body)

    async def delete(self, raw_product_id: str, authorization: str | None) -> None:
        product = await self._load_owned(raw_product_id, authorization)
        await self._products.delete(product)
        await self._session.commit()
        log.info("product_deleted", product_id=str(product.id))

    async def _mutate(
        self,
        mode: WriteMode,
        raw_product_id: str,
        authorization: str | None,
        raw_body: bytes,
    ) -> None:
        product = await self._load_owned(raw_product_id, authorization)
        fields = self._validated(mode, raw_body)
        await self._products.update(product, fields)
        await self._session.commit()
        log.info("product_updated", product_id=str(product.id), mode=mode.value)

    async def _load_owned(self, raw_product_id: str, authorization: str | None) -> Product:
        product_id = parse_resource_id(raw_product_id)
        principal = await self._verifier.verify(authorization)

        product = await self._products.get(product_id)
        if product is None:
            raise NotFound()
        if authorize(principal, product.owner_user_id) is Decision.forbid:
            log.info(
                "access_forbidden", product_id=str(product_id), principal_id=str(principal.id)
            )
            raise Forbidden()
        return product

    @staticmethod
    def _validated(mode: WriteMode, raw_body: bytes) -> dict[str, Any]:
        body = decode_body(raw_body)
        violations = validate(mode, ResourceType.product, body)
        if violations:
            raise BadInput(violations)
        return clean_fields(mode, ResourceType.product, body)


# --- Module Notes -----------------------------------------------------------
# `owner_user_id` in a body is rejected by the allow-list before it could be
# written; ownership is only ever assigned in `create`.
