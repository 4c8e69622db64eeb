"""
catalog_api.db.repositories.products

Repository for `Product` entities.

Responsibilities:
- Fetch, insert, update and delete products by primary key.
- Refresh `date_last_updated` on every mutation.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.models import Product, utcnow


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, product_id: uuid.UUID) -> Product | None:
        return await self._session.get(Product, product_id)

    async def add(self, *, owner_user_id: uuid.UUID, fields: dict[str, Any]) -> Product:
        now = utcnow()
        product = Product(
            **fields,
            owner_user_id=owner_user_id,
            date_added=now,
            date_last_updated=now,
        )
        self._session.add(product)
        await self._session.flush()
        return product

    async def update(self, product: Product, fields: dict[str, Any]) -> Product:
        for name, value in fields.items():
            setattr(product, name, value)
        product.date_last_updated = utcnow()
        await self._session.flush()
        return product

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# `owner_user_id` is only ever written by `add`; `update` callers pass fields
# that already went through the allow-list in `catalog_api.validation`.
