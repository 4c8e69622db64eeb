"""
catalog_api.db.models

Persistence schema for the catalog service.

Responsibilities:
- Define ORM models:
  - User: account principal; stores only the bcrypt hash of the password
  - Product: inventory item owned by exactly one user
  - HealthCheck: one row per successful liveness probe

These are the internal record shapes. Responses are built from the Pydantic
models in `catalog_api.schemas`, which have no password field.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.db.base import Base


def utcnow() -> datetime:
    # Naive UTC keeps SQLite and Postgres `timestamp without time zone` comparable.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # bcrypt hash, never the clear-text password.
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    account_created: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    account_updated: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    sku: Mapped[str] = mapped_column(String(255), nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    date_added: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    date_last_updated: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    # Set once from the authenticated principal at creation.
    owner_user_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),)


class HealthCheck(Base):
    __tablename__ = "health_checks"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns.
    check_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    check_datetime: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


# --- Module Notes -----------------------------------------------------------
# Timestamps are refreshed explicitly by the repositories rather than with
# `onupdate`, so an update that changes no column still bumps them.
