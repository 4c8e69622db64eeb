"""
catalog_api.schemas

Response models (external record shapes).

Responsibilities:
- Define what a client may ever see of a user or product.
- Build those shapes from ORM rows.

`UserOut` has no password field, so a hash cannot reach a response body even
if a handler passes the full ORM row through.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    username: str
    account_created: datetime
    account_updated: datetime


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    sku: str
    manufacturer: str
    quantity: int
    date_added: datetime
    date_last_updated: datetime
    owner_user_id: uuid.UUID
