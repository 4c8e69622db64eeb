"""
catalog_api.auth.ownership

Ownership authorization.

Responsibilities:
- Decide whether an authenticated user may read/write a resource owned by `owner_id`.

Callers must confirm the target exists before asking; a missing target is a
404, not a 403.
"""

from __future__ import annotations

import uuid

from catalog_api.auth.models import Decision
from catalog_api.db.models import User


def authorize(principal: User, owner_id: uuid.UUID) -> Decision:
    # Single strict equality: no admin override, no delegation.
    return Decision.allow if principal.id == owner_id else Decision.forbid
