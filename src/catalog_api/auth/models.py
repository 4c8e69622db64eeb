"""
catalog_api.auth.models

Auth domain models.

Responsibilities:
- Define the transient credential pair extracted from a request.
- Define the authorization decision type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CredentialPair:
    """
    Username/password presented on a single request. Never persisted.
    """

    username: str
    password: str = field(repr=False)


class Decision(enum.Enum):
    allow = "allow"
    forbid = "forbid"


# --- Module Notes -----------------------------------------------------------
# `repr=False` keeps the password out of tracebacks and log renderers.
