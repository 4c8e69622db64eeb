"""
catalog_api.validation

Field validation for client-supplied request bodies.

Responsibilities:
- Hold the static allow-list table: (resource, write mode) -> required/optional fields.
- Produce an ordered list of human-readable violations for a proposed field set.
- Parse raw request bodies and path identifiers into typed values.

The validator never raises for invalid fields; it returns violations and the
caller decides how to frame them. `decode_body` and `parse_resource_id` do
raise `BadInput` because there is nothing further to validate without them.
"""

from __future__ import annotations

import enum
import json
import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from catalog_api.services.errors import BadInput


class ResourceType(enum.StrEnum):
    user = "user"
    product = "product"


class WriteMode(enum.StrEnum):
    create = "create"  # POST
    replace = "replace"  # PUT
    merge = "merge"  # PATCH


@dataclass(frozen=True, slots=True)
class FieldPolicy:
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(self.required) | frozenset(self.optional)


_USER_FIELDS = ("first_name", "last_name", "password", "username")
_USER_EDITABLE = ("first_name", "last_name", "password")
_PRODUCT_FIELDS = ("name", "description", "sku", "manufacturer", "quantity")

# Anything not listed for a (resource, mode) pair is rejected: ids, timestamps,
# owner_user_id and, outside of create, username.
FIELD_POLICIES: dict[tuple[ResourceType, WriteMode], FieldPolicy] = {
    (ResourceType.user, WriteMode.create): FieldPolicy(required=_USER_FIELDS),
    (ResourceType.user, WriteMode.replace): FieldPolicy(required=_USER_EDITABLE),
    (ResourceType.user, WriteMode.merge): FieldPolicy(optional=_USER_EDITABLE),
    (ResourceType.product, WriteMode.create): FieldPolicy(required=_PRODUCT_FIELDS),
    (ResourceType.product, WriteMode.replace): FieldPolicy(required=_PRODUCT_FIELDS),
    (ResourceType.product, WriteMode.merge): FieldPolicy(optional=_PRODUCT_FIELDS),
}

# ":" is excluded because Basic credentials split username and password on it.
_EMAIL_RE = re.compile(r"^[^\s@:]+@[^\s@:]+\.[^\s@:]+$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

MIN_PASSWORD_LENGTH = 6
# Upper bound of a signed 32-bit INTEGER column (Postgres `integer`).
MAX_QUANTITY = 2**31 - 1


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_password(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= MIN_PASSWORD_LENGTH


def _is_whole_non_negative(value: Any) -> bool:
    # JSON numbers like 3.0 are integers mathematically; booleans are not numbers here.
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, float):
        return value.is_integer() and value >= 0
    return False


def _quantity_limit(value: Any) -> str | None:
    if value > MAX_QUANTITY:
        return f"quantity must be at most {MAX_QUANTITY}"
    return None


@dataclass(frozen=True, slots=True)
class _Rule:
    check: Callable[[Any], bool]
    # Messages for a required field that is invalid, and an optional field that is invalid.
    required_msg: str
    optional_msg: str
    # Message for a required field that is absent or null; defaults to `required_msg`.
    missing_msg: str | None = None
    # Range check applied once `check` passes; returns a violation or None.
    limit: Callable[[Any], str | None] | None = None

    def problem(self, value: Any, *, required: bool) -> str | None:
        if not self.check(value):
            return self.required_msg if required else self.optional_msg
        if self.limit is not None:
            return self.limit(value)
        return None


def _text_rule(field: str) -> _Rule:
    return _Rule(
        check=_is_text,
        required_msg=f"{field} is required and must be a non-empty string",
        optional_msg=f"{field} must be a non-empty string",
    )


_RULES: dict[str, _Rule] = {
    "first_name": _text_rule("first_name"),
    "last_name": _text_rule("last_name"),
    "password": _Rule(
        check=_is_password,
        required_msg=f"password is required and must be at least {MIN_PASSWORD_LENGTH} characters",
        optional_msg=f"password must be at least {MIN_PASSWORD_LENGTH} characters",
    ),
    "username": _Rule(
        check=is_valid_email,
        required_msg="username must be a valid email address",
        optional_msg="username must be a valid email address",
    ),
    "name": _text_rule("name"),
    "description": _text_rule("description"),
    "sku": _text_rule("sku"),
    "manufacturer": _text_rule("manufacturer"),
    "quantity": _Rule(
        check=_is_whole_non_negative,
        required_msg="quantity must be an integer >= 0",
        optional_msg="quantity must be an integer >= 0",
        missing_msg="quantity is required",
        limit=_quantity_limit,
    ),
}


def validate(mode: WriteMode, resource: ResourceType, fields: Mapping[str, Any]) -> list[str]:
    """
    Return every violation of `fields` against the (resource, mode) policy,
    allow-list violations first. An empty list means the body is acceptable.
    """

    policy = FIELD_POLICIES[(resource, mode)]
    violations: list[str] = []

    extra = [name for name in fields if name not in policy.allowed]
    if extra:
        violations.append(f"Cannot set fields: {', '.join(extra)}")

    if mode is WriteMode.merge and not fields:
        violations.append("At least one field must be provided")

    for name in policy.required:
        rule = _RULES[name]
        if name not in fields or fields[name] is None:
            violations.append(rule.missing_msg or rule.required_msg)
        elif problem := rule.problem(fields[name], required=True):
            violations.append(problem)

    for name in policy.optional:
        rule = _RULES[name]
        if name in fields and (problem := rule.problem(fields[name], required=False)):
            violations.append(problem)

    return violations


def clean_fields(
    mode: WriteMode, resource: ResourceType, fields: Mapping[str, Any]
) -> dict[str, Any]:
    """Allow-listed subset of an already validated body, with quantity coerced to int."""

    allowed = FIELD_POLICIES[(resource, mode)].allowed
    cleaned = {name: value for name, value in fields.items() if name in allowed}
    if "quantity" in cleaned:
        cleaned["quantity"] = int(cleaned["quantity"])
    return cleaned


def _is_encodable(value: Any) -> bool:
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            return False
        return True
    if isinstance(value, dict):
        return all(_is_encodable(k) and _is_encodable(v) for k, v in value.items())
    if isinstance(value, list):
        return all(_is_encodable(item) for item in value)
    return True


def decode_body(raw: bytes) -> dict[str, Any]:
    if not raw.strip():
        raise BadInput(message="Request body must be a JSON object")
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError and int-digit-limit errors are all ValueErrors.
        raise BadInput(message="Request body must be valid JSON") from e
    if not isinstance(data, dict):
        raise BadInput(message="Request body must be a JSON object")
    if not _is_encodable(data):
        # JSON \ud800-style escapes decode to lone surrogates that cannot be stored or hashed.
        raise BadInput(message="Request body must contain valid Unicode text")
    return data


def parse_resource_id(raw: str) -> uuid.UUID:
    # Shape failures carry no body; the client only learns the id is malformed.
    if not _UUID_RE.fullmatch(raw):
        raise BadInput()
    return uuid.UUID(raw)


# --- Module Notes -----------------------------------------------------------
# Rule order inside `validate` follows the tuples in FIELD_POLICIES, so
# violation lists are stable across runs and easy to assert on in tests.
