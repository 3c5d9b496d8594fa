"""Request body validation.

Bodies are parsed by pydantic schemas into a tagged result before any
business logic runs: ``Valid`` carries the typed model, ``Invalid`` carries a
single human readable message. Unknown fields are rejected by the schemas
themselves (``extra="forbid"``).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Generic, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..core.constants import NIS_PATTERN

M = TypeVar("M", bound=BaseModel)

_NIS_RE = re.compile(NIS_PATTERN)


@dataclass(frozen=True)
class Valid(Generic[M]):
    value: M


@dataclass(frozen=True)
class Invalid:
    message: str


ParseResult = Union[Valid[M], Invalid]


def _first_message(err: SchemaError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "__root__")
    msg = str(first.get("msg", "invalid value"))
    # pydantic prefixes messages raised from validators with "Value error, ".
    msg = msg.removeprefix("Value error, ")
    if first.get("type") == "missing":
        return f"{loc} is required"
    if first.get("type") == "extra_forbidden":
        return f"Unknown field: {loc}"
    if first.get("type") == "value_error" or not loc:
        return msg
    return f"{loc}: {msg}"


def parse_body(schema: Type[M], payload: Any) -> ParseResult:
    if not isinstance(payload, dict):
        return Invalid("Request body must be a JSON object")
    try:
        return Valid(schema.model_validate(payload))
    except SchemaError as e:
        return Invalid(_first_message(e))


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()


def is_valid_nis(value: str) -> bool:
    return bool(value) and _NIS_RE.fullmatch(value) is not None


def require_nis(value: str) -> str:
    value = require_non_empty(value, "nis")
    if not is_valid_nis(value):
        raise ValueError("NIS may only contain digits and dots")
    return value
