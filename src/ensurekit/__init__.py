"""ensurekit — runtime type assertions that validate and narrow in one call.

Usage::

    from ensurekit import ensure

    port = ensure.integer(payload["port"], "Invalid port.")
    note = ensure.nullable_string(payload.get("note"))
"""

from __future__ import annotations

from ensurekit.conventions import aliases
from ensurekit.domain.kinds import BUILTIN_KINDS, KindSpec
from ensurekit.domain.predicates import (
    ABSENT,
    is_absent,
    is_array,
    is_boolean,
    is_byte_buffer,
    is_date,
    is_defined,
    is_integer,
    is_number,
    is_object,
    is_string,
)
from ensurekit.domain.signed_decimal import Sign, SignedDecimal, is_signed_decimal
from ensurekit.engine import ValidatorPair, ValidatorSet, build
from ensurekit.errors import EnsureError, ErrorPolicy

__version__ = "1.0.0"

ensure: ValidatorSet = build()
demand = aliases(ensure, "demand")
enforce = aliases(ensure, "enforce")

__all__ = [
    "ABSENT",
    "BUILTIN_KINDS",
    "EnsureError",
    "ErrorPolicy",
    "KindSpec",
    "Sign",
    "SignedDecimal",
    "ValidatorPair",
    "ValidatorSet",
    "__version__",
    "aliases",
    "build",
    "demand",
    "enforce",
    "ensure",
    "is_absent",
    "is_array",
    "is_boolean",
    "is_byte_buffer",
    "is_date",
    "is_defined",
    "is_integer",
    "is_number",
    "is_object",
    "is_signed_decimal",
    "is_string",
]
