"""Kind specifications and the built-in kind table.

A kind pairs an attribute-safe name with the label reported in failure
messages and the predicate that decides membership. The engine builds
one required validator, one nullable validator, and one guard per kind.

INVARIANT: Built-in kind names are reserved. Extra kinds may be added
at construction time but never replace a built-in.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, field_validator

from ensurekit.domain.predicates import (
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
from ensurekit.domain.signed_decimal import is_signed_decimal

Predicate = Callable[[Any], bool]


class KindSpec(BaseModel):
    """A named runtime category a value is checked against.

    Attributes:
        name: Python identifier used to derive validator attribute names
            (``byte_buffer`` -> ``nullable_byte_buffer``, ``is_byte_buffer``).
        label: Kind name shown in failure messages (``byte-buffer``).
        predicate: Pure membership test.
        nullable: Whether a ``nullable_<name>`` form is generated.
    """

    model_config = {"frozen": True}

    name: str
    label: str
    predicate: Predicate
    nullable: bool = True

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.isidentifier() or value.startswith("_") or value != value.lower():
            msg = f"Kind name must be a lowercase public identifier, got {value!r}"
            raise ValueError(msg)
        if value.startswith(("is_", "nullable_")):
            msg = f"Kind name {value!r} clashes with a generated validator prefix"
            raise ValueError(msg)
        return value

    @field_validator("label")
    @classmethod
    def _check_label(cls, value: str) -> str:
        if not value.strip():
            msg = "Kind label must not be empty"
            raise ValueError(msg)
        return value


BUILTIN_KINDS: tuple[KindSpec, ...] = (
    KindSpec(name="array", label="array", predicate=is_array),
    KindSpec(name="byte_buffer", label="byte-buffer", predicate=is_byte_buffer),
    KindSpec(name="boolean", label="boolean", predicate=is_boolean),
    KindSpec(name="date", label="date", predicate=is_date),
    KindSpec(name="integer", label="integer", predicate=is_integer),
    KindSpec(name="number", label="number", predicate=is_number),
    KindSpec(name="object", label="object", predicate=is_object),
    KindSpec(name="string", label="string", predicate=is_string),
    KindSpec(name="signed_decimal", label="signed-decimal", predicate=is_signed_decimal),
    # Pseudo-kinds about presence rather than shape.
    KindSpec(name="defined", label="defined", predicate=is_defined),
    KindSpec(name="absent", label="absent", predicate=is_absent, nullable=False),
)

BUILTIN_KIND_NAMES: frozenset[str] = frozenset(k.name for k in BUILTIN_KINDS)


def merge_kinds(extra: Iterable[KindSpec] = ()) -> tuple[KindSpec, ...]:
    """Return the built-in kinds followed by *extra*.

    Raises:
        ValueError: If an extra kind reuses a built-in name or appears twice.
    """
    extra = tuple(extra)
    seen = set(BUILTIN_KIND_NAMES)
    for spec in extra:
        if spec.name in BUILTIN_KIND_NAMES:
            msg = f"Kind {spec.name!r} conflicts with a built-in kind"
            raise ValueError(msg)
        if spec.name in seen:
            msg = f"Kind {spec.name!r} is declared more than once"
            raise ValueError(msg)
        seen.add(spec.name)
    return (*BUILTIN_KINDS, *extra)
