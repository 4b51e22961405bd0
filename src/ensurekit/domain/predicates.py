"""Kind predicates and the absent sentinel.

One pure predicate per kind. The engine never inspects values except
through these functions, and the ``is_*`` guards exported from the
package are the very same objects, so a guard and its assertion can
never disagree.

``None`` is the null value. "Absent" is a distinct state (an unset
optional field) represented by :data:`ABSENT`; pydantic's
``PydanticUndefined`` is treated as absent as well.
"""

from __future__ import annotations

import datetime
import math
import numbers
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Final, Literal

from pydantic_core import PydanticUndefined


class _AbsentType:
    """Type of the :data:`ABSENT` singleton."""

    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> Literal[False]:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _AbsentType()

_TEXT_OR_BINARY = (str, bytes, bytearray, memoryview)
_PRIMITIVES = (str, bool, numbers.Number, Decimal)


def is_absent(data: Any) -> bool:
    """Return True if *data* is the absent marker (not ``None``)."""
    return data is ABSENT or data is PydanticUndefined


def is_defined(data: Any) -> bool:
    """Return True if *data* is neither ``None`` nor absent."""
    return data is not None and not is_absent(data)


def is_array(data: Any) -> bool:
    """Ordered, index-addressable sequences that are not text or binary."""
    return isinstance(data, Sequence) and not isinstance(data, _TEXT_OR_BINARY)


def is_byte_buffer(data: Any) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview))


def is_boolean(data: Any) -> bool:
    return isinstance(data, bool)


def is_date(data: Any) -> bool:
    """Calendar dates and datetimes (``datetime.datetime`` subclasses ``date``)."""
    return isinstance(data, datetime.date)


def is_number(data: Any) -> bool:
    """Real numbers and Decimals. ``bool`` is excluded; NaN is a number."""
    if isinstance(data, bool):
        return False
    return isinstance(data, (numbers.Real, Decimal))


def is_integer(data: Any) -> bool:
    """Numbers without a fractional component, e.g. ``42`` or ``42.0``."""
    if not is_number(data):
        return False
    if isinstance(data, numbers.Integral):
        return True
    if isinstance(data, Decimal):
        if not data.is_finite():
            return False
    elif not math.isfinite(data):
        return False
    return bool(data == math.floor(data))


def is_object(data: Any) -> bool:
    """Non-primitive values: containers, byte buffers, dates, and arbitrary instances."""
    return is_defined(data) and not isinstance(data, _PRIMITIVES)


def is_string(data: Any) -> bool:
    return isinstance(data, str)


def get_field(data: Any, name: str) -> Any:
    """Read *name* by key from mappings, by attribute otherwise.

    Returns :data:`ABSENT` when the field is missing.
    """
    if isinstance(data, Mapping):
        return data.get(name, ABSENT)
    return getattr(data, name, ABSENT)
