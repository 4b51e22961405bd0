"""Signed-decimal composite kind.

A signed decimal carries its parts explicitly instead of as one number,
the way many payment and ledger APIs serialize amounts::

    {"sign": "-", "whole": "12", "fractional": "50"}

Any object-like value exposing ``sign`` (one of ``"+"``/``"-"``) and
textual ``whole`` and ``fractional`` fields satisfies the kind, whether
it is a mapping, a :class:`SignedDecimal`, or another object with those
attributes. The parts are not parsed; checking digits is the caller's
business.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from ensurekit.domain.predicates import get_field, is_object, is_string


class Sign(StrEnum):
    """The two-valued sign enumeration."""

    POSITIVE = "+"
    NEGATIVE = "-"


_SIGNS = tuple(s.value for s in Sign)


class SignedDecimal(BaseModel):
    """Frozen signed-decimal value.

    Attributes:
        sign: ``"+"`` or ``"-"``.
        whole: Digits before the decimal point.
        fractional: Digits after the decimal point (may be empty).
    """

    model_config = {"frozen": True}

    sign: Sign
    whole: str
    fractional: str = ""

    def to_decimal(self) -> Decimal:
        """Return the value as a :class:`~decimal.Decimal`."""
        return Decimal(str(self))

    def __str__(self) -> str:
        prefix = "-" if self.sign is Sign.NEGATIVE else ""
        if self.fractional:
            return f"{prefix}{self.whole}.{self.fractional}"
        return f"{prefix}{self.whole}"


def is_signed_decimal(data: Any) -> bool:
    """Return True if *data* is object-like with a valid sign and textual parts."""
    if not is_object(data):
        return False
    sign = get_field(data, "sign")
    if not is_string(sign) or sign not in _SIGNS:
        return False
    return is_string(get_field(data, "whole")) and is_string(get_field(data, "fractional"))
