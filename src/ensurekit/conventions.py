"""Naming-convention alias families over one validator set.

Older call sites spell the same validators with a verb prefix
(``demand_integer``, ``enforce_nullable_string``). An alias family maps
those names onto the functions of an existing :class:`ValidatorSet`;
no validator logic is duplicated and the aliased objects are identical.
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from ensurekit.engine import ValidatorSet


class AliasFamily:
    """Immutable namespace of ``<verb>_<validator>`` names."""

    __slots__ = ("_names", "_verb")

    def __init__(self, verb: str, names: dict[str, Callable[..., Any]]) -> None:
        object.__setattr__(self, "_verb", verb)
        object.__setattr__(self, "_names", MappingProxyType(names))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._names[name]
        except KeyError:
            msg = f"{self._verb!r} alias family has no validator {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __copy__(self) -> AliasFamily:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> AliasFamily:
        return self

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._names})

    def __repr__(self) -> str:
        return f"<AliasFamily verb={self._verb!r} names={len(self._names)}>"

    @property
    def verb(self) -> str:
        return self._verb

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)


def aliases(validators: ValidatorSet, verb: str) -> AliasFamily:
    """Expose the required and nullable validators of *validators* under *verb*.

    ``aliases(ensure, "demand").demand_nullable_date`` is
    ``ensure.nullable_date``. Guards are not aliased.

    Raises:
        ValueError: If *verb* is not a lowercase identifier.
    """
    if not verb.isidentifier() or verb != verb.lower() or verb.startswith("_"):
        msg = f"Alias verb must be a lowercase public identifier, got {verb!r}"
        raise ValueError(msg)

    names: dict[str, Callable[..., Any]] = {}
    for kind in validators.kinds:
        pair = validators[kind]
        names[f"{verb}_{kind}"] = pair.required
        if pair.nullable is not None:
            names[f"{verb}_nullable_{kind}"] = pair.nullable
    return AliasFamily(verb, names)
