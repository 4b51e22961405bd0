"""Assertion engine — builds validator sets from a kind table.

Every validator is produced from two shared primitives:

- required check: the value must satisfy the kind predicate.
- nullable check: ``None`` passes outright, an absent value fails,
  anything else must satisfy the kind predicate.

Validators return their input unchanged on success (identity, no copy,
no coercion) and raise on failure, through the error policy when one is
configured, otherwise as :class:`~ensurekit.errors.EnsureError`.

INVARIANT: A ValidatorSet is immutable. Its only captured state is the
kind table and the error-policy reference.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, NamedTuple, NoReturn

from ensurekit.domain.kinds import KindSpec, Predicate, merge_kinds
from ensurekit.domain.predicates import is_absent
from ensurekit.errors import EnsureError, ErrorPolicy

if TYPE_CHECKING:
    from ensurekit.config.settings import EnsureSettings

logger = logging.getLogger(__name__)

Validator = Callable[..., Any]


class ValidatorPair(NamedTuple):
    """The validators generated for one kind."""

    required: Validator
    nullable: Validator | None
    guard: Predicate


def format_message(label: str, user_message: str | None = None, *, nullable: bool = False) -> str:
    """Build the failure message for *label*.

    A non-empty caller-supplied message is kept verbatim as a prefix, so
    both the caller's text and the kind label always appear.
    """
    expected = f'Expected data to be "{label}"'
    message = f"{expected} or null." if nullable else f"{expected}."
    if user_message:
        return f"{user_message} {message}"
    return message


class _Failure:
    """Raises assertion failures for one validator set."""

    __slots__ = ("_policy", "_warn")

    def __init__(self, policy: ErrorPolicy | None, *, warn: bool) -> None:
        self._policy = policy
        self._warn = warn

    def __call__(self, message: str, data: Any) -> NoReturn:
        if self._policy is not None:
            self._policy(message, data)
            if self._warn:
                logger.warning(
                    "Error policy %r returned instead of raising; raising EnsureError",
                    self._policy,
                )
        raise EnsureError(message, data)


def _required(spec: KindSpec, fail: _Failure) -> Validator:
    predicate = spec.predicate
    label = spec.label

    def validate(data: Any, message: str | None = None) -> Any:
        if not predicate(data):
            fail(format_message(label, message), data)
        return data

    validate.__name__ = spec.name
    validate.__qualname__ = f"ValidatorSet.{spec.name}"
    validate.__doc__ = f'Return *data* if it is "{label}", otherwise fail.'
    return validate


def _nullable(spec: KindSpec, fail: _Failure) -> Validator:
    predicate = spec.predicate
    label = spec.label

    def validate(data: Any, message: str | None = None) -> Any:
        if data is None:
            return None
        if is_absent(data) or not predicate(data):
            fail(format_message(label, message, nullable=True), data)
        return data

    name = f"nullable_{spec.name}"
    validate.__name__ = name
    validate.__qualname__ = f"ValidatorSet.{name}"
    validate.__doc__ = f'Return *data* if it is None or "{label}", otherwise fail.'
    return validate


class ValidatorSet:
    """An immutable family of validators sharing one error policy.

    For each kind ``K`` the set exposes ``K(data, message=None)``,
    ``nullable_K(data, message=None)`` (unless the kind has no nullable
    form) and the guard ``is_K(data)``. ``validators[K]`` returns the
    :class:`ValidatorPair` for one kind.
    """

    __slots__ = ("_attrs", "_pairs", "_policy")

    def __init__(
        self,
        kinds: Iterable[KindSpec],
        error_policy: ErrorPolicy | None,
        *,
        warn: bool = True,
    ) -> None:
        fail = _Failure(error_policy, warn=warn)
        pairs: dict[str, ValidatorPair] = {}
        attrs: dict[str, Callable[..., Any]] = {}
        for spec in kinds:
            required = _required(spec, fail)
            nullable = _nullable(spec, fail) if spec.nullable else None
            pairs[spec.name] = ValidatorPair(required, nullable, spec.predicate)
            attrs[spec.name] = required
            if nullable is not None:
                attrs[f"nullable_{spec.name}"] = nullable
            attrs[f"is_{spec.name}"] = spec.predicate
        object.__setattr__(self, "_pairs", MappingProxyType(pairs))
        object.__setattr__(self, "_attrs", MappingProxyType(attrs))
        object.__setattr__(self, "_policy", error_policy)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._attrs[name]
        except KeyError:
            msg = f"{type(self).__name__!r} object has no validator {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __copy__(self) -> ValidatorSet:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> ValidatorSet:
        return self

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._attrs})

    def __getitem__(self, kind: str) -> ValidatorPair:
        return self._pairs[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._pairs

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        policy = "custom" if self._policy is not None else "default"
        return f"<ValidatorSet kinds={len(self._pairs)} policy={policy}>"

    @property
    def kinds(self) -> tuple[str, ...]:
        """Kind names in declaration order."""
        return tuple(self._pairs)

    @property
    def error_policy(self) -> ErrorPolicy | None:
        return self._policy


def build(
    error_policy: ErrorPolicy | None = None,
    *,
    kinds: Iterable[KindSpec] = (),
    settings: EnsureSettings | None = None,
) -> ValidatorSet:
    """Build a validator set for the built-in kinds plus *kinds*.

    Args:
        error_policy: Optional ``(message, data) -> NoReturn`` hook raising
            a custom exception instead of :class:`EnsureError`.
        kinds: Extra kind specifications, e.g. collected from plugins.
        settings: Engine settings. ``build`` performs no config discovery of
            its own: without *settings*, env vars and ``[tool.ensurekit]`` are
            not consulted and a policy that returns normally is always logged
            as a warning. Pass ``EnsureSettings()`` to honor them.

    Raises:
        ValueError: If an extra kind reuses a built-in or repeated name.
    """
    warn = settings.warn_on_returning_policy if settings is not None else True
    table = merge_kinds(kinds)
    validators = ValidatorSet(table, error_policy, warn=warn)
    logger.debug(
        "Built validator set with %d kinds (custom policy: %s)",
        len(table),
        error_policy is not None,
    )
    return validators
