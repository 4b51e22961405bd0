"""EnsureError and the error-policy contract.

An error policy is a caller-supplied hook that raises a custom exception
in place of :class:`EnsureError`. It is an error-*reporting* hook: it
must never return normally. If it does, the engine still raises its own
:class:`EnsureError` right after, and the policy's return value is
ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn

ErrorPolicy = Callable[[str, Any], NoReturn]


class EnsureError(Exception):
    """Default assertion failure.

    Attributes:
        message: Human-readable failure message.
        data: The offending value, unmodified.
    """

    def __init__(self, message: str, data: Any) -> None:
        super().__init__(message)
        self._message = message
        self._data = data

    @property
    def message(self) -> str:
        return self._message

    @property
    def data(self) -> Any:
        return self._data

    def __reduce__(self) -> tuple[type[EnsureError], tuple[str, Any]]:
        return type(self), (self._message, self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, data={self._data!r})"
