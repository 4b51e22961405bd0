"""Pluggy hook specifications for ensurekit.

One setup-time hook lets installed packages contribute extra kinds,
which :func:`ensurekit.plugins.build_with_plugins` merges into the
built-in kind table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from ensurekit.domain.kinds import KindSpec

hookspec = pluggy.HookspecMarker("ensurekit")
hookimpl = pluggy.HookimplMarker("ensurekit")


class EnsureHookSpec:
    """Hook specifications for the ensurekit plugin system."""

    @hookspec
    def register_kinds(self) -> list[KindSpec] | None:
        """Return extra kind specifications to validate against."""
