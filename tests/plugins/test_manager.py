"""Tests for PluginManager — registration, kind collection, and building."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import patch

import pytest

from ensurekit.config.settings import EnsureSettings
from ensurekit.domain.kinds import KindSpec
from ensurekit.errors import EnsureError
from ensurekit.plugins import PluginManager, build_with_plugins, hookimpl


def _is_uuid_text(data: Any) -> bool:
    return isinstance(data, str) and len(data) == 36 and data.count("-") == 4


UUID_KIND = KindSpec(name="uuid_text", label="uuid", predicate=_is_uuid_text)


class _UuidPlugin:
    @hookimpl
    def register_kinds(self) -> list[KindSpec]:
        return [UUID_KIND]


class _NothingPlugin:
    @hookimpl
    def register_kinds(self) -> None:
        return None


class _BrokenPlugin:
    @hookimpl
    def register_kinds(self) -> list[KindSpec]:
        msg = "boom"
        raise RuntimeError(msg)


class _NonListPlugin:
    @hookimpl
    def register_kinds(self) -> Any:
        return UUID_KIND


class _MixedPlugin:
    @hookimpl
    def register_kinds(self) -> list[Any]:
        return ["not a spec", KindSpec(name="port", label="port", predicate=lambda d: d == 80)]


class _BuiltinClashPlugin:
    @hookimpl
    def register_kinds(self) -> list[KindSpec]:
        return [KindSpec(name="string", label="text", predicate=lambda d: True)]


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "register_kinds")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_UuidPlugin(), name="uuid")
        assert pm.list_plugin_names() == ["uuid"]

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_UuidPlugin())
        assert "_UuidPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _UuidPlugin()
        pm.register_plugin(plugin, name="uuid")
        pm.unregister(plugin)
        assert pm.list_plugin_names() == []

    def test_discover_and_load(self) -> None:
        pm = PluginManager()
        with patch.object(pm._pm, "load_setuptools_entrypoints", return_value=0) as load:
            names = pm.discover_and_load()
        load.assert_called_once_with("ensurekit.plugins")
        assert names == []
        assert pm.is_loaded

    def test_entry_point_class_is_instantiated(self) -> None:
        pm = PluginManager()

        def fake_load(group: str) -> int:
            pm._pm.register(_UuidPlugin, name="uuid-ep")
            return 1

        with patch.object(pm._pm, "load_setuptools_entrypoints", side_effect=fake_load):
            pm.discover_and_load()
        assert [k.name for k in pm.collect_kinds()] == ["uuid_text"]


class TestCollectKinds:
    def test_collects_from_plugins(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_UuidPlugin())
        pm.register_plugin(_NothingPlugin())
        assert pm.collect_kinds() == [UUID_KIND]

    @pytest.mark.parametrize(
        "plugin_cls,expected",
        [
            (_BrokenPlugin, "Failed to collect kinds"),
            (_NonListPlugin, "non-list kind registrations"),
            (_BuiltinClashPlugin, "name already registered"),
        ],
    )
    def test_bad_plugins_are_warnings(
        self, caplog: pytest.LogCaptureFixture, plugin_cls: type, expected: str
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(plugin_cls())
        with caplog.at_level(logging.WARNING, logger="ensurekit"):
            assert pm.collect_kinds() == []
        assert expected in caplog.text

    def test_invalid_entries_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_MixedPlugin())
        with caplog.at_level(logging.WARNING, logger="ensurekit"):
            kinds = pm.collect_kinds()
        assert [k.name for k in kinds] == ["port"]
        assert "non-KindSpec" in caplog.text

    def test_first_plugin_wins_on_duplicate(self) -> None:
        class _OtherUuid:
            @hookimpl
            def register_kinds(self) -> list[KindSpec]:
                return [KindSpec(name="uuid_text", label="other", predicate=lambda d: True)]

        pm = PluginManager()
        pm.register_plugin(_UuidPlugin(), name="first")
        pm.register_plugin(_OtherUuid(), name="second")
        assert pm.collect_kinds() == [UUID_KIND]


class TestBuildWithPlugins:
    def test_plugin_kind_available(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_UuidPlugin())
        validators = build_with_plugins(manager=pm, settings=EnsureSettings())
        value = "123e4567-e89b-12d3-a456-426614174000"
        assert validators.uuid_text(value) is value
        assert validators.nullable_uuid_text(None) is None
        assert validators.is_uuid_text("nope") is False
        with pytest.raises(EnsureError, match='"uuid"'):
            validators.uuid_text("nope")

    def test_builtins_still_present(self) -> None:
        validators = build_with_plugins(manager=PluginManager(), settings=EnsureSettings())
        assert validators.integer(3) == 3

    def test_skips_entry_points_when_disabled(self) -> None:
        settings = EnsureSettings(load_entry_points=False)
        with patch.object(PluginManager, "discover_and_load") as discover:
            build_with_plugins(settings=settings)
        discover.assert_not_called()

    def test_loads_entry_points_by_default(self) -> None:
        settings = EnsureSettings(load_entry_points=True)
        with patch.object(PluginManager, "discover_and_load", return_value=[]) as discover:
            build_with_plugins(settings=settings)
        discover.assert_called_once_with()

    def test_policy_applies_to_plugin_kinds(self) -> None:
        class _Rejected(Exception):
            pass

        def policy(message: str, data: Any) -> Any:
            raise _Rejected(message)

        pm = PluginManager()
        pm.register_plugin(_UuidPlugin())
        validators = build_with_plugins(policy, manager=pm, settings=EnsureSettings())
        with pytest.raises(_Rejected):
            validators.uuid_text(12)
