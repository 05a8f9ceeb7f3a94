"""Tests for PluginManager: discovery, registration, ordered activation."""

from __future__ import annotations

from pathlib import Path

import pytest

from solcfg.config.models import BuildConfig
from solcfg.domain.errors import PluginActivationError, UnknownPlugin
from solcfg.plugins import ActivationContext, PluginManager, hookimpl
from tests.conftest import BUILTIN_PLUGINS


def _config(*plugins: str) -> BuildConfig:
    return BuildConfig(
        compiler_version="0.8.9",
        sources_path=Path("/proj/contracts"),
        plugins=plugins,
        project_root=Path("/proj"),
    )


class _RecordingPlugin:
    """Appends its name to a shared journal when activated."""

    def __init__(self, name: str, journal: list[str]) -> None:
        self.name = name
        self.journal = journal

    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        self.journal.append(self.name)


class _FailingPlugin:
    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        raise RuntimeError("toolchain missing")


class _HooklessPlugin:
    pass


class _ContextOnlyPlugin:
    """Declares only the hookspec argument it uses."""

    @hookimpl
    def activate(self, context: ActivationContext) -> None:
        context.provide("context-only")


class _EntryPointPlugin:
    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        context.provide("from-entry-point")


class _FakeEntryPoint:
    def __init__(self, name: str, target: object | Exception) -> None:
        self.name = name
        self._target = target

    def load(self) -> object:
        if isinstance(self._target, Exception):
            raise self._target
        return self._target


@pytest.fixture
def fake_entry_points(monkeypatch: pytest.MonkeyPatch) -> list[_FakeEntryPoint]:
    """Replace installed ``solcfg.plugins`` entry points with a mutable list."""
    eps: list[_FakeEntryPoint] = []

    def _entry_points(*, group: str) -> list[_FakeEntryPoint]:
        assert group == "solcfg.plugins"
        return eps

    monkeypatch.setattr("importlib.metadata.entry_points", _entry_points)
    return eps


class TestRegistration:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "activate")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_RecordingPlugin("a", []), name="a")
        assert "a" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_FailingPlugin())
        assert "_FailingPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _RecordingPlugin("a", [])
        pm.register_plugin(plugin, name="a")
        pm.unregister(plugin)
        assert "a" not in pm.list_plugin_names()

    def test_get_plugin(self) -> None:
        pm = PluginManager()
        plugin = _RecordingPlugin("a", [])
        pm.register_plugin(plugin, name="a")
        assert pm.get_plugin("a") is plugin
        assert pm.get_plugin("b") is None

    def test_is_loaded_false_before_discover(self) -> None:
        assert PluginManager().is_loaded is False

    def test_discover_registers_builtins(self) -> None:
        pm = PluginManager()
        names = pm.discover_and_load()
        assert pm.is_loaded is True
        for name in BUILTIN_PLUGINS:
            assert name in names

    def test_discover_without_entry_points(self) -> None:
        pm = PluginManager()
        names = pm.discover_and_load(entry_points=False)
        assert sorted(names) == sorted(BUILTIN_PLUGINS)

    def test_discover_keeps_preregistered_name(self) -> None:
        pm = PluginManager()
        custom = _RecordingPlugin("compiler", [])
        pm.register_plugin(custom, name="compiler")
        pm.discover_and_load(entry_points=False)
        assert pm.get_plugin("compiler") is custom


class TestActivation:
    def test_runs_in_plan_order_not_registration_order(self) -> None:
        journal: list[str] = []
        pm = PluginManager()
        for name in ("a", "b", "c"):
            pm.register_plugin(_RecordingPlugin(name, journal), name=name)

        context = pm.activate(["c", "a", "b"], _config("c", "a", "b"))

        assert journal == ["c", "a", "b"]
        assert context.activated == ["c", "a", "b"]

    def test_repeated_entries_run_each_time(self) -> None:
        journal: list[str] = []
        pm = PluginManager()
        pm.register_plugin(_RecordingPlugin("a", journal), name="a")
        pm.activate(["a", "a"], _config("a", "a"))
        assert journal == ["a", "a"]

    def test_failure_wrapped_and_stops_activation(self) -> None:
        journal: list[str] = []
        pm = PluginManager()
        pm.register_plugin(_FailingPlugin(), name="broken")
        pm.register_plugin(_RecordingPlugin("after", journal), name="after")

        with pytest.raises(PluginActivationError) as excinfo:
            pm.activate(["broken", "after"], _config("broken", "after"))

        assert excinfo.value.detail["plugin"] == "broken"
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert journal == []

    def test_unknown_plugin_in_plan(self) -> None:
        pm = PluginManager()
        with pytest.raises(UnknownPlugin):
            pm.activate(["ghost"], _config("ghost"))

    def test_plugin_without_hook_still_recorded(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_HooklessPlugin(), name="passive")
        context = pm.activate(["passive"], _config("passive"))
        assert context.activated == ["passive"]
        assert context.capabilities == {}

    def test_empty_plan(self) -> None:
        context = PluginManager().activate([], _config())
        assert context.activated == []

    def test_hookimpl_with_argument_subset(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_ContextOnlyPlugin(), name="narrow")
        context = pm.activate(["narrow"], _config("narrow"))
        assert context.activated == ["narrow"]
        assert context.capabilities == {"context-only": "narrow"}


class TestEntryPoints:
    def test_class_entry_point_is_instantiated(
        self, fake_entry_points: list[_FakeEntryPoint]
    ) -> None:
        fake_entry_points.append(_FakeEntryPoint("ep", _EntryPointPlugin))
        pm = PluginManager()
        pm.discover_and_load()
        assert isinstance(pm.get_plugin("ep"), _EntryPointPlugin)
        context = pm.activate(["ep"], _config("ep"))
        assert context.capabilities == {"from-entry-point": "ep"}

    def test_broken_entry_point_is_skipped_with_warning(
        self,
        fake_entry_points: list[_FakeEntryPoint],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fake_entry_points.append(_FakeEntryPoint("broken", ImportError("no module")))
        fake_entry_points.append(_FakeEntryPoint("ep", _EntryPointPlugin))
        pm = PluginManager()

        with caplog.at_level("WARNING", logger="solcfg.plugins.manager"):
            names = pm.discover_and_load()

        assert "broken" not in names
        assert "ep" in names
        for name in BUILTIN_PLUGINS:
            assert name in names
        assert "Failed to load entry-point plugin broken" in caplog.text

    def test_entry_point_cannot_shadow_builtin(
        self, fake_entry_points: list[_FakeEntryPoint]
    ) -> None:
        fake_entry_points.append(_FakeEntryPoint("compiler", _EntryPointPlugin))
        pm = PluginManager()
        pm.discover_and_load()
        assert not isinstance(pm.get_plugin("compiler"), _EntryPointPlugin)
