"""Unit tests for the discovery engine."""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from editorscan.core.platform import HostOS
from editorscan.discovery.base import ApplicationService, CommandStrategy, DebugCallback
from editorscan.discovery.cache import DiscoveryCache
from editorscan.discovery.engine import DiscoveryEngine, merge_results
from editorscan.models.editor import EditorConfig
from editorscan.models.tier import DiscoveryTier

MakeExecutable = Callable[..., Path]


class FakeStrategy(CommandStrategy):
    """Strategy returning a fixed list and counting calls."""

    def __init__(self, editors: list[EditorConfig], *, fail: bool = False) -> None:
        self._editors = editors
        self._fail = fail
        self.calls = 0

    @property
    def name(self) -> str:
        return "Fake which"

    def is_supported(self) -> bool:
        return True

    def discover(self, debug: DebugCallback | None = None) -> list[EditorConfig]:
        self.calls += 1
        if self._fail:
            raise RuntimeError("strategy exploded")
        return list(self._editors)


class FakeService(ApplicationService):
    """Service returning a fixed list and counting calls."""

    def __init__(self, editors: list[EditorConfig], *, fail: bool = False) -> None:
        self._editors = editors
        self._fail = fail
        self.calls = 0

    @property
    def name(self) -> str:
        return "Fake Application Discovery"

    def is_supported(self) -> bool:
        return True

    def discover_editors(self) -> list[EditorConfig]:
        self.calls += 1
        if self._fail:
            raise OSError("disk gone")
        return list(self._editors)


def _editor(editor_id: str, name: str, path: str, *, default: bool = False) -> EditorConfig:
    return EditorConfig(
        id=editor_id,
        display_name=name,
        executable_path=path,
        is_default=default,
        is_auto_discovered=True,
    )


CURSOR = _editor("cursor", "Cursor", "/usr/bin/cursor")
WINDSURF = _editor("windsurf", "Windsurf", "/usr/bin/windsurf")
VSCODE = _editor("vscode", "Visual Studio Code", "/usr/share/code/code", default=True)


def _engine(
    strategies: list[CommandStrategy],
    services: list[ApplicationService],
    cache: DiscoveryCache | None = None,
) -> DiscoveryEngine:
    return DiscoveryEngine(
        strategies=strategies,
        services=services,
        host=HostOS.LINUX,
        cache=cache if cache is not None else DiscoveryCache(300, path_exists=lambda p: True),
    )


class TestMergeResults:
    """Tests for merge_results function."""

    def test_dedupes_and_sorts(self) -> None:
        """First entry per path wins; defaults sort first, then by name."""
        duplicate = _editor("cursor", "Cursor (scan)", "/usr/bin/cursor")

        result = merge_results([WINDSURF, CURSOR, duplicate, VSCODE])

        assert [e.display_name for e in result] == ["Visual Studio Code", "Cursor", "Windsurf"]


class TestDiscoverWithStrategy:
    """Tests for DiscoveryEngine.discover_with_strategy."""

    def test_fast_skips_services(self) -> None:
        """FAST only runs command strategies."""
        strategy = FakeStrategy([CURSOR])
        service = FakeService([WINDSURF])

        result = _engine([strategy], [service]).discover_with_strategy(DiscoveryTier.FAST)

        assert result == [CURSOR]
        assert service.calls == 0

    def test_comprehensive_merges_sources(self) -> None:
        """COMPREHENSIVE merges strategies and services."""
        strategy = FakeStrategy([CURSOR])
        service = FakeService([WINDSURF, CURSOR, VSCODE])

        engine = _engine([strategy], [service])
        result = engine.discover_with_strategy(DiscoveryTier.COMPREHENSIVE)

        assert [e.id for e in result] == ["vscode", "cursor", "windsurf"]

    def test_failing_sources_are_skipped(self) -> None:
        """A source that raises contributes nothing and discovery continues."""
        engine = _engine(
            [FakeStrategy([], fail=True), FakeStrategy([CURSOR])],
            [FakeService([], fail=True), FakeService([WINDSURF])],
        )
        messages: list[str] = []

        result = engine.discover_with_strategy(DiscoveryTier.COMPREHENSIVE, messages.append)

        assert [e.id for e in result] == ["cursor", "windsurf"]
        assert "Discovery strategy Fake which failed: strategy exploded" in messages
        assert "Discovery service Fake Application Discovery failed: disk gone" in messages

    def test_debug_messages(self) -> None:
        """Progress strings describe the run in order."""
        messages: list[str] = []
        engine = _engine([FakeStrategy([CURSOR])], [FakeService([])])

        engine.discover_with_strategy(DiscoveryTier.FAST, messages.append)

        assert messages[:5] == [
            "Starting editor discovery with Fast Discovery",
            "Command line strategies: 1",
            "Application services: 1",
            "Executing command line discovery",
            "Executing strategy: Fake which",
        ]
        assert messages[-3:] == [
            "Total discovered before deduplication: 1",
            "Final result after deduplication: 1",
            "  Final: Cursor at /usr/bin/cursor",
        ]

    def test_smart_uses_cache(self) -> None:
        """SMART serves a second run from the cache."""
        strategy = FakeStrategy([CURSOR])
        service = FakeService([WINDSURF])
        engine = _engine([strategy], [service])

        first = engine.discover_with_strategy(DiscoveryTier.SMART)
        messages: list[str] = []
        second = engine.discover_with_strategy(DiscoveryTier.SMART, messages.append)

        assert first == second
        assert strategy.calls == 1
        assert service.calls == 1
        assert "Using 2 cached editors" in messages

    def test_smart_rescans_after_invalidate(self) -> None:
        """invalidate_cache forces a fresh scan."""
        strategy = FakeStrategy([CURSOR])
        engine = _engine([strategy], [])

        engine.discover_with_strategy(DiscoveryTier.SMART)
        engine.invalidate_cache()
        engine.discover_with_strategy(DiscoveryTier.SMART)

        assert strategy.calls == 2

    def test_keeps_injected_empty_cache(self) -> None:
        """An empty cache passed in is used rather than replaced."""
        cache = DiscoveryCache(300, path_exists=lambda p: True)
        strategy = FakeStrategy([CURSOR])
        engine = DiscoveryEngine(
            strategies=[strategy], services=[], host=HostOS.LINUX, cache=cache
        )

        engine.discover_with_strategy(DiscoveryTier.SMART)
        engine.discover_with_strategy(DiscoveryTier.SMART)

        assert len(cache) == 1
        assert strategy.calls == 1

    def test_comprehensive_never_cached(self) -> None:
        """Only SMART consults the cache."""
        strategy = FakeStrategy([CURSOR])
        engine = _engine([strategy], [])

        engine.discover_with_strategy(DiscoveryTier.COMPREHENSIVE)
        engine.discover_with_strategy(DiscoveryTier.COMPREHENSIVE)

        assert strategy.calls == 2

    def test_discover_editors_uses_default_tier(self) -> None:
        """discover_editors runs the comprehensive tier."""
        service = FakeService([WINDSURF])

        assert _engine([], [service]).discover_editors() == [WINDSURF]
        assert service.calls == 1

    def test_no_sources(self) -> None:
        """An engine without sources finds nothing."""
        assert _engine([], []).discover_with_strategy(DiscoveryTier.SMART) == []


class TestBackgroundDiscovery:
    """Tests for the asynchronous entry points."""

    def test_discover_async_with_executor(self) -> None:
        """The callback receives the merged result."""
        received: list[list[EditorConfig]] = []
        engine = _engine([FakeStrategy([CURSOR])], [])

        with ThreadPoolExecutor(max_workers=1) as executor:
            engine.discover_async(received.append, DiscoveryTier.FAST, executor).result(5)

        assert received == [[CURSOR]]

    def test_discover_async_default_pool(self) -> None:
        """Without an executor a private worker is used."""
        received: list[list[EditorConfig]] = []
        engine = _engine([FakeStrategy([CURSOR])], [])

        engine.discover_async(received.append).result(5)

        assert received == [[CURSOR]]

    def test_discover_future(self) -> None:
        """discover_future resolves to the editors."""
        engine = _engine([], [FakeService([WINDSURF])])

        assert engine.discover_future(DiscoveryTier.COMPREHENSIVE).result(5) == [WINDSURF]

    def test_discover_future_propagates_failure(self) -> None:
        """Failures outside the sources surface on the future."""
        engine = _engine([], [])

        def broken(tier: DiscoveryTier, debug: DebugCallback | None = None) -> list[EditorConfig]:
            raise RuntimeError("engine broke")

        engine.discover_with_strategy = broken  # type: ignore[method-assign]

        with pytest.raises(RuntimeError, match="engine broke"):
            engine.discover_future().result(5)

    def test_discover_async_failure_gives_empty_list(self) -> None:
        """The callback gets an empty list when discovery fails."""
        received: list[list[EditorConfig]] = []
        engine = _engine([], [])

        def broken(tier: DiscoveryTier, debug: DebugCallback | None = None) -> list[EditorConfig]:
            raise RuntimeError("engine broke")

        engine.discover_with_strategy = broken  # type: ignore[method-assign]
        engine.discover_async(received.append).result(5)

        assert received == [[]]

    def test_discover_async_with_debug(self) -> None:
        """Debug strings bracket the run."""
        messages: list[str] = []
        received: list[list[EditorConfig]] = []
        engine = _engine([FakeStrategy([CURSOR])], [])

        engine.discover_async_with_debug(
            messages.append, received.append, DiscoveryTier.FAST
        ).result(5)

        assert messages[0] == "Starting discovery engine with Fast Discovery..."
        assert messages[-1] == "Discovery engine completed with 1 editors"
        assert received == [[CURSOR]]


class TestEngineQueries:
    """Tests for the engine's informational methods."""

    def test_validate_editor_path(self, make_executable: MakeExecutable) -> None:
        """The first strategy accepting the path wins."""
        exe = make_executable("bin/windsurf")
        engine = _engine([FakeStrategy([])], [])

        ok, config = engine.validate_editor_path(str(exe))

        assert ok
        assert config is not None
        assert config.id == "windsurf"

    def test_validate_editor_path_rejected(self, tmp_path: Path) -> None:
        """Missing paths are rejected."""
        engine = _engine([FakeStrategy([])], [])
        assert engine.validate_editor_path(str(tmp_path / "missing")) == (False, None)

    def test_source_listing(self) -> None:
        """Names and counts cover strategies then services."""
        engine = _engine([FakeStrategy([])], [FakeService([])])

        assert engine.supported_source_names() == ["Fake which", "Fake Application Discovery"]
        assert engine.supported_sources_count() == 2

    def test_tiers(self) -> None:
        """All tiers are available and COMPREHENSIVE is recommended."""
        engine = _engine([], [])

        assert engine.available_tiers() == [
            DiscoveryTier.FAST,
            DiscoveryTier.COMPREHENSIVE,
            DiscoveryTier.SMART,
        ]
        assert engine.recommended_tier() is DiscoveryTier.COMPREHENSIVE

    def test_default_sources_follow_host(self) -> None:
        """Default services are limited to the given host."""
        engine = DiscoveryEngine(strategies=[], host=HostOS.WINDOWS)

        assert [s.name for s in engine.services] == ["Windows Application Discovery"]
