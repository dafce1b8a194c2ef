"""Discovery engine.

Runs the command strategies and application services selected by a
discovery tier, then merges their results into one list: deduplicated by
executable path (first source wins) and sorted default-first, then by
display name.
"""

import logging
import os
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any

from editorscan.core.config import Settings
from editorscan.core.platform import HostOS
from editorscan.discovery.base import (
    ApplicationService,
    CommandStrategy,
    DebugCallback,
    dedupe_by_path,
)
from editorscan.discovery.cache import CacheKey, DiscoveryCache
from editorscan.discovery.commands import default_strategies
from editorscan.discovery.linux import LinuxApplicationService
from editorscan.discovery.macos import MacOSApplicationService
from editorscan.discovery.windows import WindowsApplicationService
from editorscan.models.editor import EditorConfig
from editorscan.models.tier import DiscoveryTier

logger = logging.getLogger(__name__)

DiscoveryCallback = Callable[[list[EditorConfig]], None]


def merge_results(editors: list[EditorConfig]) -> list[EditorConfig]:
    """Deduplicate by executable path and sort default-first, then by name."""
    return sorted(
        dedupe_by_path(editors),
        key=lambda e: (not e.is_default, e.display_name),
    )


def _emit(debug: DebugCallback | None, message: str) -> None:
    logger.debug(message)
    if debug is not None:
        debug(message)


class DiscoveryEngine:
    """Finds installed editors across every source that fits the host.

    Collaborators are injectable; by default the engine keeps the command
    strategies and application services whose ``is_supported()`` is true.

    Example:
        >>> engine = DiscoveryEngine()
        >>> for editor in engine.discover_with_strategy(DiscoveryTier.FAST):
        ...     print(editor.display_text)
    """

    def __init__(
        self,
        strategies: list[CommandStrategy] | None = None,
        services: list[ApplicationService] | None = None,
        host: HostOS | None = None,
        cache: DiscoveryCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            strategies: Command strategies. Defaults to the supported built-ins.
            services: Application services. Defaults to the supported built-ins.
            host: Host OS used for defaults and cache keys.
            cache: Smart-tier cache. Defaults to a fresh in-memory cache.
            settings: Tuning values. Defaults to built-in settings.
        """
        self._settings = settings or Settings()
        self._host = host or HostOS.current()

        if strategies is None:
            strategies = [
                s
                for s in default_strategies(
                    timeout=self._settings.probe_timeout_seconds,
                    extra_paths=self._settings.extra_search_paths,
                )
                if s.is_supported()
            ]
        if services is None:
            services = [
                s
                for s in (
                    MacOSApplicationService(host=self._host),
                    WindowsApplicationService(host=self._host),
                    LinuxApplicationService(host=self._host),
                )
                if s.is_supported()
            ]
        self._strategies = strategies
        self._services = services
        if cache is None:
            cache = DiscoveryCache(ttl_seconds=self._settings.cache_ttl_seconds)
        self._cache = cache

    @property
    def strategies(self) -> list[CommandStrategy]:
        """Return the active command strategies."""
        return list(self._strategies)

    @property
    def services(self) -> list[ApplicationService]:
        """Return the active application services."""
        return list(self._services)

    def discover_editors(self) -> list[EditorConfig]:
        """Discover with the default tier."""
        return self.discover_with_strategy(DiscoveryTier.default())

    def discover_with_strategy(
        self,
        tier: DiscoveryTier,
        debug: DebugCallback | None = None,
    ) -> list[EditorConfig]:
        """Run every source the tier includes and merge the results.

        Args:
            tier: Which sources to run.
            debug: Optional sink for ordered progress strings.

        Returns:
            Merged editors. Never raises for source failures.
        """
        _emit(debug, f"Starting editor discovery with {tier.display_name}")
        _emit(debug, f"Command line strategies: {len(self._strategies)}")
        _emit(debug, f"Application services: {len(self._services)}")

        key = self._cache_key(tier)
        if tier.uses_caching:
            cached = self._cache.get(key)
            if cached is not None:
                _emit(debug, f"Using {len(cached)} cached editors")
                return cached

        discovered: list[EditorConfig] = []
        if tier.includes_command_line:
            _emit(debug, "Executing command line discovery")
            discovered.extend(self._run_strategies(debug))
        if tier.includes_application_scan:
            _emit(debug, "Executing application discovery")
            discovered.extend(self._run_services(debug))

        _emit(debug, f"Total discovered before deduplication: {len(discovered)}")
        result = merge_results(discovered)
        _emit(debug, f"Final result after deduplication: {len(result)}")
        for editor in result:
            _emit(debug, f"  Final: {editor.display_name} at {editor.executable_path}")

        if tier.uses_caching:
            self._cache.put(key, result)
        return result

    def _run_strategies(self, debug: DebugCallback | None) -> list[EditorConfig]:
        discovered: list[EditorConfig] = []
        for strategy in self._strategies:
            _emit(debug, f"Executing strategy: {strategy.name}")
            try:
                configs = strategy.discover(debug)
            except Exception as e:
                # Sources must not abort discovery, whatever they raise
                _emit(debug, f"Discovery strategy {strategy.name} failed: {e}")
                logger.warning("Discovery strategy %s failed", strategy.name, exc_info=True)
                continue
            _emit(debug, f"{strategy.name} discovered {len(configs)} editors")
            discovered.extend(configs)
        return discovered

    def _run_services(self, debug: DebugCallback | None) -> list[EditorConfig]:
        discovered: list[EditorConfig] = []
        for service in self._services:
            _emit(debug, f"Executing service: {service.name}")
            try:
                configs = service.discover_editors()
            except Exception as e:
                _emit(debug, f"Discovery service {service.name} failed: {e}")
                logger.warning("Discovery service %s failed", service.name, exc_info=True)
                continue
            _emit(debug, f"{service.name} discovered {len(configs)} editors")
            for editor in configs:
                _emit(debug, f"  Found: {editor.display_name} at {editor.executable_path}")
            discovered.extend(configs)
        return discovered

    def _cache_key(self, tier: DiscoveryTier) -> CacheKey:
        return (tier.value, self._host.value, os.environ.get("PATH", ""))

    def discover_async(
        self,
        callback: DiscoveryCallback,
        tier: DiscoveryTier | None = None,
        executor: Executor | None = None,
    ) -> Future[None]:
        """Discover on a background worker and hand the result to callback.

        The callback receives an empty list if discovery fails.

        Args:
            callback: Receives the merged editors.
            tier: Tier to run. Defaults to the default tier.
            executor: Worker to run on. Defaults to a new single-thread pool.

        Returns:
            Future that completes after the callback has run.
        """
        selected = tier or DiscoveryTier.default()

        def run() -> None:
            try:
                result = self.discover_with_strategy(selected)
            except Exception:
                logger.warning("Background discovery failed", exc_info=True)
                result = []
            callback(result)

        return _submit(executor, run)

    def discover_future(
        self,
        tier: DiscoveryTier | None = None,
        executor: Executor | None = None,
    ) -> Future[list[EditorConfig]]:
        """Discover on a background worker.

        Returns:
            Future resolving to the merged editors; a failure is set as the
            future's exception.
        """
        selected = tier or DiscoveryTier.default()
        return _submit(executor, lambda: self.discover_with_strategy(selected))

    def discover_async_with_debug(
        self,
        debug: DebugCallback,
        callback: DiscoveryCallback,
        tier: DiscoveryTier | None = None,
        executor: Executor | None = None,
    ) -> Future[None]:
        """Like discover_async, streaming progress strings to debug first."""
        selected = tier or DiscoveryTier.default()

        def run() -> None:
            try:
                debug(f"Starting discovery engine with {selected.display_name}...")
                result = self.discover_with_strategy(selected, debug)
                debug(f"Discovery engine completed with {len(result)} editors")
            except Exception as e:
                debug(f"Discovery engine failed: {e}")
                logger.warning("Background discovery failed", exc_info=True)
                result = []
            callback(result)

        return _submit(executor, run)

    def validate_editor_path(self, path: str) -> tuple[bool, EditorConfig | None]:
        """Ask each command strategy to accept a manual path.

        Returns:
            ``(True, config)`` from the first strategy that accepts the
            path, else ``(False, None)``.
        """
        for strategy in self._strategies:
            try:
                config = strategy.validate_path(path)
            except OSError as e:
                logger.debug("Strategy %s could not validate %s: %s", strategy.name, path, e)
                continue
            if config is not None:
                return True, config
        return False, None

    def supported_source_names(self) -> list[str]:
        """Return the names of all active strategies and services."""
        return [s.name for s in self._strategies] + [s.name for s in self._services]

    def supported_sources_count(self) -> int:
        """Return how many strategies and services are active."""
        return len(self._strategies) + len(self._services)

    def available_tiers(self) -> list[DiscoveryTier]:
        """Return every discovery tier."""
        return list(DiscoveryTier)

    def recommended_tier(self) -> DiscoveryTier:
        """Return the tier suggested to users."""
        return DiscoveryTier.COMPREHENSIVE

    def invalidate_cache(self) -> None:
        """Forget cached Smart-tier results."""
        self._cache.invalidate()


def _submit(executor: Executor | None, fn: Callable[[], Any]) -> Future[Any]:
    if executor is not None:
        return executor.submit(fn)
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="editorscan-discovery")
    try:
        return pool.submit(fn)
    finally:
        # Lets the worker finish and the thread exit without blocking us
        pool.shutdown(wait=False)
