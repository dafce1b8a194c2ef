"""Editor discovery sources.

This module exports the discovery engine together with the command
strategies and application services it runs.
"""

from editorscan.discovery.base import ApplicationService, CommandStrategy
from editorscan.discovery.cache import DiscoveryCache
from editorscan.discovery.commands import (
    LinuxCommandStrategy,
    MacOSCommandStrategy,
    WindowsCommandStrategy,
)
from editorscan.discovery.engine import DiscoveryEngine, merge_results
from editorscan.discovery.linux import LinuxApplicationService
from editorscan.discovery.macos import MacOSApplicationService
from editorscan.discovery.windows import WindowsApplicationService

__all__ = [
    "ApplicationService",
    "CommandStrategy",
    "DiscoveryCache",
    "DiscoveryEngine",
    "LinuxApplicationService",
    "LinuxCommandStrategy",
    "MacOSApplicationService",
    "MacOSCommandStrategy",
    "WindowsApplicationService",
    "WindowsCommandStrategy",
    "merge_results",
]
