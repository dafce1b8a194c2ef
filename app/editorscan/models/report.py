"""Discovery report model for JSON export.

This module defines the data structure for exporting discovery results
to JSON with proper metadata.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from editorscan.models.editor import EditorConfig


@dataclass(frozen=True, slots=True)
class DiscoveryMetadata:
    """Metadata for a discovery run.

    Attributes:
        timestamp: ISO format timestamp when discovery ran.
        hostname: Name of the machine that was searched.
        editorscan_version: Version of editorscan that ran discovery.
        host_os: Host OS identifier.
        tier: Discovery tier identifier.
        sources: Names of the strategies and services that ran (immutable).
    """

    timestamp: str
    hostname: str
    editorscan_version: str
    host_os: str
    tier: str
    sources: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "editorscan_version": self.editorscan_version,
            "host_os": self.host_os,
            "tier": self.tier,
            "sources": list(self.sources),
        }


@dataclass(frozen=True, slots=True)
class DiscoveryReport:
    """Complete discovery result for export.

    Attributes:
        metadata: Run metadata including timestamp and hostname.
        editors: Merged editors in display order.
        summary: Editor counts by type plus totals.
    """

    metadata: DiscoveryMetadata
    editors: list[EditorConfig]
    summary: dict[str, int] = field(default_factory=lambda: {})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "editors": [editor.to_dict() for editor in self.editors],
            "summary": self.summary,
        }

    @classmethod
    def create(
        cls,
        editors: list[EditorConfig],
        *,
        host_os: str,
        tier: str,
        sources: list[str],
    ) -> "DiscoveryReport":
        """Create a DiscoveryReport with auto-generated metadata.

        Args:
            editors: Merged discovery result.
            host_os: Host OS identifier.
            tier: Tier that produced the result.
            sources: Names of the sources that ran.

        Returns:
            DiscoveryReport with populated metadata and summary.
        """
        import socket

        from editorscan import __version__

        summary: dict[str, int] = {}
        for editor in editors:
            summary[editor.id] = summary.get(editor.id, 0) + 1
        summary["total"] = len(editors)
        summary["default"] = sum(1 for e in editors if e.is_default)

        metadata = DiscoveryMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            editorscan_version=__version__,
            host_os=host_os,
            tier=tier,
            sources=tuple(sources),
        )
        return cls(metadata=metadata, editors=editors, summary=summary)
