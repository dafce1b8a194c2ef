"""Discovery tiers.

A tier names the set of discovery sources that run together and
the time budget they are expected to fit in.
"""

from enum import Enum


class DiscoveryTier(Enum):
    """Enumeration of discovery tiers."""

    FAST = "fast"
    COMPREHENSIVE = "comprehensive"
    SMART = "smart"

    @property
    def display_name(self) -> str:
        """Return the human-readable tier name."""
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        """Return a one-line description of the sources involved."""
        return _DESCRIPTIONS[self]

    @property
    def estimated_time(self) -> str:
        """Return the nominal duration shown to users."""
        return _ESTIMATES[self]

    @property
    def includes_command_line(self) -> bool:
        """Command-resolution probes run in every tier."""
        return True

    @property
    def includes_application_scan(self) -> bool:
        """Application-directory services run in all tiers but FAST."""
        return self is not DiscoveryTier.FAST

    @property
    def uses_caching(self) -> bool:
        """Only SMART reuses earlier results."""
        return self is DiscoveryTier.SMART

    @property
    def timeout_seconds(self) -> float:
        """Return the nominal time budget for the whole tier."""
        return _TIMEOUTS[self]

    @classmethod
    def from_id(cls, tier_id: str) -> "DiscoveryTier | None":
        """Look up a tier by identifier (case-insensitive)."""
        try:
            return cls(tier_id.lower())
        except ValueError:
            return None

    @classmethod
    def default(cls) -> "DiscoveryTier":
        """Return the tier used when the caller does not pick one."""
        return cls.COMPREHENSIVE


_DISPLAY_NAMES: dict[DiscoveryTier, str] = {
    DiscoveryTier.FAST: "Fast Discovery",
    DiscoveryTier.COMPREHENSIVE: "Comprehensive Discovery",
    DiscoveryTier.SMART: "Smart Discovery",
}

_DESCRIPTIONS: dict[DiscoveryTier, str] = {
    DiscoveryTier.FAST: "Quick command-line discovery only",
    DiscoveryTier.COMPREHENSIVE: "Command-line + application directory scanning",
    DiscoveryTier.SMART: "All discovery methods with intelligent caching",
}

_ESTIMATES: dict[DiscoveryTier, str] = {
    DiscoveryTier.FAST: "< 1 second",
    DiscoveryTier.COMPREHENSIVE: "2-5 seconds",
    DiscoveryTier.SMART: "1-3 seconds (cached)",
}

_TIMEOUTS: dict[DiscoveryTier, float] = {
    DiscoveryTier.FAST: 2.0,
    DiscoveryTier.COMPREHENSIVE: 10.0,
    DiscoveryTier.SMART: 15.0,
}
