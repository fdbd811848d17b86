"""Registry of the social platforms SocialHub aggregates."""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping

from ..errors.problem_details import InvalidArgumentError


logger = logging.getLogger(__name__)


class Platform(str, Enum):
    """Supported social platforms."""

    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    BLUESKY = "bluesky"
    MASTODON = "mastodon"


PLATFORM_DISPLAY_NAMES: Mapping[Platform, str] = MappingProxyType({
    Platform.TWITTER: "X (Twitter)",
    Platform.INSTAGRAM: "Instagram",
    Platform.LINKEDIN: "LinkedIn",
    Platform.BLUESKY: "Bluesky",
    Platform.MASTODON: "Mastodon",
})


class PlatformRegistry:
    """Immutable table of the platforms enabled for this process.

    Built once at application start and handed to the components that need
    platform lookups, instead of being consulted through a global map.
    """

    def __init__(self, platforms: Iterable[Platform]):
        enabled = []
        for platform in platforms:
            platform = Platform(platform)
            if platform not in enabled:
                enabled.append(platform)
        # Keep declaration order so listings are stable
        self._enabled = tuple(p for p in Platform if p in enabled)

    @classmethod
    def from_settings(cls, settings) -> "PlatformRegistry":
        """Build the registry from the ``enabled_platforms`` setting."""
        registry = cls(Platform(name) for name in settings.enabled_platforms)
        logger.info(f"Platform registry initialized with: {[p.value for p in registry.platforms()]}")
        return registry

    def platforms(self) -> List[Platform]:
        """Enabled platforms in declaration order."""
        return list(self._enabled)

    def is_enabled(self, platform: Platform) -> bool:
        return platform in self._enabled

    def resolve(self, name: str) -> Platform:
        """Resolve a client-supplied platform name.

        Raises:
            InvalidArgumentError: If the name is unknown or the platform is disabled
        """
        try:
            platform = Platform(name.strip().lower())
        except (ValueError, AttributeError):
            raise InvalidArgumentError(
                f"Unknown platform '{name}'",
                allowed=[p.value for p in self._enabled]
            )

        if not self.is_enabled(platform):
            raise InvalidArgumentError(
                f"Platform '{platform.value}' is not enabled",
                allowed=[p.value for p in self._enabled]
            )

        return platform

    def display_name(self, platform: Platform) -> str:
        return PLATFORM_DISPLAY_NAMES[platform]
