"""Platform registry for SocialHub."""

from .registry import Platform, PlatformRegistry, PLATFORM_DISPLAY_NAMES

__all__ = [
    "Platform",
    "PlatformRegistry",
    "PLATFORM_DISPLAY_NAMES"
]
