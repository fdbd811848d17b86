"""SocialHub: cursor-paginated feed, notification and search API."""

__version__ = "1.0.0"
