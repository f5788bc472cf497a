"""Exceptions raised by the site feeds package."""

from typing import Optional


class SiteFeedsError(Exception):
    """Base class for all site feeds errors."""


class ConfigError(SiteFeedsError, ValueError):
    """Raised when the feeds configuration is unreadable or invalid."""


class FetchError(SiteFeedsError):
    """Raised when a page cannot be fetched.

    Attributes:
        url: The URL that was requested
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code
