"""Data models for sites, scraped items and feed output."""

from .site import SiteConfig, FeedsConfig
from .item import (
    FailureReason,
    FieldResult,
    ScrapedItem,
    SiteScrape,
    FeedBundle,
    SiteResult,
)

__all__ = [
    "SiteConfig",
    "FeedsConfig",
    "FailureReason",
    "FieldResult",
    "ScrapedItem",
    "SiteScrape",
    "FeedBundle",
    "SiteResult",
]
