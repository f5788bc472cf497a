"""
Site Feeds - scrape websites without feeds into RSS, Atom and JSON feeds.

This package provides functionality to:
1. Extract repeated article listings from configured web pages
2. Enrich each listing with the full content of its article page
3. Publish the results as RSS 2.0, Atom 1.0 and JSON Feed files plus an index page
"""

__version__ = "1.0.0"

from .core.scraper import ItemScraper
from .core.feed_builder import FeedAssembler
from .core.pipeline import SitePipeline, safe_name
from .config import load_config
from .models import SiteConfig, FeedsConfig, ScrapedItem, FeedBundle

__all__ = [
    "ItemScraper",
    "FeedAssembler",
    "SitePipeline",
    "safe_name",
    "load_config",
    "SiteConfig",
    "FeedsConfig",
    "ScrapedItem",
    "FeedBundle",
]
