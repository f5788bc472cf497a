"""Scraped item and feed output models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from .site import SiteConfig

T = TypeVar("T")


class FailureReason(Enum):
    """Named reasons a scrape step can fall back to a default."""
    LISTING_FETCH = "listing_fetch"
    LISTING_PARSE = "listing_parse"
    FIELD_MISSING = "field_missing"
    LINK_RESOLUTION = "link_resolution"
    CONTENT_FETCH = "content_fetch"
    DATE_PARSE = "date_parse"


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    """Either an extracted value or the reason it could not be extracted."""
    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default

    @classmethod
    def success(cls, value: T) -> "FieldResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str = "") -> "FieldResult[Any]":
        return cls(failure=reason, detail=detail)


@dataclass(frozen=True)
class ScrapedItem:
    """A single article extracted from a listing page.

    Attributes:
        title: Trimmed title text, possibly empty
        link: Absolute URL of the article page
        content: Inner HTML of the article body, empty when unavailable
        date: Timezone-aware publication time
    """
    title: str
    link: str
    content: str
    date: datetime


@dataclass(frozen=True)
class SiteScrape:
    """Outcome of scraping one site."""
    site: SiteConfig
    items: List[ScrapedItem] = field(default_factory=list)
    failure: Optional[FailureReason] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class FeedBundle:
    """The three serializations of one site's feed."""
    rss: str
    atom: str
    json: str


@dataclass
class SiteResult:
    """Summary of one site's pipeline run."""
    name: str
    safe_name: str
    success: bool
    message: str
    count: int = 0
    files: Tuple[str, ...] = ()
