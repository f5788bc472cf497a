"""Item scraper: turns a site's listing page into feed-ready items."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import ParserRejectedMarkup, Tag
from soupsieve import SelectorSyntaxError

from ..errors import FetchError
from ..models.item import FailureReason, FieldResult, ScrapedItem, SiteScrape
from ..models.site import SiteConfig, is_absolute_http_url
from ..utils.date_utils import DateNormalizer, utc_now
from ..utils.html_utils import HtmlExtractor


Fetch = Callable[[str], str]

# html.parser rejects some malformed markup outright instead of repairing it
PARSE_ERRORS = (ParserRejectedMarkup, SelectorSyntaxError, ValueError, TypeError)


@dataclass(frozen=True)
class _ListingEntry:
    """Fields read from one listing element before its content page is fetched."""
    title: str
    link: str
    date_text: Optional[str]


class ItemScraper:
    """
    Scrape one site at a time into an ordered list of ScrapedItem.

    Only a failure to fetch or parse the listing page fails the whole site.
    Everything that can go wrong for a single item falls back to a default
    value for that field, except an unresolvable link, which drops the item.
    """

    def __init__(
        self,
        fetch: Fetch,
        extractor: Optional[HtmlExtractor] = None,
        date_normalizer: Optional[DateNormalizer] = None,
        max_workers: int = 4,
        clock: Callable = utc_now
    ):
        """
        Initialize the scraper.

        Args:
            fetch: Callable returning the body of a URL, raising FetchError on failure
            extractor: HTML extractor (defaults to html.parser based)
            date_normalizer: Date parser (defaults to UTC for naive dates)
            max_workers: Upper bound on concurrent content-page fetches
            clock: Returns the current time, used when a date cannot be parsed
        """
        self.fetch = fetch
        self.extractor = extractor or HtmlExtractor()
        self.date_normalizer = date_normalizer or DateNormalizer()
        self.max_workers = max(1, max_workers)
        self.clock = clock

    def scrape(self, site: SiteConfig) -> List[ScrapedItem]:
        """Return the site's items in document order, empty if the listing failed."""
        return self.scrape_site(site).items

    def scrape_site(self, site: SiteConfig) -> SiteScrape:
        """
        Scrape a site and report whether the listing itself could be read.

        Args:
            site: Site configuration

        Returns:
            SiteScrape with the items, or with a listing failure reason and no items
        """
        try:
            listing_html = self.fetch(site.url)
        except FetchError as e:
            logging.error(f"❌ Failed to fetch listing for '{site.name}': {e}")
            return SiteScrape(site=site, failure=FailureReason.LISTING_FETCH)

        try:
            soup = self.extractor.parse(listing_html)
            elements = self.extractor.select_items(soup, site.selector)
        except PARSE_ERRORS as e:
            logging.error(f"❌ Failed to parse listing for '{site.name}' ({site.url}): {e}")
            return SiteScrape(site=site, failure=FailureReason.LISTING_PARSE)

        logging.info(f"Found {len(elements)} item(s) on {site.url}")

        entries = []
        for position, element in enumerate(elements, start=1):
            entry = self._read_listing_entry(site, element)
            if entry.ok:
                entries.append(entry.value)
            else:
                logging.warning(
                    f"⚠️ Skipping item {position} of '{site.name}': {entry.detail}"
                )

        # map() yields results in submission order whatever order fetches finish in
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            contents = list(
                executor.map(lambda e: self._fetch_content(site, e.link), entries)
            )

        items = [
            ScrapedItem(
                title=entry.title,
                link=entry.link,
                content=content.value_or(""),
                date=self._item_date(entry)
            )
            for entry, content in zip(entries, contents)
        ]
        return SiteScrape(site=site, items=items)

    def _read_listing_entry(self, site: SiteConfig, element: Tag) -> FieldResult:
        link = self.resolve_link(site, element)
        if not link.ok:
            return link

        title = self.extractor.text_of(element, site.title_selector)
        if title is None:
            logging.debug(f"No title match for '{site.title_selector}' in {link.value}")

        return FieldResult.success(_ListingEntry(
            title=title or "",
            link=link.value,
            date_text=self.extractor.text_of(element, site.date_selector)
        ))

    def resolve_link(self, site: SiteConfig, element: Tag) -> FieldResult:
        """Resolve the item's href against the site URL."""
        href = self.extractor.attr_of(element, site.link_selector, "href")
        if href is None or not href.strip():
            return FieldResult.failed(
                FailureReason.LINK_RESOLUTION,
                f"no href found for '{site.link_selector}'"
            )

        try:
            link = urljoin(site.url, href.strip())
        except ValueError as e:
            return FieldResult.failed(
                FailureReason.LINK_RESOLUTION, f"cannot resolve '{href}': {e}"
            )

        if not is_absolute_http_url(link):
            return FieldResult.failed(
                FailureReason.LINK_RESOLUTION, f"'{href}' is not an http(s) link"
            )
        return FieldResult.success(link)

    def _fetch_content(self, site: SiteConfig, link: str) -> FieldResult:
        try:
            html = self.fetch(link)
        except FetchError as e:
            logging.warning(f"⚠️ Error fetching content from {link}: {e}")
            return FieldResult.failed(FailureReason.CONTENT_FETCH, str(e))

        try:
            content = self.extractor.inner_html_of(
                self.extractor.parse(html), site.content_selector
            )
        except PARSE_ERRORS as e:
            logging.warning(f"⚠️ Error parsing content from {link}: {e}")
            return FieldResult.failed(FailureReason.CONTENT_FETCH, str(e))

        if content is None:
            logging.debug(f"No content match for '{site.content_selector}' on {link}")
            return FieldResult.failed(FailureReason.FIELD_MISSING, site.content_selector)
        return FieldResult.success(content)

    def parse_date(self, date_text: Optional[str]) -> FieldResult:
        """Normalize scraped date text, reporting why it could not be used."""
        if date_text is None:
            return FieldResult.failed(FailureReason.FIELD_MISSING, "no date element")

        result = self.date_normalizer.normalize(date_text)
        if not result.ok:
            return FieldResult.failed(FailureReason.DATE_PARSE, date_text)
        return FieldResult.success(result.value)

    def _item_date(self, entry: _ListingEntry) -> datetime:
        date = self.parse_date(entry.date_text)
        if date.failure is FailureReason.DATE_PARSE:
            logging.debug(f"Unparseable date '{date.detail}' for {entry.link}, using now")
        return date.value_or(self.clock())
