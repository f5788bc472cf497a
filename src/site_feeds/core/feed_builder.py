"""Feed assembly: one site's items serialized as RSS, Atom and JSON Feed."""

import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from feedgen.feed import FeedGenerator

from ..models.item import FeedBundle, ScrapedItem
from ..models.site import SiteConfig
from ..utils.date_utils import utc_now
from ..utils.html_utils import html_to_text, strip_xml_invalid


GENERATOR = "RSS Generator"
JSON_FEED_VERSION = "https://jsonfeed.org/version/1"
SUMMARY_LENGTH = 280


class FeedAssembler:
    """
    Build the three feed documents for a site.

    Entries keep the order of the items passed in. Entry dates come from the
    items only, so two builds of the same items differ just in the feed-level
    build timestamps.
    """

    def __init__(self, language: str = "en", generator: str = GENERATOR):
        self.language = language
        self.generator = generator

    def assemble(
        self,
        site: SiteConfig,
        items: Sequence[ScrapedItem],
        updated: Optional[datetime] = None
    ) -> FeedBundle:
        """
        Serialize a site's items.

        Args:
            site: Site the items were scraped from
            items: Items in the order they should appear
            updated: Feed build time (defaults to now)

        Returns:
            FeedBundle with RSS 2.0, Atom 1.0 and JSON Feed bodies
        """
        updated = updated or utc_now()
        # one stray control character would make lxml reject the whole document
        items = [
            replace(
                item,
                title=strip_xml_invalid(item.title),
                link=strip_xml_invalid(item.link),
                content=strip_xml_invalid(item.content)
            )
            for item in items
        ]
        summaries = [self._summarize(item) for item in items]

        generator = self._build_generator(site, items, summaries, updated)
        bundle = FeedBundle(
            rss=generator.rss_str(pretty=True).decode("utf-8"),
            atom=generator.atom_str(pretty=True).decode("utf-8"),
            json=json.dumps(
                self._build_json_feed(site, items, summaries),
                indent=4,
                ensure_ascii=False
            )
        )
        logging.debug(f"Assembled {len(items)} entries for '{site.name}'")
        return bundle

    def _build_generator(
        self,
        site: SiteConfig,
        items: Sequence[ScrapedItem],
        summaries: List[str],
        updated: datetime
    ) -> FeedGenerator:
        fg = FeedGenerator()
        fg.id(site.url)
        fg.title(strip_xml_invalid(site.name))
        fg.description(self._description(site))
        fg.link(href=site.url, rel="alternate")
        fg.language(self.language)
        fg.updated(updated)
        fg.lastBuildDate(updated)
        fg.generator(self.generator)

        for item, summary in zip(items, summaries):
            # feedgen prepends by default
            entry = fg.add_entry(order="append")
            entry.id(item.link)
            # Atom rejects entries with an empty title
            entry.title(item.title or item.link)
            entry.link(href=item.link)
            entry.published(item.date)
            entry.updated(item.date)
            if item.content:
                entry.content(item.content, type="html")
            if summary:
                entry.summary(summary)
        return fg

    def _build_json_feed(
        self,
        site: SiteConfig,
        items: Sequence[ScrapedItem],
        summaries: List[str]
    ) -> Dict[str, Any]:
        feed = {
            "version": JSON_FEED_VERSION,
            "title": site.name,
            "home_page_url": site.url,
            "description": self._description(site),
            "items": []
        }
        for item, summary in zip(items, summaries):
            entry = {
                "id": item.link,
                "content_html": item.content,
                "url": item.link,
                "title": item.title,
                "date_modified": item.date.isoformat(),
                "date_published": item.date.isoformat()
            }
            if summary:
                entry["summary"] = summary
            feed["items"].append(entry)
        return feed

    def _summarize(self, item: ScrapedItem) -> str:
        return strip_xml_invalid(html_to_text(item.content, max_length=SUMMARY_LENGTH))

    @staticmethod
    def _description(site: SiteConfig) -> str:
        return f"RSS feed for {strip_xml_invalid(site.name)}"
