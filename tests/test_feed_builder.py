"""Tests for the FeedAssembler class."""

import json
import unittest
from datetime import datetime, timezone

import feedparser

from site_feeds.core.feed_builder import FeedAssembler
from site_feeds.models import ScrapedItem, SiteConfig


SITE = SiteConfig(
    name="Example News",
    url="https://example.com/news/",
    selector="div.item",
    title_selector="h2",
    link_selector="a",
    date_selector="time",
    content_selector="article",
)

ITEMS = [
    ScrapedItem(
        title="First story",
        link="https://example.com/articles/1",
        content="<p>Hello <b>readers</b></p>",
        date=datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc),
    ),
    ScrapedItem(
        title="Second story",
        link="https://example.com/articles/2",
        content="",
        date=datetime(2024, 3, 2, 8, 30, tzinfo=timezone.utc),
    ),
]


class TestFeedAssembler(unittest.TestCase):
    """Test cases for the FeedAssembler class."""

    def setUp(self):
        """Set up test fixtures."""
        self.assembler = FeedAssembler()
        self.updated = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)
        self.bundle = self.assembler.assemble(SITE, ITEMS, updated=self.updated)

    def test_rss_entries_in_order(self):
        feed = feedparser.parse(self.bundle.rss)

        self.assertEqual(feed.version, "rss20")
        self.assertEqual(feed.feed.title, "Example News")
        self.assertEqual(feed.feed.description, "RSS feed for Example News")
        self.assertEqual(feed.feed.generator, "RSS Generator")
        self.assertEqual(feed.feed.language, "en")
        self.assertEqual(
            [entry.link for entry in feed.entries],
            ["https://example.com/articles/1", "https://example.com/articles/2"]
        )
        self.assertEqual(feed.entries[0].id, "https://example.com/articles/1")

    def test_atom_entries_in_order(self):
        feed = feedparser.parse(self.bundle.atom)

        self.assertEqual(feed.version, "atom10")
        self.assertEqual(feed.feed.id, "https://example.com/news/")
        self.assertEqual(
            [entry.title for entry in feed.entries],
            ["First story", "Second story"]
        )
        self.assertIn("<b>readers</b>", feed.entries[0].content[0].value)
        self.assertEqual(feed.entries[1].updated_parsed[:5], (2024, 3, 2, 8, 30))

    def test_json_feed(self):
        feed = json.loads(self.bundle.json)

        self.assertEqual(feed["version"], "https://jsonfeed.org/version/1")
        self.assertEqual(feed["title"], "Example News")
        self.assertEqual(feed["home_page_url"], "https://example.com/news/")
        self.assertEqual(len(feed["items"]), 2)

        first = feed["items"][0]
        self.assertEqual(first["id"], "https://example.com/articles/1")
        self.assertEqual(first["url"], "https://example.com/articles/1")
        self.assertEqual(first["content_html"], "<p>Hello <b>readers</b></p>")
        self.assertEqual(first["date_published"], "2024-03-01T10:00:00+00:00")
        self.assertIn("Hello readers", first["summary"])
        self.assertNotIn("summary", feed["items"][1])

    def test_empty_item_list(self):
        bundle = self.assembler.assemble(SITE, [], updated=self.updated)

        self.assertEqual(len(feedparser.parse(bundle.rss).entries), 0)
        self.assertEqual(len(feedparser.parse(bundle.atom).entries), 0)
        self.assertEqual(json.loads(bundle.json)["items"], [])

    def test_empty_title_falls_back_to_link_in_atom(self):
        item = ScrapedItem(
            title="",
            link="https://example.com/untitled",
            content="",
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        bundle = self.assembler.assemble(SITE, [item], updated=self.updated)

        atom = feedparser.parse(bundle.atom)
        self.assertEqual(atom.entries[0].title, "https://example.com/untitled")
        self.assertEqual(json.loads(bundle.json)["items"][0]["title"], "")

    def test_rebuild_is_identical_for_same_timestamp(self):
        """Only the feed build time can differ between two builds."""
        again = FeedAssembler().assemble(SITE, ITEMS, updated=self.updated)

        self.assertEqual(again, self.bundle)

        later = FeedAssembler().assemble(
            SITE, ITEMS, updated=datetime(2025, 1, 1, tzinfo=timezone.utc)
        )
        self.assertEqual(later.json, self.bundle.json)
        self.assertNotEqual(later.atom, self.bundle.atom)

    def test_control_characters_are_stripped(self):
        """A stray control character does not break the XML serializations."""
        item = ScrapedItem(
            title="T\x08x",
            link="https://example.com/articles/3",
            content="<p>a\x0cb</p>",
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        bundle = self.assembler.assemble(SITE, [ITEMS[0], item], updated=self.updated)

        atom = feedparser.parse(bundle.atom)
        rss = feedparser.parse(bundle.rss)
        self.assertFalse(atom.bozo)
        self.assertFalse(rss.bozo)
        self.assertEqual([e.title for e in atom.entries], ["First story", "Tx"])
        self.assertIn("ab", atom.entries[1].content[0].value)
        self.assertEqual(json.loads(bundle.json)["items"][1]["content_html"], "<p>ab</p>")


if __name__ == "__main__":
    unittest.main()
