"""Tests for the HTML utilities."""

import unittest

from site_feeds.utils.html_utils import HtmlExtractor, html_to_text, strip_xml_invalid


PAGE = """
<ul>
  <li class="entry"><a href="/one" class="title link">  One  </a></li>
  <li class="entry"><a class="title">Two</a><div class="body"><p>Hello <b>world</b></p></div></li>
</ul>
"""


class TestHtmlExtractor(unittest.TestCase):
    """Test cases for the HtmlExtractor class."""

    def setUp(self):
        """Set up test fixtures."""
        self.extractor = HtmlExtractor()
        self.soup = self.extractor.parse(PAGE)
        self.items = self.extractor.select_items(self.soup, "li.entry")

    def test_select_items_in_document_order(self):
        self.assertEqual(len(self.items), 2)
        self.assertEqual(self.extractor.text_of(self.items[0], "a"), "One")
        self.assertEqual(self.extractor.text_of(self.items[1], "a"), "Two")

    def test_missing_match_returns_none(self):
        self.assertIsNone(self.extractor.text_of(self.items[0], "div.body"))
        self.assertIsNone(self.extractor.inner_html_of(self.items[0], "div.body"))
        self.assertIsNone(self.extractor.attr_of(self.items[0], "img", "src"))

    def test_attr_of(self):
        self.assertEqual(self.extractor.attr_of(self.items[0], "a", "href"), "/one")
        self.assertIsNone(self.extractor.attr_of(self.items[1], "a", "href"))
        self.assertEqual(self.extractor.attr_of(self.items[0], "a", "class"), "title link")

    def test_inner_html_of(self):
        self.assertEqual(
            self.extractor.inner_html_of(self.items[1], "div.body"),
            "<p>Hello <b>world</b></p>"
        )


class TestHtmlToText(unittest.TestCase):
    """Test cases for html_to_text."""

    def test_collapses_to_single_line(self):
        text = html_to_text("<h1>Title</h1>\n<p>First   paragraph.</p><p>Second.</p>")

        self.assertNotIn("\n", text)
        self.assertIn("First paragraph.", text)
        self.assertIn("Second.", text)

    def test_empty_input(self):
        self.assertEqual(html_to_text(""), "")
        self.assertEqual(html_to_text(None), "")

    def test_truncates(self):
        text = html_to_text("<p>" + "word " * 100 + "</p>", max_length=20)

        self.assertTrue(text.endswith("..."))
        self.assertLessEqual(len(text), 23)


class TestStripXmlInvalid(unittest.TestCase):
    """Test cases for strip_xml_invalid."""

    def test_removes_control_characters(self):
        self.assertEqual(strip_xml_invalid("a\x00b\x08c\x0bd\x0ce\x1ff"), "abcdef")

    def test_keeps_whitespace_and_text(self):
        text = "line\ttab\nnew\rret \u00e9\u4e2d"
        self.assertEqual(strip_xml_invalid(text), text)

    def test_empty(self):
        self.assertEqual(strip_xml_invalid(""), "")


if __name__ == "__main__":
    unittest.main()
