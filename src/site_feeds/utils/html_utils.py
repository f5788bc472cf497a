"""HTML processing utilities."""

import re
from typing import List, Optional, Union

import html2text
from bs4 import BeautifulSoup, Tag


Node = Union[BeautifulSoup, Tag]

# Characters XML 1.0 cannot carry, even escaped
XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class HtmlExtractor:
    """Thin wrapper around BeautifulSoup CSS selection.

    Element handles returned by the select methods can be passed back into
    the other helpers to read text, attributes or inner markup.
    """

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, self.parser)

    def select_items(self, node: Node, selector: str) -> List[Tag]:
        """Return every element matching selector, in document order."""
        return list(node.select(selector))

    def select_first(self, node: Node, selector: str) -> Optional[Tag]:
        return node.select_one(selector)

    def text_of(self, node: Node, selector: str) -> Optional[str]:
        """Return the trimmed text of the first match, or None if nothing matches."""
        target = self.select_first(node, selector)
        if target is None:
            return None
        return target.get_text().strip()

    def attr_of(self, node: Node, selector: str, attribute: str) -> Optional[str]:
        """Return an attribute of the first match, or None if absent."""
        target = self.select_first(node, selector)
        if target is None:
            return None
        value = target.get(attribute)
        # multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def inner_html_of(self, node: Node, selector: str) -> Optional[str]:
        target = self.select_first(node, selector)
        if target is None:
            return None
        return target.decode_contents()


def create_html_cleaner() -> html2text.HTML2Text:
    """Create and configure an HTML to text converter.

    Returns:
        Configured HTML2Text instance
    """
    cleaner = html2text.HTML2Text()
    cleaner.ignore_links = True
    cleaner.ignore_images = True
    cleaner.ignore_emphasis = True
    cleaner.body_width = 0
    return cleaner


def html_to_text(html_content: str, cleaner: html2text.HTML2Text = None, max_length: int = 0) -> str:
    """Convert HTML content to a single line of plain text.

    Args:
        html_content: HTML content to clean
        cleaner: Optional HTML2Text instance (will create one if not provided)
        max_length: Truncate to this many characters when positive

    Returns:
        Cleaned text as a single line
    """
    if not html_content:
        return ""
    if cleaner is None:
        cleaner = create_html_cleaner()

    raw_text = cleaner.handle(html_content).strip()
    text = re.sub(r"\s+", " ", raw_text)
    if max_length > 0 and len(text) > max_length:
        text = text[:max_length].rstrip() + "..."
    return text


def strip_xml_invalid(text: str) -> str:
    """Remove control characters and other code points that are illegal in XML 1.0."""
    if not text:
        return text
    return XML_INVALID_CHARS.sub("", text)
