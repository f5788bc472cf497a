"""File output utilities for feed bundles and the index page."""

import html
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from ..models.item import FeedBundle

logger = logging.getLogger(__name__)

# bundle attribute -> file extension
FEED_FILES = (
    ("rss", "xml", "RSS Feed"),
    ("atom", "atom", "Atom Feed"),
    ("json", "json", "JSON Feed"),
)

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>RSS Feeds</title>
    <style>
      body {{ font-family: system-ui; max-width: 800px; margin: 0 auto; padding: 2rem; }}
      .site-feeds {{ margin-bottom: 2rem; }}
      ul {{ list-style-type: none; padding: 0; }}
      li {{ margin: 0.5rem 0; }}
      a {{ color: #0066cc; text-decoration: none; }}
      a:hover {{ text-decoration: underline; }}
    </style>
  </head>
  <body>
    <h1>Available RSS Feeds</h1>
{sites}
  </body>
</html>
"""

SITE_TEMPLATE = """    <div class="site-feeds">
      <h2>{name}</h2>
      <ul>
{links}
      </ul>
    </div>"""


def render_index(sites: Sequence[Tuple[str, str]]) -> str:
    """Render the index page.

    Args:
        sites: (display name, safe name) pairs, in the order to list them

    Returns:
        HTML document linking to every feed file of every site
    """
    blocks = []
    for name, safe_name in sites:
        links = "\n".join(
            f'        <li><a href="{html.escape(safe_name)}.{extension}">{label}</a></li>'
            for _, extension, label in FEED_FILES
        )
        blocks.append(SITE_TEMPLATE.format(name=html.escape(name), links=links))
    return INDEX_TEMPLATE.format(sites="\n".join(blocks))


class FeedWriter:
    """Writes feed bundles and the index page into one output directory."""

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)

    def prepare(self) -> None:
        """Create the output directory. Raises OSError if that is not possible."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_bundle(self, safe_name: str, bundle: FeedBundle) -> List[Path]:
        written = []
        for attribute, extension, _ in FEED_FILES:
            path = self.output_dir / f"{safe_name}.{extension}"
            path.write_text(getattr(bundle, attribute), encoding="utf-8")
            written.append(path)
        logger.debug(f"Wrote {', '.join(p.name for p in written)}")
        return written

    def write_index(self, sites: Sequence[Tuple[str, str]]) -> Path:
        path = self.output_dir / "index.html"
        path.write_text(render_index(sites), encoding="utf-8")
        logger.info(f"📄 Wrote index page with {len(sites)} site(s) to {path}")
        return path
