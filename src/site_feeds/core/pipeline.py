"""Site pipeline: scrape, assemble and write feeds for every configured site."""

import logging
import re
from typing import List, Optional

from ..models.item import SiteResult
from ..models.site import FeedsConfig, SiteConfig
from ..utils.file_utils import FeedWriter
from .feed_builder import FeedAssembler
from .scraper import ItemScraper


def safe_name(name: str) -> str:
    """Lower-case a site name and collapse every non-alphanumeric run to '-'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower())


class SitePipeline:
    """
    Run every configured site through scrape -> assemble -> write.

    Sites are processed one at a time in configured order. A site whose
    listing page cannot be read produces no files; any other error in one
    site is logged and the run moves on to the next site.
    """

    def __init__(
        self,
        scraper: ItemScraper,
        assembler: FeedAssembler,
        writer: Optional[FeedWriter] = None
    ):
        """
        Initialize the pipeline.

        Args:
            scraper: Item scraper used for every site
            assembler: Feed assembler used for every site
            writer: File writer; None runs without writing anything (dry run)
        """
        self.scraper = scraper
        self.assembler = assembler
        self.writer = writer

    def process_site(self, site: SiteConfig) -> SiteResult:
        """
        Scrape one site and write its feed bundle.

        Args:
            site: Site configuration

        Returns:
            SiteResult describing what was produced
        """
        name = safe_name(site.name)
        scraped = self.scraper.scrape_site(site)

        if not scraped.ok:
            return SiteResult(
                name=site.name,
                safe_name=name,
                success=False,
                message=f"Listing unavailable ({scraped.failure.value})"
            )

        bundle = self.assembler.assemble(site, scraped.items)

        if self.writer is None:
            logging.info(f"DRY RUN: Would write {len(scraped.items)} entries for {site.name}")
            return SiteResult(
                name=site.name,
                safe_name=name,
                success=True,
                message=f"Processed {len(scraped.items)} entries (dry run)",
                count=len(scraped.items)
            )

        files = self.writer.write_bundle(name, bundle)
        return SiteResult(
            name=site.name,
            safe_name=name,
            success=True,
            message=f"Processed {len(scraped.items)} entries",
            count=len(scraped.items),
            files=tuple(str(path) for path in files)
        )

    def run(self, config: FeedsConfig) -> List[SiteResult]:
        """
        Process all configured sites and write the index page.

        Args:
            config: Run configuration

        Returns:
            List of SiteResult, one per site, in configured order
        """
        logging.info(f"Found {len(config.sites)} configured site(s).")
        results = []

        for site in config.sites:
            logging.info(f"\nProcessing {site.name}...")
            try:
                result = self.process_site(site)
            except Exception as e:
                logging.error(f"❌ Error processing site '{site.name}': {str(e)}")
                logging.debug("Exception details:", exc_info=True)
                result = SiteResult(
                    name=site.name,
                    safe_name=safe_name(site.name),
                    success=False,
                    message=f"Error: {str(e)}"
                )

            if result.success:
                logging.info(f"SUCCESS: {result.message}")
            else:
                logging.warning(f"WARNING: {site.name}: {result.message}")
            results.append(result)

        if self.writer is not None:
            self.writer.write_index(
                [(result.name, result.safe_name) for result in results if result.files]
            )
        return results
