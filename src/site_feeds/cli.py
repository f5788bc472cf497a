"""
Command line entry point.

Scrapes every configured site, writes RSS, Atom and JSON feeds for each one
and an index.html linking to them.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .config import DEFAULT_CONFIG_PATH, load_config
from .core.feed_builder import FeedAssembler
from .core.pipeline import SitePipeline
from .core.scraper import ItemScraper
from .errors import ConfigError
from .utils.date_utils import DateNormalizer
from .utils.file_utils import FeedWriter
from .utils.http_utils import HtmlFetcher, create_session


def setup_logging(log_level=logging.INFO, log_to_file=False):
    """Set up logging configuration."""
    log_format = "%(asctime)s - %(levelname)s - %(message)s"
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(log_dir / f"site_feeds_{timestamp}.log"))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)

    # Suppress noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_environment():
    """Load environment variables based on the current environment."""
    env = os.environ.get("ENVIRONMENT", "development").lower()
    logging.info(f"🌍 Running in {env.upper()} environment")

    for env_path in [Path(f"config/.env.{env}"), Path("config/.env"), Path(".env")]:
        if env_path.exists():
            logging.info(f"📄 Loading environment from {env_path}")
            load_dotenv(env_path)
            return

    logging.debug("No .env file found. Using environment variables or defaults.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape configured websites into RSS, Atom and JSON feeds"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level"
    )
    parser.add_argument(
        "--log-to-file",
        action="store_true",
        help="Log to file in addition to console"
    )
    parser.add_argument(
        "--config",
        help="Path to the site configuration file",
        default=os.environ.get("SITE_FEEDS_CONFIG", DEFAULT_CONFIG_PATH)
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for the generated feeds (overrides outputDir)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request timeout in seconds"
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Concurrent content-page fetches per site"
    )
    parser.add_argument(
        "--timezone",
        help="Timezone assumed for scraped dates without an offset"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and build feeds without writing any files"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the site feeds process."""
    # Logging and .env must be in place before the real parse so that
    # environment-based defaults are visible.
    log_args, _ = build_parser().parse_known_args(argv)
    setup_logging(
        log_level=getattr(logging, log_args.log_level),
        log_to_file=log_args.log_to_file
    )
    load_environment()

    args = build_parser().parse_args(argv)

    start_time = datetime.now()
    logging.info("Starting site feeds run")

    try:
        config = load_config(
            args.config,
            overrides={
                "outputDir": args.output_dir,
                "timeout": args.timeout,
                "maxWorkers": args.max_workers,
                "timezone": args.timezone,
            }
        )

        writer = None
        if args.dry_run:
            logging.info("DRY RUN MODE: No files will be written")
        else:
            writer = FeedWriter(config.output_dir)
            writer.prepare()

        session = create_session(config.user_agent, pool_size=config.max_workers)
        scraper = ItemScraper(
            fetch=HtmlFetcher(session, timeout=config.timeout).fetch,
            date_normalizer=DateNormalizer(config.timezone),
            max_workers=config.max_workers
        )
        pipeline = SitePipeline(scraper, FeedAssembler(language=config.language), writer)

        with session:
            results = pipeline.run(config)

        elapsed_seconds = (datetime.now() - start_time).total_seconds()
        failed = [result for result in results if not result.success]

        logging.info("\nRun Summary:")
        logging.info(f"Total runtime: {elapsed_seconds:.2f} seconds")
        logging.info(f"Sites processed: {len(results)}")
        logging.info(f"Sites failed: {len(failed)}")
        logging.info(f"Entries written: {sum(result.count for result in results)}")

        if args.dry_run:
            logging.info("DRY RUN COMPLETED: No files were written")
        else:
            logging.info(f"Successfully generated all feeds in {config.output_dir}")
        return 0

    except KeyboardInterrupt:
        logging.warning("\nRun interrupted by user")
        return 130

    except ConfigError as e:
        logging.error(f"Configuration error: {e}")
        return 1

    except OSError as e:
        logging.error(f"Cannot write output: {e}")
        logging.debug("Exception details:", exc_info=True)
        return 1

    except Exception as e:
        logging.error(f"Site feeds run failed: {str(e)}")
        logging.debug("Exception details:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
