#!/usr/bin/env python
"""
Run the site feeds process.

Scrapes every site in the configuration file and writes RSS, Atom and JSON
feeds plus an index.html into the configured output directory.
"""

import sys

from site_feeds.cli import main


if __name__ == "__main__":
    sys.exit(main())
