"""Scrape, assemble and run pipeline."""
