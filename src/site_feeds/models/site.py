"""Site configuration models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple
from urllib.parse import urlparse

import soupsieve

from ..errors import ConfigError


# YAML key -> dataclass field
SELECTOR_KEYS = {
    "selector": "selector",
    "titleSelector": "title_selector",
    "linkSelector": "link_selector",
    "dateSelector": "date_selector",
    "contentSelector": "content_selector",
}


def is_absolute_http_url(url: str) -> bool:
    """Return True if url is an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class SiteConfig:
    """Configuration for one scraped website.

    Attributes:
        name: Display name of the site, also used to derive output file names
        url: Absolute URL of the listing page
        selector: CSS selector matching each repeated item container
        title_selector: Selector for the title, scoped to an item container
        link_selector: Selector for the link element, scoped to an item container
        date_selector: Selector for the date text, scoped to an item container
        content_selector: Selector for the article body on the linked page
    """
    name: str
    url: str
    selector: str
    title_selector: str
    link_selector: str
    date_selector: str
    content_selector: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SiteConfig":
        """Build a SiteConfig from a raw configuration mapping.

        Raises:
            ConfigError: If a field is missing, empty, or a selector does not compile
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Site entry must be a mapping, got {type(data).__name__}")

        values: Dict[str, str] = {}
        for key in ("name", "url", *SELECTOR_KEYS):
            raw = data.get(key)
            if not isinstance(raw, str) or not raw.strip():
                label = data.get("name") or "<unnamed>"
                raise ConfigError(f"Site '{label}' is missing required field '{key}'")
            values[key] = raw.strip()

        if not is_absolute_http_url(values["url"]):
            raise ConfigError(
                f"Site '{values['name']}' url must be an absolute http(s) URL: {values['url']}"
            )

        for key in SELECTOR_KEYS:
            try:
                soupsieve.compile(values[key])
            except soupsieve.SelectorSyntaxError as e:
                raise ConfigError(
                    f"Site '{values['name']}' has an invalid {key} '{values[key]}': {e}"
                ) from e

        return cls(
            name=values["name"],
            url=values["url"],
            **{attr: values[key] for key, attr in SELECTOR_KEYS.items()},
        )


@dataclass(frozen=True)
class FeedsConfig:
    """Run-wide configuration.

    Attributes:
        output_dir: Directory receiving the feed files and index page
        sites: Sites to process, in configured order
        timeout: Per-request timeout in seconds
        max_workers: Upper bound on concurrent content-page fetches per site
        timezone: Timezone assumed for dates that carry no offset
        user_agent: User-Agent header sent with every request
        language: Language code written into the feeds
    """
    output_dir: str
    sites: Tuple[SiteConfig, ...] = field(default_factory=tuple)
    timeout: float = 30.0
    max_workers: int = 4
    timezone: str = "UTC"
    user_agent: str = "Mozilla/5.0 (compatible; site-feeds/1.0)"
    language: str = "en"
