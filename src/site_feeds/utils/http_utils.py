"""HTTP fetching helpers."""

import logging

import requests
from requests.adapters import HTTPAdapter

from ..errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def create_session(user_agent: str, pool_size: int = 10) -> requests.Session:
    """Create a requests session whose connection pool fits the worker count."""
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    session.headers["User-Agent"] = user_agent
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class HtmlFetcher:
    """Fetch pages as text. No retries; a failure is final for that URL."""

    def __init__(self, session: requests.Session, timeout: float = 30.0):
        self.session = session
        self.timeout = timeout

    def fetch(self, url: str) -> str:
        """GET url and return the decoded body.

        Raises:
            FetchError: On connection errors, timeouts, non-2xx status or body read errors
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(url, f"HTTP {status}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(url, f"Request failed: {e}") from e
