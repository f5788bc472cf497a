"""Free-text date normalization."""

import logging
import warnings
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pandas as pd
import pytz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateResult:
    """Parsed timestamp, or ok=False when the text was not a date."""
    value: Optional[datetime]
    ok: bool


class DateNormalizer:
    """Parse date strings scraped from listing pages into UTC datetimes.

    Naive values are interpreted in ``timezone`` before conversion to UTC.
    """

    def __init__(self, timezone: str = "UTC"):
        self.timezone = pytz.timezone(timezone)

    def normalize(self, text: Optional[str]) -> DateResult:
        if text is None or not text.strip():
            return DateResult(None, False)

        # "now" and "today" parse as the current time, which matches the fallback
        try:
            with warnings.catch_warnings():
                # pandas warns when it has to fall back to dateutil inference
                warnings.simplefilter("ignore", UserWarning)
                parsed = pd.to_datetime(text.strip(), dayfirst=False)
        except (ValueError, TypeError, OverflowError) as e:
            logger.debug(f"Could not parse date '{text}': {e}")
            return DateResult(None, False)

        if pd.isna(parsed):
            return DateResult(None, False)

        try:
            if parsed.tzinfo is None:
                parsed = parsed.tz_localize(self.timezone)
            parsed = parsed.tz_convert(pytz.utc)
        except (ValueError, OverflowError) as e:
            # nonexistent/ambiguous local times around DST changes
            logger.debug(f"Could not localize date '{text}': {e}")
            return DateResult(None, False)

        return DateResult(parsed.to_pydatetime(), True)


def utc_now() -> datetime:
    return datetime.now(pytz.utc)
