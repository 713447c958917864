"""
Temporal Data Generator Module

Generates ages, birth dates and timestamps:
- Ages under between/under/above/exact policies
- Birth dates derived from the record's age
- Creation/update timestamps (UTC, millisecond precision)
- Registration dates within the past year
- Unix timestamps and local ISO datetimes
"""

import time
from datetime import date, datetime, timezone
from typing import Optional
import logging

import pandas as pd

from ..providers import RandomValueProvider

logger = logging.getLogger(__name__)

ABOVE_AGE_SPAN = 50

DATE_FORMATS = {
    'iso': '%Y-%m-%d',
    'us': '%m/%d/%Y',
    'eu': '%d/%m/%Y',
}


def format_date(value: date, date_format: Optional[str] = None) -> str:
    """
    Render a date in one of the supported layouts

    Args:
        value: Date to render
        date_format: 'iso' (default), 'us' or 'eu'

    Returns:
        Formatted date string
    """
    return value.strftime(DATE_FORMATS.get(date_format or 'iso', DATE_FORMATS['iso']))


class TemporalGenerator:
    """
    Generates ages and temporal values

    Features:
    - Age policies with consistent per-record caching
    - Date-of-birth derived from the cached age
    - UTC and local timestamp formats
    """

    def __init__(self, provider: RandomValueProvider):
        """
        Initialize temporal generator

        Args:
            provider: Source of random values
        """
        self.provider = provider

    def draw_age(self, age_config) -> int:
        """
        Draw an age under the configured policy

        - between: U[min, max]
        - under: U[1, max - 1], never below 1
        - above: U[min + 1, min + 50]
        - exact: value
        """
        mode = age_config.mode
        if mode == 'between':
            return self.provider.integer(age_config.min, age_config.max)
        if mode == 'under':
            upper = max(1, age_config.max - 1)
            return self.provider.integer(1, upper)
        if mode == 'above':
            return self.provider.integer(age_config.min + 1, age_config.min + ABOVE_AGE_SPAN)
        return age_config.value

    def age(self, ctx, fresh: bool = False) -> int:
        """Age of the record's person, cached on the context"""
        if fresh or ctx.age is None:
            ctx.age = self.draw_age(ctx.age_config)
        return ctx.age

    def date_of_birth(self, ctx, date_format: Optional[str] = None, fresh: bool = False) -> str:
        """Today minus the record's age in years, date only"""
        age = self.age(ctx, fresh)
        birth = pd.Timestamp.today().normalize() - pd.DateOffset(years=age)
        return format_date(birth.date(), date_format)

    @staticmethod
    def utc_timestamp() -> str:
        """UTC ISO-8601 with milliseconds and a trailing Z"""
        now = datetime.now(timezone.utc).isoformat(timespec='milliseconds')
        return now.replace('+00:00', 'Z')

    def registration_date(self, date_format: Optional[str] = None) -> str:
        return format_date(self.provider.past_date(), date_format)

    @staticmethod
    def unix_timestamp(index: int) -> int:
        """Epoch seconds offset by the record index"""
        return int(time.time()) + index

    @staticmethod
    def iso_date() -> str:
        """Local ISO-8601 datetime with offset, second precision"""
        return datetime.now().astimezone().isoformat(timespec='seconds')
