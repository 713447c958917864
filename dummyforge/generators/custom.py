"""
Custom Field Generators

User-shaped fields: random strings with prefix/suffix, patterned codes,
weighted booleans and auto-increment sequences.
"""

from typing import Optional
import logging

from ..config import DEFAULT_LENGTH_MIN, DEFAULT_LENGTH_MAX, DEFAULT_PATTERN
from ..field_types import FieldType
from ..providers import RandomValueProvider

logger = logging.getLogger(__name__)


class CustomGenerator:
    """
    Generates user-configured values

    Features:
    - randomString / randomNumeric / randomAlphanumeric bodies
    - X/# placeholder patterns
    - booleans with a configurable true-percentage
    - per-field auto-increment counters
    """

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def random_string(self, field_type: FieldType, options) -> str:
        """
        Random body wrapped in the field's prefix and suffix

        Args:
            field_type: One of the random string types, selecting the alphabet
            options: FieldOptions (length_min, length_max, prefix, suffix)

        Returns:
            prefix + body + suffix
        """
        length_min = DEFAULT_LENGTH_MIN if options.length_min is None else options.length_min
        length_max = DEFAULT_LENGTH_MAX if options.length_max is None else options.length_max
        length = self.provider.integer(length_min, length_max)

        if field_type == FieldType.RANDOM_NUMERIC:
            body = self.provider.numeric(length)
        elif field_type == FieldType.RANDOM_ALPHANUMERIC:
            body = self.provider.alphanumeric(length)
        else:
            body = self.provider.alpha(length)

        return f"{options.prefix or ''}{body}{options.suffix or ''}"

    def pattern(self, pattern: Optional[str] = None) -> str:
        """Replace each X with A-Z and each # with 0-9; other characters stay"""
        chars = []
        for char in pattern or DEFAULT_PATTERN:
            if char == 'X':
                chars.append(self.provider.alpha(1, upper=True))
            elif char == '#':
                chars.append(self.provider.numeric(1))
            else:
                chars.append(char)
        return ''.join(chars)

    def boolean(self, true_percentage: Optional[float] = None) -> bool:
        percentage = 50 if true_percentage is None else true_percentage
        clamped = min(100, max(0, percentage))
        return self.provider.integer(1, 100) <= clamped

    @staticmethod
    def auto_increment(ctx, field_name: str, start: Optional[int] = None, step: Optional[int] = None) -> int:
        """Next value of the field's own counter, never shared with the ID types"""
        return ctx.counters.next(
            f'field:{field_name}',
            1 if start is None else start,
            1 if step is None else step,
        )
