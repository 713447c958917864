"""
Field Generators Module

Provides specialized generators for each field category:
- PII: Names, emails, phones, addresses, identifiers, finance
- Temporal: Ages, birth dates and timestamps
- Custom: Random strings, patterns, booleans, auto-increment
- Fields: Record context and total dispatch over field types
"""

from .pii import (
    NameGenerator,
    EmailGenerator,
    PhoneGenerator,
    AddressGenerator,
    IdentifierGenerator,
    FinanceGenerator,
)
from .temporal import TemporalGenerator, format_date
from .custom import CustomGenerator
from .fields import FieldValueGenerator, RecordContext

__all__ = [
    # PII generators
    "NameGenerator",
    "EmailGenerator",
    "PhoneGenerator",
    "AddressGenerator",
    "IdentifierGenerator",
    "FinanceGenerator",

    # Temporal generators
    "TemporalGenerator",
    "format_date",

    # Custom generators
    "CustomGenerator",

    # Dispatch
    "FieldValueGenerator",
    "RecordContext",
]
