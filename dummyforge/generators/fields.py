"""
Field Value Dispatch

Maps every FieldType to the generator that produces it. The mapping is
total: constructing a FieldValueGenerator fails if any type lacks a
handler.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set
import logging

from ..config import AgeConfig, FieldConfig
from ..field_types import FieldType
from ..providers import RandomValueProvider
from ..tracking import AutoIncrementRegistry
from .custom import CustomGenerator
from .pii import (
    NameGenerator,
    EmailGenerator,
    PhoneGenerator,
    AddressGenerator,
    IdentifierGenerator,
    FinanceGenerator,
)
from .temporal import TemporalGenerator

logger = logging.getLogger(__name__)

Handler = Callable[[FieldConfig, 'RecordContext', bool], Any]


@dataclass
class RecordContext:
    """Everything known about the record being built"""
    index: int
    gender: str
    country_code: str
    age_config: AgeConfig
    counters: AutoIncrementRegistry = field(default_factory=AutoIncrementRegistry)

    # Cached so name, email, age and birth-date fields agree
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = None


class FieldValueGenerator:
    """
    Produces one value for one field of one record

    Features:
    - Total dispatch over FieldType
    - Per-record name/age consistency via RecordContext
    - Empty value (with a warning) for unknown type tags
    """

    def __init__(self, provider: RandomValueProvider):
        """
        Initialize the field value generator

        Args:
            provider: Source of every random primitive
        """
        self.provider = provider
        self.names = NameGenerator(provider)
        self.emails = EmailGenerator(provider, self.names)
        self.phones = PhoneGenerator(provider)
        self.addresses = AddressGenerator(provider)
        self.identifiers = IdentifierGenerator(provider)
        self.finance = FinanceGenerator(provider)
        self.temporal = TemporalGenerator(provider)
        self.custom = CustomGenerator(provider)

        self._handlers = self._build_handlers()
        self._warned_fields: Set[str] = set()

        missing = [ft.value for ft in FieldType if ft not in self._handlers]
        if missing:
            raise RuntimeError(f"No generator registered for field types: {missing}")

    def _build_handlers(self) -> Dict[FieldType, Handler]:
        names = self.names
        temporal = self.temporal
        custom = self.custom
        addresses = self.addresses
        identifiers = self.identifiers

        def phone(f, ctx, fresh):
            return self.phones.generate(ctx.country_code)

        def random_string(f, ctx, fresh):
            return custom.random_string(f.type, f.config)

        return {
            # Identity
            FieldType.FIRST_NAME: lambda f, ctx, fresh: names.first_name(ctx, fresh),
            FieldType.LAST_NAME: lambda f, ctx, fresh: names.last_name(ctx, fresh),
            FieldType.FULL_NAME: lambda f, ctx, fresh: names.full_name(ctx, fresh),

            # Demographic
            FieldType.GENDER: lambda f, ctx, fresh: ctx.gender,
            FieldType.AGE: lambda f, ctx, fresh: temporal.age(ctx, fresh),
            FieldType.DATE_OF_BIRTH: lambda f, ctx, fresh: temporal.date_of_birth(
                ctx, f.config.date_format, fresh),

            # Contact
            FieldType.EMAIL: lambda f, ctx, fresh: self.emails.generate(ctx),
            FieldType.PHONE: phone,
            FieldType.MOBILE_PHONE: phone,
            FieldType.LANDLINE: phone,

            # Geographic
            FieldType.COUNTRY: lambda f, ctx, fresh: addresses.country(ctx.country_code),
            FieldType.CITY: lambda f, ctx, fresh: addresses.city(),
            FieldType.STATE: lambda f, ctx, fresh: addresses.state(),
            FieldType.ADDRESS: lambda f, ctx, fresh: addresses.full_address(ctx.country_code),
            FieldType.STREET_ADDRESS: lambda f, ctx, fresh: addresses.street_address(),
            FieldType.POSTAL_CODE: lambda f, ctx, fresh: addresses.postal_code(),
            FieldType.LATITUDE: lambda f, ctx, fresh: addresses.latitude(),
            FieldType.LONGITUDE: lambda f, ctx, fresh: addresses.longitude(),

            # Identifiers
            FieldType.STUDENT_ID: lambda f, ctx, fresh: identifiers.student_id(ctx),
            FieldType.EMPLOYEE_ID: lambda f, ctx, fresh: identifiers.employee_id(ctx),
            FieldType.UUID: lambda f, ctx, fresh: identifiers.uuid(),
            FieldType.USERNAME: lambda f, ctx, fresh: identifiers.username(),

            # Temporal
            FieldType.CREATED_AT: lambda f, ctx, fresh: temporal.utc_timestamp(),
            FieldType.UPDATED_AT: lambda f, ctx, fresh: temporal.utc_timestamp(),
            FieldType.REGISTRATION_DATE: lambda f, ctx, fresh: temporal.registration_date(
                f.config.date_format),
            FieldType.UNIX_TIMESTAMP: lambda f, ctx, fresh: temporal.unix_timestamp(ctx.index),
            FieldType.ISO_DATE: lambda f, ctx, fresh: temporal.iso_date(),

            # Financial
            FieldType.CREDIT_CARD: lambda f, ctx, fresh: self.finance.credit_card(),
            FieldType.IBAN: lambda f, ctx, fresh: self.finance.iban(),
            FieldType.CURRENCY: lambda f, ctx, fresh: self.finance.currency(),

            # Custom random
            FieldType.RANDOM_STRING: random_string,
            FieldType.RANDOM_NUMERIC: random_string,
            FieldType.RANDOM_ALPHANUMERIC: random_string,

            # Sequential
            FieldType.AUTO_INCREMENT: lambda f, ctx, fresh: custom.auto_increment(
                ctx, f.name, f.config.start, 1),
            FieldType.AUTO_INCREMENT_CUSTOM: lambda f, ctx, fresh: custom.auto_increment(
                ctx, f.name, f.config.start, f.config.step),

            FieldType.BOOLEAN: lambda f, ctx, fresh: custom.boolean(f.config.boolean_true_percentage),
            FieldType.CUSTOM_PATTERN: lambda f, ctx, fresh: custom.pattern(f.config.pattern),
        }

    def generate(self, field_config: FieldConfig, ctx: RecordContext, regenerate: bool = False) -> Any:
        """
        Generate a value for one field

        Args:
            field_config: Field being filled
            ctx: Context of the current record
            regenerate: Retry after a duplicate; name and age types draw
                fresh values and overwrite the record cache, which later
                fields pick up while earlier fields keep their values

        Returns:
            The field value ("" for unknown types)
        """
        handler = self._handlers.get(field_config.type)
        if handler is None:
            if field_config.name not in self._warned_fields:
                logger.warning(
                    f"Unknown field type '{field_config.type_name}' for field "
                    f"'{field_config.name}', emitting empty values"
                )
                self._warned_fields.add(field_config.name)
            return ""

        return handler(field_config, ctx, regenerate)
