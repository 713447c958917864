"""
PII (Personally Identifiable Information) Generators

Generates synthetic PII that is realistic but entirely fictitious:
- Names (first, last, full), sex-biased and shared within a record
- Email addresses built from the record's names
- Phone numbers shaped by the record's country
- Addresses and geographic fields
- Identifiers (student/employee IDs, UUIDs, usernames)
- Financial values (card numbers, IBANs, currencies)
"""

import re
from typing import Optional
import logging

from ..countries import get_country_name, get_phone_rule, get_calling_code
from ..providers import RandomValueProvider

logger = logging.getLogger(__name__)

STUDENT_ID_START = 1000
EMPLOYEE_ID_START = 5000

# Reserved counter keys; user fields are namespaced with 'field:'
STUDENT_ID_KEY = 'builtin:studentID'
EMPLOYEE_ID_KEY = 'builtin:employeeID'


def _name_bias(gender: Optional[str]) -> Optional[str]:
    """Only male/female bias the name pool; other genders draw unbiased"""
    return gender if gender in ('male', 'female') else None


class NameGenerator:
    """
    Generate person names for one record at a time

    Names are cached on the record context so firstName, lastName,
    fullName and email agree within a record. A fresh draw only reaches
    fields generated after it; values already emitted for the record
    keep the earlier name.
    """

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def first_name(self, ctx, fresh: bool = False) -> str:
        """
        First name of the record's person

        Args:
            ctx: Record context holding the cache
            fresh: Draw a new name and overwrite the cache

        Returns:
            First name
        """
        if fresh or ctx.first_name is None:
            ctx.first_name = self.provider.first_name(_name_bias(ctx.gender))
        return ctx.first_name

    def last_name(self, ctx, fresh: bool = False) -> str:
        if fresh or ctx.last_name is None:
            ctx.last_name = self.provider.last_name()
        return ctx.last_name

    def full_name(self, ctx, fresh: bool = False) -> str:
        return f"{self.first_name(ctx, fresh)} {self.last_name(ctx, fresh)}"


class EmailGenerator:
    """
    Generate email addresses

    Format: first.last.N@domain, lowercase, N in 1..9999
    """

    def __init__(self, provider: RandomValueProvider, names: NameGenerator):
        self.provider = provider
        self.names = names

    @staticmethod
    def _sanitize_name(value: str) -> str:
        """Normalize names for email local-part generation."""
        cleaned = re.sub(r'[^a-z0-9]', '', str(value).lower())
        return cleaned or 'user'

    def generate(self, ctx) -> str:
        first = self._sanitize_name(self.names.first_name(ctx))
        last = self._sanitize_name(self.names.last_name(ctx))
        number = self.provider.integer(1, 9999)
        domain = self.provider.domain_name()
        return f"{first}.{last}.{number}@{domain}".lower()


class PhoneGenerator:
    """
    Generate phone numbers for a country

    Lookup order:
    - detailed national rule (dial code + national length range)
    - bare calling code with an 8-10 digit national part
    - the provider's own unconstrained format
    """

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def generate(self, country_code: str) -> str:
        rule = get_phone_rule(country_code)
        if rule:
            length = self.provider.integer(rule.min_length, rule.max_length)
            return f"+{rule.dial_code} {self.provider.phone_digits(length)}"

        calling_code = get_calling_code(country_code)
        if calling_code:
            length = self.provider.integer(8, 10)
            return f"+{calling_code} {self.provider.phone_digits(length)}"

        logger.debug(f"No calling code for '{country_code}', using provider format")
        return self.provider.phone_number()


class AddressGenerator:
    """
    Generate geographic fields

    Components: street, city, state, postal code, country, coordinates
    """

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def country(self, country_code: str) -> str:
        return get_country_name(country_code)

    def city(self) -> str:
        return self.provider.city()

    def state(self) -> str:
        return self.provider.state()

    def street_address(self) -> str:
        return self.provider.street_address()

    def postal_code(self) -> str:
        return self.provider.postal_code()

    def latitude(self) -> float:
        return self.provider.latitude()

    def longitude(self) -> float:
        return self.provider.longitude()

    def full_address(self, country_code: str) -> str:
        """street, city, state, country"""
        return ", ".join([
            self.street_address(),
            self.city(),
            self.state(),
            self.country(country_code),
        ])


class IdentifierGenerator:
    """
    Generate various identifier formats

    - Student IDs (STU-1000, STU-1001, ...)
    - Employee IDs (EMP-5000, EMP-5001, ...)
    - UUIDs
    - Usernames
    """

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def student_id(self, ctx) -> str:
        return f"STU-{ctx.counters.next(STUDENT_ID_KEY, STUDENT_ID_START, 1)}"

    def employee_id(self, ctx) -> str:
        return f"EMP-{ctx.counters.next(EMPLOYEE_ID_KEY, EMPLOYEE_ID_START, 1)}"

    def uuid(self) -> str:
        return self.provider.uuid()

    def username(self) -> str:
        # Independent of the record's cached names
        base = re.sub(r'[^a-z0-9]', '', self.provider.first_name().lower()) or 'user'
        return f"{base}{self.provider.integer(1, 9999)}"


class FinanceGenerator:
    """Card numbers, IBANs and currency codes from the provider"""

    def __init__(self, provider: RandomValueProvider):
        self.provider = provider

    def credit_card(self) -> str:
        return self.provider.credit_card_number()

    def iban(self) -> str:
        return self.provider.iban()

    def currency(self) -> str:
        return self.provider.currency_code()
