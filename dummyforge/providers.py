"""
Random Value Providers

The engine never touches a global random source. It asks an injected
provider for every random primitive, so tests can hand in a seeded or
scripted provider instead of patching module state.
"""

import string
from datetime import date
from typing import Optional, Sequence, TypeVar
import logging

from faker import Faker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomValueProvider:
    """
    Interface for locale-aware random primitives

    Subclasses must implement every method; the defaults raise
    NotImplementedError.
    """

    def first_name(self, sex: Optional[str] = None) -> str:
        """First name, biased towards 'male' or 'female' when sex is given"""
        raise NotImplementedError

    def last_name(self) -> str:
        raise NotImplementedError

    def city(self) -> str:
        raise NotImplementedError

    def state(self) -> str:
        raise NotImplementedError

    def street_address(self) -> str:
        raise NotImplementedError

    def postal_code(self) -> str:
        raise NotImplementedError

    def latitude(self) -> float:
        raise NotImplementedError

    def longitude(self) -> float:
        raise NotImplementedError

    def phone_number(self) -> str:
        """Unconstrained phone number in the provider's own format"""
        raise NotImplementedError

    def phone_digits(self, length: int) -> str:
        return self.numeric(length)

    def uuid(self) -> str:
        raise NotImplementedError

    def integer(self, min_value: int, max_value: int) -> int:
        """Uniform integer in [min_value, max_value]"""
        raise NotImplementedError

    def choice(self, items: Sequence[T]) -> T:
        return items[self.integer(0, len(items) - 1)]

    def alpha(self, length: int, upper: bool = False) -> str:
        raise NotImplementedError

    def numeric(self, length: int) -> str:
        raise NotImplementedError

    def alphanumeric(self, length: int) -> str:
        raise NotImplementedError

    def past_date(self) -> date:
        """Random date within the last year"""
        raise NotImplementedError

    def country_code(self) -> str:
        raise NotImplementedError

    def domain_name(self) -> str:
        raise NotImplementedError

    def credit_card_number(self) -> str:
        raise NotImplementedError

    def iban(self) -> str:
        raise NotImplementedError

    def currency_code(self) -> str:
        raise NotImplementedError


class FakerProvider(RandomValueProvider):
    """
    Provider backed by a private Faker instance

    Each provider owns its Faker instance, so seeding one provider never
    affects another.
    """

    def __init__(self, locale: str = "en_US", seed: Optional[int] = None):
        """
        Initialize the provider

        Args:
            locale: Faker locale for names and addresses
            seed: Optional seed for repeatable sequences
        """
        self.locale = locale
        self.faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)
            logger.debug(f"FakerProvider seeded with {seed}")
        self._random = self.faker.random

    def first_name(self, sex: Optional[str] = None) -> str:
        if sex == "male":
            return self.faker.first_name_male()
        if sex == "female":
            return self.faker.first_name_female()
        return self.faker.first_name()

    def last_name(self) -> str:
        return self.faker.last_name()

    def city(self) -> str:
        return self.faker.city()

    def state(self) -> str:
        return self.faker.state()

    def street_address(self) -> str:
        return self.faker.street_address()

    def postal_code(self) -> str:
        return self.faker.postcode()

    def latitude(self) -> float:
        return float(self.faker.latitude())

    def longitude(self) -> float:
        return float(self.faker.longitude())

    def phone_number(self) -> str:
        return self.faker.phone_number()

    def uuid(self) -> str:
        return str(self.faker.uuid4())

    def integer(self, min_value: int, max_value: int) -> int:
        return self._random.randint(min_value, max_value)

    def alpha(self, length: int, upper: bool = False) -> str:
        letters = string.ascii_uppercase if upper else string.ascii_letters
        return "".join(self._random.choices(letters, k=length))

    def numeric(self, length: int) -> str:
        return "".join(self._random.choices(string.digits, k=length))

    def alphanumeric(self, length: int) -> str:
        return "".join(self._random.choices(string.ascii_letters + string.digits, k=length))

    def past_date(self) -> date:
        return self.faker.date_between(start_date="-1y", end_date="today")

    def country_code(self) -> str:
        return self.faker.country_code()

    def domain_name(self) -> str:
        return self.faker.domain_name()

    def credit_card_number(self) -> str:
        return self.faker.credit_card_number()

    def iban(self) -> str:
        return self.faker.iban()

    def currency_code(self) -> str:
        return self.faker.currency_code()
