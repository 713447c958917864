"""Shared fixtures"""

from datetime import date
from itertools import count

import pytest

from dummyforge.config import FieldConfig, FieldOptions, GenerationConfig
from dummyforge.providers import FakerProvider, RandomValueProvider


class StubProvider(RandomValueProvider):
    """Predictable provider: lowest bounds, fixed strings, numbered names"""

    def __init__(self):
        self._names = count(1)

    def first_name(self, sex=None):
        return f"{sex or 'any'}{next(self._names)}"

    def last_name(self):
        return "Doe"

    def city(self):
        return "Springfield"

    def state(self):
        return "Ohio"

    def street_address(self):
        return "1 Main St"

    def postal_code(self):
        return "12345"

    def latitude(self):
        return 10.5

    def longitude(self):
        return -20.25

    def phone_number(self):
        return "555-0100"

    def uuid(self):
        return "00000000-0000-4000-8000-000000000000"

    def integer(self, min_value, max_value):
        return min_value

    def alpha(self, length, upper=False):
        return ("A" if upper else "a") * length

    def numeric(self, length):
        return "7" * length

    def alphanumeric(self, length):
        return "a1" * (length // 2) + "a" * (length % 2)

    def past_date(self):
        return date(2024, 3, 9)

    def country_code(self):
        return "US"

    def domain_name(self):
        return "example.com"

    def credit_card_number(self):
        return "4111111111111111"

    def iban(self):
        return "GB00TEST0000000000"

    def currency_code(self):
        return "EUR"


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def faker_provider():
    return FakerProvider(seed=1234)


def _make_field(name, field_type, unique=False, **options):
    return FieldConfig(name=name, type=field_type, unique=unique, config=FieldOptions(**options))


@pytest.fixture
def make_field():
    """Factory: make_field(name, type, unique=False, **FieldOptions)"""
    return _make_field


@pytest.fixture
def simple_config():
    return GenerationConfig(
        fields=[
            _make_field("id", "autoIncrement", unique=True),
            _make_field("firstName", "firstName"),
            _make_field("lastName", "lastName"),
            _make_field("email", "email", unique=True),
            _make_field("gender", "gender"),
        ],
        count=20,
    )
