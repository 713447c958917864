"""
Field type catalogue

The closed set of semantic field kinds a generation request may use,
grouped by category for CLI listings and the API.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Union


class FieldType(str, Enum):
    """Semantic kind of an output column"""
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    GENDER = "gender"
    AGE = "age"
    DATE_OF_BIRTH = "dateOfBirth"
    EMAIL = "email"
    PHONE = "phone"
    MOBILE_PHONE = "mobilePhone"
    LANDLINE = "landline"
    COUNTRY = "country"
    CITY = "city"
    STATE = "state"
    ADDRESS = "address"
    STREET_ADDRESS = "streetAddress"
    POSTAL_CODE = "postalCode"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    STUDENT_ID = "studentID"
    EMPLOYEE_ID = "employeeID"
    UUID = "uuid"
    USERNAME = "username"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    REGISTRATION_DATE = "registrationDate"
    UNIX_TIMESTAMP = "unixTimestamp"
    ISO_DATE = "isoDate"
    CREDIT_CARD = "creditCard"
    IBAN = "iban"
    CURRENCY = "currency"
    RANDOM_STRING = "randomString"
    RANDOM_NUMERIC = "randomNumeric"
    RANDOM_ALPHANUMERIC = "randomAlphanumeric"
    AUTO_INCREMENT = "autoIncrement"
    AUTO_INCREMENT_CUSTOM = "autoIncrementCustom"
    BOOLEAN = "boolean"
    CUSTOM_PATTERN = "customPattern"


FIELD_CATEGORIES: Dict[str, List[FieldType]] = {
    "identity": [FieldType.FIRST_NAME, FieldType.LAST_NAME, FieldType.FULL_NAME],
    "demographic": [FieldType.GENDER, FieldType.AGE, FieldType.DATE_OF_BIRTH],
    "contact": [FieldType.EMAIL, FieldType.PHONE, FieldType.MOBILE_PHONE, FieldType.LANDLINE],
    "geographic": [
        FieldType.COUNTRY, FieldType.CITY, FieldType.STATE, FieldType.ADDRESS,
        FieldType.STREET_ADDRESS, FieldType.POSTAL_CODE, FieldType.LATITUDE, FieldType.LONGITUDE,
    ],
    "identifier": [FieldType.STUDENT_ID, FieldType.EMPLOYEE_ID, FieldType.UUID, FieldType.USERNAME],
    "temporal": [
        FieldType.CREATED_AT, FieldType.UPDATED_AT, FieldType.REGISTRATION_DATE,
        FieldType.UNIX_TIMESTAMP, FieldType.ISO_DATE,
    ],
    "financial": [FieldType.CREDIT_CARD, FieldType.IBAN, FieldType.CURRENCY],
    "custom_random": [FieldType.RANDOM_STRING, FieldType.RANDOM_NUMERIC, FieldType.RANDOM_ALPHANUMERIC],
    "sequential": [FieldType.AUTO_INCREMENT, FieldType.AUTO_INCREMENT_CUSTOM],
    "boolean": [FieldType.BOOLEAN],
    "pattern": [FieldType.CUSTOM_PATTERN],
}

# Values of these types vary naturally or cannot be meaningfully deduplicated
UNIQUENESS_EXEMPT: FrozenSet[FieldType] = frozenset({
    FieldType.BOOLEAN,
    FieldType.CREATED_AT,
    FieldType.UPDATED_AT,
    FieldType.REGISTRATION_DATE,
    FieldType.UNIX_TIMESTAMP,
    FieldType.ISO_DATE,
})

RANDOM_STRING_TYPES: FrozenSet[FieldType] = frozenset(FIELD_CATEGORIES["custom_random"])


def parse_field_type(value: Union[str, FieldType]) -> Union[FieldType, str]:
    """
    Map a type tag to its FieldType member

    Unrecognized tags are returned unchanged so newer schemas still load;
    the generator emits an empty value for them.
    """
    if isinstance(value, FieldType):
        return value
    try:
        return FieldType(value)
    except ValueError:
        return str(value)


def enforces_uniqueness(field_type: Union[FieldType, str]) -> bool:
    """Whether the unique flag is honoured for this type"""
    return isinstance(field_type, FieldType) and field_type not in UNIQUENESS_EXEMPT
