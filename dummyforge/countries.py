"""
Country and phone rule tables

Static lookup data: ISO country code to display name and national phone
number shapes for well-known countries. Calling codes for every other
region come from libphonenumber metadata via phonenumbers.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import phonenumbers


@dataclass(frozen=True)
class PhoneRule:
    """Shape of a national phone number"""
    dial_code: str
    min_length: int
    max_length: int


COUNTRIES: Dict[str, str] = {
    'AE': 'United Arab Emirates',
    'AR': 'Argentina',
    'AT': 'Austria',
    'AU': 'Australia',
    'BD': 'Bangladesh',
    'BE': 'Belgium',
    'BR': 'Brazil',
    'CA': 'Canada',
    'CH': 'Switzerland',
    'CL': 'Chile',
    'CN': 'China',
    'CO': 'Colombia',
    'CZ': 'Czech Republic',
    'DE': 'Germany',
    'DK': 'Denmark',
    'EG': 'Egypt',
    'ES': 'Spain',
    'FI': 'Finland',
    'FR': 'France',
    'GB': 'United Kingdom',
    'GH': 'Ghana',
    'GR': 'Greece',
    'HK': 'Hong Kong',
    'HU': 'Hungary',
    'ID': 'Indonesia',
    'IE': 'Ireland',
    'IL': 'Israel',
    'IN': 'India',
    'IT': 'Italy',
    'JP': 'Japan',
    'KE': 'Kenya',
    'KR': 'South Korea',
    'LK': 'Sri Lanka',
    'MA': 'Morocco',
    'MX': 'Mexico',
    'MY': 'Malaysia',
    'NG': 'Nigeria',
    'NL': 'Netherlands',
    'NO': 'Norway',
    'NP': 'Nepal',
    'NZ': 'New Zealand',
    'PE': 'Peru',
    'PH': 'Philippines',
    'PK': 'Pakistan',
    'PL': 'Poland',
    'PT': 'Portugal',
    'RO': 'Romania',
    'RU': 'Russia',
    'SA': 'Saudi Arabia',
    'SE': 'Sweden',
    'SG': 'Singapore',
    'TH': 'Thailand',
    'TR': 'Turkey',
    'TW': 'Taiwan',
    'UA': 'Ukraine',
    'US': 'United States',
    'VN': 'Vietnam',
    'ZA': 'South Africa',
}

PHONE_RULES: Dict[str, PhoneRule] = {
    'US': PhoneRule('1', 10, 10),
    'CA': PhoneRule('1', 10, 10),
    'GB': PhoneRule('44', 10, 10),
    'IE': PhoneRule('353', 9, 9),
    'AU': PhoneRule('61', 9, 9),
    'NZ': PhoneRule('64', 8, 9),
    'IN': PhoneRule('91', 10, 10),
    'PK': PhoneRule('92', 10, 10),
    'BD': PhoneRule('880', 10, 10),
    'LK': PhoneRule('94', 9, 9),
    'DE': PhoneRule('49', 10, 11),
    'FR': PhoneRule('33', 9, 9),
    'IT': PhoneRule('39', 9, 10),
    'ES': PhoneRule('34', 9, 9),
    'PT': PhoneRule('351', 9, 9),
    'NL': PhoneRule('31', 9, 9),
    'BE': PhoneRule('32', 8, 9),
    'CH': PhoneRule('41', 9, 9),
    'AT': PhoneRule('43', 10, 11),
    'SE': PhoneRule('46', 7, 9),
    'NO': PhoneRule('47', 8, 8),
    'DK': PhoneRule('45', 8, 8),
    'FI': PhoneRule('358', 9, 10),
    'PL': PhoneRule('48', 9, 9),
    'JP': PhoneRule('81', 10, 10),
    'CN': PhoneRule('86', 11, 11),
    'KR': PhoneRule('82', 9, 10),
    'SG': PhoneRule('65', 8, 8),
    'MY': PhoneRule('60', 9, 10),
    'PH': PhoneRule('63', 10, 10),
    'BR': PhoneRule('55', 10, 11),
    'MX': PhoneRule('52', 10, 10),
    'ZA': PhoneRule('27', 9, 9),
    'NG': PhoneRule('234', 10, 10),
    'AE': PhoneRule('971', 9, 9),
    'SA': PhoneRule('966', 9, 9),
}


def get_country_name(country_code: str) -> str:
    """Display name for a country code, or the code itself when unlisted"""
    return COUNTRIES.get(country_code, country_code)


def get_phone_rule(country_code: str) -> Optional[PhoneRule]:
    return PHONE_RULES.get(country_code)


def get_calling_code(country_code: str) -> Optional[str]:
    """International calling code for a country, or None for unknown regions"""
    rule = PHONE_RULES.get(country_code)
    if rule:
        return rule.dial_code
    if not country_code:
        return None
    # 0 means libphonenumber has no metadata for the region
    calling_code = phonenumbers.country_code_for_region(country_code.upper())
    return str(calling_code) if calling_code else None


def list_countries() -> List[Dict[str, str]]:
    """Countries sorted by name, for selectors and the API"""
    return [
        {'code': code, 'name': name}
        for code, name in sorted(COUNTRIES.items(), key=lambda item: item[1])
    ]
