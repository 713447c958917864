"""
Configuration Management Module

Generation requests (fields, count, demographics, location), application
settings, loading from YAML/JSON/dicts, validation and packaged presets.
"""

import re
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union
from dataclasses import dataclass, field, asdict, fields as dataclass_fields
from copy import deepcopy
import logging

from .errors import DummyForgeError, ErrorKind, create_error
from .field_types import FieldType, RANDOM_STRING_TYPES, parse_field_type
from .utils import FileHandler

logger = logging.getLogger(__name__)

MAX_RECORDS = 10000
FIELD_NAME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9_]*$')
AGE_MODES = ('between', 'under', 'above', 'exact')
LOCATION_MODES = ('random', 'specific', 'single')
DATE_FORMATS = ('iso', 'us', 'eu')

DEFAULT_LENGTH_MIN = 5
DEFAULT_LENGTH_MAX = 12
MAX_STRING_LENGTH = 1000
DEFAULT_PATTERN = 'XXX-####-XXX'

INT_OPTIONS = ('length_min', 'length_max', 'start', 'step')
NUMBER_OPTIONS = ('number_min', 'number_max', 'boolean_true_percentage')
TEXT_OPTIONS = ('prefix', 'suffix', 'pattern', 'date_format')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class AgeConfig:
    """Age policy: between{min,max} | under{max} | above{min} | exact{value}"""
    mode: str = "between"
    min: Optional[int] = 18
    max: Optional[int] = 65
    value: Optional[int] = None

    @classmethod
    def between(cls, min_age: int, max_age: int) -> 'AgeConfig':
        return cls(mode="between", min=min_age, max=max_age)

    @classmethod
    def under(cls, max_age: int) -> 'AgeConfig':
        return cls(mode="under", min=None, max=max_age)

    @classmethod
    def above(cls, min_age: int) -> 'AgeConfig':
        return cls(mode="above", min=min_age, max=None)

    @classmethod
    def exact(cls, age: int) -> 'AgeConfig':
        return cls(mode="exact", min=None, max=None, value=age)


@dataclass
class DemographicsConfig:
    """Gender split (percentages) and age policy"""
    male_percentage: float = 50
    female_percentage: float = 50
    age_config: AgeConfig = field(default_factory=AgeConfig)


@dataclass
class LocationConfig:
    """Country selection policy: random, specific (list) or single (fixed)"""
    mode: str = "random"
    countries: List[str] = field(default_factory=list)
    single_country: Optional[str] = None


@dataclass
class FieldOptions:
    """Type-specific parameters for one field"""
    length_min: Optional[int] = None
    length_max: Optional[int] = None
    number_min: Optional[float] = None
    number_max: Optional[float] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    start: Optional[int] = None
    step: Optional[int] = None
    pattern: Optional[str] = None
    date_format: Optional[str] = None  # iso, us, eu
    boolean_true_percentage: Optional[float] = None


@dataclass
class FieldConfig:
    """One output column"""
    name: str
    type: Union[FieldType, str]
    unique: bool = False
    config: FieldOptions = field(default_factory=FieldOptions)

    def __post_init__(self):
        self.type = parse_field_type(self.type)
        if self.config is None:
            self.config = FieldOptions()

    @property
    def type_name(self) -> str:
        return self.type.value if isinstance(self.type, FieldType) else str(self.type)


@dataclass
class GenerationConfig:
    """A complete generation request"""
    fields: List[FieldConfig] = field(default_factory=list)
    count: int = 100
    demographics: DemographicsConfig = field(default_factory=DemographicsConfig)
    location: LocationConfig = field(default_factory=LocationConfig)


@dataclass
class EngineSettings:
    """Limits and randomness settings for the engine"""
    max_records: int = MAX_RECORDS
    max_unique_attempts: int = 100
    locale: str = "en_US"
    seed: Optional[int] = None


@dataclass
class ExportSettings:
    """Defaults for writing generated records to disk"""
    formats: List[str] = field(default_factory=lambda: ["csv"])
    table_name: str = "GeneratedData"
    output_dir: str = "output"
    filename: str = "data"


@dataclass
class LoggingSettings:
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Settings:
    """Application settings combining all sub-settings"""
    engine: EngineSettings = field(default_factory=EngineSettings)
    export: ExportSettings = field(default_factory=ExportSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merge(self, other: 'Settings') -> 'Settings':
        """Merge another settings object into this one (other's non-None values win)"""
        merged = deepcopy(self)

        for key in ['engine', 'export', 'logging']:
            other_section = getattr(other, key)
            merged_section = getattr(merged, key)
            for field_name, field_value in asdict(other_section).items():
                if field_value is not None:
                    setattr(merged_section, field_name, field_value)

        return merged


def _snake_case(key: str) -> str:
    """lengthMin -> length_min; snake_case keys pass through"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', key).lower()


def _camel_case(key: str) -> str:
    head, *rest = key.split('_')
    return head + ''.join(part.capitalize() for part in rest)


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {_snake_case(str(key)): value for key, value in data.items()}


def _build(cls, data: Optional[Dict[str, Any]], context: str):
    """Instantiate a flat dataclass from a dict, dropping unknown keys"""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise create_error(
            ErrorKind.INVALID_FIELD_CONFIG,
            f"{context} must be a mapping, got {type(data).__name__}",
        )

    known = {f.name for f in dataclass_fields(cls)}
    normalized = _normalize_keys(data)
    unknown = set(normalized) - known
    if unknown:
        logger.debug(f"Ignoring unknown keys in {context}: {sorted(unknown)}")

    return cls(**{key: value for key, value in normalized.items() if key in known})


def _strip_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def generation_config_to_dict(config: GenerationConfig) -> Dict[str, Any]:
    """Serialize a request to its camelCase wire form"""
    age = config.demographics.age_config
    age_dict: Dict[str, Any] = {'mode': age.mode}
    if age.mode == 'between':
        age_dict.update({'min': age.min, 'max': age.max})
    elif age.mode == 'under':
        age_dict['max'] = age.max
    elif age.mode == 'above':
        age_dict['min'] = age.min
    else:
        age_dict['value'] = age.value

    location: Dict[str, Any] = {'mode': config.location.mode}
    if config.location.countries:
        location['countries'] = list(config.location.countries)
    if config.location.single_country:
        location['singleCountry'] = config.location.single_country

    fields_out = []
    for field_config in config.fields:
        entry: Dict[str, Any] = {
            'name': field_config.name,
            'type': field_config.type_name,
            'unique': field_config.unique,
        }
        options = {_camel_case(k): v for k, v in _strip_none(asdict(field_config.config)).items()}
        if options:
            entry['config'] = options
        fields_out.append(entry)

    return {
        'fields': fields_out,
        'count': config.count,
        'demographics': {
            'malePercentage': config.demographics.male_percentage,
            'femalePercentage': config.demographics.female_percentage,
            'ageConfig': age_dict,
        },
        'location': location,
    }


class ConfigLoader:
    """Loads generation requests, settings and presets"""

    def __init__(self, preset_dir: Optional[Path] = None):
        """
        Initialize the configuration loader

        Args:
            preset_dir: Directory containing preset YAML files
        """
        if preset_dir is None:
            self.preset_dir = Path(__file__).parent / "presets"
        else:
            self.preset_dir = Path(preset_dir)

        self.presets = self._load_presets()

    def _load_presets(self) -> Dict[str, GenerationConfig]:
        """Load all available preset requests"""
        presets = {}

        if not self.preset_dir.exists():
            logger.warning(f"Preset directory not found: {self.preset_dir}")
            return presets

        for preset_file in sorted(self.preset_dir.glob("*.yaml")):
            preset_name = preset_file.stem
            try:
                presets[preset_name] = self.load_from_file(preset_file)
                logger.debug(f"Loaded preset: {preset_name}")
            except (OSError, ValueError, yaml.YAMLError, DummyForgeError) as e:
                logger.error(f"Failed to load preset {preset_name}: {e}")

        return presets

    @staticmethod
    def _read(filepath: Union[str, Path]) -> Dict[str, Any]:
        data = FileHandler.read_config(filepath)
        if not isinstance(data, dict):
            raise create_error(
                ErrorKind.INVALID_FIELD_CONFIG,
                f"{filepath} must contain a mapping at the top level",
            )
        return data

    def load_from_file(self, filepath: Union[str, Path]) -> GenerationConfig:
        """
        Load a generation request from a YAML or JSON file

        Args:
            filepath: Path to the request file

        Returns:
            GenerationConfig object
        """
        return self.load_from_dict(self._read(filepath))

    def load_from_dict(self, config_dict: Dict[str, Any]) -> GenerationConfig:
        """
        Load a generation request from a dictionary

        Accepts the camelCase wire format (malePercentage, ageConfig,
        singleCountry, lengthMin, ...) as well as snake_case keys.

        Args:
            config_dict: Request dictionary

        Returns:
            GenerationConfig object
        """
        data = _normalize_keys(config_dict)

        fields_data = data.get('fields') or []
        if not isinstance(fields_data, list):
            raise create_error(ErrorKind.INVALID_FIELD_CONFIG, "fields must be a list")

        field_configs = []
        for index, raw in enumerate(fields_data):
            if not isinstance(raw, dict) or 'name' not in raw or 'type' not in raw:
                raise create_error(
                    ErrorKind.INVALID_FIELD_CONFIG,
                    f"Field #{index} needs a name and a type",
                    {'field_index': index},
                )
            field_configs.append(FieldConfig(
                name=str(raw['name']),
                type=raw['type'],
                unique=bool(raw.get('unique', False)),
                config=_build(FieldOptions, raw.get('config'), f"field '{raw['name']}' config"),
            ))

        demographics_data = data.get('demographics') or {}
        if not isinstance(demographics_data, dict):
            raise create_error(ErrorKind.INVALID_DEMOGRAPHICS, "demographics must be a mapping")
        demographics_data = _normalize_keys(demographics_data)
        demographics = DemographicsConfig(
            male_percentage=demographics_data.get('male_percentage', 50),
            female_percentage=demographics_data.get('female_percentage', 50),
            age_config=_build(AgeConfig, demographics_data.get('age_config'), "ageConfig"),
        )

        location = _build(LocationConfig, data.get('location'), "location")
        if location.countries is None:
            location.countries = []

        return GenerationConfig(
            fields=field_configs,
            count=data.get('count', 100),
            demographics=demographics,
            location=location,
        )

    def load_settings(self, source: Union[str, Path, Dict[str, Any], None] = None) -> Settings:
        """
        Load application settings from a file or dictionary

        Missing sections fall back to defaults.
        """
        if source is None:
            return Settings()

        data = source if isinstance(source, dict) else self._read(source)

        return Settings(
            engine=_build(EngineSettings, data.get('engine'), "engine settings"),
            export=_build(ExportSettings, data.get('export'), "export settings"),
            logging=_build(LoggingSettings, data.get('logging'), "logging settings"),
        )

    def load_preset(self, preset_name: str) -> GenerationConfig:
        """
        Load a preset request by name

        Args:
            preset_name: Name of the preset (e.g., 'students', 'customers')

        Returns:
            GenerationConfig object
        """
        if preset_name not in self.presets:
            available = ", ".join(self.presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available: {available}")

        return deepcopy(self.presets[preset_name])

    def save_config(self, config: GenerationConfig, filepath: Union[str, Path]):
        """
        Save a generation request to a YAML file

        Args:
            config: Request to save
            filepath: Path to save the file
        """
        FileHandler.write_config(generation_config_to_dict(config), filepath)
        logger.info(f"Configuration saved to: {filepath}")

    def list_presets(self) -> List[str]:
        """Get list of available preset names"""
        return list(self.presets.keys())


class ConfigValidator:
    """Validates generation requests before any record is produced"""

    @staticmethod
    def collect_errors(config: GenerationConfig, max_records: int = MAX_RECORDS) -> List[DummyForgeError]:
        """
        Every problem with a request, in the order the engine reports them

        Args:
            config: Request to validate
            max_records: Upper bound on config.count

        Returns:
            List of errors (empty when the request is valid)
        """
        errors: List[DummyForgeError] = []

        # Settings may lower the limit but never raise it
        limit = min(max_records, MAX_RECORDS)
        count = config.count
        if not _is_int(count) or not 1 <= count <= limit:
            errors.append(create_error(
                ErrorKind.COUNT_EXCEEDED,
                f"Requested {count} records",
                {'requested_count': count, 'max_allowed': limit},
            ))

        if not config.fields:
            errors.append(create_error(ErrorKind.NO_FIELDS_SELECTED))

        demographics = config.demographics
        male, female = demographics.male_percentage, demographics.female_percentage
        if not _is_number(male) or not _is_number(female):
            errors.append(create_error(
                ErrorKind.INVALID_DEMOGRAPHICS,
                "Percentages must be numbers",
                {'male_percentage': male, 'female_percentage': female},
            ))
        elif male + female != 100:
            total = male + female
            errors.append(create_error(
                ErrorKind.INVALID_DEMOGRAPHICS,
                f"Total percentage: {total}%",
                {'male_percentage': male, 'female_percentage': female, 'total': total},
            ))

        errors.extend(ConfigValidator._age_errors(demographics.age_config))

        seen_names = set()
        for field_config in config.fields:
            name = field_config.name
            if not isinstance(name, str) or not FIELD_NAME_PATTERN.match(name):
                errors.append(create_error(
                    ErrorKind.INVALID_FIELD_NAME,
                    f"'{field_config.name}'",
                    {'field_name': field_config.name},
                ))
            elif name in seen_names:
                errors.append(create_error(
                    ErrorKind.DUPLICATE_FIELD_NAME,
                    f"'{field_config.name}'",
                    {'field_name': field_config.name},
                ))
            else:
                seen_names.add(name)

            errors.extend(ConfigValidator.validate_field(field_config))

        errors.extend(ConfigValidator._location_errors(config.location))

        return errors

    @staticmethod
    def _age_errors(age: AgeConfig) -> List[DummyForgeError]:
        if age.mode not in AGE_MODES:
            return [create_error(ErrorKind.INVALID_AGE_RANGE, f"Unknown age mode '{age.mode}'")]

        required = {
            'between': ('min', 'max'),
            'under': ('max',),
            'above': ('min',),
            'exact': ('value',),
        }[age.mode]
        missing = [name for name in required if getattr(age, name) is None]
        if missing:
            return [create_error(
                ErrorKind.INVALID_AGE_RANGE,
                f"Age mode '{age.mode}' requires {', '.join(missing)}",
            )]

        malformed = [name for name in required if not _is_int(getattr(age, name))]
        if malformed:
            return [create_error(
                ErrorKind.INVALID_AGE_RANGE,
                f"Age {', '.join(malformed)} must be whole numbers",
                {name: getattr(age, name) for name in malformed},
            )]

        if age.mode == 'between' and age.min >= age.max:
            return [create_error(
                ErrorKind.INVALID_AGE_RANGE,
                f"Invalid range: {age.min} - {age.max}",
                {'min': age.min, 'max': age.max},
            )]

        return []

    @staticmethod
    def _location_errors(location: LocationConfig) -> List[DummyForgeError]:
        if location.mode not in LOCATION_MODES:
            return [create_error(ErrorKind.INVALID_LOCATION, f"Unknown location mode '{location.mode}'")]
        countries = location.countries
        if not isinstance(countries, list) or not all(isinstance(code, str) for code in countries):
            return [create_error(ErrorKind.INVALID_LOCATION, "Countries must be a list of country codes")]
        if location.single_country is not None and not isinstance(location.single_country, str):
            return [create_error(ErrorKind.INVALID_LOCATION, "Single country must be a country code")]
        if location.mode == 'specific' and not countries:
            return [create_error(ErrorKind.INVALID_LOCATION, "Specific mode needs at least one country")]
        if location.mode == 'single' and not location.single_country:
            return [create_error(ErrorKind.INVALID_LOCATION, "Single mode needs a country")]
        return []

    @staticmethod
    def _option_type_ok(name: str, value: Any) -> bool:
        if name in INT_OPTIONS:
            return _is_int(value)
        if name in NUMBER_OPTIONS:
            return _is_number(value)
        return isinstance(value, str)

    @staticmethod
    def validate_field(field_config: FieldConfig) -> List[DummyForgeError]:
        """
        Validate field-specific options

        Args:
            field_config: Field to check

        Returns:
            List of errors for this field
        """
        errors = []
        options = field_config.config
        context = {'field_name': field_config.name, 'field_type': field_config.type_name}

        malformed = [
            name for name in INT_OPTIONS + NUMBER_OPTIONS + TEXT_OPTIONS
            if getattr(options, name) is not None and not ConfigValidator._option_type_ok(name, getattr(options, name))
        ]
        if malformed:
            # Range checks below assume well-typed options
            return [create_error(
                ErrorKind.INVALID_FIELD_CONFIG,
                f"{field_config.name}: wrong type for {', '.join(malformed)}",
                {**context, 'options': malformed},
            )]

        if field_config.type in RANDOM_STRING_TYPES:
            length_min = DEFAULT_LENGTH_MIN if options.length_min is None else options.length_min
            length_max = DEFAULT_LENGTH_MAX if options.length_max is None else options.length_max
            if length_min < 1 or length_max > MAX_STRING_LENGTH or length_min > length_max:
                errors.append(create_error(
                    ErrorKind.INVALID_STRING_LENGTH,
                    f"{field_config.name}: length {length_min}-{length_max}",
                    context,
                ))

        if options.number_min is not None and options.number_max is not None:
            if options.number_min >= options.number_max:
                errors.append(create_error(
                    ErrorKind.INVALID_NUMBER_RANGE,
                    f"{field_config.name}: {options.number_min} - {options.number_max}",
                    context,
                ))

        if field_config.type == FieldType.CUSTOM_PATTERN and options.pattern:
            if 'X' not in options.pattern and '#' not in options.pattern:
                errors.append(create_error(
                    ErrorKind.INVALID_PATTERN,
                    f"{field_config.name}: '{options.pattern}' has no X or # placeholder",
                    context,
                ))

        if field_config.type == FieldType.AUTO_INCREMENT_CUSTOM and options.step == 0:
            errors.append(create_error(
                ErrorKind.INVALID_FIELD_CONFIG,
                f"{field_config.name}: step must not be 0",
                context,
            ))

        if options.date_format is not None and options.date_format not in DATE_FORMATS:
            errors.append(create_error(
                ErrorKind.INVALID_FIELD_CONFIG,
                f"{field_config.name}: dateFormat must be one of {list(DATE_FORMATS)}",
                context,
            ))

        return errors

    @staticmethod
    def validate(config: GenerationConfig, max_records: int = MAX_RECORDS) -> Tuple[bool, List[str]]:
        """
        Validate a request

        Args:
            config: Request to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = [str(error) for error in ConfigValidator.collect_errors(config, max_records)]
        return len(errors) == 0, errors

    @staticmethod
    def check(config: GenerationConfig, max_records: int = MAX_RECORDS):
        """Raise the first validation error, if any"""
        errors = ConfigValidator.collect_errors(config, max_records)
        if errors:
            raise errors[0]


def get_default_settings() -> Settings:
    """Get the default application settings"""
    return Settings()


def get_default_generation_config() -> GenerationConfig:
    """A small people table used when no request file or preset is given"""
    return GenerationConfig(
        fields=[
            FieldConfig(name="id", type=FieldType.AUTO_INCREMENT, unique=True),
            FieldConfig(name="firstName", type=FieldType.FIRST_NAME),
            FieldConfig(name="lastName", type=FieldType.LAST_NAME),
            FieldConfig(name="gender", type=FieldType.GENDER),
            FieldConfig(name="age", type=FieldType.AGE),
            FieldConfig(name="email", type=FieldType.EMAIL, unique=True),
            FieldConfig(name="phone", type=FieldType.PHONE),
            FieldConfig(name="country", type=FieldType.COUNTRY),
        ],
        count=100,
    )
