"""
Record Generation Engine

Validates a generation request, then produces the requested number of
records field by field, coordinating gender and country derivation,
per-field uniqueness and auto-increment sequences.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import logging

import pandas as pd

from .config import ConfigValidator, EngineSettings, GenerationConfig, LocationConfig
from .errors import DummyForgeError, ErrorKind, create_error, log_error
from .field_types import enforces_uniqueness
from .generators import FieldValueGenerator, RecordContext
from .providers import FakerProvider, RandomValueProvider
from .tracking import AutoIncrementRegistry, UniquenessTracker

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

GENDER_OPTIONS = ["male", "female", "other", "non-binary"]


def determine_gender(index: int, male_percentage: float, female_percentage: float) -> str:
    """
    Deterministic gender for the record at index

    Steps through the 0-99 range in strides of 7 so the split tracks the
    configured percentages without randomness. Rolls beyond the male and
    female share cycle through all gender options.
    """
    roll = (index * 7) % 100

    if roll < male_percentage:
        return "male"
    if roll < male_percentage + female_percentage:
        return "female"
    return GENDER_OPTIONS[(index + 3) % len(GENDER_OPTIONS)]


@dataclass
class GenerationResult:
    """Result of data generation"""
    records: List[Record]
    generation_time: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.records)


class DataGenerator:
    """
    Main engine for synthetic record generation

    Uniqueness and counter state live only for the duration of one
    generate_records call, so an instance can be reused sequentially.
    Concurrent callers should use separate instances.
    """

    def __init__(
        self,
        provider: Optional[RandomValueProvider] = None,
        settings: Optional[EngineSettings] = None,
    ):
        """
        Initialize the engine

        Args:
            provider: Random value provider (Faker-backed if None)
            settings: Engine limits and locale (defaults if None)
        """
        self.settings = settings or EngineSettings()
        self.provider = provider or FakerProvider(self.settings.locale, self.settings.seed)
        self.fields = FieldValueGenerator(self.provider)

        logger.debug(f"DataGenerator initialized with {type(self.provider).__name__}")

    def _country_code(self, location: LocationConfig) -> str:
        if location.mode == "single":
            return location.single_country
        if location.mode == "specific":
            return self.provider.choice(location.countries)
        return self.provider.country_code()

    def generate_records(
        self,
        config: GenerationConfig,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> List[Record]:
        """
        Generate records for a request

        Args:
            config: Validated or unvalidated generation request
            progress_callback: Optional callback(done, total) after each record

        Returns:
            List of records, keys in field order

        Raises:
            DummyForgeError: Validation failures, UniquenessExhausted, or
                EngineFailure wrapping any unexpected exception
        """
        try:
            ConfigValidator.check(config, self.settings.max_records)
        except DummyForgeError as e:
            log_error(e, logger)
            raise

        tracker = UniquenessTracker(self.settings.max_unique_attempts)
        counters = AutoIncrementRegistry()
        demographics = config.demographics

        logger.info(f"Generating {config.count} records with {len(config.fields)} fields")

        records: List[Record] = []
        try:
            for index in range(config.count):
                ctx = RecordContext(
                    index=index,
                    gender=determine_gender(
                        index, demographics.male_percentage, demographics.female_percentage),
                    country_code=self._country_code(config.location),
                    age_config=demographics.age_config,
                    counters=counters,
                )

                record: Record = {}
                for field_config in config.fields:
                    value = self.fields.generate(field_config, ctx)

                    if field_config.unique and enforces_uniqueness(field_config.type):
                        value = tracker.ensure_unique(
                            field_config.name,
                            value,
                            lambda f=field_config, c=ctx: self.fields.generate(f, c, regenerate=True),
                            field_config.type_name,
                        )

                    record[field_config.name] = value

                records.append(record)

                if progress_callback:
                    progress_callback(index + 1, config.count)

        except DummyForgeError as e:
            log_error(e, logger)
            raise
        except Exception as e:
            error = create_error(
                ErrorKind.ENGINE_FAILURE,
                str(e),
                {"record_index": len(records), "original_error": type(e).__name__},
            )
            log_error(error, logger)
            raise error from e

        return records

    def run(
        self,
        config: GenerationConfig,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> GenerationResult:
        """
        Generate records and report timing and metadata

        Args:
            config: Generation request
            progress_callback: Optional callback for progress updates

        Returns:
            GenerationResult with records and metadata
        """
        start_time = time.time()

        records = self.generate_records(config, progress_callback)

        generation_time = time.time() - start_time

        result = GenerationResult(
            records=records,
            generation_time=generation_time,
            metadata={
                'num_records': len(records),
                'num_fields': len(config.fields),
                'field_names': [f.name for f in config.fields],
                'unique_fields': [f.name for f in config.fields if f.unique],
                'location_mode': config.location.mode,
                'timestamp': datetime.now().isoformat(),
            }
        )

        logger.info(f"Generation completed in {generation_time:.2f}s")

        return result

    def generate_frame(self, config: GenerationConfig) -> pd.DataFrame:
        """Generate records as a DataFrame with columns in field order"""
        records = self.generate_records(config)
        return pd.DataFrame(records, columns=[f.name for f in config.fields])
