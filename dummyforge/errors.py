"""
Error Catalogue Module

Typed errors raised by the generation engine, configuration validation
and exporters. Every error kind maps to a catalogue entry carrying a code,
a user-facing message and a suggested resolution.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Broad area an error belongs to"""
    GENERATION = "GEN"
    VALIDATION = "VAL"
    EXPORT = "EXP"
    SYSTEM = "SYS"


class ErrorSeverity(Enum):
    """How serious an error is for the user"""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorKind(Enum):
    """Machine-readable failure kinds"""
    COUNT_EXCEEDED = "CountExceeded"
    NO_FIELDS_SELECTED = "NoFieldsSelected"
    INVALID_DEMOGRAPHICS = "InvalidDemographics"
    INVALID_AGE_RANGE = "InvalidAgeRange"
    UNIQUENESS_EXHAUSTED = "UniquenessExhausted"
    ENGINE_FAILURE = "EngineFailure"
    INVALID_FIELD_CONFIG = "InvalidFieldConfig"
    INVALID_FIELD_NAME = "InvalidFieldName"
    DUPLICATE_FIELD_NAME = "DuplicateFieldName"
    INVALID_PATTERN = "InvalidPattern"
    INVALID_NUMBER_RANGE = "InvalidNumberRange"
    INVALID_STRING_LENGTH = "InvalidStringLength"
    INVALID_LOCATION = "InvalidLocation"
    NO_DATA_TO_EXPORT = "NoDataToExport"
    UNSUPPORTED_EXPORT_FORMAT = "UnsupportedExportFormat"
    EXPORT_FAILED = "ExportFailed"


@dataclass(frozen=True)
class ErrorCode:
    """Catalogue entry describing one error kind"""
    code: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    user_message: str
    resolution: str
    log_level: str  # info, warn, error, fatal


ERROR_CODES: Dict[ErrorKind, ErrorCode] = {
    ErrorKind.UNIQUENESS_EXHAUSTED: ErrorCode(
        code="DF-GEN-001",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.MEDIUM,
        message="Failed to generate unique value after maximum attempts",
        user_message=(
            "Unable to generate enough unique values for this field. Try reducing "
            "the number of records or removing uniqueness constraint."
        ),
        resolution="Reduce record count, remove unique constraint, or use a different field type",
        log_level="warn",
    ),
    ErrorKind.INVALID_FIELD_CONFIG: ErrorCode(
        code="DF-GEN-002",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.HIGH,
        message="Invalid field configuration",
        user_message="One or more fields are configured incorrectly. Please check your field settings.",
        resolution="Review field configuration and ensure all required parameters are valid",
        log_level="error",
    ),
    ErrorKind.COUNT_EXCEEDED: ErrorCode(
        code="DF-GEN-003",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.HIGH,
        message="Record count outside the allowed range",
        user_message="You can generate between 1 and 10,000 records at a time.",
        resolution="Set the record count to a value from 1 to 10,000",
        log_level="warn",
    ),
    ErrorKind.NO_FIELDS_SELECTED: ErrorCode(
        code="DF-GEN-004",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.HIGH,
        message="No fields selected for generation",
        user_message="Please select at least one field to generate data.",
        resolution="Select one or more fields from the available options",
        log_level="warn",
    ),
    ErrorKind.ENGINE_FAILURE: ErrorCode(
        code="DF-GEN-005",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.CRITICAL,
        message="Data generation engine failure",
        user_message="Data generation stopped because of an unexpected error.",
        resolution="Retry the generation. If the problem persists, report it with the log file",
        log_level="fatal",
    ),
    ErrorKind.INVALID_DEMOGRAPHICS: ErrorCode(
        code="DF-GEN-006",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid demographics configuration",
        user_message="Gender percentages must add up to 100%. Please adjust your settings.",
        resolution="Ensure male + female percentages equal 100%",
        log_level="warn",
    ),
    ErrorKind.INVALID_AGE_RANGE: ErrorCode(
        code="DF-GEN-007",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid age range configuration",
        user_message="Age range is invalid. Minimum age must be less than maximum age.",
        resolution="Set a valid age range (e.g., min: 18, max: 65)",
        log_level="warn",
    ),
    ErrorKind.INVALID_LOCATION: ErrorCode(
        code="DF-GEN-008",
        category=ErrorCategory.GENERATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid location configuration",
        user_message="Choose at least one country for 'specific' mode, or a country for 'single' mode.",
        resolution="Add a country to the location settings or switch to random countries",
        log_level="warn",
    ),
    ErrorKind.NO_DATA_TO_EXPORT: ErrorCode(
        code="DF-EXP-005",
        category=ErrorCategory.EXPORT,
        severity=ErrorSeverity.HIGH,
        message="No data available for export",
        user_message="No data has been generated yet. Please generate data before exporting.",
        resolution="Generate data first, then try exporting again",
        log_level="warn",
    ),
    ErrorKind.UNSUPPORTED_EXPORT_FORMAT: ErrorCode(
        code="DF-EXP-006",
        category=ErrorCategory.EXPORT,
        severity=ErrorSeverity.MEDIUM,
        message="Export format not supported",
        user_message="Please select an export format (SQL, CSV, TXT, fixed-width text, PDF, or XLSX).",
        resolution="Use one of: sql, csv, txt, fixed, pdf, xlsx",
        log_level="warn",
    ),
    ErrorKind.EXPORT_FAILED: ErrorCode(
        code="DF-EXP-001",
        category=ErrorCategory.EXPORT,
        severity=ErrorSeverity.HIGH,
        message="Failed to write export file",
        user_message="Unable to save the export. The file may be in use or you may not have write permissions.",
        resolution="Close any programs using the file and ensure you have write permissions",
        log_level="error",
    ),
    ErrorKind.INVALID_FIELD_NAME: ErrorCode(
        code="DF-VAL-001",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid field name",
        user_message="Field name is invalid. Use only letters, numbers, and underscores. No spaces allowed.",
        resolution='Enter a valid field name (e.g., "student_id", "firstName")',
        log_level="warn",
    ),
    ErrorKind.DUPLICATE_FIELD_NAME: ErrorCode(
        code="DF-VAL-002",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        message="Duplicate field name",
        user_message="This field name already exists. Please use a unique name.",
        resolution="Choose a different field name",
        log_level="warn",
    ),
    ErrorKind.INVALID_PATTERN: ErrorCode(
        code="DF-VAL-003",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid custom pattern",
        user_message='The pattern you entered is invalid. Use "X" for letters and "#" for numbers.',
        resolution='Enter a valid pattern (e.g., "XXX-###-XXX")',
        log_level="warn",
    ),
    ErrorKind.INVALID_NUMBER_RANGE: ErrorCode(
        code="DF-VAL-004",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid number range",
        user_message="Invalid number range. Minimum must be less than maximum.",
        resolution="Enter a valid range where min < max",
        log_level="warn",
    ),
    ErrorKind.INVALID_STRING_LENGTH: ErrorCode(
        code="DF-VAL-005",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        message="Invalid string length",
        user_message="String length must be between 1 and 1000 characters.",
        resolution="Enter a length between 1 and 1000, with minimum not above maximum",
        log_level="warn",
    ),
}

_SEVERITY_TITLES = {
    ErrorSeverity.LOW: "Information",
    ErrorSeverity.MEDIUM: "Warning",
    ErrorSeverity.HIGH: "Error",
    ErrorSeverity.CRITICAL: "Critical Error",
}

_LOG_LEVELS = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


class DummyForgeError(Exception):
    """
    Error raised by the generator, validators and exporters

    Carries the catalogue entry for its kind plus technical details and
    free-form context for diagnostics.
    """

    def __init__(
        self,
        kind: ErrorKind,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        entry = ERROR_CODES[kind]
        message = entry.message
        if technical_details:
            message = f"{entry.message}: {technical_details}"
        super().__init__(message)

        self.kind = kind
        self.code = entry.code
        self.category = entry.category
        self.severity = entry.severity
        self.user_message = entry.user_message
        self.resolution = entry.resolution
        self.log_level = entry.log_level
        self.technical_details = technical_details
        self.context = context or {}
        self.timestamp = datetime.now()

    @property
    def title(self) -> str:
        return _SEVERITY_TITLES[self.severity]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for logs and API responses"""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": str(self),
            "user_message": self.user_message,
            "resolution": self.resolution,
            "technical_details": self.technical_details,
            "context": {key: str(value) for key, value in self.context.items()},
            "timestamp": self.timestamp.isoformat(),
        }

    def to_user_display(self) -> Dict[str, str]:
        """Title, message, resolution and code for presentation layers"""
        return {
            "title": self.title,
            "message": self.user_message,
            "resolution": self.resolution,
            "code": self.code,
        }


def create_error(
    kind: ErrorKind,
    technical_details: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> DummyForgeError:
    """Build an error of the given kind"""
    return DummyForgeError(kind, technical_details, context)


def log_error(error: Exception, logger: logging.Logger):
    """Log an error at the level its catalogue entry asks for"""
    if isinstance(error, DummyForgeError):
        logger.log(
            _LOG_LEVELS.get(error.log_level, logging.ERROR),
            f"[{error.code}] {error} context={error.context}",
        )
    else:
        logger.error(f"Unexpected error: {error}", exc_info=error)
