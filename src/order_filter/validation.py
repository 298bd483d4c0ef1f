"""Settings validation.

The validator is an ordered list of independent checks. Each check either
passes (returns None), ends validation successfully (returns :class:`Ok`), or
fails (returns :class:`Failure`). The first non-None result wins.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from order_filter.config import Settings


class ValidationReason(str, Enum):
    INVALID_INPUT = "invalid_input"
    MISSING_DISTRICT = "missing_district"
    MISSING_OR_INVALID_DELIVERY_TIME = "missing_or_invalid_delivery_time"
    LOG_DIRECTORY_MISSING = "log_directory_missing"
    OUTPUT_DIRECTORY_MISSING = "output_directory_missing"


@dataclass(frozen=True, slots=True)
class Ok:
    """Validation passed.

    `config_driven` is set when the settings defer to an existing config file.
    """

    config_driven: bool = False


@dataclass(frozen=True, slots=True)
class Failure:
    reason: ValidationReason
    message: str


ValidationOutcome = Ok | Failure
SettingsCheck = Callable[[Settings], ValidationOutcome | None]


class SettingsValidationError(Exception):
    """Raised when settings fail validation."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure

    @property
    def reason(self) -> ValidationReason:
        return self.failure.reason


def _parent_dir_exists(path: Path) -> bool:
    return path.absolute().parent.is_dir()


def check_config_file(settings: Settings) -> ValidationOutcome | None:
    path = settings.config_file_path
    if path is not None and path.is_file():
        return Ok(config_driven=True)
    return None


def check_input_file(settings: Settings) -> ValidationOutcome | None:
    path = settings.input_file_path
    if not path.is_file():
        return Failure(
            ValidationReason.INVALID_INPUT,
            "The '--input' option is not provided or invalid.",
        )
    return None


def check_city_district(settings: Settings) -> ValidationOutcome | None:
    if not settings.city_district:
        return Failure(
            ValidationReason.MISSING_DISTRICT,
            "The '--city-district' filter option is not provided.",
        )
    return None


def check_first_delivery_date_time(settings: Settings) -> ValidationOutcome | None:
    value = settings.first_delivery_date_time
    if value is None or value == datetime.min:
        return Failure(
            ValidationReason.MISSING_OR_INVALID_DELIVERY_TIME,
            "The '--first-delivery-date-time' filter option is not provided or invalid.",
        )
    return None


def check_log_directory(settings: Settings) -> ValidationOutcome | None:
    path = settings.delivery_log_file_path
    if not _parent_dir_exists(path):
        return Failure(
            ValidationReason.LOG_DIRECTORY_MISSING,
            f"A root directory for the log '{path}' file does not exist!",
        )
    return None


def check_output_directory(settings: Settings) -> ValidationOutcome | None:
    path = settings.delivery_order_file_path
    if not _parent_dir_exists(path):
        return Failure(
            ValidationReason.OUTPUT_DIRECTORY_MISSING,
            f"A root directory for the delivery order '{path}' file does not exist!",
        )
    return None


DEFAULT_CHECKS: tuple[SettingsCheck, ...] = (
    check_config_file,
    check_input_file,
    check_city_district,
    check_first_delivery_date_time,
    check_log_directory,
    check_output_directory,
)


def validate_settings(
    settings: Settings, checks: Sequence[SettingsCheck] = DEFAULT_CHECKS
) -> ValidationOutcome:
    """Run `checks` in order and return the first decisive outcome."""

    for check in checks:
        outcome = check(settings)
        if outcome is not None:
            return outcome
    return Ok()


def ensure_valid(settings: Settings) -> Ok:
    """Validate settings, raising :class:`SettingsValidationError` on failure."""

    outcome = validate_settings(settings)
    if isinstance(outcome, Failure):
        raise SettingsValidationError(outcome)
    return outcome
