"""
Input validation shared by every entry point.

Checks return a ValidationResult instead of raising, so routers consume them
the same way: ensure_valid(result, error_cls) raises the entity's format
error when the result is not ok.
"""
from dataclasses import dataclass
from typing import Optional, Type

from .services.errors import IncorrectFormatError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check: ok, or not ok with a reason."""
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


def validate_name(name: Optional[str], entity: str) -> ValidationResult:
    if name is None or not name.strip():
        return ValidationResult.invalid(f"{entity} name must not be blank")
    return ValidationResult.valid()


def validate_coordinates(latitude: float, longitude: float, entity: str = "Station") -> ValidationResult:
    if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
        return ValidationResult.invalid(f"{entity} latitude must be in range between -90 and 90")
    if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
        return ValidationResult.invalid(f"{entity} longitude must be in range between -180 and 180")
    return ValidationResult.valid()


def validate_radius(radius_km: float) -> ValidationResult:
    # NaN fails the comparison too
    if not radius_km >= 0:
        return ValidationResult.invalid("Radius must not be negative")
    return ValidationResult.valid()


def validate_company(name: Optional[str]) -> ValidationResult:
    return validate_name(name, "Company")


def validate_station(name: Optional[str], latitude: float, longitude: float) -> ValidationResult:
    for result in (
        validate_name(name, "Station"),
        validate_coordinates(latitude, longitude, "Station"),
    ):
        if not result.ok:
            return result
    return ValidationResult.valid()


def validate_radius_search(latitude: float, longitude: float, radius_km: float) -> ValidationResult:
    for result in (
        validate_coordinates(latitude, longitude, "Search"),
        validate_radius(radius_km),
    ):
        if not result.ok:
            return result
    return ValidationResult.valid()


def ensure_valid(result: ValidationResult, error_cls: Type[IncorrectFormatError]) -> None:
    """Raise error_cls(reason) when the result is not ok."""
    if not result.ok:
        raise error_cls(result.reason)
