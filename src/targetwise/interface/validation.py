"""Filter validation and feedback for MCP tools and the CLI.

The filter model itself only checks value shapes; these checks surface
suspicious but legal combinations as warnings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..domain.filters import FilterSet, Gender
from ..domain.pricing import PricingTable


class ValidationResult:
    """Result of filter validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None, warnings: list[str] | None = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.warnings = warnings or []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON response."""
        return {
            "valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
        }

    def add_error(self, error: str) -> ValidationResult:
        """Add an error and return self for chaining."""
        self.errors.append(error)
        self.is_valid = False
        return self

    def add_warning(self, warning: str) -> ValidationResult:
        """Add a warning and return self for chaining."""
        self.warnings.append(warning)
        return self


def validate_filters(
    filters: FilterSet,
    pricing: PricingTable | None = None,
    current_year: int | None = None,
) -> ValidationResult:
    """Check enabled dimensions for values that cannot match or price as intended.

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult(is_valid=True)

    if filters.gender.enabled and filters.gender.value == Gender.any:
        result.add_warning("gender is enabled with ANY; it matches everyone but still raises the unit price")

    if filters.age_range.enabled:
        age = filters.age_range.value
        if age.min > age.max:
            result.add_error(f"ageRange min ({age.min}) is greater than max ({age.max})")
        if age.min < 0:
            result.add_warning(f"ageRange min is negative ({age.min})")
        year = current_year if current_year is not None else datetime.now(timezone.utc).year
        if age.max >= year:
            result.add_warning(
                f"ageRange max ({age.max}) reaches {year}; customers without a birth year match it "
                "under the zero policy"
            )
        elif age.max > 120:
            result.add_warning(f"ageRange max ({age.max}) is above any plausible age")

    if filters.region.enabled:
        region = filters.region.value
        if not region.sido and not region.sigungu:
            result.add_warning("region is enabled but empty; it matches everyone but still raises the unit price")
        elif region.sigungu and not region.sido:
            result.add_warning("sigungu without sido is not scoped to a province; same-named districts all match")

    if filters.radius.enabled:
        if filters.radius.value.meters == 0:
            result.add_warning("radius is 0 m; only customers at the exact centre match")

    pricing = pricing or PricingTable()
    active = filters.active_count()
    if pricing.unit_price(active) == 0:
        result.add_warning(f"{active} active filter(s) price at 0 won; submission will be blocked")
    elif active > pricing.max_index:
        result.add_warning(f"{active} active filters exceed the pricing table; the top tier applies")

    return result


def validate_and_quote(filters: FilterSet, pricing: PricingTable | None = None) -> dict[str, Any]:
    """Run validation and report the unit price in one call."""
    pricing = pricing or PricingTable()
    validation = validate_filters(filters, pricing)
    active = filters.active_count()
    return {
        "validation": validation.to_dict(),
        "active_filters": [d.value for d in filters.active_dimensions()],
        "unit_price": pricing.unit_price(active),
        "summary": {
            "valid": validation.is_valid,
            "error_count": len(validation.errors),
            "warning_count": len(validation.warnings),
        },
    }
