"""TargetingEngine: evaluates a FilterSet against a customer snapshot."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from .customer import Customer
from .filters import Dimension, FilterSet, Gender
from .geo import within_radius


class MissingBirthYearPolicy(str, Enum):
    """How an enabled age filter treats customers without a birth year."""

    zero = "zero"          # birth year 0: huge age, fails any bounded range
    exclude = "exclude"    # always rejected
    include = "include"    # age check skipped


class TargetingEngine:
    """Pure predicate chain over the enabled dimensions of a FilterSet.

    Never raises for incomplete customers: a customer missing the data a
    dimension needs simply fails that dimension.
    """

    def __init__(
        self,
        missing_birth_year_policy: MissingBirthYearPolicy = MissingBirthYearPolicy.zero,
        current_year: int | None = None,
    ) -> None:
        self._missing_birth_year = MissingBirthYearPolicy(missing_birth_year_policy)
        self._current_year = current_year

    @property
    def missing_birth_year_policy(self) -> MissingBirthYearPolicy:
        return self._missing_birth_year

    @property
    def current_year(self) -> int | None:
        return self._current_year

    def evaluate(
        self,
        filter_set: FilterSet,
        customers: Iterable[Customer],
        current_year: int | None = None,
    ) -> list[Customer]:
        """Return the customers rejected by none of the enabled dimensions, in input order."""
        year = self._year(current_year)
        return [c for c in customers if self.rejected_by(filter_set, c, year) is None]

    def matches(self, filter_set: FilterSet, customer: Customer, current_year: int | None = None) -> bool:
        return self.rejected_by(filter_set, customer, self._year(current_year)) is None

    def reason(self, filter_set: FilterSet, customer: Customer, current_year: int | None = None) -> str:
        """Return audit reason for this customer: 'allowed' or 'denied: <dimension>'."""
        dimension = self.rejected_by(filter_set, customer, self._year(current_year))
        if dimension is None:
            return "allowed"
        return f"denied: {dimension.value}"

    def rejected_by(self, filter_set: FilterSet, customer: Customer, current_year: int) -> Dimension | None:
        """First enabled dimension the customer fails, or None."""
        if not self._gender_ok(filter_set, customer):
            return Dimension.gender
        if not self._age_ok(filter_set, customer, current_year):
            return Dimension.age_range
        if not self._region_ok(filter_set, customer):
            return Dimension.region
        if not self._radius_ok(filter_set, customer):
            return Dimension.radius
        return None

    def _year(self, current_year: int | None) -> int:
        if current_year is not None:
            return current_year
        if self._current_year is not None:
            return self._current_year
        return datetime.now(timezone.utc).year

    @staticmethod
    def _gender_ok(filter_set: FilterSet, customer: Customer) -> bool:
        dim = filter_set.gender
        if not dim.enabled or dim.value == Gender.any:
            return True
        return customer.gender == dim.value.value

    def _age_ok(self, filter_set: FilterSet, customer: Customer, current_year: int) -> bool:
        dim = filter_set.age_range
        if not dim.enabled:
            return True
        birth_year = customer.birth_year
        if birth_year is None:
            if self._missing_birth_year == MissingBirthYearPolicy.include:
                return True
            if self._missing_birth_year == MissingBirthYearPolicy.exclude:
                return False
            birth_year = 0
        age = current_year - birth_year
        return dim.value.min <= age <= dim.value.max

    @staticmethod
    def _region_ok(filter_set: FilterSet, customer: Customer) -> bool:
        dim = filter_set.region
        if not dim.enabled:
            return True
        if dim.value.sido and customer.sido != dim.value.sido:
            return False
        if dim.value.sigungu and customer.sigungu != dim.value.sigungu:
            return False
        return True

    @staticmethod
    def _radius_ok(filter_set: FilterSet, customer: Customer) -> bool:
        dim = filter_set.radius
        if not dim.enabled:
            return True
        if not customer.has_coordinates:
            return False
        area = dim.value
        return within_radius(area.center_lat, area.center_lng, customer.lat, customer.lng, area.meters)
