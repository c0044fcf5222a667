"""TargetingEngine tests: prevent semantic drift."""

import pytest

from targetwise.domain.customer import Customer
from targetwise.domain.filters import Dimension, FilterSet
from targetwise.domain.targeting_engine import MissingBirthYearPolicy, TargetingEngine

YEAR = 2024
CENTER = (37.5665, 126.9780)


def _customer(cid: str, **fields) -> Customer:
    return Customer(id=cid, **fields)


CUSTOMERS = [
    _customer("f-1995-seoul", gender="F", birth_year=1995, sido="서울특별시", sigungu="중구", lat=37.5665, lng=126.9780),
    _customer("m-1970-seoul", gender="M", birth_year=1970, sido="서울특별시", sigungu="강남구", lat=37.5172, lng=127.0473),
    _customer("f-2000-busan", gender="F", birth_year=2000, sido="부산광역시", sigungu="중구", lat=35.1063, lng=129.0323),
    _customer("unknown", gender=None, birth_year=None, sido=None, sigungu=None, lat=None, lng=None),
]


def _ids(customers) -> list[str]:
    return [c.id for c in customers]


def _evaluate(filters: FilterSet, customers=CUSTOMERS, **engine_kwargs) -> list[str]:
    return _ids(TargetingEngine(**engine_kwargs).evaluate(filters, customers, current_year=YEAR))


class TestDisabledDimensions:
    """All-disabled FilterSet is the identity."""

    def test_all_disabled_returns_everyone(self):
        assert TargetingEngine().evaluate(FilterSet(), CUSTOMERS, current_year=YEAR) == CUSTOMERS

    def test_disabled_values_are_ignored(self):
        filters = (
            FilterSet()
            .set_value("gender", "M")
            .set_value("ageRange", (90, 99))
            .set_value("region", {"sido": "제주특별자치도"})
            .set_value("radius", {"centerLat": 0, "centerLng": 0, "meters": 1})
        )
        assert filters.active_count() == 0
        assert _evaluate(filters) == _ids(CUSTOMERS)

    def test_empty_customer_list(self):
        assert TargetingEngine().evaluate(FilterSet().toggle("gender"), []) == []


class TestGender:
    def test_gender_female(self):
        filters = FilterSet().set_value("gender", "F").toggle("gender")
        assert _evaluate(filters) == ["f-1995-seoul", "f-2000-busan"]

    def test_gender_any_matches_everyone(self):
        filters = FilterSet().toggle("gender")
        assert _evaluate(filters) == _ids(CUSTOMERS)

    @pytest.mark.parametrize("value", ["M", "F", "ANY"])
    def test_disabled_gender_value_does_not_change_inclusion(self, value):
        base = FilterSet().set_value("ageRange", (20, 40)).toggle("ageRange")
        assert _evaluate(base.set_value("gender", value)) == _evaluate(base)

    def test_toggling_gender_any_off_does_not_change_inclusion(self):
        base = FilterSet().set_value("region", {"sido": "서울특별시"}).toggle("region").toggle("gender")
        assert _evaluate(base) == _evaluate(base.toggle("gender"))


class TestAgeRange:
    def test_scenario_age_25_to_35(self):
        customers = [_customer("a", birth_year=1995, gender="F"), _customer("b", birth_year=1970, gender="M")]
        filters = FilterSet().set_value("ageRange", (25, 35)).toggle("ageRange")
        assert _evaluate(filters, customers) == ["a"]

    def test_bounds_inclusive(self):
        customers = [_customer("25", birth_year=1999), _customer("35", birth_year=1989)]
        filters = FilterSet().set_value("ageRange", (25, 35)).toggle("ageRange")
        assert _evaluate(filters, customers) == ["25", "35"]

    def test_inverted_range_matches_nobody(self):
        filters = FilterSet().set_value("ageRange", (40, 20)).toggle("ageRange")
        assert _evaluate(filters) == []

    def test_missing_birth_year_zero_policy_rejected_by_bounded_range(self):
        filters = FilterSet().set_value("ageRange", (0, 120)).toggle("ageRange")
        assert "unknown" not in _evaluate(filters)

    def test_missing_birth_year_zero_policy_passes_unbounded_range(self):
        filters = FilterSet().set_value("ageRange", (0, 10_000)).toggle("ageRange")
        assert "unknown" in _evaluate(filters, missing_birth_year_policy=MissingBirthYearPolicy.zero)

    def test_missing_birth_year_include_policy(self):
        filters = FilterSet().set_value("ageRange", (25, 35)).toggle("ageRange")
        assert _evaluate(filters, missing_birth_year_policy="include") == ["f-1995-seoul", "unknown"]

    def test_missing_birth_year_exclude_policy(self):
        filters = FilterSet().set_value("ageRange", (0, 10_000)).toggle("ageRange")
        assert "unknown" not in _evaluate(filters, missing_birth_year_policy=MissingBirthYearPolicy.exclude)

    def test_engine_year_used_when_call_omits_it(self):
        engine = TargetingEngine(current_year=2030)
        filters = FilterSet().set_value("ageRange", (35, 35)).toggle("ageRange")
        assert _ids(engine.evaluate(filters, CUSTOMERS)) == ["f-1995-seoul"]


class TestRegion:
    def test_sido_only(self):
        filters = FilterSet().set_value("region", {"sido": "서울특별시"}).toggle("region")
        assert _evaluate(filters) == ["f-1995-seoul", "m-1970-seoul"]

    def test_sigungu_is_not_scoped_to_sido(self):
        filters = FilterSet().set_value("region", {"sigungu": "중구"}).toggle("region")
        assert _evaluate(filters) == ["f-1995-seoul", "f-2000-busan"]

    def test_sido_and_sigungu_are_anded(self):
        filters = FilterSet().set_value("region", {"sido": "부산광역시", "sigungu": "중구"}).toggle("region")
        assert _evaluate(filters) == ["f-2000-busan"]

    def test_enabled_but_empty_region_matches_everyone(self):
        assert _evaluate(FilterSet().toggle("region")) == _ids(CUSTOMERS)


class TestRadius:
    def _radius(self, meters: float) -> FilterSet:
        return (
            FilterSet()
            .set_value("radius", {"centerLat": CENTER[0], "centerLng": CENTER[1], "meters": meters})
            .toggle("radius")
        )

    def test_scenario_one_kilometre(self):
        customers = [_customer("here", lat=37.5665, lng=126.9780), _customer("far", lat=37.6, lng=127.1)]
        assert _evaluate(self._radius(1000), customers) == ["here"]

    def test_missing_coordinates_excluded(self):
        assert "unknown" not in _evaluate(self._radius(10_000_000))

    def test_large_radius_covers_busan(self):
        assert _evaluate(self._radius(400_000)) == ["f-1995-seoul", "m-1970-seoul", "f-2000-busan"]


class TestCombined:
    def test_short_circuit_reason_is_first_failing_dimension(self):
        filters = (
            FilterSet()
            .set_value("gender", "M").toggle("gender")
            .set_value("region", {"sido": "부산광역시"}).toggle("region")
        )
        engine = TargetingEngine()
        assert engine.reason(filters, CUSTOMERS[0], YEAR) == "denied: gender"
        assert engine.reason(filters, CUSTOMERS[1], YEAR) == "denied: region"
        assert engine.rejected_by(filters, CUSTOMERS[2], YEAR) == Dimension.gender

    def test_allowed_reason(self):
        assert TargetingEngine().reason(FilterSet(), CUSTOMERS[3], YEAR) == "allowed"

    def test_all_dimensions(self):
        filters = (
            FilterSet()
            .set_value("gender", "F").toggle("gender")
            .set_value("ageRange", (20, 35)).toggle("ageRange")
            .set_value("region", {"sido": "서울특별시"}).toggle("region")
            .set_value("radius", {"centerLat": CENTER[0], "centerLng": CENTER[1], "meters": 5000}).toggle("radius")
        )
        assert filters.active_count() == 4
        assert _evaluate(filters) == ["f-1995-seoul"]

    def test_matches_agrees_with_evaluate(self):
        filters = FilterSet().set_value("gender", "F").toggle("gender")
        engine = TargetingEngine()
        expected = [c.id for c in CUSTOMERS if engine.matches(filters, c, YEAR)]
        assert _evaluate(filters) == expected
