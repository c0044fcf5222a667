"""Domain layer for targetwise."""

from .customer import Customer
from .filters import (
    AgeRange,
    AgeRangeFilter,
    Dimension,
    FilterDimension,
    FilterSet,
    Gender,
    GenderFilter,
    RadiusArea,
    RadiusFilter,
    Region,
    RegionFilter,
)
from .geo import EARTH_RADIUS_M, distance, within_radius
from .match_semantics import (
    RULE_AGE_INCLUSIVE,
    RULE_AGE_MISSING_BIRTH_YEAR,
    RULE_COST_EXACT,
    RULE_DISABLED_MATCHES_ALL,
    RULE_GENDER_EXACT,
    RULE_PRICE_BY_ACTIVE_COUNT,
    RULE_RADIUS_HAVERSINE,
    RULE_REGION_AND,
)
from .pricing import CANONICAL_PRICING_TIERS, PreviewResult, PricingTable, estimated_cost
from .targeting_engine import MissingBirthYearPolicy, TargetingEngine

__all__ = [
    "AgeRange",
    "AgeRangeFilter",
    "CANONICAL_PRICING_TIERS",
    "Customer",
    "Dimension",
    "EARTH_RADIUS_M",
    "FilterDimension",
    "FilterSet",
    "Gender",
    "GenderFilter",
    "MissingBirthYearPolicy",
    "PreviewResult",
    "PricingTable",
    "RadiusArea",
    "RadiusFilter",
    "Region",
    "RegionFilter",
    "TargetingEngine",
    "distance",
    "estimated_cost",
    "within_radius",
    "RULE_AGE_INCLUSIVE",
    "RULE_AGE_MISSING_BIRTH_YEAR",
    "RULE_COST_EXACT",
    "RULE_DISABLED_MATCHES_ALL",
    "RULE_GENDER_EXACT",
    "RULE_PRICE_BY_ACTIVE_COUNT",
    "RULE_RADIUS_HAVERSINE",
    "RULE_REGION_AND",
]
