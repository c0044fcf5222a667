"""targetwise: campaign targeting and pricing evaluator."""

from .domain import (
    Customer,
    Dimension,
    FilterSet,
    Gender,
    MissingBirthYearPolicy,
    PreviewResult,
    PricingTable,
    TargetingEngine,
    distance,
    estimated_cost,
)

__version__ = "0.1.0"
__all__ = [
    "Customer",
    "Dimension",
    "FilterSet",
    "Gender",
    "MissingBirthYearPolicy",
    "PreviewResult",
    "PricingTable",
    "TargetingEngine",
    "distance",
    "estimated_cost",
]
