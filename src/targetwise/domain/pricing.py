"""Tiered per-recipient pricing for campaign previews."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

# Won per recipient, indexed by active filter count.
CANONICAL_PRICING_TIERS: tuple[int, ...] = (0, 50, 70, 90, 110, 130)


@dataclass(frozen=True)
class PreviewResult:
    """Advisory recipient count and cost; the backend bills independently."""

    recipients: int
    unit_price: int
    estimated_cost: int

    @property
    def can_submit(self) -> bool:
        return self.estimated_cost > 0

    def to_dict(self) -> dict:
        return {
            "recipients": self.recipients,
            "unitPrice": self.unit_price,
            "estimatedCost": self.estimated_cost,
        }


def estimated_cost(recipients: int, unit_price: int) -> int:
    return recipients * unit_price


class PricingTable:
    """Fixed, non-decreasing table of unit prices by active filter count."""

    def __init__(self, tiers: Sequence[int] = CANONICAL_PRICING_TIERS) -> None:
        tiers = tuple(int(t) for t in tiers)
        if not tiers:
            raise ValueError("pricing table needs at least one tier")
        if any(t < 0 for t in tiers):
            raise ValueError(f"pricing tiers must be non-negative, got {list(tiers)}")
        if any(later < earlier for earlier, later in zip(tiers, tiers[1:])):
            raise ValueError(f"pricing tiers must be non-decreasing, got {list(tiers)}")
        self._tiers = tiers

    @property
    def tiers(self) -> tuple[int, ...]:
        return self._tiers

    @property
    def max_index(self) -> int:
        return len(self._tiers) - 1

    def unit_price(self, active_count: int) -> int:
        """Price per recipient; counts past the table use the last tier."""
        index = min(max(active_count, 0), self.max_index)
        return self._tiers[index]

    def quote(self, recipients: int, active_count: int) -> PreviewResult:
        unit = self.unit_price(active_count)
        return PreviewResult(
            recipients=recipients,
            unit_price=unit,
            estimated_cost=estimated_cost(recipients, unit),
        )

    def to_dict(self) -> dict:
        return {
            "currency": "KRW",
            "tiers": [{"active_filters": i, "unit_price": price} for i, price in enumerate(self._tiers)],
            "clamped_above": self.max_index,
        }
