"""Pricing table tests."""

import pytest

from targetwise.domain.pricing import CANONICAL_PRICING_TIERS, PreviewResult, PricingTable, estimated_cost


class TestUnitPrice:
    def test_canonical_table(self):
        assert PricingTable().tiers == (0, 50, 70, 90, 110, 130)
        assert CANONICAL_PRICING_TIERS == (0, 50, 70, 90, 110, 130)

    def test_non_decreasing_then_constant(self):
        table = PricingTable()
        prices = [table.unit_price(n) for n in range(0, 12)]
        assert all(a <= b for a, b in zip(prices, prices[1:]))
        assert prices[table.max_index:] == [130] * (12 - table.max_index)

    def test_three_active_filters_use_fourth_entry(self):
        table = PricingTable()
        assert table.unit_price(3) == table.tiers[3] == 90
        assert table.quote(200, 3).estimated_cost == 200 * 90

    def test_negative_count_clamps_to_first_tier(self):
        assert PricingTable().unit_price(-1) == 0

    def test_custom_table(self):
        table = PricingTable([50, 70, 90, 110, 130, 150])
        assert table.unit_price(0) == 50
        assert table.unit_price(99) == 150

    @pytest.mark.parametrize("tiers", [[], [50, 40], (10, 20, 15), [-10, 0, 50]])
    def test_invalid_tables(self, tiers):
        with pytest.raises(ValueError):
            PricingTable(tiers)


class TestEstimatedCost:
    @pytest.mark.parametrize("recipients,unit", [(0, 0), (0, 130), (1, 50), (200, 90), (123_457, 110)])
    def test_exact_product(self, recipients, unit):
        assert estimated_cost(recipients, unit) == recipients * unit

    def test_zero_recipients_blocks_submission(self):
        result = PricingTable().quote(0, 4)
        assert result.estimated_cost == 0
        assert not result.can_submit

    def test_no_filters_is_free_and_blocked(self):
        result = PricingTable().quote(1000, 0)
        assert result.unit_price == 0
        assert not result.can_submit

    def test_to_dict_uses_console_keys(self):
        assert PreviewResult(3, 50, 150).to_dict() == {"recipients": 3, "unitPrice": 50, "estimatedCost": 150}

    def test_table_description(self):
        d = PricingTable().to_dict()
        assert d["currency"] == "KRW"
        assert d["tiers"][3] == {"active_filters": 3, "unit_price": 90}
        assert d["clamped_above"] == 5
