"""MCP resources: filter schema and pricing table as discoverable documents."""

from __future__ import annotations

import json
from typing import Any

from ...domain.filters import FilterSet

FILTER_SCHEMA_URI = "targetwise://schema/filters"
PRICING_TABLE_URI = "targetwise://pricing/table"


def get_filter_schema_resource() -> dict[str, Any]:
    """Return the FilterSet JSON schema plus both accepted payload examples."""
    return {
        "uri": FILTER_SCHEMA_URI,
        "name": "Filter Schema",
        "description": "FilterSet shape and the console's flag-less legacy shape",
        "mimeType": "application/json",
        "contents": json.dumps({
            "schema": FilterSet.model_json_schema(by_alias=True),
            "examples": {
                "filters": FilterSet().enable("ageRange").set_value("ageRange", (25, 35)).model_dump(
                    mode="json", by_alias=True
                ),
                "legacy_filters": {
                    "gender": "F",
                    "ageRange": [25, 35],
                    "region": {"sido": "서울특별시", "sigungu": ""},
                    "radius": {"lat": 37.5665, "lng": 126.978, "meters": 0},
                },
            },
        }, indent=2, ensure_ascii=False),
    }


def get_pricing_table_resource() -> dict[str, Any]:
    """Return the pricing table currently configured."""
    from ...wiring import build_pricing_table

    return {
        "uri": PRICING_TABLE_URI,
        "name": "Pricing Table",
        "description": "Unit price in won per active filter count",
        "mimeType": "application/json",
        "contents": json.dumps(build_pricing_table().to_dict(), indent=2),
    }
