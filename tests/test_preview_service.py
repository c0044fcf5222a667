"""Unit tests for PreviewService with fake adapters."""

import pytest

from fakes import FakeCustomerDirectory, FixedRequestIds
from targetwise.domain.customer import Customer
from targetwise.domain.filters import FilterSet
from targetwise.domain.pricing import PricingTable
from targetwise.domain.targeting_engine import TargetingEngine
from targetwise.models.mcp_requests import PreviewRequest
from targetwise.services.preview_service import PreviewService

CUSTOMERS = [
    Customer(id="1", gender="F", birth_year=1995, sido="서울특별시", lat=37.5665, lng=126.9780),
    Customer(id="2", gender="M", birth_year=1970, sido="서울특별시", lat=37.6, lng=127.1),
    Customer(id="3", gender="F", birth_year=1990, sido="부산광역시"),
]


def _service(customers=CUSTOMERS, **kwargs) -> tuple[PreviewService, FakeCustomerDirectory]:
    directory = FakeCustomerDirectory(customers)
    service = PreviewService(
        customer_directory=directory,
        targeting_engine=TargetingEngine(current_year=2024),
        request_id_provider=FixedRequestIds(),
        **kwargs,
    )
    return service, directory


class TestPreview:
    def test_counts_and_prices(self):
        service, directory = _service()
        filters = FilterSet().set_value("gender", "F").toggle("gender")
        response, trace = service.preview(PreviewRequest(filters=filters))
        assert response.recipients == 2
        assert response.unit_price == 50
        assert response.estimated_cost == 100
        assert response.can_submit is True
        assert response.active_filters == ["gender"]
        assert response.request_id == "req-1"
        assert directory.fetches == 1

    def test_audit_trace(self):
        service, _ = _service()
        filters = FilterSet().set_value("gender", "F").toggle("gender")
        _, trace = service.preview(PreviewRequest(filters=filters))
        assert trace["customers_evaluated"] == 3
        assert trace["constraint_impact"] == {"gender": 1}
        assert trace["decisions"] == [
            {"customer_id": "1", "reason": "allowed"},
            {"customer_id": "2", "reason": "denied: gender"},
            {"customer_id": "3", "reason": "allowed"},
        ]
        assert trace["filters"]["gender"]["value"] == "F"

    def test_inline_snapshot_skips_directory(self):
        service, directory = _service()
        response, _ = service.preview(PreviewRequest(filters=FilterSet().toggle("region"), customers=CUSTOMERS[:1]))
        assert response.recipients == 1
        assert directory.fetches == 0

    def test_no_filters_is_blocked(self):
        service, _ = _service()
        response, _ = service.preview(PreviewRequest())
        assert response.recipients == 3
        assert response.unit_price == 0
        assert response.can_submit is False
        assert any("no filters enabled" in w for w in response.warnings)

    def test_no_match_warning(self):
        service, _ = _service()
        filters = FilterSet().set_value("region", {"sido": "제주특별자치도"}).toggle("region")
        response, _ = service.preview(PreviewRequest(filters=filters))
        assert response.recipients == 0
        assert response.estimated_cost == 0
        assert any("no customers match" in w for w in response.warnings)

    def test_empty_directory_warning(self):
        service, _ = _service(customers=[])
        response, _ = service.preview(PreviewRequest(filters=FilterSet().toggle("gender")))
        assert response.recipients == 0
        assert any("returned no customers" in w for w in response.warnings)

    def test_request_year_overrides_engine_year(self):
        service, _ = _service()
        filters = FilterSet().set_value("ageRange", (39, 39)).toggle("ageRange")
        response, _ = service.preview(PreviewRequest(filters=filters, current_year=2034))
        assert response.recipients == 1

    def test_custom_pricing_table(self):
        service, _ = _service(pricing_table=PricingTable([50, 70, 90, 110, 130, 150]))
        response, _ = service.preview(PreviewRequest())
        assert response.unit_price == 50
        assert response.estimated_cost == 150

    def test_serialized_with_console_keys(self):
        service, _ = _service()
        response, _ = service.preview(PreviewRequest(filters=FilterSet().toggle("gender")))
        dumped = response.model_dump(by_alias=True)
        assert {"recipients", "unitPrice", "estimatedCost", "canSubmit", "requestId"} <= set(dumped)

    def test_preview_filters_wrapper(self):
        service, _ = _service()
        response = service.preview_filters(FilterSet().toggle("gender"), customers=CUSTOMERS)
        assert response.recipients == 3
        assert response.estimated_cost == 150


def test_without_directory_requires_inline_customers():
    service = PreviewService()
    with pytest.raises(RuntimeError):
        service.preview(PreviewRequest())
