"""PreviewService: customer snapshot -> targeting -> pricing."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..domain.customer import Customer
from ..domain.filters import FilterSet
from ..domain.pricing import PricingTable
from ..domain.targeting_engine import TargetingEngine
from ..models.mcp_requests import PreviewRequest
from ..models.mcp_responses import PreviewResponse
from ..ports.customer_directory import CustomerDirectoryPort
from ..ports.id_gen import RequestIdProvider, UuidRequestIdProvider

logger = logging.getLogger(__name__)


class PreviewService:
    """Orchestrates a campaign preview.

    Each call works on one immutable customer snapshot: either the one the
    caller passes in, or a fresh fetch from the directory.
    """

    def __init__(
        self,
        customer_directory: CustomerDirectoryPort | None = None,
        targeting_engine: TargetingEngine | None = None,
        pricing_table: PricingTable | None = None,
        request_id_provider: RequestIdProvider | None = None,
    ) -> None:
        self._directory = customer_directory
        self._targeting = targeting_engine or TargetingEngine()
        self._pricing = pricing_table or PricingTable()
        self._req_id = request_id_provider or UuidRequestIdProvider()

    @property
    def pricing_table(self) -> PricingTable:
        return self._pricing

    def close(self) -> None:
        """Release the directory's HTTP resources, if it holds any."""
        close = getattr(self._directory, "close", None)
        if close is not None:
            close()

    def snapshot(self, customers: Iterable[Customer] | None = None) -> tuple[Customer, ...]:
        """Freeze the given customers, or fetch them when none are given."""
        if customers is not None:
            return tuple(customers)
        if self._directory is None:
            raise RuntimeError("No customer directory configured and no customers supplied")
        return self._directory.fetch_all()

    def preview(self, request: PreviewRequest) -> tuple[PreviewResponse, dict[str, Any]]:
        request_id = self._req_id.new_request_id()
        filters = request.filters
        logger.info(
            "preview_start",
            extra={
                "trace_id": request_id,
                "active_filters": filters.active_count(),
                "inline_customers": request.customers is not None,
            },
        )

        customers = self.snapshot(request.customers)
        decisions: list[dict[str, Any]] = []
        rejections: dict[str, int] = {}
        matched = 0
        for customer in customers:
            reason = self._targeting.reason(filters, customer, request.current_year)
            decisions.append({"customer_id": customer.id, "reason": reason})
            if reason == "allowed":
                matched += 1
            else:
                dimension = reason.replace("denied: ", "")
                rejections[dimension] = rejections.get(dimension, 0) + 1

        result = self._pricing.quote(matched, filters.active_count())
        warnings = self._warnings(filters, len(customers), matched)
        response = PreviewResponse.from_result(
            result,
            request_id=request_id,
            active_filters=[d.value for d in filters.active_dimensions()],
            warnings=warnings,
        )
        audit_trace: dict[str, Any] = {
            "request_id": request_id,
            "filters": filters.model_dump(mode="json", by_alias=True),
            "customers_evaluated": len(customers),
            "recipients": result.recipients,
            "unit_price": result.unit_price,
            "estimated_cost": result.estimated_cost,
            "constraint_impact": rejections,
            "decisions": decisions,
        }
        logger.info(
            "preview_done",
            extra={
                "trace_id": request_id,
                "recipients": result.recipients,
                "estimated_cost": result.estimated_cost,
            },
        )
        return response, audit_trace

    def preview_filters(
        self,
        filters: FilterSet,
        customers: Iterable[Customer] | None = None,
        current_year: int | None = None,
    ) -> PreviewResponse:
        """Convenience wrapper returning only the response."""
        request = PreviewRequest(
            filters=filters,
            customers=list(customers) if customers is not None else None,
            current_year=current_year,
        )
        response, _ = self.preview(request)
        return response

    def _warnings(self, filters: FilterSet, evaluated: int, matched: int) -> list[str]:
        warnings: list[str] = []
        if evaluated == 0:
            warnings.append("customer directory returned no customers")
        elif matched == 0:
            warnings.append("no customers match the enabled filters; consider relaxing them")
        if filters.active_count() == 0 and self._pricing.unit_price(0) == 0:
            warnings.append("no filters enabled; the base tier is free and submission stays blocked")
        if filters.age_range.enabled and filters.age_range.value.min > filters.age_range.value.max:
            warnings.append("ageRange min is greater than max; no customer can match")
        return warnings
