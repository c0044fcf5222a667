"""Tool registry for the targeting MCP server.

Strict JSON schemas via Pydantic; errors come back as JSON payloads;
each invocation is logged with its latency.
"""

from __future__ import annotations

import json
import time
from contextlib import closing
from typing import Any

from pydantic import ValidationError

from ...config.runtime import get_settings
from ...domain.filters import Dimension, FilterSet
from ...domain.pricing import PricingTable
from ...errors import BackendError, SubmissionBlockedError
from ...models.mcp_requests import CampaignDraft, PreviewRequest, SubmitRequest
from ..validation import validate_and_quote
from .observability import log_tool_invocation, metrics_snapshot

# In-memory trace store for targeting_explain (request_id -> audit_trace)
_trace_store: dict[str, dict[str, Any]] = {}
_TRACE_STORE_MAX = 1_000
_EXPLAIN_DECISIONS_MAX = 200


def _store_trace(audit_trace: dict[str, Any]) -> None:
    decisions = audit_trace.get("decisions", [])
    stored = {k: v for k, v in audit_trace.items() if k != "decisions"}
    stored["decisions"] = decisions[:_EXPLAIN_DECISIONS_MAX]
    stored["decisions_total"] = len(decisions)
    _trace_store[audit_trace["request_id"]] = stored
    while len(_trace_store) > _TRACE_STORE_MAX:
        # Drop oldest (insertion order)
        _trace_store.pop(next(iter(_trace_store)))


def _get_preview_service(inline: bool = False):
    from ...wiring import build_preview_service
    return build_preview_service(with_directory=not inline)


def _get_campaign_service():
    from ...wiring import build_campaign_service
    return build_campaign_service()


def _get_pricing_table() -> PricingTable:
    from ...wiring import build_pricing_table
    return build_pricing_table()


def _parse_filters(filters: dict | None, legacy_filters: dict | None) -> FilterSet:
    """Accept either the tagged FilterSet shape or the console's flag-less shape."""
    if filters is not None and legacy_filters is not None:
        raise ValueError("pass either filters or legacy_filters, not both")
    if legacy_filters is not None:
        return FilterSet.from_legacy(legacy_filters)
    if filters is None:
        return FilterSet()
    return FilterSet.model_validate(filters)


def _error(tool: str, t0: float, payload: dict[str, Any]) -> str:
    log_tool_invocation(tool, None, (time.monotonic() - t0) * 1000, error=payload.get("error"))
    return json.dumps(payload, indent=2)


def _invalid(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, ValidationError):
        return {"error": "invalid_request", "details": json.loads(exc.json())}
    return {"error": "invalid_request", "details": str(exc)}


def _analyze(trace: dict[str, Any]) -> dict[str, Any]:
    impact: dict[str, int] = trace.get("constraint_impact", {})
    recommendations: list[str] = []
    if trace.get("recipients", 0) == 0 and trace.get("customers_evaluated", 0) > 0:
        recommendations.append("No customers matched. Disable or widen the most restrictive filter.")
    if impact:
        worst = max(impact, key=impact.get)
        if impact[worst] > trace.get("customers_evaluated", 0) // 2:
            recommendations.append(f"'{worst}' rejects most customers ({impact[worst]}); consider broadening it")
    if not recommendations:
        recommendations.append("Targeting looks reasonable.")
    return {
        "customers_evaluated": trace.get("customers_evaluated", 0),
        "accepted": trace.get("recipients", 0),
        "rejected": sum(impact.values()),
        "constraint_impact": impact,
        "recommendations": recommendations,
    }


# ---------------------------------------------------------------------------
# Preview tools (read-only)
# ---------------------------------------------------------------------------
PREVIEW_ALLOWED_TOOLS = frozenset({
    "targeting_preview",
    "targeting_explain",
    "targeting_validate",
    "targeting_capabilities",
    "targeting_health",
    "pricing_quote",
    "pricing_table",
})

CONSOLE_ALLOWED_TOOLS = PREVIEW_ALLOWED_TOOLS | {"campaigns_submit"}


def register_preview_tools(mcp):
    """Register read-only targeting and pricing tools."""

    @mcp.tool()
    def targeting_preview(
        filters: dict | None = None,
        legacy_filters: dict | None = None,
        customers: list[dict] | None = None,
        current_year: int | None = None,
    ) -> str:
        """Count matching customers and estimate campaign cost (advisory only).

        Args:
            filters: FilterSet with gender/ageRange/region/radius entries, each {enabled, value}
            legacy_filters: Console shape {gender, ageRange: [min, max], region: {sido, sigungu}, radius: {lat, lng, meters}}
            customers: Optional inline customer snapshot; fetched from the backend when omitted
            current_year: Year used for age computation

        Returns:
            JSON with recipients, unitPrice, estimatedCost, activeFilters, canSubmit, requestId, warnings
        """
        t0 = time.monotonic()
        try:
            request = PreviewRequest(
                filters=_parse_filters(filters, legacy_filters),
                customers=customers,
                current_year=current_year,
            )
        except (ValidationError, ValueError) as e:
            return _error("targeting_preview", t0, _invalid(e))
        try:
            with closing(_get_preview_service(inline=customers is not None)) as service:
                response, audit_trace = service.preview(request)
        except BackendError as e:
            return _error("targeting_preview", t0, e.to_dict())
        _store_trace(audit_trace)
        latency_ms = (time.monotonic() - t0) * 1000
        log_tool_invocation(
            "targeting_preview", response.request_id, latency_ms, extra={"recipients": response.recipients}
        )
        return json.dumps(response.model_dump(by_alias=True), indent=2)

    @mcp.tool()
    def targeting_explain(request_id: str) -> str:
        """Return the per-customer decisions of a prior preview and which filters rejected most.

        Args:
            request_id: requestId returned by targeting_preview

        Returns:
            JSON trace with filters, decisions (truncated), constraint impact and recommendations
        """
        trace = _trace_store.get(request_id)
        if trace is None:
            return json.dumps({"error": "request_id not found", "request_id": request_id})
        enhanced = dict(trace)
        enhanced["decisions_truncated"] = trace["decisions_total"] > len(trace["decisions"])
        enhanced["analysis"] = _analyze(trace)
        return json.dumps(enhanced, indent=2)

    @mcp.tool()
    def targeting_validate(filters: dict | None = None, legacy_filters: dict | None = None) -> str:
        """Check filters for combinations that cannot match or price unexpectedly.

        Args:
            filters: FilterSet shape
            legacy_filters: Console shape

        Returns:
            JSON with validation errors/warnings, active filters and unit price
        """
        t0 = time.monotonic()
        try:
            filter_set = _parse_filters(filters, legacy_filters)
        except (ValidationError, ValueError) as e:
            return _error("targeting_validate", t0, _invalid(e))
        result = validate_and_quote(filter_set, _get_pricing_table())
        log_tool_invocation("targeting_validate", None, (time.monotonic() - t0) * 1000)
        return json.dumps(result, indent=2)

    @mcp.tool()
    def pricing_quote(active_filters: int, recipients: int = 0) -> str:
        """Unit price and estimated cost for a filter count and recipient count.

        Args:
            active_filters: Number of enabled filter dimensions
            recipients: Number of matched recipients

        Returns:
            JSON with recipients, unitPrice, estimatedCost, canSubmit
        """
        if active_filters < 0 or recipients < 0:
            return json.dumps({"error": "invalid_request", "details": "counts must be non-negative"})
        result = _get_pricing_table().quote(recipients, active_filters)
        return json.dumps({**result.to_dict(), "canSubmit": result.can_submit})

    @mcp.tool()
    def pricing_table() -> str:
        """The unit price per active filter count."""
        return json.dumps(_get_pricing_table().to_dict())

    @mcp.tool()
    def targeting_capabilities() -> str:
        """Filter dimensions, value shapes, pricing and birth-year policy in effect."""
        settings = get_settings()
        return json.dumps({
            "dimensions": [d.value for d in Dimension],
            "value_shapes": {
                "gender": "M | F | ANY",
                "ageRange": {"min": "int", "max": "int"},
                "region": {"sido": "str | null", "sigungu": "str | null"},
                "radius": {"centerLat": "float", "centerLng": "float", "meters": "float"},
            },
            "pricing": _get_pricing_table().to_dict(),
            "missing_birth_year_policy": settings.missing_birth_year_policy.value,
            "features": ["legacy_filters", "inline_customers", "explain", "validate"],
        })

    @mcp.tool()
    def targeting_health() -> str:
        """Liveness/readiness: backend customer directory reachable."""
        from ...adapters.http_backend import BackendClient
        from ...adapters.http_customer_directory import HttpCustomerDirectory

        settings = get_settings()
        with BackendClient.from_settings(settings) as client:
            try:
                page = HttpCustomerDirectory(client).fetch_page(0, 1)
            except BackendError as e:
                return json.dumps({"ok": False, "backend": settings.backend_url, **e.to_dict()})
        return json.dumps({
            "ok": True,
            "backend": settings.backend_url,
            "total_customers": page.total_elements,
            "metrics": metrics_snapshot(),
        })


# ---------------------------------------------------------------------------
# Console tools (submission)
# ---------------------------------------------------------------------------
def register_console_tools(mcp):
    """Register preview tools plus campaign submission."""
    register_preview_tools(mcp)

    @mcp.tool()
    def campaigns_submit(
        title: str,
        message_text: str,
        link: str = "",
        filters: dict | None = None,
        legacy_filters: dict | None = None,
        send_now: bool = False,
    ) -> str:
        """Create a campaign for the targeted customers; refused when the estimated cost is zero.

        Args:
            title: Campaign title
            message_text: SMS body
            link: Optional landing link
            filters: FilterSet shape
            legacy_filters: Console shape
            send_now: Dispatch immediately after creation

        Returns:
            JSON with campaignId, sent, preview and the backend record
        """
        from .auth import require_console_scope
        require_console_scope()

        t0 = time.monotonic()
        try:
            request = SubmitRequest(
                draft=CampaignDraft(title=title, message_text=message_text, link=link),
                filters=_parse_filters(filters, legacy_filters),
                send_now=send_now,
            )
        except (ValidationError, ValueError) as e:
            return _error("campaigns_submit", t0, _invalid(e))
        try:
            with closing(_get_campaign_service()) as service:
                response = service.submit(request)
        except SubmissionBlockedError as e:
            return _error("campaigns_submit", t0, {"error": "submission_blocked", "details": str(e)})
        except BackendError as e:
            return _error("campaigns_submit", t0, e.to_dict())
        latency_ms = (time.monotonic() - t0) * 1000
        log_tool_invocation(
            "campaigns_submit",
            response.preview.request_id,
            latency_ms,
            error=response.send_error["error"] if response.send_error else None,
            extra={"campaign_id": response.campaign_id, "sent": response.sent},
        )
        return json.dumps(response.model_dump(by_alias=True), indent=2)
