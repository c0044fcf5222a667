"""MCP response DTOs for preview and submission tools."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..domain.pricing import PreviewResult


class PreviewResponse(BaseModel):
    """Output DTO for the targeting_preview tool."""

    recipients: int = Field(..., ge=0, description="Customers matched by the enabled filters")
    unit_price: int = Field(..., ge=0, serialization_alias="unitPrice", description="Won per recipient")
    estimated_cost: int = Field(..., ge=0, serialization_alias="estimatedCost", description="Advisory total")
    active_filters: list[str] = Field(default_factory=list, serialization_alias="activeFilters")
    can_submit: bool = Field(..., serialization_alias="canSubmit")
    request_id: str = Field(..., serialization_alias="requestId", description="Trace ID for this preview")
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls,
        result: PreviewResult,
        request_id: str,
        active_filters: list[str],
        warnings: list[str] | None = None,
    ) -> PreviewResponse:
        return cls(
            recipients=result.recipients,
            unit_price=result.unit_price,
            estimated_cost=result.estimated_cost,
            active_filters=active_filters,
            can_submit=result.can_submit,
            request_id=request_id,
            warnings=warnings or [],
        )


class SubmissionResponse(BaseModel):
    """Output DTO for the campaigns_submit tool."""

    campaign_id: str = Field(..., serialization_alias="campaignId")
    sent: bool = Field(default=False, description="Whether the send call succeeded")
    preview: PreviewResponse
    backend: dict = Field(default_factory=dict, description="Raw backend campaign record")
    send_error: dict | None = Field(
        default=None,
        serialization_alias="sendError",
        description="Backend error from the send call; the campaign exists and can be resent by id",
    )
