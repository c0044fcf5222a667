"""MCP request DTOs for preview and submission tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.customer import Customer
from ..domain.filters import FilterSet


class PreviewRequest(BaseModel):
    """Input DTO for the targeting_preview tool."""

    filters: FilterSet = Field(
        default_factory=FilterSet,
        description="Targeting filters; all dimensions disabled by default",
    )
    customers: list[Customer] | None = Field(
        default=None,
        description="Inline customer snapshot; fetched from the directory when omitted",
    )
    current_year: int | None = Field(
        default=None,
        ge=1900,
        description="Year used for age computation (defaults to settings or the current year)",
    )


class CampaignDraft(BaseModel):
    """Campaign content sent alongside the filters."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200, description="Campaign title")
    message_text: str = Field(..., alias="messageText", min_length=1, description="SMS body")
    link: str = Field(default="", description="Optional landing link")

    @field_validator("title", "message_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_payload(self, filters: FilterSet) -> dict:
        """Body for ``POST /campaigns``."""
        return {
            "title": self.title,
            "messageText": self.message_text,
            "link": self.link,
            "filters": filters.to_legacy(),
        }


class SubmitRequest(BaseModel):
    """Input DTO for the campaigns_submit tool."""

    draft: CampaignDraft
    filters: FilterSet = Field(default_factory=FilterSet)
    send_now: bool = Field(default=False, description="Dispatch immediately after creation")
