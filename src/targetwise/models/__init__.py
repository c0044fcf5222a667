"""Domain and MCP request/response models."""

from ..domain.customer import Customer
from ..domain.filters import FilterSet
from .mcp_requests import CampaignDraft, PreviewRequest, SubmitRequest
from .mcp_responses import PreviewResponse, SubmissionResponse

__all__ = [
    # Domain
    "Customer",
    "FilterSet",
    # MCP requests
    "CampaignDraft",
    "PreviewRequest",
    "SubmitRequest",
    # MCP responses
    "PreviewResponse",
    "SubmissionResponse",
]
