"""Application services."""

from .campaign_service import CampaignService
from .preview_service import PreviewService

__all__ = ["CampaignService", "PreviewService"]
