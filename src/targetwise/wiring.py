"""Composition root: the single place where wiring happens.

Call ``build_preview_service()`` or ``build_campaign_service()`` to get a
fully-constructed service with real adapters. No ad-hoc construction
elsewhere.
"""

from __future__ import annotations

from .adapters.http_backend import BackendClient
from .adapters.http_campaign_gateway import HttpCampaignGateway
from .adapters.http_customer_directory import HttpCustomerDirectory
from .config.runtime import RuntimeSettings, get_settings
from .domain.pricing import PricingTable
from .domain.targeting_engine import TargetingEngine
from .services.campaign_service import CampaignService
from .services.preview_service import PreviewService


def build_targeting_engine(settings: RuntimeSettings | None = None) -> TargetingEngine:
    settings = settings or get_settings()
    return TargetingEngine(
        missing_birth_year_policy=settings.missing_birth_year_policy,
        current_year=settings.current_year,
    )


def build_pricing_table(settings: RuntimeSettings | None = None) -> PricingTable:
    settings = settings or get_settings()
    return PricingTable(settings.pricing_tiers)


def build_preview_service(
    settings: RuntimeSettings | None = None,
    with_directory: bool = True,
    client: BackendClient | None = None,
) -> PreviewService:
    """Construct a PreviewService; ``with_directory=False`` for inline snapshots only.

    Call ``close()`` on the result to release its HTTP session.
    """
    settings = settings or get_settings()
    directory = None
    if with_directory:
        directory = HttpCustomerDirectory(
            client or BackendClient.from_settings(settings),
            page_size=settings.customer_page_size,
            max_pages=settings.max_customer_pages,
        )
    return PreviewService(
        customer_directory=directory,
        targeting_engine=build_targeting_engine(settings),
        pricing_table=build_pricing_table(settings),
    )


def build_campaign_service(settings: RuntimeSettings | None = None) -> CampaignService:
    """Construct a CampaignService with real adapters."""
    settings = settings or get_settings()
    client = BackendClient.from_settings(settings)
    return CampaignService(
        preview_service=build_preview_service(settings, client=client),
        gateway=HttpCampaignGateway(client),
    )
