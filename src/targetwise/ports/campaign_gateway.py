"""Port: campaign submission backend."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CampaignGatewayPort(Protocol):
    """Create and dispatch campaigns. The backend recomputes billing itself."""

    def create_campaign(self, payload: dict) -> dict: ...

    def send_campaign(self, campaign_id: str) -> dict: ...
