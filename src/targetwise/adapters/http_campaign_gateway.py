"""Campaign submission adapter over ``POST /campaigns``."""

from __future__ import annotations

from ..errors import CampaignGatewayError
from .http_backend import BackendClient


class HttpCampaignGateway:
    """Create and send campaigns on the backend."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def close(self) -> None:
        self._client.close()

    def create_campaign(self, payload: dict) -> dict:
        data = self._client.post_json("/campaigns", payload, error_cls=CampaignGatewayError)
        if not isinstance(data, dict):
            raise CampaignGatewayError("Unexpected campaign response shape", details=repr(data)[:200])
        return data

    def send_campaign(self, campaign_id: str) -> dict:
        data = self._client.post_json(f"/campaigns/{campaign_id}/send", error_cls=CampaignGatewayError)
        return data if isinstance(data, dict) else {"result": data}
