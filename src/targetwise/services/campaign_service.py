"""CampaignService: gated campaign creation and dispatch."""

from __future__ import annotations

import logging

from ..errors import CampaignGatewayError, SubmissionBlockedError
from ..models.mcp_requests import PreviewRequest, SubmitRequest
from ..models.mcp_responses import SubmissionResponse
from ..ports.campaign_gateway import CampaignGatewayPort
from .preview_service import PreviewService

logger = logging.getLogger(__name__)


class CampaignService:
    """Re-previews the filters, refuses zero-cost campaigns, then submits."""

    def __init__(self, preview_service: PreviewService, gateway: CampaignGatewayPort) -> None:
        self._preview = preview_service
        self._gateway = gateway

    def close(self) -> None:
        self._preview.close()
        close = getattr(self._gateway, "close", None)
        if close is not None:
            close()

    def submit(self, request: SubmitRequest) -> SubmissionResponse:
        preview, _ = self._preview.preview(PreviewRequest(filters=request.filters))
        if not preview.can_submit:
            logger.info(
                "campaign_blocked",
                extra={"trace_id": preview.request_id, "recipients": preview.recipients},
            )
            raise SubmissionBlockedError(
                f"estimated cost is zero ({preview.recipients} recipients at {preview.unit_price} won)"
            )

        created = self._gateway.create_campaign(request.draft.to_payload(request.filters))
        campaign = created.get("campaign") if isinstance(created.get("campaign"), dict) else created
        campaign_id = campaign.get("id")
        if campaign_id is None:
            raise CampaignGatewayError("Backend did not return a campaign id", details=str(created)[:200])
        campaign_id = str(campaign_id)
        logger.info(
            "campaign_submitted",
            extra={
                "trace_id": preview.request_id,
                "campaign_id": campaign_id,
                "estimated_cost": preview.estimated_cost,
            },
        )

        sent = False
        send_error = None
        if request.send_now:
            try:
                self._gateway.send_campaign(campaign_id)
            except CampaignGatewayError as e:
                send_error = e.to_dict()
                logger.error(
                    "campaign_send_failed",
                    extra={"trace_id": preview.request_id, "campaign_id": campaign_id, "error": str(e)},
                )
            else:
                sent = True
                logger.info("campaign_sent", extra={"trace_id": preview.request_id, "campaign_id": campaign_id})

        return SubmissionResponse(
            campaign_id=campaign_id, sent=sent, preview=preview, backend=campaign, send_error=send_error
        )
