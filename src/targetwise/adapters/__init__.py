"""Adapters for the external campaign backend."""

from .http_backend import BackendClient
from .http_campaign_gateway import HttpCampaignGateway
from .http_customer_directory import HttpCustomerDirectory

__all__ = ["BackendClient", "HttpCampaignGateway", "HttpCustomerDirectory"]
