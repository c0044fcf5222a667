"""Port interfaces (Protocols).

Application services depend only on these, never on concrete adapters.
No requests or other infrastructure imports allowed here.
"""

from .campaign_gateway import CampaignGatewayPort
from .customer_directory import CustomerDirectoryPort, CustomerPage
from .id_gen import RequestIdProvider, UuidRequestIdProvider

__all__ = [
    "CampaignGatewayPort",
    "CustomerDirectoryPort",
    "CustomerPage",
    "RequestIdProvider",
    "UuidRequestIdProvider",
]
