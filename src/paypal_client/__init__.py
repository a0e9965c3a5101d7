"""PayPal REST client: credential lifecycle and authenticated requests."""

from paypal_client.credentials import CredentialCache
from paypal_client.gateway import AuthenticatedGateway, OutboundRequest

__all__ = [
    "AuthenticatedGateway",
    "CredentialCache",
    "OutboundRequest",
]
