"""Payments Domain - orders, direct payments, vault tokens and subscriptions."""

from typing import TYPE_CHECKING, Any

from domains.base import PayPalDomain, split_identifier
from domains.payments import schemas
from paypal_client.gateway import AuthenticatedGateway
from shared.logging import get_logger

if TYPE_CHECKING:
    from mcp_server.registry import ToolRegistry

logger = get_logger(__name__)


class PaymentsDomain(PayPalDomain):
    """
    Payments Domain.

    Provides tools for:
    - Checkout orders (create, capture)
    - Direct payments (v1 payments API)
    - Vaulted payment tokens
    - Billing subscriptions
    """

    name = "payments"
    description = "Orders, payments, payment tokens and subscriptions"

    def _define_tools(self) -> None:
        self._add_tool(
            "create_payment_token",
            "Create a payment token for future use",
            schemas.CREATE_PAYMENT_TOKEN,
            self._create_payment_token,
        )
        self._add_tool(
            "create_order",
            "Create a new order in PayPal",
            schemas.CREATE_ORDER,
            self._create_order,
        )
        self._add_tool(
            "capture_order",
            "Capture payment for an authorized order",
            schemas.CAPTURE_ORDER,
            self._capture_order,
        )
        self._add_tool(
            "create_payment",
            "Create a direct payment",
            schemas.CREATE_PAYMENT,
            self._create_payment,
        )
        self._add_tool(
            "create_subscription",
            "Create a subscription for recurring billing",
            schemas.CREATE_SUBSCRIPTION,
            self._create_subscription,
        )

    async def _create_payment_token(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating payment token")
        return await self._call(
            gateway, "POST", "/v1/vault/payment-tokens",
            "Failed to create payment token", json=params,
        )

    async def _create_order(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating order")
        return await self._call(
            gateway, "POST", "/v2/checkout/orders",
            "Failed to create order", json=params,
        )

    async def _capture_order(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        order_id, payload = split_identifier(params, "order_id")
        logger.info("Capturing order", order_id=order_id)
        return await self._call(
            gateway, "POST", f"/v2/checkout/orders/{order_id}/capture",
            f"Failed to capture order {order_id}", json=payload,
        )

    async def _create_payment(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating payment")
        return await self._call(
            gateway, "POST", "/v1/payments/payment",
            "Failed to create payment", json=params,
        )

    async def _create_subscription(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating subscription", plan_id=params.get("plan_id"))
        return await self._call(
            gateway, "POST", "/v1/billing/subscriptions",
            "Failed to create subscription", json=params,
        )


def register_payments_domain(registry: "ToolRegistry") -> None:
    """Register the payments domain tools."""
    domain = PaymentsDomain()
    registry.register_many(domain.tools)
    logger.info("Payments domain registered", tool_count=len(domain.tools))
