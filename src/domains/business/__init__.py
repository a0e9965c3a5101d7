"""Business Domain - catalog products, invoicing and payouts."""

from typing import TYPE_CHECKING, Any

from domains.base import PayPalDomain, split_identifier
from domains.business import schemas
from paypal_client.gateway import AuthenticatedGateway
from shared.logging import get_logger

if TYPE_CHECKING:
    from mcp_server.registry import ToolRegistry

logger = get_logger(__name__)


class BusinessDomain(PayPalDomain):
    """
    Business Domain.

    Provides tools for:
    - Catalog products
    - Invoices
    - Batch payouts
    """

    name = "business"
    description = "Catalog products, invoices and payouts"

    def _define_tools(self) -> None:
        self._add_tool(
            "create_product",
            "Create a new product in the catalog",
            schemas.CREATE_PRODUCT,
            self._create_product,
        )
        self._add_tool(
            "create_invoice",
            "Generate a new invoice",
            schemas.CREATE_INVOICE,
            self._create_invoice,
        )
        self._add_tool(
            "create_payout",
            "Process a batch payout",
            schemas.CREATE_PAYOUT,
            self._create_payout,
        )
        self._add_tool(
            "get_product",
            "Get a product from the catalog",
            schemas.GET_PRODUCT,
            self._get_product,
        )
        self._add_tool(
            "get_invoice",
            "Get an invoice",
            schemas.GET_INVOICE,
            self._get_invoice,
        )

    async def _create_product(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating product", product_type=params.get("type"))
        return await self._call(
            gateway, "POST", "/v1/catalogs/products",
            "Failed to create product", json=params,
        )

    async def _create_invoice(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating invoice")
        return await self._call(
            gateway, "POST", "/v2/invoicing/invoices",
            "Failed to create invoice", json=params,
        )

    async def _create_payout(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating payout", item_count=len(params.get("items", [])))
        return await self._call(
            gateway, "POST", "/v1/payments/payouts",
            "Failed to create payout", json=params,
        )

    async def _get_product(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        product_id, _ = split_identifier(params, "product_id")
        logger.info("Getting product", product_id=product_id)
        return await self._call(
            gateway, "GET", f"/v1/catalogs/products/{product_id}",
            f"Failed to get product {product_id}",
        )

    async def _get_invoice(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        invoice_id, _ = split_identifier(params, "invoice_id")
        logger.info("Getting invoice", invoice_id=invoice_id)
        return await self._call(
            gateway, "GET", f"/v2/invoicing/invoices/{invoice_id}",
            f"Failed to get invoice {invoice_id}",
        )


def register_business_domain(registry: "ToolRegistry") -> None:
    """Register the business domain tools."""
    domain = BusinessDomain()
    registry.register_many(domain.tools)
    logger.info("Business domain registered", tool_count=len(domain.tools))
