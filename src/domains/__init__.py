"""PayPal tool domains.

Each domain contains:
- Tool definitions
- Input schemas
- Handlers that call the PayPal REST API through the gateway

Domains only organize tools; the registry treats all names as one flat
namespace and rejects duplicates.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_server.registry import ToolRegistry


def load_all_domains(registry: "ToolRegistry") -> None:
    """
    Load and register all PayPal domains.

    This is called at server startup. A duplicate tool name raises
    ValueError and aborts startup.
    """
    from domains.payments import register_payments_domain
    from domains.business import register_business_domain
    from domains.identity import register_identity_domain

    register_payments_domain(registry)
    register_business_domain(registry)
    register_identity_domain(registry)


__all__ = ["load_all_domains"]
