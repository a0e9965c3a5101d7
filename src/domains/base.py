"""Base class for PayPal tool domains.

Each domain:
- Declares its tools and their input schemas
- Binds every tool to an async handler method
- Translates tool calls into PayPal REST requests through the gateway
- Turns remote failures into tool-specific errors
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import quote

from paypal_client.gateway import AuthenticatedGateway
from shared.errors import AuthFailure, RemoteCallError, ToolExecutionError
from shared.logging import get_logger
from shared.models import ToolDefinition, ToolOperation

logger = get_logger(__name__)


class PayPalDomain(ABC):
    """
    Base class for a group of PayPal tools.

    Handlers are stateless: everything they need arrives as validated
    arguments plus the gateway.
    """

    name: str = ""
    description: str = ""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._define_tools()

    @abstractmethod
    def _define_tools(self) -> None:
        """Populate self._tools."""

    @property
    def tools(self) -> list[ToolDefinition]:
        """Return all tool definitions for this domain."""
        return list(self._tools.values())

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def _add_tool(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        operation: ToolOperation,
    ) -> None:
        self._tools[name] = ToolDefinition(
            name=name,
            domain=self.name,
            description=description,
            input_schema=input_schema,
            operation=operation,
        )

    async def _call(
        self,
        gateway: AuthenticatedGateway,
        method: str,
        path: str,
        failure: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Make a gateway request, replacing any failure with ToolExecutionError.

        The remote detail is logged here and kept out of the raised message.
        """
        try:
            return await gateway.request(method, path, json=json, params=params)
        except (RemoteCallError, AuthFailure) as e:
            logger.error(
                failure,
                domain=self.name,
                method=method,
                path=path,
                status_code=e.status_code,
                error=e.message,
            )
            raise ToolExecutionError(failure) from e


def split_identifier(arguments: dict[str, Any], key: str) -> tuple[str, dict[str, Any]]:
    """
    Pull a path identifier out of the arguments.

    Returns:
        Tuple of (identifier, remaining arguments for the request body)

    Raises:
        ToolExecutionError: If the identifier is missing or empty
    """
    payload = dict(arguments)
    identifier = payload.pop(key, None)
    if not identifier:
        raise ToolExecutionError(f"{key} is required")
    return quote(str(identifier), safe=""), payload
