"""Dispatcher for tools/list and tools/call requests.

A call moves through received -> token-ensured -> handler-resolved ->
validated -> invoked -> responded. Failures before invocation become
protocol errors; failures raised by the tool itself become an isError result.
"""

import json
import time
from typing import Any, Optional

from paypal_client.gateway import AuthenticatedGateway
from shared.errors import AuthFailure, ErrorCode, ProtocolError, ValidationError
from shared.logging import bind_context, clear_context, get_logger
from shared.models import CallToolResult, DispatchState, RequestContext

from mcp_server.registry import ToolRegistry
from mcp_server.validation import InputValidator

logger = get_logger(__name__)


class Dispatcher:
    """
    Resolves tool calls against the registry and runs them.

    Responsibilities:
    - Ensure a valid PayPal token before any tool runs
    - Resolve the tool by name
    - Validate arguments
    - Invoke the tool and shape its result
    """

    def __init__(
        self,
        registry: ToolRegistry,
        gateway: AuthenticatedGateway,
        validator: Optional[InputValidator] = None,
    ) -> None:
        self.registry = registry
        self.gateway = gateway
        self.validator = validator or InputValidator.from_registry(registry)

    def list_tools(self) -> list[dict[str, Any]]:
        """Every registered tool; needs no authentication."""
        return self.registry.describe_tools()

    async def call_tool(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> CallToolResult:
        """
        Execute a tool call.

        Raises:
            ProtocolError: If authentication fails, the tool is unknown,
                or the arguments are invalid
        """
        ctx = RequestContext(tool_name=name, arguments=arguments or {})
        if request_id:
            ctx.request_id = request_id

        bind_context(request_id=ctx.request_id, tool=name)
        start_time = time.time()
        try:
            logger.info("Tool call")
            logger.debug("Tool arguments", arguments=ctx.arguments)

            try:
                await self.gateway.credentials.ensure_valid()
            except AuthFailure as e:
                logger.error("Authentication failed", status_code=e.status_code)
                raise ProtocolError(ErrorCode.INTERNAL_ERROR, e.message) from e
            ctx.state = DispatchState.TOKEN_ENSURED

            tool = self.registry.get(name)
            if tool is None or tool.operation is None:
                raise ProtocolError(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}")
            ctx.state = DispatchState.HANDLER_RESOLVED

            try:
                ctx.validated_arguments = self.validator.validate(name, ctx.arguments)
            except ValidationError as e:
                raise ProtocolError(ErrorCode.INVALID_PARAMS, e.message, data=e.errors) from e
            ctx.state = DispatchState.VALIDATED

            try:
                result = await tool.operation(ctx.validated_arguments, self.gateway)
            except Exception as e:
                ctx.state = DispatchState.INVOKED
                logger.error("Tool execution failed", error=str(e), exc_info=True)
                return CallToolResult.text(f"Error: {e}", is_error=True)
            ctx.state = DispatchState.INVOKED

            response = CallToolResult.text(json.dumps(result, indent=2))
            ctx.state = DispatchState.RESPONDED
            logger.info(
                "Tool call completed",
                execution_time_ms=round((time.time() - start_time) * 1000, 2),
            )
            return response
        finally:
            clear_context()
