"""PayPal MCP Server - FastAPI Application.

Exposes the tool registry over a JSON-RPC 2.0 endpoint (POST /mcp) that
answers initialize, tools/list and tools/call, plus plain HTTP helpers for
health checks and tool discovery.
"""

import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_fixed

from paypal_client import AuthenticatedGateway, CredentialCache
from shared.config import ServerSettings, Settings, get_settings
from shared.errors import ConfigError, ErrorCode, ProtocolError
from shared.logging import get_logger, setup_logging

from mcp_server.dispatcher import Dispatcher
from mcp_server.protocol import (
    SERVER_VERSION,
    CallToolParams,
    RPCError,
    RPCRequest,
    RPCResponse,
    initialize_result,
)
from mcp_server.registry import build_registry

logger = get_logger(__name__)


async def verify_credentials(credentials: CredentialCache, server: ServerSettings) -> bool:
    """
    Check the configured PayPal credentials at startup.

    Attempts up to max_retries + 1 times, waiting retry_delay between tries.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(server.max_retries + 1),
        wait=wait_fixed(server.retry_delay_seconds),
        retry=retry_if_result(lambda ok: not ok),
        retry_error_callback=lambda retry_state: False,
    )
    return await retrying(credentials.verify)


def build_dispatcher(settings: Settings, client: httpx.AsyncClient) -> Dispatcher:
    """Wire the credential cache, gateway and registry into a dispatcher."""
    credentials = CredentialCache(
        client,
        client_id=settings.paypal.client_id,
        client_secret=settings.paypal.client_secret,
        token_cache_seconds=settings.paypal.token_cache_seconds,
    )
    gateway = AuthenticatedGateway(client, credentials)
    return Dispatcher(build_registry(), gateway)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    if getattr(app.state, "dispatcher", None) is not None:
        # Dispatcher supplied by the caller
        yield
        return

    settings = get_settings()
    setup_logging(settings.server.log_level, json_output=settings.server.log_json)

    logger.info("Starting PayPal MCP Server", environment=settings.paypal.environment)

    client = httpx.AsyncClient(
        base_url=settings.paypal.api_base_url,
        timeout=settings.server.request_timeout_seconds,
    )
    try:
        dispatcher = build_dispatcher(settings, client)

        if not await verify_credentials(dispatcher.gateway.credentials, settings.server):
            raise ConfigError("Failed to verify PayPal credentials")

        app.state.settings = settings
        app.state.dispatcher = dispatcher

        logger.info(
            "PayPal MCP Server started",
            environment=settings.paypal.environment,
            domains=dispatcher.registry.list_domains(),
            tool_count=len(dispatcher.registry),
        )

        yield
    finally:
        logger.info("Shutting down PayPal MCP Server")
        await client.aclose()


def create_app(dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        dispatcher: Prebuilt dispatcher; when omitted one is built from
            settings during startup
    """
    app = FastAPI(
        title="PayPal MCP Server",
        description="MCP tool server for the PayPal REST APIs",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    def get_dispatcher() -> Dispatcher:
        if app.state.dispatcher is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server not initialized"
            )
        return app.state.dispatcher

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        registry = get_dispatcher().registry
        settings = getattr(app.state, "settings", None)
        return {
            "status": "healthy",
            "version": SERVER_VERSION,
            "environment": settings.paypal.environment if settings else None,
            "domains": registry.list_domains(),
            "tool_count": len(registry),
        }

    @app.get("/tools", tags=["Tools"])
    async def list_tools() -> dict[str, Any]:
        """List all available tools."""
        tools = get_dispatcher().list_tools()
        return {"tools": tools, "count": len(tools)}

    @app.post("/mcp", tags=["MCP"])
    async def handle_rpc(request: Request) -> Response:
        """JSON-RPC 2.0 endpoint for MCP clients."""
        try:
            body = await request.json()
        except ValueError:
            return _error_response(None, ProtocolError(ErrorCode.PARSE_ERROR, "Parse error"))

        try:
            rpc = RPCRequest.model_validate(body)
        except PydanticValidationError:
            request_id = body.get("id") if isinstance(body, dict) else None
            return _error_response(
                request_id, ProtocolError(ErrorCode.INVALID_REQUEST, "Invalid request")
            )

        if rpc.method.startswith("notifications/"):
            return Response(status_code=status.HTTP_202_ACCEPTED)

        try:
            result = await _dispatch_rpc(get_dispatcher(), rpc)
        except ProtocolError as e:
            return _error_response(rpc.id, e)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Unhandled error in RPC handler", method=rpc.method, error=str(e), exc_info=True)
            return _error_response(
                rpc.id, ProtocolError(ErrorCode.INTERNAL_ERROR, "Internal error")
            )

        return JSONResponse(RPCResponse(id=rpc.id, result=result).to_dict())

    return app


async def _dispatch_rpc(dispatcher: Dispatcher, rpc: RPCRequest) -> Any:
    """Route one JSON-RPC request to the dispatcher."""
    if rpc.method == "initialize":
        return initialize_result()

    if rpc.method == "ping":
        return {}

    if rpc.method == "tools/list":
        return {"tools": dispatcher.list_tools()}

    if rpc.method == "tools/call":
        try:
            params = CallToolParams.model_validate(rpc.params)
        except PydanticValidationError as e:
            raise ProtocolError(
                ErrorCode.INVALID_PARAMS, "Invalid parameters for tools/call"
            ) from e
        result = await dispatcher.call_tool(
            params.name,
            params.arguments,
            request_id=str(rpc.id) if rpc.id is not None else None,
        )
        return result.to_protocol()

    raise ProtocolError(ErrorCode.METHOD_NOT_FOUND, f"Method not found: {rpc.method}")


def _error_response(request_id: Any, error: ProtocolError) -> JSONResponse:
    if not isinstance(request_id, (str, int)):
        request_id = None
    response = RPCResponse(
        id=request_id,
        error=RPCError(code=error.rpc_code, message=error.message, data=error.data),
    )
    return JSONResponse(response.to_dict())


app = create_app()


def main():
    """Run the PayPal MCP Server."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error("Failed to start PayPal MCP server", error=e.message)
        sys.exit(1)

    setup_logging(settings.server.log_level, json_output=settings.server.log_json)

    uvicorn.run(
        "mcp_server.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    main()
