"""Identity Domain - user info and web experience profiles."""

from typing import TYPE_CHECKING, Any

from domains.base import PayPalDomain, split_identifier
from domains.identity import schemas
from paypal_client.gateway import AuthenticatedGateway
from shared.logging import get_logger

if TYPE_CHECKING:
    from mcp_server.registry import ToolRegistry

logger = get_logger(__name__)

WEB_PROFILES_PATH = "/v1/payment-experience/web-profiles"


class IdentityDomain(PayPalDomain):
    """
    Identity Domain.

    Provides tools for:
    - User information for the authenticated account
    - Web experience profiles (checkout customization)
    """

    name = "identity"
    description = "User information and web experience profiles"

    def _define_tools(self) -> None:
        self._add_tool(
            "get_userinfo",
            "Retrieve user information",
            schemas.GET_USERINFO,
            self._get_userinfo,
        )
        self._add_tool(
            "create_web_profile",
            "Create a web experience profile",
            schemas.CREATE_WEB_PROFILE,
            self._create_web_profile,
        )
        self._add_tool(
            "get_web_profiles",
            "Get list of web experience profiles",
            schemas.GET_WEB_PROFILES,
            self._get_web_profiles,
        )
        self._add_tool(
            "get_web_profile",
            "Get a specific web experience profile",
            schemas.GET_WEB_PROFILE,
            self._get_web_profile,
        )
        self._add_tool(
            "update_web_profile",
            "Update a web experience profile",
            schemas.UPDATE_WEB_PROFILE,
            self._update_web_profile,
        )
        self._add_tool(
            "delete_web_profile",
            "Delete a web experience profile",
            schemas.DELETE_WEB_PROFILE,
            self._delete_web_profile,
        )

    async def _get_userinfo(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Getting user information")
        return await self._call(
            gateway, "GET", "/v1/identity/oauth2/userinfo",
            "Failed to get user information", params={"schema": "paypalv1.1"},
        )

    async def _create_web_profile(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Creating web profile")
        return await self._call(
            gateway, "POST", WEB_PROFILES_PATH,
            "Failed to create web profile", json=params,
        )

    async def _get_web_profiles(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        logger.info("Getting web profiles")
        return await self._call(
            gateway, "GET", WEB_PROFILES_PATH,
            "Failed to get web profiles",
        )

    async def _get_web_profile(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        profile_id, _ = split_identifier(params, "profile_id")
        logger.info("Getting web profile", profile_id=profile_id)
        return await self._call(
            gateway, "GET", f"{WEB_PROFILES_PATH}/{profile_id}",
            f"Failed to get web profile {profile_id}",
        )

    async def _update_web_profile(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        profile_id, payload = split_identifier(params, "profile_id")
        logger.info("Updating web profile", profile_id=profile_id)
        result = await self._call(
            gateway, "PUT", f"{WEB_PROFILES_PATH}/{profile_id}",
            f"Failed to update web profile {profile_id}", json=payload,
        )
        # PayPal answers 204 No Content on success
        return result or {"success": True, "profile_id": profile_id}

    async def _delete_web_profile(
        self,
        params: dict[str, Any],
        gateway: AuthenticatedGateway
    ) -> Any:
        profile_id, _ = split_identifier(params, "profile_id")
        logger.info("Deleting web profile", profile_id=profile_id)
        await self._call(
            gateway, "DELETE", f"{WEB_PROFILES_PATH}/{profile_id}",
            f"Failed to delete web profile {profile_id}",
        )
        return {"success": True, "profile_id": profile_id}


def register_identity_domain(registry: "ToolRegistry") -> None:
    """Register the identity domain tools."""
    domain = IdentityDomain()
    registry.register_many(domain.tools)
    logger.info("Identity domain registered", tool_count=len(domain.tools))
