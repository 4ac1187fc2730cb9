"""
Custom agent API client.

Thin async wrapper around the external agent service. Every call is a
single POST with the X-API-Key header; no retries are attempted.

Dependencies: httpx, cigno.configs, cigno.core.exceptions
System role: Outbound AI integration adapter
"""

import logging
from typing import Any

import httpx

from cigno.configs import AgentSettings
from cigno.core.exceptions import AgentConfigurationError, AgentError, AgentRequestError
from cigno.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)


class CustomAgentClient:
    """
    Client for the custom agent HTTP API.

    Args:
        settings: Agent configuration (base URL, key, timeout)
        client: Optional pre-built httpx.AsyncClient, mainly for tests
    """

    def __init__(self, settings: AgentSettings, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self.base_url = settings.api_base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)

    def _headers(self) -> dict[str, str]:
        if not self.settings.api_key:
            raise AgentConfigurationError("AI_API_KEY is not configured", {"setting": "AI_API_KEY"})
        return {"Content-Type": "application/json", "X-API-Key": self.settings.api_key}

    async def _post(self, path: str, payload: dict[str, Any], agent_id: str | None = None) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._headers()
        try:
            response = await self.client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise AgentError(f"Custom agent request failed: {e}", {"agent_id": agent_id}) from e

        if not response.is_success:
            logger.warning(
                "Custom agent returned error status",
                extra={
                    "agent_id": agent_id,
                    "status_code": response.status_code,
                    "body": safe_log_value(response.text),
                },
            )
            raise AgentRequestError(response.status_code, response.text, agent_id)

        try:
            return response.json()
        except ValueError:
            return response.text

    async def execute(self, agent_id: str, message: str, context: dict[str, Any] | None = None) -> Any:
        """
        Run an agent on a message.

        Args:
            agent_id: Remote agent identifier
            message: Prompt text
            context: Structured context forwarded to the agent

        Returns:
            Decoded JSON body (or raw text when the body is not JSON)

        Raises:
            AgentConfigurationError: If the API key or agent id is missing
            AgentRequestError: If the API answers with a non-success status
            AgentError: If the request cannot be sent
        """
        if not agent_id:
            raise AgentConfigurationError("Agent id is required")
        logger.info("Executing custom agent", extra={"agent_id": agent_id})
        return await self._post(
            f"/api/custom-agents/{agent_id}/execute",
            {"message": message, "context": context or {}},
            agent_id,
        )

    async def chat(self, agent_id: str, message: str, context: dict[str, Any] | None = None) -> Any:
        """Send a message to an agent's chat endpoint. Raises like execute."""
        if not agent_id:
            raise AgentConfigurationError("Agent id is required")
        logger.info("Chatting with custom agent", extra={"agent_id": agent_id})
        return await self._post(
            f"/api/custom-agents/{agent_id}/chat",
            {"message": message, "context": context or {}},
            agent_id,
        )

    async def send_chat(self, message: str, context: dict[str, Any] | None = None) -> Any:
        """Send a message to the general chat endpoint (no agent)."""
        return await self._post("/api/chat/send-streaming", {"message": message, "context": context or {}})

    async def aclose(self) -> None:
        """Close the httpx.AsyncClient this instance created. Injected clients stay open."""
        if self._owns_client:
            await self.client.aclose()
