"""Outbound relay to the externally hosted workflow runner."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from widget_relay.common.config import RelaySettings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


@dataclass(frozen=True)
class RelaySuccess:
    """The workflow answered 2xx; ``payload`` is its decoded JSON body."""

    payload: Any
    message: str = ""
    success: bool = True


@dataclass(frozen=True)
class RelayFailure:
    """The call failed: network error, timeout, non-2xx or undecodable body."""

    error: str
    message: str = ""
    status_code: Optional[int] = None
    success: bool = False


RelayResult = Union[RelaySuccess, RelayFailure]


def build_endpoint(base_url: str, workflow_id: str) -> str:
    """Trim one trailing slash from ``base_url`` and append the workflow id."""
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    return f"{base_url}/{workflow_id}"


def build_envelope(message: str, session_id: str) -> dict[str, Any]:
    return {
        "output_type": "chat",
        "input_type": "chat",
        "input_value": message,
        "session_id": session_id,
    }


class WorkflowRelay:
    """Stateless forwarder: one POST per message, no retries."""

    def __init__(
        self,
        settings: RelaySettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.relay_timeout,
            transport=self._transport,
        )

    async def relay(
        self,
        base_url: str,
        workflow_id: str,
        api_key: str,
        message: str,
        session_id: str,
    ) -> RelayResult:
        url = build_endpoint(base_url, workflow_id)
        headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: api_key,
        }
        try:
            async with self._client() as client:
                resp = await client.post(
                    url, json=build_envelope(message, session_id), headers=headers,
                )
        except httpx.TimeoutException:
            logger.warning("Relay to %s timed out after %ss", url, self.settings.relay_timeout)
            return RelayFailure(
                error=f"Request timed out after {self.settings.relay_timeout:g}s",
            )
        except httpx.HTTPError as e:
            logger.warning("Relay to %s failed: %s", url, e)
            return RelayFailure(error=str(e) or e.__class__.__name__)

        if not resp.is_success:
            logger.warning("Relay to %s answered HTTP %s", url, resp.status_code)
            return RelayFailure(
                error=f"HTTP {resp.status_code}: {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("Relay to %s returned an undecodable body", url)
            return RelayFailure(error=f"Invalid JSON in response: {e}")
        return RelaySuccess(payload=payload)

    async def test_connection(
        self,
        base_url: str,
        workflow_id: str,
        api_key: str,
        message: str | None = None,
        session_id: str | None = None,
    ) -> RelayResult:
        """Diagnostic relay: same call, plus a human-readable ``message``."""
        result = await self.relay(
            base_url,
            workflow_id,
            api_key,
            message or self.settings.default_test_message,
            session_id or f"test-{int(time.time() * 1000)}",
        )
        if isinstance(result, RelaySuccess):
            return RelaySuccess(payload=result.payload, message="Connection successful")
        if result.status_code is not None:
            label = "Connection failed"
        else:
            label = "Connection error"
        return RelayFailure(
            error=result.error, message=label, status_code=result.status_code,
        )
