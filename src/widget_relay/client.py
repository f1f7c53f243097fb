"""
ChatClient SDK: sync client for a Widget-Relay server.

Used by embedding hosts and scripts to look up public chat configurations
and relay messages through ``/chat/send``.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Optional

import httpx


class ChatClientError(Exception):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"HTTP {status_code}: {message}")


@dataclass
class ChatReply:
    """Reply to a relayed chat message."""

    response: str
    session_id: str


class ChatClient:
    """
    Synchronous HTTP client for Widget-Relay.

    A session id is generated on first use and reused for the client's
    lifetime unless one is passed explicitly.
    """

    def __init__(
        self,
        server_url: str = "http://localhost:8080",
        session_id: Optional[str] = None,
        timeout: float = 60,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.session_id = session_id or uuid.uuid4().hex
        self._http = httpx.Client(
            base_url=self.server_url,
            timeout=timeout,
            transport=transport,
        )

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            body = resp.json()
        except ValueError:
            raise ChatClientError(resp.status_code, resp.reason_phrase) from None
        if not isinstance(body, dict):
            raise ChatClientError(resp.status_code, resp.reason_phrase, details=body)
        raise ChatClientError(
            resp.status_code,
            body.get("error") or resp.reason_phrase,
            details=body.get("details"),
        )

    def send(
        self, config_id: int, message: str, session_id: Optional[str] = None,
    ) -> ChatReply:
        """Relay ``message`` to the workflow behind configuration ``config_id``."""
        resp = self._http.post(
            "/chat/send",
            json={
                "message": message,
                "sessionId": session_id or self.session_id,
                "configId": config_id,
            },
        )
        self._raise_for_status(resp)
        data = resp.json()["data"]
        return ChatReply(response=data["response"], session_id=data["sessionId"])

    def public_config(self, slug: str) -> Optional[dict[str, Any]]:
        """Browser-safe configuration for ``slug``, or None when unavailable."""
        resp = self._http.get(f"/public/{slug}")
        if resp.status_code == 404:
            return None
        self._raise_for_status(resp)
        return resp.json()["data"]

    def health(self) -> dict[str, Any]:
        resp = self._http.get("/health")
        self._raise_for_status(resp)
        return resp.json()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
