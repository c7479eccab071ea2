import itertools
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class RemoteToolError(Exception):
    """A JSON-RPC error envelope returned by a tool agent."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
        self.data = data


class ToolAgentClient:
    """
    Blocking HTTP client for a tool agent's `/mcp` and `/health`.

    Responsible ONLY for transport and envelope handling.
    Transport failures raise RuntimeError; error envelopes raise
    RemoteToolError carrying the remote code.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 10,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {}
        self._ids = itertools.count(1)

    # ============================================================
    # PROTOCOL
    # ============================================================

    def initialize(self, client_name: str = "toolagents-client") -> Dict[str, Any]:
        return self.call(
            "initialize",
            {"clientInfo": {"name": client_name}, "capabilities": {}},
        )

    def list_tools(self) -> List[Dict[str, Any]]:
        return self.call("tools/list")["tools"]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        return self.call("tools/call", {"name": name, "arguments": arguments or {}})

    def ping(self) -> Dict[str, Any]:
        return self.call("ping")

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }

        logger.debug("[CLIENT] %s → %s", method, self.base_url)
        data = self._request("POST", "/mcp", json=payload)

        if "error" in data:
            error = data["error"]
            raise RemoteToolError(
                error.get("code", 0),
                error.get("message", ""),
                error.get("data"),
            )

        if "result" not in data:
            raise RuntimeError(f"Missing 'result' field in remote response: {data}")

        return data["result"]

    # ============================================================
    # HEALTH
    # ============================================================

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    # ------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"

        try:
            response = requests.request(
                method,
                url,
                headers=self.headers,
                timeout=self.timeout_seconds,
                **kwargs,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"Transport failure ({method} {url}): {e}") from e

        try:
            data = response.json()
        except ValueError:
            raise RuntimeError(
                f"Agent did not return valid JSON. Response text: {response.text}"
            )

        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid response format from agent: {data}")

        return data
