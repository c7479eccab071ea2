from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, Union

from .errors import (
    JsonRpcError,
    ParseError,
    MethodNotFound,
    InvalidParams,
    InternalError,
    ResourceNotFound,
)
from .messages import RpcRequest, RpcResponse
from ..tools.executor import ToolExecutor
from ..utils import utc_now_iso

logger = logging.getLogger(__name__)


PROTOCOL_VERSION = "2024-11-05"


class ProtocolState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class RpcMethod(Enum):
    """Every JSON-RPC method an agent answers. Anything else is -32601."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    PING = "ping"


class ProtocolEngine:
    """
    JSON-RPC 2.0 dispatcher shared by every tool agent.

    The engine owns no domain state. It resolves `method` through the
    RpcMethod enum, routes `tools/call` through the ToolExecutor and
    translates every outcome into a response envelope. No exception
    raised below this layer reaches the transport.

    State
    -----
    UNINITIALIZED → INITIALIZED on the first `initialize`. Repeated
    `initialize` calls re-confirm capabilities. Ordering is not
    enforced: `tools/call` before `initialize` is served.
    """

    def __init__(
        self,
        executor: ToolExecutor,
        server_name: str,
        server_version: str = "1.0.0",
        protocol_version: str = PROTOCOL_VERSION,
    ) -> None:
        self._executor = executor
        self._server_name = server_name
        self._server_version = server_version
        self._protocol_version = protocol_version
        self._state = ProtocolState.UNINITIALIZED

        self._handlers: Dict[RpcMethod, Callable[[Dict[str, Any]], Any]] = {
            RpcMethod.INITIALIZE: self._initialize,
            RpcMethod.TOOLS_LIST: self._tools_list,
            RpcMethod.TOOLS_CALL: self._tools_call,
            RpcMethod.PING: self._ping,
        }

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ProtocolState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._state is ProtocolState.INITIALIZED

    # ------------------------------------------------------------------
    # Entry Points
    # ------------------------------------------------------------------

    def handle_body(self, body: Union[bytes, str]) -> Dict[str, Any]:
        """Parse a raw request body and return the response envelope."""

        try:
            payload = json.loads(body, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError) as e:
            logger.info("[PROTOCOL] Unparseable body: %s", e)
            return RpcResponse.failure(None, ParseError(data="Invalid JSON")).to_dict()

        return self.handle_payload(payload).to_dict()

    def handle_payload(self, payload: Any) -> RpcResponse:

        try:
            request = RpcRequest.from_payload(payload)
        except JsonRpcError as e:
            return RpcResponse.failure(e.request_id, e)

        try:
            method = RpcMethod(request.method)
        except ValueError:
            logger.info("[PROTOCOL] Unknown method: %s", request.method)
            return RpcResponse.failure(
                request.id,
                MethodNotFound(data=f"Unknown method: {request.method}"),
            )

        try:
            result = self._handlers[method](request.params)
        except JsonRpcError as e:
            return RpcResponse.failure(request.id, e)
        except Exception as e:
            logger.exception("[PROTOCOL] %s failed", method.value)
            return RpcResponse.failure(request.id, InternalError(str(e)))

        return RpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Method Handlers
    # ------------------------------------------------------------------

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self._state is ProtocolState.UNINITIALIZED:
            logger.info(
                "[PROTOCOL] %s initialized | client=%s",
                self._server_name,
                params.get("clientInfo"),
            )
        self._state = ProtocolState.INITIALIZED

        return {
            "protocolVersion": self._protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self._server_name,
                "version": self._server_version,
            },
        }

    def _tools_list(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": self._executor.registry.get_manifest()}

    def _ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "pong": True,
            "timestamp": utc_now_iso(),
        }

    def _tools_call(self, params: Dict[str, Any]) -> Any:

        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParams("Tool name must be a non-empty string")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        logger.info("[PROTOCOL] tools/call %s", name)
        result = self._executor.execute(name, arguments)

        if result.status == "success":
            return result.output

        if result.status == "blocked":
            raise InvalidParams(f"Unknown tool: {name}")

        if result.status == "invalid":
            raise InvalidParams(result.error, data=result.details)

        if result.status == "not_found":
            raise ResourceNotFound(result.error)

        raise InternalError(result.error)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")
