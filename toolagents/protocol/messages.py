from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .errors import InvalidRequest, JsonRpcError


JSONRPC_VERSION = "2.0"

RequestId = Optional[Union[str, int, float]]


@dataclass(frozen=True)
class RpcRequest:
    """
    Parsed JSON-RPC 2.0 request envelope.

    Only the shape is checked here; whether `method` is supported is
    the engine's decision.
    """

    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    id: RequestId = None

    @classmethod
    def from_payload(cls, payload: Any) -> "RpcRequest":

        if not isinstance(payload, dict):
            raise InvalidRequest("Request must be a JSON object")

        request_id = payload.get("id")
        if request_id is not None and (
            isinstance(request_id, bool)
            or not isinstance(request_id, (str, int, float))
        ):
            raise InvalidRequest("Request id must be a string, number or null")

        method = payload.get("method")
        if not isinstance(method, str) or not method:
            raise InvalidRequest("Request method must be a non-empty string", request_id=request_id)

        params = payload.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise InvalidRequest("Request params must be an object", request_id=request_id)

        return cls(method=method, params=params, id=request_id)


@dataclass(frozen=True)
class RpcResponse:
    """
    JSON-RPC 2.0 response envelope. Exactly one of `result` / `error`
    is serialized.
    """

    id: RequestId
    result: Any = None
    error: Optional[JsonRpcError] = None

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> "RpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, error: JsonRpcError) -> "RpcResponse":
        return cls(id=request_id, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {
                "jsonrpc": JSONRPC_VERSION,
                "id": self.id,
                "error": self.error.to_dict(),
            }

        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": self.id,
            "result": self.result,
        }
