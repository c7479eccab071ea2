"""
JSON-RPC 2.0 error taxonomy.

Every failure that crosses the protocol boundary is one of these; the
engine serializes it into the `error` member of the response envelope.
"""

from typing import Any, Dict, Optional


PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Implementation-defined server error range (-32000 .. -32099)
RESOURCE_NOT_FOUND = -32001


class JsonRpcError(Exception):
    """Base class: a protocol-visible error with a JSON-RPC code."""

    code = INTERNAL_ERROR
    message = "Internal error"

    def __init__(
        self,
        detail: Optional[str] = None,
        data: Any = None,
        request_id: Any = None,
    ) -> None:
        self.detail = detail
        self.data = data
        self.request_id = request_id
        super().__init__(detail or self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "code": self.code,
            "message": self.message if not self.detail else f"{self.message}: {self.detail}",
        }
        if self.data is not None:
            payload["data"] = self.data
        return payload


class ParseError(JsonRpcError):
    code = PARSE_ERROR
    message = "Parse error"


class InvalidRequest(JsonRpcError):
    code = INVALID_REQUEST
    message = "Invalid Request"


class MethodNotFound(JsonRpcError):
    code = METHOD_NOT_FOUND
    message = "Method not found"


class InvalidParams(JsonRpcError):
    code = INVALID_PARAMS
    message = "Invalid params"


class InternalError(JsonRpcError):
    code = INTERNAL_ERROR
    message = "Internal error"


class ResourceNotFound(JsonRpcError):
    code = RESOURCE_NOT_FOUND
    message = "Not found"
