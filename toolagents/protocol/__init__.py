from .errors import (
    JsonRpcError,
    ParseError,
    InvalidRequest,
    MethodNotFound,
    InvalidParams,
    InternalError,
    ResourceNotFound,
)
from .messages import RpcRequest, RpcResponse
from .engine import ProtocolEngine, ProtocolState, RpcMethod, PROTOCOL_VERSION

__all__ = [
    "JsonRpcError",
    "ParseError",
    "InvalidRequest",
    "MethodNotFound",
    "InvalidParams",
    "InternalError",
    "ResourceNotFound",
    "RpcRequest",
    "RpcResponse",
    "ProtocolEngine",
    "ProtocolState",
    "RpcMethod",
    "PROTOCOL_VERSION",
]
