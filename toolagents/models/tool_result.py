from dataclasses import dataclass, field
from typing import Any, Optional, Literal, Dict


@dataclass(frozen=True)
class ToolResult:
    """
    Immutable structured record of a tool invocation.

    Produced by ToolExecutor and consumed by the protocol engine,
    which turns it into a JSON-RPC result or error envelope.

    Attributes
    ----------
    tool_name : str
        Name of the tool that was requested.

    status : {"success", "blocked", "invalid", "not_found", "failure"}
        Outcome classification:
            success   → handler ran and returned
            blocked   → tool is not registered
            invalid   → arguments failed validation, handler not run
            not_found → handler reported a missing resource
            failure   → handler raised unexpectedly

    output : Any
        Handler return value. None unless status is success.

    error : Optional[str]
        Human-readable failure description.

    details : Dict[str, Any]
        Structured failure data (e.g. missing / mistyped fields).

    latency_ms : int
        Execution time in milliseconds (monotonic).
    """

    tool_name: str
    status: Literal["success", "blocked", "invalid", "not_found", "failure"]
    output: Any
    error: Optional[str]
    latency_ms: int
    details: Dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Convenience Properties
    # ------------------------------------------------------------------

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tool_name": self.tool_name,
            "status": self.status,
            "output": self.output,
            "error": self.error,
            "details": self.details,
            "latency_ms": self.latency_ms,
        }
