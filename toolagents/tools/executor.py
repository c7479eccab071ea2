from __future__ import annotations

import time
import logging
from typing import Any, Callable, Dict, Optional

from .registry import ToolRegistry
from .validator import ArgumentValidator, ArgumentValidationError
from ..errors import NotFoundError
from ..models import ToolResult

logger = logging.getLogger(__name__)


class ToolExecutor:
    """
    Execution boundary for `tools/call`.

    Flow: registry lookup → argument validation → typed handler.
    Every outcome, including unexpected handler exceptions, comes back
    as a ToolResult; nothing raised by a handler escapes this class.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        after_mutation: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._registry = registry
        self._arg_validator = ArgumentValidator(registry)
        self._after_mutation = after_mutation

    # ============================================================
    # MAIN EXECUTION
    # ============================================================

    def execute(self, tool_name: str, args: Dict[str, Any]) -> ToolResult:

        start = time.monotonic()

        try:
            tool = self._registry.lookup(tool_name)
        except KeyError as e:
            return self._result(tool_name, "blocked", start, error=e.args[0])

        # ------------------------------------------------------------
        # Argument Validation (handler never runs on failure)
        # ------------------------------------------------------------
        try:
            typed_args = self._arg_validator.validate(tool_name, args)
        except ArgumentValidationError as e:
            logger.info("[EXECUTOR] Rejected %s: %s", tool_name, e)
            return self._result(
                tool_name, "invalid", start, error=str(e), details=e.to_dict()
            )

        # ------------------------------------------------------------
        # Handler
        # ------------------------------------------------------------
        try:
            output = tool.handler(typed_args)
        except NotFoundError as e:
            return self._result(tool_name, "not_found", start, error=str(e))
        except Exception as e:
            logger.exception("[EXECUTOR] Tool %s failed", tool_name)
            return self._result(tool_name, "failure", start, error=str(e) or type(e).__name__)

        if tool.side_effect and self._after_mutation is not None:
            try:
                self._after_mutation(tool_name)
            except Exception:
                logger.exception("[EXECUTOR] Post-mutation hook failed for %s", tool_name)

        logger.info(
            "[EXECUTOR] Tool %s succeeded | latency_ms=%d",
            tool_name,
            self._latency_ms(start),
        )
        return self._result(tool_name, "success", start, output=output)

    # ============================================================
    # RESULT BUILDER
    # ============================================================

    def _result(
        self,
        tool_name: str,
        status: str,
        start_time: float,
        output: Any = None,
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> ToolResult:

        return ToolResult(
            tool_name=tool_name,
            status=status,
            output=output,
            error=error,
            latency_ms=self._latency_ms(start_time),
            details=details or {},
        )

    @staticmethod
    def _latency_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)

    # ------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------

    @property
    def registry(self) -> ToolRegistry:
        return self._registry
