from __future__ import annotations

from typing import Dict, List, Any, Iterable
from threading import RLock
from copy import deepcopy
import logging

from .schema import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Authoritative registry of all tools an agent exposes.

    This forms the capability boundary: if a tool is not registered here,
    it cannot be reached through `tools/call`.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, Tool] = {}
        self._lock = RLock()
        logger.debug("[TOOL REGISTRY] Initialized (empty)")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, tool: Tool) -> None:

        with self._lock:
            if tool.name in self._tools:
                raise ValueError(f"Tool '{tool.name}' is already registered.")

            self._tools[tool.name] = tool

            logger.info(
                "[TOOL REGISTRY] Tool registered: %s | total=%d",
                tool.name,
                len(self._tools)
            )

    def register_many(self, tools: Iterable[Tool]) -> None:

        tools = list(tools)

        with self._lock:
            seen = set(self._tools)
            for tool in tools:
                if tool.name in seen:
                    raise ValueError(f"Tool '{tool.name}' is already registered.")
                seen.add(tool.name)

            for tool in tools:
                self._tools[tool.name] = tool

            logger.info(
                "[TOOL REGISTRY] Bulk registration complete | total=%d",
                len(self._tools)
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, tool_name: str) -> Tool:

        with self._lock:
            try:
                return self._tools[tool_name]
            except KeyError:
                logger.warning(
                    "[TOOL REGISTRY] Lookup failed: %s | available=%s",
                    tool_name,
                    list(self._tools.keys())
                )
                raise KeyError(f"Tool '{tool_name}' is not registered.") from None

    def has_tool(self, tool_name: str) -> bool:
        with self._lock:
            return tool_name in self._tools

    def list_tools(self) -> List[Tool]:
        with self._lock:
            return list(self._tools.values())

    def list_tool_names(self) -> List[str]:
        with self._lock:
            return list(self._tools.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    # ------------------------------------------------------------------
    # Schema Access
    # ------------------------------------------------------------------

    def get_input_schema(self, tool_name: str) -> Dict[str, Any]:
        return deepcopy(self.lookup(tool_name).input_schema)

    def get_manifest(self) -> List[Dict[str, Any]]:
        """Published descriptors, in registration order."""
        return [tool.to_descriptor() for tool in self.list_tools()]
