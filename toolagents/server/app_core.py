from __future__ import annotations

import logging
import time
from typing import Any, Dict

from toolagents.agents import create_agent
from toolagents.agents.base import ToolAgent
from toolagents.config import AgentConfig
from toolagents.protocol import ProtocolEngine
from toolagents.tools.executor import ToolExecutor
from toolagents.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolAgentApp:
    """
    Server-owned application assembler.

    Wires one agent's tools into:
        ToolRegistry
        ToolExecutor (with the agent's post-mutation hook)
        ProtocolEngine

    The transport only ever talks to this object.
    """

    def __init__(self, agent: ToolAgent) -> None:
        self.agent = agent

        self.registry = ToolRegistry()
        self.registry.register_many(agent.build_tools())

        self.executor = ToolExecutor(self.registry, after_mutation=agent.after_mutation)
        self.engine = ProtocolEngine(
            self.executor,
            server_name=agent.name,
            server_version=agent.version,
            protocol_version=agent.protocol_version,
        )

        self.started_at = time.monotonic()

        logger.info(
            "[APP] Assembled %s | tool_count=%d",
            agent.name,
            len(self.registry),
        )

    @classmethod
    def create(cls, config: AgentConfig) -> "ToolAgentApp":
        return cls(create_agent(config))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.started_at = time.monotonic()
        self.agent.start()

    def stop(self) -> None:
        self.agent.stop()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def handle_rpc(self, body: bytes) -> Dict[str, Any]:
        return self.engine.handle_body(body)

    @property
    def uptime(self) -> float:
        return time.monotonic() - self.started_at

    def health(self) -> Dict[str, Any]:
        """Health fields without timestamp; agent stats are merged in last."""
        payload = {
            "status": "healthy",
            "uptime": round(self.uptime, 3),
            "initialized": self.engine.initialized,
            "agent": self.agent.name,
        }
        payload.update(self.agent.health_details())
        return payload
