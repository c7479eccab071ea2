from typing import Dict, Type

from ..config import AgentConfig
from .base import ToolAgent
from .files import FileAgent
from .memory import MemoryAgent
from .task import TaskAgent


AGENTS: Dict[str, Type[ToolAgent]] = {
    "file": FileAgent,
    "memory": MemoryAgent,
    "task": TaskAgent,
}


def create_agent(config: AgentConfig) -> ToolAgent:
    try:
        agent_cls = AGENTS[config.agent]
    except KeyError:
        raise ValueError(f"Unsupported agent: {config.agent}") from None
    return agent_cls(config)
