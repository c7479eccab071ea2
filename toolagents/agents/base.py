from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Tuple, Type

from pydantic import BaseModel

from ..config import AgentConfig
from ..tools.schema import Tool


# tool name → (typed input model, handler, side_effect)
ToolBinding = Tuple[Type[BaseModel], Callable[[Any], Any], bool]


def tools_from_manifest(
    manifest: Mapping[str, Any],
    bindings: Mapping[str, ToolBinding],
) -> List[Tool]:
    """
    Join a published manifest with its static handler table.

    Both sides must name exactly the same tools; a mismatch is a
    programming error and fails at startup, never per request.
    """
    published = manifest["tools"]

    if set(published) != set(bindings):
        raise ValueError(
            f"Manifest '{manifest['name']}' and handler table disagree: "
            f"manifest={sorted(published)} handlers={sorted(bindings)}"
        )

    tools = []
    for name, entry in published.items():
        input_model, handler, side_effect = bindings[name]
        tools.append(
            Tool(
                name=name,
                description=entry["description"],
                input_schema=entry["inputSchema"],
                input_model=input_model,
                handler=handler,
                side_effect=side_effect,
            )
        )
    return tools


class ToolAgent(ABC):
    """
    One deployable agent: a manifest, its tools and any domain state
    they close over.

    Lifecycle hooks (`start`, `stop`, `after_mutation`) default to
    no-ops; agents with background work or persistence override them.
    """

    manifest: Dict[str, Any]

    def __init__(self, config: AgentConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return self.manifest["name"]

    @property
    def version(self) -> str:
        return self.manifest["version"]

    @property
    def protocol_version(self) -> str:
        return self.manifest["protocol"]

    @abstractmethod
    def build_tools(self) -> List[Tool]:
        raise NotImplementedError

    def health_details(self) -> Dict[str, Any]:
        return {}

    def after_mutation(self, tool_name: str) -> None:
        pass

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass
