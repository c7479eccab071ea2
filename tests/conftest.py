"""
Shared fixtures for the tool agent tests.
"""
import pytest

from toolagents.config import AgentConfig
from toolagents.agents.memory import MemoryAgent
from toolagents.agents.task import TaskAgent
from toolagents.agents.files import FileAgent
from toolagents.memory import KnowledgeStore
from toolagents.server.app_core import ToolAgentApp


class FakeClock:
    """Manually advanced epoch clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Empty store driven by the fake clock."""
    return KnowledgeStore(clock=clock)


@pytest.fixture
def memory_config():
    return AgentConfig(agent="memory", sweep_interval=0)


@pytest.fixture
def memory_app(memory_config, store):
    return ToolAgentApp(MemoryAgent(memory_config, store=store))


@pytest.fixture
def task_app():
    return ToolAgentApp(TaskAgent(AgentConfig(agent="task")))


@pytest.fixture
def file_app(tmp_path):
    config = AgentConfig(agent="file", allowed_roots=[str(tmp_path)])
    return ToolAgentApp(FileAgent(config))


def rpc(method, params=None, request_id=1):
    """Build a JSON-RPC 2.0 request payload."""
    payload = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        payload["params"] = params
    return payload


def call(name, arguments=None, request_id=1):
    return rpc("tools/call", {"name": name, "arguments": arguments or {}}, request_id)
