import os
from pathlib import Path
from typing import Dict, List, Optional


DEFAULT_PORTS: Dict[str, int] = {
    "file": 3001,
    "memory": 3002,
    "task": 3004,
}

DEFAULT_HOST = "0.0.0.0"
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
DEFAULT_SWEEP_INTERVAL = 60.0
DEFAULT_MAX_KNOWLEDGE_ITEMS = 10000
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class AgentConfig:
    """
    Central configuration object for a single tool agent process.

    Values come from the constructor or, via `from_env`, from
    per-agent environment overrides with fixed fallbacks:

        <AGENT>_AGENT_PORT / PORT
        <AGENT>_AGENT_HOST / HOST
        <AGENT>_AGENT_DATA          (memory agent persistence directory)
        LOG_LEVEL
        MEMORY_SWEEP_INTERVAL       (seconds, 0 disables the sweeper)
        FILE_AGENT_ROOTS            (os.pathsep separated)
    """

    def __init__(
        self,
        agent: str = "memory",
        host: str = DEFAULT_HOST,
        port: Optional[int] = None,
        log_level: str = "INFO",
        data_directory: Optional[str] = None,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        max_knowledge_items: int = DEFAULT_MAX_KNOWLEDGE_ITEMS,
        allowed_roots: Optional[List[str]] = None,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        self.agent = agent
        self.host = host
        self.port = port if port is not None else DEFAULT_PORTS.get(agent, 0)
        self.log_level = log_level.upper()
        self.data_directory = data_directory
        self.sweep_interval = sweep_interval
        self.max_knowledge_items = max_knowledge_items
        self.allowed_roots = allowed_roots or [str(Path.cwd())]
        self.max_file_size = max_file_size

        self._validate()

    @classmethod
    def from_env(cls, agent: str, environ: Optional[Dict[str, str]] = None) -> "AgentConfig":
        env = os.environ if environ is None else environ
        prefix = f"{agent.upper()}_AGENT_"

        port = env.get(prefix + "PORT") or env.get("PORT")
        host = env.get(prefix + "HOST") or env.get("HOST") or DEFAULT_HOST
        roots = env.get("FILE_AGENT_ROOTS")

        try:
            return cls(
                agent=agent,
                host=host,
                port=int(port) if port else None,
                log_level=env.get("LOG_LEVEL", "INFO"),
                data_directory=env.get(prefix + "DATA") or None,
                sweep_interval=float(
                    env.get("MEMORY_SWEEP_INTERVAL", DEFAULT_SWEEP_INTERVAL)
                ),
                allowed_roots=[r for r in roots.split(os.pathsep) if r] if roots else None,
            )
        except ValueError as e:
            raise ValueError(f"Invalid configuration for agent '{agent}': {e}") from e

    def override(self, host: Optional[str] = None, port: Optional[int] = None) -> "AgentConfig":
        """Apply command-line overrides and re-validate."""
        if host:
            self.host = host
        if port is not None:
            self.port = port
        self._validate()
        return self

    def _validate(self):
        if self.agent not in DEFAULT_PORTS:
            raise ValueError(f"Unsupported agent: {self.agent}")

        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {self.log_level}")

        if self.sweep_interval < 0:
            raise ValueError("sweep_interval cannot be negative")

        if self.max_knowledge_items <= 0:
            raise ValueError("max_knowledge_items must be positive")

        if self.max_file_size <= 0:
            raise ValueError("max_file_size must be positive")

    def __repr__(self) -> str:
        return (
            f"AgentConfig(agent={self.agent!r}, host={self.host!r}, "
            f"port={self.port}, data_directory={self.data_directory!r})"
        )
