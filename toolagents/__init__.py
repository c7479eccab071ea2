"""JSON-RPC tool agents: memory, task and file."""

__version__ = "1.0.0"
