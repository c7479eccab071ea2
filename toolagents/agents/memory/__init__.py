from .agent import MemoryAgent
from .manifest import MANIFEST

__all__ = ["MemoryAgent", "MANIFEST"]
