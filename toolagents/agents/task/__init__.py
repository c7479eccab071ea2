from .agent import TaskAgent
from .manifest import MANIFEST

__all__ = ["TaskAgent", "MANIFEST"]
