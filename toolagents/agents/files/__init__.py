from .agent import FileAgent
from .manifest import MANIFEST

__all__ = ["FileAgent", "MANIFEST"]
