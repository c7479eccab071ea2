from .nodes import KnowledgeNode, is_expired
from .edges import Relationship
from .graph import KnowledgeGraph
from .similarity import SimilarityScorer, HashingVectorScorer
from .store import KnowledgeStore
from .sweeper import ExpirySweeper
from .persistence import MemoryPersistence

__all__ = [
    "KnowledgeNode",
    "is_expired",
    "Relationship",
    "KnowledgeGraph",
    "SimilarityScorer",
    "HashingVectorScorer",
    "KnowledgeStore",
    "ExpirySweeper",
    "MemoryPersistence",
]
