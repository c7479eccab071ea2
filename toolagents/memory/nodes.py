from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class KnowledgeNode:
    """
    Immutable unit of knowledge stored in the memory graph.

    Nodes are addressed by a caller-supplied `key`. Storing under an
    existing key replaces the node as a whole; relationships that
    reference the key are owned by the graph and are unaffected.

    Times are epoch seconds. `expires_at` is None for nodes that never
    expire.
    """

    key: str
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: float = 0.0
    expires_at: Optional[float] = None

    @classmethod
    def create(
        cls,
        key: str,
        content: str,
        metadata: Optional[Dict[str, Any]],
        now: float,
        ttl: Optional[float] = None,
    ) -> "KnowledgeNode":
        return cls(
            key=key,
            content=content,
            metadata=dict(metadata or {}),
            created_at=now,
            expires_at=now + ttl if ttl is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "content": self.content,
            "metadata": dict(self.metadata),
            "created_at": self.created_at,
            "expires_at": self.expires_at,
        }


def is_expired(node: KnowledgeNode, now: float) -> bool:
    """A node is logically absent once `now` reaches its expiry."""
    return node.expires_at is not None and node.expires_at <= now
