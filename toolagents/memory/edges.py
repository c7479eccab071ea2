import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


def new_relationship_id() -> str:
    return f"rel_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Relationship:
    """
    Directed, typed, weighted relationship between two node keys.

    Endpoints are plain keys, not node references: an edge may point at
    a key with no live node (dangling), which traversal simply skips.
    Several edges may share the same (from_key, to_key, type) triple.
    """

    from_key: str
    to_key: str
    relationship_type: str
    strength: float = 0.5
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: float = 0.0
    id: str = field(default_factory=new_relationship_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from_key": self.from_key,
            "to_key": self.to_key,
            "relationship_type": self.relationship_type,
            "strength": self.strength,
            "metadata": dict(self.metadata),
            "created_at": self.created_at,
        }
