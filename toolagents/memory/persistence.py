import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from .store import KnowledgeStore
from .nodes import KnowledgeNode
from .edges import Relationship

logger = logging.getLogger(__name__)


SNAPSHOT_FILENAME = "memory.json"


class MemoryPersistence:
    """
    Handles serialization and deserialization of the knowledge store
    as a single JSON snapshot.
    """

    @staticmethod
    def save(store: KnowledgeStore, path: str) -> None:
        nodes, edges = store.snapshot()

        data = {
            "nodes": [node.to_dict() for node in nodes],
            "relationships": [edge.to_dict() for edge in edges],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        # Atomic replace
        tmp = target.with_suffix(target.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, target)

        logger.debug(
            "[PERSISTENCE] Saved %d nodes and %d relationships to %s",
            len(nodes),
            len(edges),
            target,
        )

    @staticmethod
    def load(store: KnowledgeStore, path: str) -> bool:
        """
        Restore the store from `path`. Returns False when no snapshot
        exists; nodes that expired while offline are dropped.
        """
        if not Path(path).exists():
            logger.info("[PERSISTENCE] No snapshot at %s, starting fresh", path)
            return False

        with open(path) as f:
            data = json.load(f)

        nodes = [KnowledgeNode(**n) for n in data.get("nodes", [])]
        edges = [Relationship(**e) for e in data.get("relationships", [])]

        store.restore(nodes, edges)

        logger.info(
            "[PERSISTENCE] Loaded %d nodes and %d relationships from %s",
            store.count(),
            len(edges),
            path,
        )
        return True
