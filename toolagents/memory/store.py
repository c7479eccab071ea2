from __future__ import annotations

import time
import logging
from threading import RLock
from typing import Any, Callable, Collection, Dict, List, Optional, Tuple

from .nodes import KnowledgeNode, is_expired
from .edges import Relationship
from .graph import KnowledgeGraph
from .similarity import SimilarityScorer, HashingVectorScorer, tokenize
from .traversal import traverse, OUTGOING
from ..errors import CapacityError
from ..utils import isoformat

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """
    In-memory knowledge graph store behind the memory agent's tools.

    Responsibilities
    ----------------
    • Upsert key-addressed nodes with optional TTL
    • Record directed, typed, weighted relationships (dangling allowed)
    • Answer exact / fuzzy / semantic / graph queries
    • Bounded breadth-first context traversal
    • Lazy expiry on access plus an incremental sweep

    Concurrency
    -----------
    One re-entrant lock guards the whole graph. Every public operation
    holds it for its full duration, so a reader never observes a
    partially applied write. `sweep_expired` takes the lock once per
    removed node.

    The store is constructed explicitly and injected into the tool
    handlers; there is no module-level instance.
    """

    QUERY_TYPES = ("exact", "fuzzy", "semantic", "graph")

    DEFAULT_LIMIT = 10
    MAX_LIMIT = 100

    DEFAULT_DEPTH = 2
    MIN_DEPTH = 1
    MAX_DEPTH = 5

    GRAPH_QUERY_RADIUS = 1

    DEFAULT_STRENGTH = 0.5

    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        max_items: int = 10000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._graph = KnowledgeGraph()
        self._scorer = scorer or HashingVectorScorer()
        self._max_items = max_items
        self._clock = clock
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def _live_node(self, key: str, now: float) -> Optional[KnowledgeNode]:
        """Resolve a key to a live node, purging it if it has expired."""
        node = self._graph.get_node(key)
        if node is None:
            return None
        if is_expired(node, now):
            self._graph.remove_node(key)
            logger.debug("[KNOWLEDGE STORE] Lazily expired: %s", key)
            return None
        return node

    def _live_nodes(self, now: float) -> List[KnowledgeNode]:
        live = []
        for node in self._graph.nodes():
            if is_expired(node, now):
                self._graph.remove_node(node.key)
            else:
                live.append(node)
        return live

    def sweep_expired(self, now: Optional[float] = None) -> int:
        """
        Remove expired nodes, taking the lock once per removal.

        Relationships are left in place; they simply dangle.
        """
        now = self._clock() if now is None else now

        with self._lock:
            candidates = [n.key for n in self._graph.nodes() if is_expired(n, now)]

        removed = 0
        for key in candidates:
            with self._lock:
                node = self._graph.get_node(key)
                # Re-check: the key may have been re-stored since the snapshot
                if node is not None and is_expired(node, now):
                    self._graph.remove_node(key)
                    removed += 1

        if removed:
            logger.info("[KNOWLEDGE STORE] Sweep removed %d expired nodes", removed)
        return removed

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    def store(
        self,
        key: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
        ttl: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Upsert a node. Content, metadata and expiry are replaced as a
        whole; relationships referencing `key` are not touched.
        """
        with self._lock:
            now = self._clock()
            existing = self._live_node(key, now)

            if existing is None and self._graph.node_count >= self._max_items:
                self._live_nodes(now)
                if self._graph.node_count >= self._max_items:
                    raise CapacityError(
                        f"Knowledge store is full ({self._max_items} items)"
                    )

            node = KnowledgeNode.create(
                key, content, _normalize_metadata(metadata), now, ttl
            )
            try:
                view = _node_view(node)
            except (OverflowError, ValueError, OSError):
                raise ValueError(f"ttl out of range: {ttl}") from None
            self._graph.put_node(node)

        logger.info(
            "[KNOWLEDGE STORE] Stored %s | replaced=%s | ttl=%s",
            key,
            existing is not None,
            ttl,
        )

        return {
            "key": key,
            "stored": True,
            "replaced": existing is not None,
            "createdAt": view["createdAt"],
            "expiresAt": view["expiresAt"],
        }

    def delete(self, key: str) -> Dict[str, Any]:
        with self._lock:
            node = self._live_node(key, self._clock())
            if node is not None:
                self._graph.remove_node(key)

        logger.info("[KNOWLEDGE STORE] Delete %s | deleted=%s", key, node is not None)
        return {"key": key, "deleted": node is not None}

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(
        self,
        query: str,
        type: str = "fuzzy",
        limit: int = DEFAULT_LIMIT,
        include_metadata: bool = True,
        include_relationships: bool = False,
    ) -> Dict[str, Any]:

        if type not in self.QUERY_TYPES:
            raise ValueError(f"Unsupported query type: {type}")

        limit = max(1, min(limit, self.MAX_LIMIT))

        with self._lock:
            now = self._clock()

            if type == "exact":
                node = self._live_node(query, now)
                scored = [(1.0, node)] if node is not None else []
            elif type == "graph":
                scored = self._graph_matches(query, now)
            else:
                live = self._live_nodes(now)
                if type == "fuzzy":
                    scored = [(_fuzzy_score(query, n), n) for n in live]
                else:
                    scores = self._scorer.score(query, [f"{n.key} {n.content}" for n in live])
                    scored = list(zip(scores, live))

            scored = [(s, n) for s, n in scored if s > 0]
            scored.sort(key=lambda pair: (-pair[0], -pair[1].created_at))

            results = [
                self._format_match(node, score, include_metadata, include_relationships)
                for score, node in scored[:limit]
            ]

        logger.info(
            "[KNOWLEDGE STORE] Query %r (%s) returned %d results",
            query,
            type,
            len(results),
        )

        return {
            "query": query,
            "type": type,
            "results": results,
            "count": len(results),
            "timestamp": isoformat(self._clock()),
        }

    def _graph_matches(self, seed: str, now: float) -> List[Tuple[float, KnowledgeNode]]:
        origin = self._live_node(seed, now)
        if origin is None:
            return []

        matches = [(1.0, origin)]
        for hop in traverse(
            self._graph,
            seed,
            self.GRAPH_QUERY_RADIUS,
            is_live=lambda k: self._live_node(k, now) is not None,
        ):
            matches.append((1.0 / (1 + hop.distance), self._graph.get_node(hop.key)))
        return matches

    def _format_match(
        self,
        node: KnowledgeNode,
        score: float,
        include_metadata: bool,
        include_relationships: bool,
    ) -> Dict[str, Any]:
        match = _node_view(node, include_metadata)
        match["score"] = round(score, 4)
        if include_relationships:
            match["relationships"] = [
                _format_relationship(e) for e in self._graph.outgoing(node.key)
            ]
        return match

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def create_relationship(
        self,
        from_key: str,
        to_key: str,
        relationship_type: str,
        strength: float = DEFAULT_STRENGTH,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Record a directed edge. Endpoints need not resolve to live
        nodes; such edges dangle until the nodes appear.
        """
        with self._lock:
            edge = Relationship(
                from_key=from_key,
                to_key=to_key,
                relationship_type=relationship_type,
                strength=strength,
                metadata=_normalize_metadata(metadata),
                created_at=self._clock(),
            )
            self._graph.add_edge(edge)

        logger.info(
            "[KNOWLEDGE STORE] Relationship %s: %s -[%s]-> %s",
            edge.id,
            from_key,
            relationship_type,
            to_key,
        )

        return {
            "id": edge.id,
            "fromKey": from_key,
            "toKey": to_key,
            "relationshipType": relationship_type,
            "strength": strength,
            "createdAt": isoformat(edge.created_at),
        }

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def get_context(
        self,
        key: str,
        depth: int = DEFAULT_DEPTH,
        relationship_types: Optional[Collection[str]] = None,
        include_content: bool = True,
        direction: str = OUTGOING,
    ) -> Dict[str, Any]:
        """
        Breadth-first neighbourhood of `key`, up to `depth` hops.

        An unknown or expired origin yields an empty result rather than
        an error: its edges may outlive it.
        """
        depth = max(self.MIN_DEPTH, min(depth, self.MAX_DEPTH))

        with self._lock:
            now = self._clock()
            origin = self._live_node(key, now)

            if origin is None:
                logger.info("[KNOWLEDGE STORE] Context origin absent: %s", key)
                return {"key": key, "node": None, "related": [], "depth": depth}

            hops = traverse(
                self._graph,
                key,
                depth,
                is_live=lambda k: self._live_node(k, now) is not None,
                relationship_types=relationship_types,
                direction=direction,
            )

            related = []
            for hop in hops:
                entry: Dict[str, Any] = {
                    "key": hop.key,
                    "distance": hop.distance,
                    "relationship": {
                        "id": hop.relationship.id,
                        "type": hop.relationship.relationship_type,
                        "strength": hop.relationship.strength,
                        "direction": hop.direction,
                        "fromKey": hop.relationship.from_key,
                        "toKey": hop.relationship.to_key,
                    },
                }
                if include_content:
                    entry["node"] = _node_view(self._graph.get_node(hop.key))
                else:
                    entry["node"] = {"key": hop.key}
                related.append(entry)

            node_view = _node_view(origin)

        logger.info(
            "[KNOWLEDGE STORE] Context for %s (depth %d): %d related",
            key,
            depth,
            len(related),
        )

        return {"key": key, "node": node_view, "related": related, "depth": depth}

    # ------------------------------------------------------------------
    # Introspection / Persistence Support
    # ------------------------------------------------------------------

    def count(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for n in self._graph.nodes() if not is_expired(n, now))

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "knowledgeCount": self.count(),
                "relationshipCount": self._graph.edge_count,
            }

    def snapshot(self) -> Tuple[List[KnowledgeNode], List[Relationship]]:
        with self._lock:
            return list(self._graph.nodes()), list(self._graph.edges())

    def restore(
        self,
        nodes: List[KnowledgeNode],
        edges: List[Relationship],
    ) -> None:
        """Replace all state; nodes already expired are dropped."""
        with self._lock:
            now = self._clock()
            self._graph.load_state(
                [n for n in nodes if not is_expired(n, now)],
                edges,
            )


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def _node_view(node: KnowledgeNode, include_metadata: bool = True) -> Dict[str, Any]:
    """
    Caller-facing view of a node. Raises OverflowError or ValueError
    when a timestamp falls outside the datetime range.
    """
    view: Dict[str, Any] = {
        "key": node.key,
        "content": node.content,
        "createdAt": isoformat(node.created_at),
        "expiresAt": isoformat(node.expires_at),
    }
    if include_metadata:
        view["metadata"] = dict(node.metadata)
    return view


def _normalize_metadata(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    normalized = dict(metadata or {})
    if "tags" in normalized and normalized["tags"] is not None:
        normalized["tags"] = sorted(set(normalized["tags"]))
    return normalized


def _fuzzy_score(query: str, node: KnowledgeNode) -> float:
    """
    Half substring hit, half token overlap, both case-insensitive.
    """
    needle = query.strip().lower()
    key, content = node.key.lower(), node.content.lower()

    substring = 1.0 if needle and (needle in key or needle in content) else 0.0

    query_tokens = set(tokenize(query))
    if query_tokens:
        node_tokens = set(tokenize(key)) | set(tokenize(content))
        overlap = len(query_tokens & node_tokens) / len(query_tokens)
    else:
        overlap = 0.0

    return 0.5 * substring + 0.5 * overlap


def _format_relationship(edge: Relationship) -> Dict[str, Any]:
    return {
        "id": edge.id,
        "fromKey": edge.from_key,
        "toKey": edge.to_key,
        "relationshipType": edge.relationship_type,
        "strength": edge.strength,
        "metadata": dict(edge.metadata),
    }
