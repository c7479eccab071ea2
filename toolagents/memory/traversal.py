"""Bounded breadth-first traversal over knowledge relationships.

Shared by `get_context` and `graph`-mode queries.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Collection, List, Optional

from .edges import Relationship
from .graph import KnowledgeGraph


OUTGOING = "outgoing"
INCOMING = "incoming"
BOTH = "both"


@dataclass(frozen=True)
class Hop:
    """A node reached during traversal."""
    key: str
    relationship: Relationship
    distance: int  # Hop count from the origin
    direction: str  # Direction the relationship was followed


def traverse(
    graph: KnowledgeGraph,
    origin: str,
    max_depth: int,
    is_live: Callable[[str], bool],
    relationship_types: Optional[Collection[str]] = None,
    direction: str = OUTGOING,
) -> List[Hop]:
    """Walk outward from `origin` level by level, up to `max_depth` hops.

    Each key is emitted at most once, at its shortest distance; the
    origin itself is never emitted. Among edges reaching the same key
    on the same level, the first in insertion order wins. Edges whose
    far endpoint is not live (expired or never stored) are skipped and
    not expanded.

    Args:
        graph: Graph to walk
        origin: Starting key
        max_depth: Maximum hop count
        is_live: Predicate deciding whether a key resolves to a live node
        relationship_types: Optional whitelist of relationship types
        direction: "outgoing", "incoming" or "both"

    Returns:
        Hops ordered by distance, then discovery order
    """
    allowed = set(relationship_types) if relationship_types else None
    visited = {origin}
    results: List[Hop] = []
    current_level = [origin]
    distance = 0

    while current_level and distance < max_depth:
        distance += 1
        next_level = []

        for key in current_level:
            for edge, neighbour, followed in _neighbours(graph, key, direction):
                if allowed is not None and edge.relationship_type not in allowed:
                    continue
                if neighbour in visited or not is_live(neighbour):
                    continue

                visited.add(neighbour)
                results.append(Hop(neighbour, edge, distance, followed))
                next_level.append(neighbour)

        current_level = next_level

    return results


def _neighbours(graph: KnowledgeGraph, key: str, direction: str):
    if direction in (OUTGOING, BOTH):
        for edge in graph.outgoing(key):
            yield edge, edge.to_key, OUTGOING
    if direction in (INCOMING, BOTH):
        for edge in graph.incoming(key):
            yield edge, edge.from_key, INCOMING
