from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .nodes import KnowledgeNode
from .edges import Relationship


class KnowledgeGraph:
    """
    Key-addressed knowledge graph.

    This class is a *data structure only*: it knows nothing about
    time, expiry, scoring or locking. Those policies belong to
    KnowledgeStore, which owns the graph and serializes access to it.

    Nodes and relationships are stored independently. Removing or
    replacing a node never touches its relationships; adjacency
    indices map a key to edge ids in insertion order.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, KnowledgeNode] = {}
        self._edges: Dict[str, Relationship] = {}
        self._outgoing: Dict[str, List[str]] = defaultdict(list)
        self._incoming: Dict[str, List[str]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Node Operations
    # ------------------------------------------------------------------

    def put_node(self, node: KnowledgeNode) -> Optional[KnowledgeNode]:
        """Insert or replace a node. Returns the replaced node, if any."""
        previous = self._nodes.get(node.key)
        self._nodes[node.key] = node
        return previous

    def get_node(self, key: str) -> Optional[KnowledgeNode]:
        return self._nodes.get(key)

    def remove_node(self, key: str) -> Optional[KnowledgeNode]:
        return self._nodes.pop(key, None)

    def has_node(self, key: str) -> bool:
        return key in self._nodes

    def nodes(self) -> Iterable[KnowledgeNode]:
        return list(self._nodes.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Edge Operations
    # ------------------------------------------------------------------

    def add_edge(self, edge: Relationship) -> None:
        """Add a directed relationship. Duplicate triples are kept."""
        self._edges[edge.id] = edge
        self._outgoing[edge.from_key].append(edge.id)
        self._incoming[edge.to_key].append(edge.id)

    def outgoing(self, key: str) -> List[Relationship]:
        return [self._edges[eid] for eid in self._outgoing.get(key, ())]

    def incoming(self, key: str) -> List[Relationship]:
        return [self._edges[eid] for eid in self._incoming.get(key, ())]

    def edges(self) -> Iterable[Relationship]:
        return list(self._edges.values())

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    # ------------------------------------------------------------------
    # Persistence Support
    # ------------------------------------------------------------------

    def load_state(
        self,
        nodes: Iterable[KnowledgeNode],
        edges: Iterable[Relationship],
    ) -> None:
        """
        Replace entire graph state during persistence restore.
        """
        self._nodes = {}
        self._edges = {}
        self._outgoing = defaultdict(list)
        self._incoming = defaultdict(list)

        for node in nodes:
            self.put_node(node)
        for edge in edges:
            self.add_edge(edge)
