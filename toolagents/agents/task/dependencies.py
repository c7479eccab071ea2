"""Dependency-graph checks for project tasks."""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple


_IN_PROGRESS = 1
_DONE = 2


def find_cycles(graph: Dict[str, Sequence[str]]) -> List[List[str]]:
    """Find dependency cycles with an iterative depth-first search.

    `graph` maps each node to the nodes it depends on. Every back edge
    found yields one cycle, written as the key sequence closing on its
    first element (``["a", "b", "c", "a"]``) and rotated so that its
    smallest key comes first. Identical cycles are reported once.
    References to nodes missing from `graph` are ignored here.

    Returns:
        Cycles in discovery order
    """
    state: Dict[str, int] = {}
    seen = set()
    cycles: List[List[str]] = []

    for root in graph:
        if root in state:
            continue

        path = [root]
        position = {root: 0}
        state[root] = _IN_PROGRESS
        stack = [iter(graph[root])]

        while stack:
            child = next(stack[-1], None)

            if child is None:
                stack.pop()
                finished = path.pop()
                del position[finished]
                state[finished] = _DONE
                continue

            if child not in graph:
                continue

            child_state = state.get(child)

            if child_state == _IN_PROGRESS:
                cycle = _canonical(path[position[child]:])
                if cycle not in seen:
                    seen.add(cycle)
                    cycles.append(list(cycle) + [cycle[0]])

            elif child_state is None:
                state[child] = _IN_PROGRESS
                position[child] = len(path)
                path.append(child)
                stack.append(iter(graph[child]))

    return cycles


def find_missing(graph: Dict[str, Sequence[str]]) -> List[Dict[str, str]]:
    """Dependencies that point at unknown nodes."""
    return [
        {"taskId": node, "dependsOn": dep}
        for node, deps in graph.items()
        for dep in deps
        if dep not in graph
    ]


def _canonical(cycle: List[str]) -> Tuple[str, ...]:
    start = cycle.index(min(cycle))
    return tuple(cycle[start:] + cycle[:start])
