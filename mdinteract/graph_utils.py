from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Set, Tuple, TypeVar

T = TypeVar("T")

def adjacency(edges: Iterable[Tuple[T, T]]) -> Dict[T, Set[T]]:
    """Undirected adjacency sets from an edge list."""
    adj: Dict[T, Set[T]] = {}
    for u, v in edges:
        adj.setdefault(u, set()).add(v)
        adj.setdefault(v, set()).add(u)
    return adj

def simple_paths(adj: Dict[T, Set[T]], start: T, max_edges: int) -> Iterator[List[T]]:
    """Yield every simple path [start, ..., end] with 1..max_edges edges.

    The last node may coincide with ``start`` (a closed ring); no other node
    is visited twice.  Neighbors are visited in sorted order so the output is
    deterministic for orderable nodes.
    """
    path: List[T] = [start]

    def walk(u: T) -> Iterator[List[T]]:
        if len(path) > max_edges:
            return
        for v in sorted(adj.get(u, ())):
            if v in path[1:] or (v == start and len(path) < 3):
                continue
            path.append(v)
            yield list(path)
            if v != start:
                yield from walk(v)
            path.pop()

    yield from walk(start)

def connected_components(adj: Dict[T, Set[T]]) -> Dict[T, int]:
    """Label each node with the index of its connected component."""
    label: Dict[T, int] = {}
    comp = -1
    for root in sorted(adj):
        if root in label:
            continue
        comp += 1
        stack = [root]
        label[root] = comp
        while stack:
            u = stack.pop()
            for v in adj.get(u, ()):
                if v not in label:
                    label[v] = comp
                    stack.append(v)
    return label
