from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Set, Tuple

from linker.core.models import Graph, Path


def find_paths(
    graph: Graph,
    start: str,
    end: str,
    max_depth: int,
    ordered: bool = False,
) -> List[Path]:
    """
    Breadth-first search from `start` for paths to `end`.

    An address is marked visited when it is enqueued, so every address is
    reached by at most one path: the result holds at most one path, the
    first breadth-first route found. Paths longer than `max_depth` nodes are
    dropped. With `ordered`, neighbors are expanded in sorted order and the
    chosen route is reproducible; otherwise it depends on set iteration order.
    """
    paths: List[Path] = []
    if start != end and (start not in graph or end not in graph):
        return paths

    q: Deque[Tuple[str, Path]] = deque([(start, [start])])
    visited: Set[str] = {start}

    while q:
        node, path = q.popleft()

        if len(path) > max_depth:
            continue

        if node == end:
            paths.append(path)
            continue

        neighbors: Iterable[str] = graph.neighbors(node)
        if ordered:
            neighbors = sorted(neighbors)

        for nxt in neighbors:
            if nxt in visited:
                continue
            visited.add(nxt)
            q.append((nxt, path + [nxt]))

    return paths
