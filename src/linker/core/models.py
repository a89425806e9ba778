from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterator, List, Mapping, Optional

from linker.config import settings


Path = List[str]

_EMPTY: FrozenSet[str] = frozenset()



# Configuration model

@dataclass(frozen=True)
class LinkConfig:
    """
    User input / run configuration for linking two addresses.
    """

    address1: str
    address2: str
    max_depth: int = settings.LINK_MAX_PATH_DEPTH   # nodes per path
    ordered: bool = False                           # sort neighbors for reproducible paths



# Graph model

@dataclass(frozen=True)
class Graph:
    """
    Undirected co-occurrence graph: address -> neighbor addresses.

    Symmetric. Read-only once built: the adjacency is a mapping proxy over
    frozensets.
    """

    adjacency: Mapping[str, FrozenSet[str]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.adjacency, MappingProxyType):
            frozen = {a: frozenset(ns) for a, ns in self.adjacency.items()}
            object.__setattr__(self, "adjacency", MappingProxyType(frozen))

    def neighbors(self, address: str) -> FrozenSet[str]:
        return self.adjacency.get(address, _EMPTY)

    def has_edge(self, a: str, b: str) -> bool:
        return b in self.neighbors(a)

    def edge_count(self) -> int:
        loops = sum(1 for a, ns in self.adjacency.items() if a in ns)
        total = sum(len(ns) for ns in self.adjacency.values())
        return loops + (total - loops) // 2

    def __contains__(self, address: object) -> bool:
        return address in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)



# Run result

@dataclass
class LinkResult:

    address1: str
    address2: str

    signatures1: int = 0
    signatures2: int = 0
    unique_signatures: int = 0

    transactions_fetched: int = 0
    transactions_failed: int = 0

    # blockTime range of the fetched records (None if no record had one)
    earliest_block_time: Optional[int] = None
    latest_block_time: Optional[int] = None

    graph: Graph = field(default_factory=Graph)
    paths: List[Path] = field(default_factory=list)
