"""Pool file discovery and the token graph of tradeable pools."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union


def read_json_dir(directory: Union[str, Path]) -> list[str]:
    """Paths of the entries in a directory whose extension is json, sorted."""
    return sorted(
        str(entry) for entry in Path(directory).iterdir() if entry.suffix == ".json"
    )


@dataclass(frozen=True, order=True)
class PoolIndex:
    """Index of a token in the pool graph."""

    index: int


IndexLike = Union[PoolIndex, int]


def _index(value: IndexLike) -> PoolIndex:
    return value if isinstance(value, PoolIndex) else PoolIndex(value)


@dataclass
class PoolGraph:
    """Directed multigraph from token index to token index, edges holding pools."""

    edges: dict[PoolIndex, dict[PoolIndex, list[Any]]] = field(default_factory=dict)

    def add_quote(self, src: IndexLike, dst: IndexLike, pool: Any) -> None:
        """Record that the pool trades from src to dst."""
        self.edges.setdefault(_index(src), {}).setdefault(_index(dst), []).append(pool)

    def quotes(self, src: IndexLike, dst: IndexLike) -> list[Any]:
        """Pools trading from src to dst, in the order they were added."""
        return list(self.edges.get(_index(src), {}).get(_index(dst), []))

    def neighbours(self, src: IndexLike) -> list[PoolIndex]:
        """Token indices reachable from src in one hop."""
        return list(self.edges.get(_index(src), {}))

    def __contains__(self, src: object) -> bool:
        if not isinstance(src, (PoolIndex, int)):
            return False
        return _index(src) in self.edges

    def __iter__(self) -> Iterator[PoolIndex]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)