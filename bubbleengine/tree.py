"""A simple ordered tree of data nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Node(Generic[T]):
    """A tree node holding a value and an ordered list of children."""

    data: Optional[T] = None
    children: List["Node[T]"] = field(default_factory=list)

    def append(self, item: Any) -> "Node[T]":
        """Add a child node, wrapping plain values in a new node; return the child."""
        child = item if isinstance(item, Node) else Node(item)
        self.children.append(child)
        return child

    def __iter__(self) -> Iterator["Node[T]"]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


@dataclass
class Tree(Generic[T]):
    """A tree with a single root node."""

    root: Node[T] = field(default_factory=Node)