"""Breadth-first traversal of a node arena."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .node import Tree


def traverse(tree: Tree, root: int) -> Iterator[int]:
    """Yield ``root`` and every node below it in breadth-first order.

    Children are queued after their parent has been yielded, so a caller may
    rewrite the child list of the node it was just handed and the traversal
    continues into the new children. Rewriting nodes that are already queued
    gives an unspecified order. The iterator is single-use.
    """
    pending = deque([root])
    while pending:
        handle = pending.popleft()
        yield handle
        pending.extend(tree.node(handle).children)
