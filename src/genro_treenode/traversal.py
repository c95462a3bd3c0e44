# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal engine for TreeNode hierarchies.

Every traversal is an explicit iterator object that keeps its own stack,
queue or cursor instead of recursing through generators. Deep trees are
therefore limited by memory, not by the interpreter recursion limit.

Iterators read the structural links of the nodes and never modify them.
Mutating a subtree while one of its iterators is being consumed is not
supported; the outcome is undefined.

Traversal orders:
    - **Pre-order** (``'dfs_pre'``): a node precedes all of its descendants
    - **Post-order** (``'dfs_post'``): a node follows all of its descendants
    - **Breadth-first** (``'bfs'``): level by level, left to right

Example:
    >>> root = TreeNode('root')
    >>> a = root.append_child('A')
    >>> a1 = a.append_child('A1')
    >>> b = root.append_child('B')
    >>> [n.value for n in create_traversal('bfs', root)]
    ['root', 'A', 'B', 'A1']
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from .exceptions import UnsupportedTraversalError

if TYPE_CHECKING:
    from .node import TreeNode


class TreeTraversal(Enum):
    """Whole-subtree traversal orders."""

    DEPTH_FIRST_PRE_ORDER = "dfs_pre"
    DEPTH_FIRST_POST_ORDER = "dfs_post"
    BREADTH_FIRST = "bfs"

    @classmethod
    def resolve(cls, order: TreeTraversal | str) -> TreeTraversal:
        """Return the member matching ``order``.

        Accepts a member, its value, its name or one of the short aliases
        (``'pre'``, ``'post'``, ``'level'``...), case-insensitively.

        Raises:
            UnsupportedTraversalError: If ``order`` matches nothing.
        """
        if isinstance(order, cls):
            return order
        if isinstance(order, str):
            member = _ALIASES.get(order.strip().lower())
            if member is not None:
                return member
        raise UnsupportedTraversalError(
            f"Traversal method unhandled [{order!r}]. "
            f"Choose from: {', '.join(sorted(_ALIASES))}"
        )


_ALIASES: dict[str, TreeTraversal] = {
    'dfs_pre': TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    'pre': TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    'preorder': TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    'depth_first_pre_order': TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    'dfs_post': TreeTraversal.DEPTH_FIRST_POST_ORDER,
    'post': TreeTraversal.DEPTH_FIRST_POST_ORDER,
    'postorder': TreeTraversal.DEPTH_FIRST_POST_ORDER,
    'depth_first_post_order': TreeTraversal.DEPTH_FIRST_POST_ORDER,
    'bfs': TreeTraversal.BREADTH_FIRST,
    'level': TreeTraversal.BREADTH_FIRST,
    'breadth_first': TreeTraversal.BREADTH_FIRST,
}


class TreeIterator(ABC):
    """Base class for lazy node iterators.

    Args:
        start: Node the iteration is anchored to.
        max_depth: Deepest level to visit, relative to ``start``
            (0 = ``start`` only). None means unlimited.
    """

    def __init__(self, start: TreeNode, max_depth: int | None = None) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth cannot be negative: {max_depth}")
        self.start = start
        self.max_depth = max_depth

    def __iter__(self) -> Iterator[TreeNode]:
        return self

    @abstractmethod
    def __next__(self) -> TreeNode:
        ...

    def _should_explore(self, depth: int) -> bool:
        """True if children of a node at ``depth`` are within range."""
        return self.max_depth is None or depth < self.max_depth


class AncestorIterator(TreeIterator):
    """Walks parent links up to the root, excluding the start node."""

    def __init__(self, start: TreeNode) -> None:
        super().__init__(start)
        self._current = start

    def __next__(self) -> TreeNode:
        parent = self._current._parent
        if parent is None:
            raise StopIteration
        self._current = parent
        return parent


class SiblingIterator(TreeIterator):
    """Walks the sibling chain outward from the start node, exclusive.

    Args:
        start: Node to walk from.
        forward: True for following siblings, False for previous ones.
    """

    def __init__(self, start: TreeNode, forward: bool = True) -> None:
        super().__init__(start)
        self.forward = forward
        self._current = start

    def __next__(self) -> TreeNode:
        if self.forward:
            sibling = self._current._following_sibling
        else:
            sibling = self._current._previous_sibling
        if sibling is None:
            raise StopIteration
        self._current = sibling
        return sibling


class PreOrderIterator(TreeIterator):
    """Depth-first pre-order traversal backed by an explicit stack.

    Args:
        start: Root of the traversed subtree.
        max_depth: Depth limit relative to ``start``.
        include_self: If False, ``start`` itself is skipped and only its
            proper descendants are produced.
    """

    def __init__(
        self,
        start: TreeNode,
        max_depth: int | None = None,
        include_self: bool = True,
    ) -> None:
        super().__init__(start, max_depth)
        self.include_self = include_self
        # Stack of (node, depth); children are pushed in reverse so the
        # first child is popped first.
        self._stack: list[tuple[TreeNode, int]] = []
        if include_self:
            self._stack.append((start, 0))
        else:
            self._push_children(start, 0)

    def _push_children(self, node: TreeNode, depth: int) -> None:
        if self._should_explore(depth):
            self._stack.extend((child, depth + 1) for child in reversed(node._children))

    def __next__(self) -> TreeNode:
        if not self._stack:
            raise StopIteration
        node, depth = self._stack.pop()
        self._push_children(node, depth)
        return node


class PostOrderIterator(TreeIterator):
    """Depth-first post-order traversal backed by an explicit stack.

    Each stack frame holds a node, its depth and a cursor on its children.
    A node is emitted when its cursor is exhausted, that is after its whole
    subtree has been emitted.
    """

    def __init__(self, start: TreeNode, max_depth: int | None = None) -> None:
        super().__init__(start, max_depth)
        self._stack: list[list] = [[start, 0, 0]]

    def __next__(self) -> TreeNode:
        stack = self._stack
        while stack:
            frame = stack[-1]
            node, depth, cursor = frame
            if cursor < len(node._children) and self._should_explore(depth):
                frame[2] = cursor + 1
                stack.append([node._children[cursor], depth + 1, 0])
                continue
            stack.pop()
            return node
        raise StopIteration


class BreadthFirstIterator(TreeIterator):
    """Breadth-first traversal using level-by-level expansion.

    The start node is emitted first. Each following level is built from the
    children of the previous level, parents taken left to right and children
    in their stored order. Iteration ends on the first empty level.
    """

    def __init__(self, start: TreeNode, max_depth: int | None = None) -> None:
        super().__init__(start, max_depth)
        self._level: list[TreeNode] = [start]
        self._depth = 0
        self._position = 0

    def __next__(self) -> TreeNode:
        if self._position >= len(self._level):
            if not self._should_explore(self._depth):
                raise StopIteration
            self._level = [child for node in self._level for child in node._children]
            self._depth += 1
            self._position = 0
            if not self._level:
                raise StopIteration
        node = self._level[self._position]
        self._position += 1
        return node


_TRAVERSERS: dict[TreeTraversal, type[TreeIterator]] = {
    TreeTraversal.DEPTH_FIRST_PRE_ORDER: PreOrderIterator,
    TreeTraversal.DEPTH_FIRST_POST_ORDER: PostOrderIterator,
    TreeTraversal.BREADTH_FIRST: BreadthFirstIterator,
}


def create_traversal(
    order: TreeTraversal | str,
    start: TreeNode,
    max_depth: int | None = None,
) -> TreeIterator:
    """Create the iterator for a whole-subtree traversal of ``start``.

    Args:
        order: TreeTraversal member or one of its string aliases.
        start: Root of the traversed subtree (always included).
        max_depth: Optional depth limit relative to ``start``.

    Returns:
        A fresh, lazy iterator over ``start`` and its descendants.

    Raises:
        UnsupportedTraversalError: If ``order`` is not recognized.
        ValueError: If ``max_depth`` is negative.
    """
    return _TRAVERSERS[TreeTraversal.resolve(order)](start, max_depth)
