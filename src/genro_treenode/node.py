# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeNode - A generic ordered tree node.

A TreeNode is at the same time a value holder, a member of an ordered
sibling chain and the root of its own subtree. Each node keeps four sets
of structural links that are rewritten together by the mutation protocol:

    - parent: the owning node, or None for a root
    - children: the owned, ordered list of child nodes
    - previous/following sibling: lateral links inside the parent's
      children, or inside an independent root-level chain

All mutations go through ``attach()`` and ``detach()``. Attaching a node
detaches it from wherever it was first, so a node never belongs to two
trees at once and ``attach()`` doubles as "move".

Example:
    >>> root = TreeNode('root')
    >>> a = root.append_child('A')
    >>> a1 = a.append_child('A1')
    >>> b = root.append_child('B')
    >>> [n.value for n in root.self_and_descendants()]
    ['root', 'A', 'A1', 'B']
    >>> a.detach().is_root
    True
    >>> [n.value for n in root]
    ['B']
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, TypeVar

from .exceptions import (
    EqualityError,
    IndexOutOfRangeError,
    InvariantViolationError,
    NullArgumentError,
    TreeNodeCycleError,
)
from .traversal import (
    AncestorIterator,
    PreOrderIterator,
    SiblingIterator,
    TreeIterator,
    TreeTraversal,
    create_traversal,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

_MISSING = object()


class TreeNode(Generic[T]):
    """A node in an ordered tree with an arbitrary branching factor.

    Structural links are exposed as read-only properties; they are only
    rewritten by ``attach()`` and ``detach()``.

    Attributes:
        value: The payload, set once at construction.
        parent: The owning node, or None if this node is a root.
        previous_sibling: The sibling immediately before this node, or None.
        following_sibling: The sibling immediately after this node, or None.

    Example:
        >>> node = TreeNode('config')
        >>> node.is_root, node.is_leaf
        (True, True)
        >>> child = node.append_child('db')
        >>> child.parent is node
        True
    """

    __slots__ = (
        '_value', '_parent', '_children',
        '_previous_sibling', '_following_sibling',
    )

    def __init__(self, value: T | None = None) -> None:
        """Initialize a root TreeNode.

        Args:
            value: Optional payload stored in the node.
        """
        self._value = value
        self._parent: TreeNode[T] | None = None
        self._children: list[TreeNode[T]] = []
        self._previous_sibling: TreeNode[T] | None = None
        self._following_sibling: TreeNode[T] | None = None

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeNode({self._value!r}, children={len(self._children)})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._children)

    def __bool__(self) -> bool:
        # A leaf is still a node: don't let __len__ make it falsy.
        return True

    def __iter__(self) -> Iterator[TreeNode[T]]:
        """Iterate over direct children in order."""
        return iter(tuple(self._children))

    def __getitem__(self, index: int | slice) -> TreeNode[T] | tuple[TreeNode[T], ...]:
        """Return the child at ``index`` (negative indexes allowed).

        Raises:
            IndexOutOfRangeError: If an int index is out of range.
        """
        if isinstance(index, slice):
            return tuple(self._children[index])
        try:
            return self._children[index]
        except IndexError:
            raise IndexOutOfRangeError(
                index, -len(self._children), len(self._children) - 1
            ) from None

    def __contains__(self, item: Any) -> bool:
        """Deep search, see ``contains()``."""
        return self.contains(item)

    # ==================== Structural State ====================

    @property
    def value(self) -> T | None:
        """The payload stored in this node."""
        return self._value

    @property
    def parent(self) -> TreeNode[T] | None:
        """The owning node, or None if this node is a root."""
        return self._parent

    @property
    def previous_sibling(self) -> TreeNode[T] | None:
        """The sibling immediately before this node.

        A root node can still have siblings in a root-level chain.
        None if this node is the first sibling.
        """
        return self._previous_sibling

    @property
    def following_sibling(self) -> TreeNode[T] | None:
        """The sibling immediately after this node.

        A root node can still have siblings in a root-level chain.
        None if this node is the last sibling.
        """
        return self._following_sibling

    @property
    def first_child(self) -> TreeNode[T] | None:
        """The first child, or None for a leaf."""
        return self._children[0] if self._children else None

    @property
    def last_child(self) -> TreeNode[T] | None:
        """The last child, or None for a leaf."""
        return self._children[-1] if self._children else None

    # ==================== Structural Queries ====================

    @property
    def root(self) -> TreeNode[T]:
        """The topmost node of the tree containing this node.

        Walks the parent chain on every access (O(depth)).
        """
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def depth(self) -> int:
        """Number of parent-chain steps to the root (root=0)."""
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return depth

    @property
    def child_count(self) -> int:
        """Number of direct children."""
        return len(self._children)

    @property
    def has_child(self) -> bool:
        """True if this node has at least one child."""
        return bool(self._children)

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._children

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self._parent is None

    @property
    def is_first_sibling(self) -> bool:
        """True if no sibling precedes this node."""
        return self._previous_sibling is None

    @property
    def is_last_sibling(self) -> bool:
        """True if no sibling follows this node."""
        return self._following_sibling is None

    @property
    def index(self) -> int | None:
        """Position of this node among its parent's children.

        None if this node is a root.
        """
        if self._parent is None:
            return None
        return self._parent._child_position(self)

    def path(self) -> list[TreeNode[T]]:
        """Return the nodes from the root down to this node, inclusive."""
        nodes = [self, *AncestorIterator(self)]
        nodes.reverse()
        return nodes

    def _child_position(self, child: TreeNode[T]) -> int:
        """Find ``child`` among direct children by identity.

        Returns:
            The position, or -1 if ``child`` is not a direct child.
        """
        for i, node in enumerate(self._children):
            if node is child:
                return i
        return -1

    def _is_self_or_ancestor(self, node: TreeNode[T]) -> bool:
        """True if ``node`` is this node or one of its ancestors."""
        current: TreeNode[T] | None = self
        while current is not None:
            if current is node:
                return True
            current = current._parent
        return False

    # ==================== Search ====================

    def contains(self, item: Any) -> bool:
        """Deep search of this node and all its descendants.

        Args:
            item: A TreeNode to look for by identity, or a value to look
                for by equality.

        Returns:
            True if a match exists in the subtree rooted at this node.

        Raises:
            EqualityError: If a stored value cannot be compared with ``item``.
        """
        if isinstance(item, TreeNode):
            return self.contains_node(item)
        return self.contains_value(item)

    def contains_value(self, value: Any) -> bool:
        """True if this node or a descendant stores a value equal to ``value``.

        A stored None only matches a query of None.

        Raises:
            EqualityError: If a stored value cannot be compared with ``value``.
        """
        return self.find_value(value, _MISSING) is not _MISSING

    def contains_node(self, node: TreeNode[T] | None) -> bool:
        """True if ``node`` is this node or one of its descendants."""
        if node is None:
            return False
        return any(n is node for n in PreOrderIterator(self))

    def find(
        self,
        predicate: Callable[[TreeNode[T]], bool],
        order: TreeTraversal | str = TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    ) -> Iterator[TreeNode[T]]:
        """Yield nodes of this subtree (self included) matching ``predicate``.

        Args:
            predicate: Function that returns True for matching nodes.
            order: Traversal order used for the scan.
        """
        traversal = create_traversal(order, self)
        return (node for node in traversal if predicate(node))

    def find_value(self, value: Any, default: Any = None) -> Any:
        """Return the first node in pre-order whose value equals ``value``.

        Args:
            value: The value to look for.
            default: Returned when no node matches.

        Raises:
            EqualityError: If a stored value cannot be compared with ``value``.
        """
        for node in PreOrderIterator(self):
            if _values_equal(node._value, value):
                return node
        return default

    # ==================== Mutation Protocol ====================

    def attach(self, index: int, child: TreeNode[T] | T) -> TreeNode[T]:
        """Attach ``child`` at position ``index`` among this node's children.

        The child is first detached from any tree it belongs to, so this
        also moves nodes, subtree included.

        Args:
            index: Insertion point, 0 <= index <= child_count.
            child: An existing TreeNode, or a value wrapped in a new TreeNode.

        Returns:
            The attached node.

        Raises:
            NullArgumentError: If ``child`` is None.
            IndexOutOfRangeError: If ``index`` is not a valid insertion point.
            TreeNodeCycleError: If ``child`` is this node or an ancestor of it.
        """
        if child is None:
            raise NullArgumentError('child')
        count = len(self._children)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= count:
            raise IndexOutOfRangeError(index, 0, count)
        if not isinstance(child, TreeNode):
            child = TreeNode(child)
        elif self._is_self_or_ancestor(child):
            raise TreeNodeCycleError(
                f"Cannot attach {child!r} under {self!r}: "
                "a node cannot become its own descendant"
            )

        child.detach()
        # Detaching a child of this very node shrinks the list by one.
        index = min(index, len(self._children))

        previous = self._children[index - 1] if index > 0 else None
        following = self._children[index] if index < len(self._children) else None
        child._previous_sibling = previous
        child._following_sibling = following
        if previous is not None:
            previous._following_sibling = child
        if following is not None:
            following._previous_sibling = child

        child._parent = self
        self._children.insert(index, child)
        logger.debug("Attached %r to %r at index %d", child, self, index)
        return child

    def prepend_child(self, child: TreeNode[T] | T) -> TreeNode[T]:
        """Attach ``child`` as the first child. See ``attach()``."""
        return self.attach(0, child)

    def append_child(self, child: TreeNode[T] | T) -> TreeNode[T]:
        """Attach ``child`` as the last child. See ``attach()``."""
        return self.attach(len(self._children), child)

    def attach_following_sibling(self, node: TreeNode[T] | T) -> TreeNode[T]:
        """Attach ``node`` immediately after this node.

        If this node has a parent, ``node`` becomes the parent's child at the
        next position. A root node can still get siblings: ``node`` is then
        spliced into the root-level sibling chain.

        Args:
            node: An existing TreeNode, or a value wrapped in a new TreeNode.

        Returns:
            The attached node.

        Raises:
            NullArgumentError: If ``node`` is None.
        """
        return self._attach_sibling(node, following=True)

    def attach_previous_sibling(self, node: TreeNode[T] | T) -> TreeNode[T]:
        """Attach ``node`` immediately before this node.

        Mirror of ``attach_following_sibling()``.

        Raises:
            NullArgumentError: If ``node`` is None.
        """
        return self._attach_sibling(node, following=False)

    def _attach_sibling(self, node: TreeNode[T] | T, following: bool) -> TreeNode[T]:
        if node is None:
            raise NullArgumentError('node')
        if not isinstance(node, TreeNode):
            node = TreeNode(node)
        elif node is self:
            return node

        if self._parent is not None:
            position = self._parent._child_position(self)
            if position < 0:
                self._raise_corrupted(self._parent)
            if node._parent is self._parent and self._parent._child_position(node) < position:
                # Detaching an earlier sibling moves this node one step left.
                position -= 1
            return self._parent.attach(position + 1 if following else position, node)

        node.detach()
        if following:
            neighbour = self._following_sibling
            node._previous_sibling = self
            node._following_sibling = neighbour
            if neighbour is not None:
                neighbour._previous_sibling = node
            self._following_sibling = node
        else:
            neighbour = self._previous_sibling
            node._following_sibling = self
            node._previous_sibling = neighbour
            if neighbour is not None:
                neighbour._following_sibling = node
            self._previous_sibling = node
        logger.debug(
            "Attached %r as %s sibling of root %r",
            node, 'following' if following else 'previous', self,
        )
        return node

    def detach(self) -> TreeNode[T]:
        """Detach this node from its parent and siblings.

        The node becomes a root and keeps all of its children. Calling
        ``detach()`` on a node that is already a lone root does nothing.

        Returns:
            This node, for chaining.

        Raises:
            InvariantViolationError: If the parent does not list this node
                among its children.
        """
        parent = self._parent
        if parent is not None:
            position = parent._child_position(self)
            if position < 0:
                self._raise_corrupted(parent)
            del parent._children[position]
            self._parent = None

        previous = self._previous_sibling
        following = self._following_sibling
        if previous is not None:
            previous._following_sibling = following
        if following is not None:
            following._previous_sibling = previous
        self._previous_sibling = None
        self._following_sibling = None

        if parent is not None or previous is not None or following is not None:
            logger.debug("Detached %r from %r", self, parent)
        return self

    def _raise_corrupted(self, parent: TreeNode[T]) -> None:
        logger.error(
            "Structural invariant broken: %r points to parent %r "
            "which does not list it among its children", self, parent,
        )
        raise InvariantViolationError(
            f"Unexpected error detaching node {self!r}: "
            f"not found among the children of {parent!r}"
        )

    def remove_child(self, node: TreeNode[T] | None) -> bool:
        """Remove ``node`` if it is a direct child of this node.

        Returns:
            True if the node was found and removed, False otherwise.
        """
        if node is None:
            return False
        position = self._child_position(node)
        if position < 0:
            return False
        self._children[position].detach()
        return True

    def remove_child_at(self, index: int) -> TreeNode[T]:
        """Remove the child at ``index``.

        Returns:
            The removed child, now a root.

        Raises:
            IndexOutOfRangeError: If ``index`` is not in [0, child_count).
        """
        count = len(self._children)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < count:
            raise IndexOutOfRangeError(index, 0, count - 1)
        return self._children[index].detach()

    def remove_all_children(self) -> list[TreeNode[T]]:
        """Remove every child of this node.

        Returns:
            The removed children in their former order.
        """
        removed = []
        while self._children:
            removed.append(self.remove_child_at(0))
        return removed

    # ==================== Traversal ====================

    def ancestors(self) -> Iterator[TreeNode[T]]:
        """Iterate from the parent up to the root (self excluded)."""
        return AncestorIterator(self)

    def children(self) -> tuple[TreeNode[T], ...]:
        """Return the direct children in order, as a read-only tuple."""
        return tuple(self._children)

    def following_siblings(self) -> Iterator[TreeNode[T]]:
        """Iterate over the siblings after this node, nearest first."""
        return SiblingIterator(self, forward=True)

    def previous_siblings(self) -> Iterator[TreeNode[T]]:
        """Iterate over the siblings before this node, nearest first."""
        return SiblingIterator(self, forward=False)

    def descendants(self, max_depth: int | None = None) -> Iterator[TreeNode[T]]:
        """Iterate over all proper descendants in pre-order.

        Args:
            max_depth: Optional depth limit relative to this node
                (1 = children only).
        """
        return PreOrderIterator(self, max_depth=max_depth, include_self=False)

    def self_and_descendants(
        self,
        order: TreeTraversal | str = TreeTraversal.DEPTH_FIRST_PRE_ORDER,
        max_depth: int | None = None,
    ) -> TreeIterator:
        """Iterate over this node and its whole subtree.

        Args:
            order: A TreeTraversal member or alias ('pre', 'post', 'bfs'...).
            max_depth: Optional depth limit relative to this node.

        Returns:
            A fresh lazy iterator.

        Raises:
            UnsupportedTraversalError: If ``order`` is not recognized.
        """
        return create_traversal(order, self, max_depth)

    def walk(
        self,
        callback: Callable[[TreeNode[T]], Any] | None = None,
        order: TreeTraversal | str = TreeTraversal.DEPTH_FIRST_PRE_ORDER,
    ) -> TreeIterator | None:
        """Walk the subtree, optionally calling a callback on each node.

        Args:
            callback: Optional function to call on each node.
                If provided, walk returns None.
            order: Traversal order.

        Returns:
            The traversal iterator if no callback is provided.

        Example:
            >>> for node in root.walk():
            ...     print(node.depth, node.value)

            >>> root.walk(lambda n: print(n.value), order='post')
        """
        traversal = create_traversal(order, self)
        if callback is None:
            return traversal
        for node in traversal:
            callback(node)
        return None


def _values_equal(stored: Any, query: Any) -> bool:
    """Compare a stored value with a query value.

    None on either side only matches None. Comparison failures raise
    EqualityError.
    """
    if stored is None or query is None:
        return stored is query
    try:
        return bool(stored == query)
    except (TypeError, ValueError) as exc:
        raise EqualityError(
            f"Cannot compare stored value {stored!r} with {query!r}"
        ) from exc
