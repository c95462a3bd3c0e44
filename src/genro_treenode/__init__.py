# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeNode - Generic ordered trees with sibling navigation.

A lightweight, zero-dependency library providing a generic tree node with
ordered children, bidirectional sibling links and lazy traversals for the
Genro ecosystem (Genro Kyō).
"""

import logging

__version__ = "0.1.0"

from .exceptions import (
    EqualityError,
    IndexOutOfRangeError,
    InvariantViolationError,
    NullArgumentError,
    TreeNodeCycleError,
    TreeNodeError,
    UnsupportedTraversalError,
)
from .node import TreeNode
from .traversal import (
    AncestorIterator,
    BreadthFirstIterator,
    PostOrderIterator,
    PreOrderIterator,
    SiblingIterator,
    TreeIterator,
    TreeTraversal,
    create_traversal,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "TreeNode",
    # Traversal
    "TreeTraversal",
    "TreeIterator",
    "AncestorIterator",
    "SiblingIterator",
    "PreOrderIterator",
    "PostOrderIterator",
    "BreadthFirstIterator",
    "create_traversal",
    # Exceptions
    "TreeNodeError",
    "NullArgumentError",
    "IndexOutOfRangeError",
    "UnsupportedTraversalError",
    "TreeNodeCycleError",
    "InvariantViolationError",
    "EqualityError",
]
