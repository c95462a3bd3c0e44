# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeNode exceptions.

Every exception derives from TreeNodeError and from the closest builtin,
so code catching ``IndexError`` or ``TypeError`` keeps working.
"""

from __future__ import annotations


class TreeNodeError(Exception):
    """Base exception for TreeNode errors."""

    pass


class NullArgumentError(TreeNodeError, TypeError):
    """Raised when a required node argument is None."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Argument '{argument}' cannot be None")


class IndexOutOfRangeError(TreeNodeError, IndexError):
    """Raised when an insertion or removal index is outside the valid bound."""

    def __init__(self, index: object, lower: int, upper: int) -> None:
        self.index = index
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"The index specified is not valid: {index!r} "
            f"(expected {lower} <= index <= {upper})"
        )


class UnsupportedTraversalError(TreeNodeError, ValueError):
    """Raised when an unknown traversal order is requested."""

    pass


class TreeNodeCycleError(TreeNodeError, ValueError):
    """Raised when a node would become its own ancestor."""

    pass


class InvariantViolationError(TreeNodeError, RuntimeError):
    """Raised when the structural state of a tree is found corrupted.

    This is not a caller mistake: it means a link was rewritten outside
    the attach/detach protocol. The operation is aborted, not repaired.
    """

    pass


class EqualityError(TreeNodeError, TypeError):
    """Raised when a stored value cannot be compared for equality."""

    pass
