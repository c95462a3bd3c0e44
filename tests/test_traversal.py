# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreeNode traversals."""

import pytest

from genro_treenode import (
    BreadthFirstIterator,
    PostOrderIterator,
    PreOrderIterator,
    TreeNode,
    TreeTraversal,
    UnsupportedTraversalError,
    create_traversal,
)


def _sample_tree():
    """Build root -> [A -> [A1, A2], B] and return the root."""
    root = TreeNode('root')
    a = root.append_child('A')
    root.append_child('B')
    a.append_child('A1')
    a.append_child('A2')
    return root


def _wide_tree():
    """Build a three-level tree with uneven branching."""
    root = TreeNode('r')
    for i in range(3):
        child = root.append_child(f'c{i}')
        for j in range(i + 1):
            grandchild = child.append_child(f'c{i}.{j}')
            if j == i:
                grandchild.append_child(f'c{i}.{j}.x')
    return root


def _values(nodes):
    return [n.value for n in nodes]


class TestSelfAndDescendants:
    """Tests for whole-subtree traversal orders."""

    def test_pre_order(self):
        """Test pre-order on the sample tree."""
        root = _sample_tree()
        result = root.self_and_descendants(TreeTraversal.DEPTH_FIRST_PRE_ORDER)
        assert _values(result) == ['root', 'A', 'A1', 'A2', 'B']

    def test_post_order(self):
        """Test post-order on the sample tree."""
        root = _sample_tree()
        result = root.self_and_descendants(TreeTraversal.DEPTH_FIRST_POST_ORDER)
        assert _values(result) == ['A1', 'A2', 'A', 'B', 'root']

    def test_breadth_first(self):
        """Test breadth-first on the sample tree."""
        root = _sample_tree()
        result = root.self_and_descendants(TreeTraversal.BREADTH_FIRST)
        assert _values(result) == ['root', 'A', 'B', 'A1', 'A2']

    def test_default_order_is_pre_order(self):
        """Test self_and_descendants defaults to pre-order."""
        root = _sample_tree()
        assert _values(root.self_and_descendants()) == ['root', 'A', 'A1', 'A2', 'B']

    def test_string_aliases(self):
        """Test orders can be given as strings."""
        root = _sample_tree()
        assert _values(root.self_and_descendants('post'))[-1] == 'root'
        assert _values(root.self_and_descendants('BFS'))[:3] == ['root', 'A', 'B']
        assert _values(root.self_and_descendants('depth_first_pre_order'))[1] == 'A'
        assert _values(root.self_and_descendants('dfs_post'))[0] == 'A1'

    def test_unknown_order_raises_eagerly(self):
        """Test an unknown order raises before any iteration."""
        root = _sample_tree()
        with pytest.raises(UnsupportedTraversalError, match="unhandled"):
            root.self_and_descendants('sideways')
        with pytest.raises(ValueError):
            root.self_and_descendants(42)

    def test_leaf_traversals(self):
        """Test every order yields just the node for a leaf."""
        leaf = TreeNode('leaf')
        for order in TreeTraversal:
            assert list(leaf.self_and_descendants(order)) == [leaf]

    def test_subtree_traversal(self):
        """Test traversal starting below the root stays in the subtree."""
        root = _sample_tree()
        a = root.first_child
        assert _values(a.self_and_descendants('bfs')) == ['A', 'A1', 'A2']
        assert _values(a.self_and_descendants('post')) == ['A1', 'A2', 'A']

    def test_each_call_is_independent(self):
        """Test each call returns a fresh iterator."""
        root = _sample_tree()
        first = root.self_and_descendants()
        next(first)
        second = root.self_and_descendants()
        assert next(second) is root
        assert next(first).value == 'A'

    def test_traversal_is_lazy(self):
        """Test nodes are produced on demand."""
        root = _sample_tree()
        iterator = root.self_and_descendants('bfs')
        assert iter(iterator) is iterator
        assert next(iterator) is root
        assert next(iterator).value == 'A'


class TestOrderLaws:
    """Tests for ordering properties on a larger tree."""

    def test_pre_order_parent_first(self):
        """Test every node precedes its descendants in pre-order."""
        root = _wide_tree()
        order = list(root.self_and_descendants('pre'))
        for node in order:
            for descendant in node.descendants():
                assert order.index(node) < order.index(descendant)

    def test_post_order_parent_last(self):
        """Test every node follows its descendants in post-order."""
        root = _wide_tree()
        order = list(root.self_and_descendants('post'))
        for node in order:
            for descendant in node.descendants():
                assert order.index(node) > order.index(descendant)

    def test_breadth_first_depth_non_decreasing(self):
        """Test depths never decrease in breadth-first order."""
        root = _wide_tree()
        depths = [n.depth for n in root.self_and_descendants('bfs')]
        assert depths == sorted(depths)

    def test_same_node_set_in_every_order(self):
        """Test all orders visit the same nodes exactly once."""
        root = _wide_tree()
        results = [list(root.self_and_descendants(o)) for o in TreeTraversal]
        ids = [sorted(id(n) for n in r) for r in results]
        assert ids[0] == ids[1] == ids[2]
        assert len(set(ids[0])) == len(ids[0]) == 13

    def test_breadth_first_keeps_per_parent_order(self):
        """Test breadth-first lists each level left to right."""
        root = _wide_tree()
        values = _values(root.self_and_descendants('bfs'))
        assert values[:4] == ['r', 'c0', 'c1', 'c2']
        assert values[4:10] == ['c0.0', 'c1.0', 'c1.1', 'c2.0', 'c2.1', 'c2.2']
        assert values[10:] == ['c0.0.x', 'c1.1.x', 'c2.2.x']


class TestMaxDepth:
    """Tests for depth-limited traversals."""

    def test_max_depth_zero(self):
        """Test max_depth=0 yields only the start node."""
        root = _sample_tree()
        for order in TreeTraversal:
            assert list(root.self_and_descendants(order, max_depth=0)) == [root]
        assert list(root.descendants(max_depth=0)) == []

    def test_max_depth_one(self):
        """Test max_depth=1 stops at the children."""
        root = _sample_tree()
        assert _values(root.self_and_descendants('pre', max_depth=1)) == ['root', 'A', 'B']
        assert _values(root.self_and_descendants('post', max_depth=1)) == ['A', 'B', 'root']
        assert _values(root.self_and_descendants('bfs', max_depth=1)) == ['root', 'A', 'B']
        assert _values(root.descendants(max_depth=1)) == ['A', 'B']

    def test_negative_max_depth_raises(self):
        """Test a negative depth limit is rejected."""
        root = _sample_tree()
        with pytest.raises(ValueError, match="cannot be negative"):
            root.self_and_descendants('bfs', max_depth=-1)


class TestAxisTraversals:
    """Tests for ancestors, children, siblings and descendants."""

    def test_ancestors(self):
        """Test ancestors walks up to the root, self excluded."""
        root = _sample_tree()
        a2 = root.first_child.last_child
        assert _values(a2.ancestors()) == ['A', 'root']
        assert list(root.ancestors()) == []

    def test_children_is_read_only_snapshot(self):
        """Test children() can't be used to mutate the node."""
        root = _sample_tree()
        children = root.children()
        assert isinstance(children, tuple)
        assert _values(children) == ['A', 'B']
        root.append_child('C')
        assert _values(children) == ['A', 'B']

    def test_following_and_previous_siblings(self):
        """Test sibling walks in both directions."""
        root = TreeNode('root')
        nodes = [root.append_child(v) for v in 'abcd']
        assert _values(nodes[1].following_siblings()) == ['c', 'd']
        assert _values(nodes[1].previous_siblings()) == ['a']
        assert list(nodes[3].following_siblings()) == []
        assert list(nodes[0].previous_siblings()) == []

    def test_descendants_pre_order(self):
        """Test descendants excludes self and follows pre-order."""
        root = _sample_tree()
        assert _values(root.descendants()) == ['A', 'A1', 'A2', 'B']
        assert list(root.first_child.first_child.descendants()) == []

    def test_walk_generator(self):
        """Test walk without callback returns the traversal."""
        root = _sample_tree()
        assert _values(root.walk(order='post')) == ['A1', 'A2', 'A', 'B', 'root']

    def test_walk_callback(self):
        """Test walk with callback."""
        root = _sample_tree()
        labels = []
        assert root.walk(lambda n: labels.append(n.value), order='bfs') is None
        assert labels == ['root', 'A', 'B', 'A1', 'A2']


class TestDeepTrees:
    """Tests for trees deeper than the recursion limit."""

    def _chain(self, length):
        root = TreeNode(0)
        node = root
        for i in range(1, length):
            node = node.append_child(i)
        return root, node

    def test_deep_chain_all_orders(self):
        """Test every traversal handles a 10000-level chain."""
        root, leaf = self._chain(10000)
        assert sum(1 for _ in root.self_and_descendants('pre')) == 10000
        post = root.self_and_descendants('post')
        assert next(post) is leaf
        assert sum(1 for _ in root.self_and_descendants('bfs')) == 10000
        assert sum(1 for _ in root.descendants()) == 9999

    def test_deep_chain_queries(self):
        """Test depth, root and contains on a deep chain."""
        root, leaf = self._chain(10000)
        assert leaf.depth == 9999
        assert leaf.root is root
        assert root.contains(9999)
        assert root.contains(leaf)
        assert sum(1 for _ in leaf.ancestors()) == 9999


class TestCreateTraversal:
    """Tests for the traversal factory."""

    def test_factory_returns_iterator_classes(self):
        """Test each order maps to its iterator class."""
        root = _sample_tree()
        assert isinstance(create_traversal('pre', root), PreOrderIterator)
        assert isinstance(create_traversal('post', root), PostOrderIterator)
        assert isinstance(create_traversal('level', root), BreadthFirstIterator)

    def test_resolve(self):
        """Test TreeTraversal.resolve accepts members and aliases."""
        assert TreeTraversal.resolve(TreeTraversal.BREADTH_FIRST) is TreeTraversal.BREADTH_FIRST
        assert TreeTraversal.resolve(' Pre ') is TreeTraversal.DEPTH_FIRST_PRE_ORDER
        with pytest.raises(UnsupportedTraversalError):
            TreeTraversal.resolve(None)

    def test_iterator_without_include_self(self):
        """Test PreOrderIterator can skip its start node."""
        root = _sample_tree()
        assert _values(PreOrderIterator(root, include_self=False)) == ['A', 'A1', 'A2', 'B']
