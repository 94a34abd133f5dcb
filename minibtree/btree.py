from __future__ import annotations

"""
Contains the implementation of the in-memory btree
"""
import logging

from typing import Any, List, Optional

from .constants import DEFAULT_DEGREE, MIN_DEGREE


logger = logging.getLogger(__name__)


class InvalidDegree(ValueError):
    """Degree can not support the split invariant"""
    pass


class Node:
    """
    Holds keys, their values, and (for internal nodes) children.
    The tree performs all mutations directly on these fields.
    """

    def __init__(self, leaf: bool):
        self.leaf = leaf
        self.keys: List[Any] = []
        self.values: List[Any] = []
        self.children: List[Node] = []

    def num_keys(self) -> int:
        return len(self.keys)

    def __repr__(self):
        kind = "leaf" if self.leaf else "internal"
        return f"Node({kind}, keys={self.keys})"


class BTree:
    """
    Insertion-only btree mapping keys to values.

    Every node holds at most 2*degree - 1 keys. Full nodes are split on the way
    down during an insert (preemptive splitting), so a node is never asked
    to accept a key it has no room for.

    Duplicate keys are kept as separate entries; a new duplicate is always
    placed to the right of existing equal keys, and `search` returns the value
    of the leftmost, i.e. first inserted, occurrence.

    The public interface consists of `insert`, `search`, `is_empty`,
    and the debugging utilities. The remaining methods should not
    be invoked by external actors.
    """

    def __init__(self, degree: int = DEFAULT_DEGREE):
        """
        :param degree: branching parameter; fixed for the lifetime of the tree
        """
        if isinstance(degree, bool) or not isinstance(degree, int):
            raise InvalidDegree(f"degree must be an integer, received [{degree!r}]")
        if degree < MIN_DEGREE:
            raise InvalidDegree(f"degree must be >= {MIN_DEGREE}, received [{degree}]")
        self.root: Optional[Node] = None
        self.degree = degree

    @property
    def max_keys(self) -> int:
        return 2 * self.degree - 1

    # section : public interface: insert, search, is_empty

    def insert(self, key, value):
        """
        insert `key` -> `value` into the tree

        Algorithm:
            If the tree is empty, create a leaf root holding the pair.

            If the root is full, create a new (internal) root whose only
            child is the old root, and split the old root. This is the only
            way the tree grows in height.

            Then descend from the root. Before descending into a child,
            split it if it is full. Thus, the node we descend into always
            has room for one more key, and the key can be placed in the leaf
            without any upward propagation.

        :param key:
        :param value:
        """
        if self.root is None:
            root = Node(leaf=True)
            root.keys.append(key)
            root.values.append(value)
            self.root = root
            return

        root = self.root
        if root.num_keys() == self.max_keys:
            new_root = Node(leaf=False)
            new_root.children.append(root)
            self.split_child(new_root, 0)
            self.root = new_root
            logger.debug(f"root split; tree height is now {self.height()}")
            root = new_root

        self.insert_non_full(root, key, value)

    def search(self, key) -> Optional[Any]:
        """
        find the value stored for `key`

        Equal keys are laid out, left to right, in insertion order. When an
        internal node holds `key`, an earlier duplicate may still sit in the
        subtree left of it, so the descent continues there.

        :param key: key being seeked
        :return: value of the first inserted entry with `key`; None if not found
        """
        value = None
        node = self.root
        while node is not None:
            i = 0
            while i < node.num_keys() and key > node.keys[i]:
                i += 1
            if i < node.num_keys() and key == node.keys[i]:
                value = node.values[i]
            if node.leaf:
                break
            node = node.children[i]
        return value

    def is_empty(self) -> bool:
        return self.root is None

    # section: logic helpers - insert core

    def insert_non_full(self, node: Node, key, value):
        """
        insert into the subtree rooted at `node`; `node` must have fewer than
        max_keys keys

        :param node:
        :param key:
        :param value:
        """
        while True:
            # position after any keys <= key
            i = node.num_keys()
            while i > 0 and key < node.keys[i - 1]:
                i -= 1

            if node.leaf:
                node.keys.insert(i, key)
                node.values.insert(i, value)
                return

            if node.children[i].num_keys() == self.max_keys:
                self.split_child(node, i)
                # the promoted median now sits at i; a key equal to it goes right
                if key >= node.keys[i]:
                    i += 1
            node = node.children[i]

    def split_child(self, parent: Node, index: int):
        """
        split the full child at `parent.children[index]`

        The median of the child is promoted to `parent` at `index`. The keys
        (and children) right of the median move to a new sibling, which is
        placed at `parent.children[index + 1]`. The child retains the keys
        left of the median.

        :param parent:
        :param index: position of the full child amongst parent's children
        """
        child = parent.children[index]
        assert child.num_keys() == self.max_keys, (
            f"split requires a full child; child has {child.num_keys()} keys"
        )
        mid = self.degree - 1
        sibling = Node(leaf=child.leaf)

        sibling.keys = child.keys[mid + 1:]
        sibling.values = child.values[mid + 1:]
        if not child.leaf:
            sibling.children = child.children[self.degree:]
            del child.children[self.degree:]

        mid_key = child.keys[mid]
        mid_value = child.values[mid]
        del child.keys[mid:]
        del child.values[mid:]

        parent.keys.insert(index, mid_key)
        parent.values.insert(index, mid_value)
        parent.children.insert(index + 1, sibling)
        logger.debug(f"split child at index {index}; promoted key: {mid_key}")

    # section: btree utility methods

    def height(self) -> int:
        """
        :return: number of levels; 0 for an empty tree
        """
        height = 0
        node = self.root
        while node is not None:
            height += 1
            node = None if node.leaf else node.children[0]
        return height

    # section: btree debugging utilities

    @staticmethod
    def depth_to_indent(depth: int) -> str:
        return " " * (depth * 4)

    def print_tree(self, node: Node = None, depth: int = 0):
        """
        print entire tree node by node, starting at an optional node
        :param node: root of invocation; defaults to tree root
        :param depth: depth of current invocation (used for formatting indentation)
        """
        if node is None:
            if self.root is None:
                print("empty tree")
                return
            node = self.root

        indent = self.depth_to_indent(depth)
        if node.leaf:
            self.print_leaf_node(node, depth=depth)
            return

        body = f".. printing internal node at depth: [{depth}] .."
        divider = f"{indent}{len(body) * '.'}"
        print(divider)
        print(f"{indent}{body}")
        print(divider)
        print(f"{indent}internal (size: {node.num_keys()}, children: {len(node.children)})")
        for i, key in enumerate(node.keys):
            print(f"{indent}{i}-key: {key}")
        for child in node.children:
            self.print_tree(child, depth=depth + 1)
        print(divider)

    @staticmethod
    def print_leaf_node(node: Node, depth: int = 0):
        indent = BTree.depth_to_indent(depth)
        print(f"{indent}leaf (size: {node.num_keys()})")
        for i, key in enumerate(node.keys):
            print(f"{indent}{i} - {key}: {node.values[i]!r}")

    def validate(self) -> bool:
        """
        invoke all sub-validators
        :return:
            raises AssertionError on failure
            True on success
        """
        self.validate_node_sizes()
        self.validate_ordering()
        self.validate_leaf_depth()
        return True

    def validate_node_sizes(self) -> bool:
        """
        validate:
            1) no node holds more than max_keys keys
            2) keys and values are parallel
            3) internal nodes have one more child than keys; leaves have none
        """
        if self.root is None:
            return True

        stack = [self.root]
        while stack:
            node = stack.pop()
            assert node.num_keys() <= self.max_keys, (
                f"node {node} has {node.num_keys()} keys; max is {self.max_keys}"
            )
            assert len(node.values) == node.num_keys(), (
                f"node {node} has {len(node.values)} values for {node.num_keys()} keys"
            )
            if node.leaf:
                assert not node.children, f"leaf {node} has children"
            else:
                assert len(node.children) == node.num_keys() + 1, (
                    f"internal node {node} has {len(node.children)} children for {node.num_keys()} keys"
                )
                assert node.num_keys() > 0, f"internal node {node} is 0-ary"
                stack.extend(node.children)
        return True

    def validate_ordering(self) -> bool:
        """
        traverse the tree, starting at root, and ensure keys are ordered as expected.

        Each stack entry carries the bounds its subtree must respect; None
        denotes an open bound. Bounds are inclusive since duplicate keys may
        straddle a separator.

        :return:
            raises AssertionError on failure
            True on success
        """
        if self.root is None:
            return True

        stack = [(self.root, None, None)]
        while stack:
            node, lower_bound, upper_bound = stack.pop()
            for i, key in enumerate(node.keys):
                if lower_bound is not None:
                    assert lower_bound <= key, (
                        f"validation: lower bound [{lower_bound}] constraint violated [{key}]"
                    )
                if upper_bound is not None:
                    assert key <= upper_bound, (
                        f"validation: upper bound [{upper_bound}] constraint violated [{key}]"
                    )
                if i > 0:
                    prev_key = node.keys[i - 1]
                    assert prev_key <= key, (
                        f"validation: sibling keys out of order; key: {key}, prev_key: {prev_key}"
                    )

            if node.leaf:
                continue

            for child_num, child in enumerate(node.children):
                child_lower_bound = node.keys[child_num - 1] if child_num > 0 else lower_bound
                child_upper_bound = node.keys[child_num] if child_num < node.num_keys() else upper_bound
                stack.append((child, child_lower_bound, child_upper_bound))

        return True

    def validate_leaf_depth(self) -> bool:
        """
        validate all leaves are at the same depth, i.e. the tree is balanced
        """
        if self.root is None:
            return True

        leaf_depths = set()
        stack = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            if node.leaf:
                leaf_depths.add(depth)
            else:
                stack.extend((child, depth + 1) for child in node.children)

        assert len(leaf_depths) == 1, f"leaves found at multiple depths: {sorted(leaf_depths)}"
        return True
