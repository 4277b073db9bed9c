# -*- coding: utf-8 -*-
"""
tree.py  (binary access tree)
-----------------------------
A monotone Boolean formula over attributes, stored as a strict binary tree
of AND / OR gates with attribute leaves.

Nodes are immutable.  Share vectors are not kept on the nodes; the compiler
passes them down as arguments, so one tree can be compiled any number of
times, from any number of threads.  Every walk over the tree uses an
explicit stack, so long AND/OR chains are not bounded by Python's recursion
limit.

Builders:
  leaf("A")                      -> LEAF(A)
  and_(a, b, c)                  -> AND(AND(a, b), c)      (left-associative)
  or_right(a, b, c)              -> OR(a, OR(b, c))        (right-associative)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import MalformedTreeError
from .field import Attribute, PrimeField, default_field, held_attributes


class NodeKind(enum.Enum):
    LEAF = "leaf"
    AND = "and"
    OR = "or"


@dataclass(frozen=True, eq=False, repr=False)
class AccessTreeNode:
    kind: NodeKind
    attribute: Optional[int] = None
    label: Optional[str] = None
    left: Optional["AccessTreeNode"] = None
    right: Optional["AccessTreeNode"] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, NodeKind):
            raise MalformedTreeError(f"Unknown node kind: {self.kind!r}")
        if self.kind is NodeKind.LEAF:
            if self.attribute is None:
                raise MalformedTreeError("Leaf node requires an attribute")
            if self.left is not None or self.right is not None:
                raise MalformedTreeError("Leaf node cannot have children")
        else:
            if self.left is None or self.right is None:
                raise MalformedTreeError(
                    f"{self.kind.name} node requires exactly two children"
                )
            if self.attribute is not None:
                raise MalformedTreeError(f"{self.kind.name} node cannot carry an attribute")

    # ── structure ────────────────────────────────────────────────────────────

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def copy(self) -> "AccessTreeNode":
        """Deep clone; the copy shares no node with the original."""
        built: List[AccessTreeNode] = []
        for node in _postorder(self):
            if node.is_leaf:
                built.append(AccessTreeNode(NodeKind.LEAF, attribute=node.attribute,
                                            label=node.label))
            else:
                right = built.pop()
                left = built.pop()
                built.append(AccessTreeNode(node.kind, left=left, right=right))
        return built[0]

    def leaves(self) -> List["AccessTreeNode"]:
        """Leaves in depth-first, left-to-right order (= compiled row order)."""
        return [n for n in _preorder(self) if n.is_leaf]

    def leaf_count(self) -> int:
        return len(self.leaves())

    def and_count(self) -> int:
        return sum(1 for n in _preorder(self) if n.kind is NodeKind.AND)

    def depth(self) -> int:
        best = 0
        stack = [(self, 1)]
        while stack:
            node, d = stack.pop()
            best = max(best, d)
            if not node.is_leaf:
                stack.append((node.left, d + 1))
                stack.append((node.right, d + 1))
        return best

    # ── semantics ────────────────────────────────────────────────────────────

    def is_satisfied_by(self, held: Iterable[Attribute],
                        field: Optional[PrimeField] = None) -> bool:
        """Plain Boolean evaluation of the formula."""
        field = field or default_field()
        held_set = {field.attribute(a) for a in held_attributes(held)}
        values: List[bool] = []
        for node in _postorder(self):
            if node.kind is NodeKind.LEAF:
                values.append(node.attribute in held_set)
                continue
            right = values.pop()
            left = values.pop()
            values.append(left and right if node.kind is NodeKind.AND else left or right)
        return values[0]

    # ── identity ─────────────────────────────────────────────────────────────

    def _shape(self) -> Iterator[tuple]:
        # preorder of a full binary tree determines it uniquely
        for n in _preorder(self):
            yield (n.kind, n.attribute, n.label)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessTreeNode):
            return NotImplemented
        if self is other:
            return True
        return list(self._shape()) == list(other._shape())

    def __hash__(self) -> int:
        return hash(tuple(self._shape()))

    # ── rendering ────────────────────────────────────────────────────────────

    def _leaf_text(self) -> str:
        if self.label is not None:
            return self.label
        return hex(self.attribute)[:10]

    def to_formula(self) -> str:
        """Render as a fully parenthesised policy string."""
        parts: List[str] = []
        for node in _postorder(self):
            if node.is_leaf:
                parts.append(node._leaf_text())
                continue
            right = parts.pop()
            left = parts.pop()
            op = "and" if node.kind is NodeKind.AND else "or"
            parts.append(f"({left} {op} {right})")
        return parts[0]

    def pretty(self) -> str:
        lines: List[str] = []
        stack = [(self, "", True, True)]
        while stack:
            node, prefix, is_last, is_root = stack.pop()
            connector = "" if is_root else ("└── " if is_last else "├── ")
            if node.is_leaf:
                lines.append(f"{prefix}{connector}LEAF({node._leaf_text()})")
                continue
            lines.append(f"{prefix}{connector}{node.kind.name}")
            child_prefix = prefix if is_root else prefix + ("    " if is_last else "│   ")
            stack.append((node.right, child_prefix, True, False))
            stack.append((node.left, child_prefix, False, False))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_formula()

    def __repr__(self) -> str:
        return f"AccessTreeNode({self.to_formula()})"


# ============================================================
# Traversal
# ============================================================

def _preorder(root: AccessTreeNode) -> Iterator[AccessTreeNode]:
    """Node, then left subtree, then right subtree."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def _postorder(root: AccessTreeNode) -> Iterator[AccessTreeNode]:
    """Left subtree, right subtree, then node."""
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if node.is_leaf or expanded:
            yield node
            continue
        stack.append((node, True))
        stack.append((node.right, False))
        stack.append((node.left, False))


# ============================================================
# Share-vector helper
# ============================================================

def pad_share_vector(vector: Sequence[int], n: int) -> List[int]:
    """Return ``vector`` extended with zeros to length ``n`` (copy if already >= n)."""
    out = list(vector)
    if len(out) < n:
        out.extend([0] * (n - len(out)))
    return out


# ============================================================
# Builders
# ============================================================

def leaf(attr: Attribute, field: Optional[PrimeField] = None) -> AccessTreeNode:
    field = field or default_field()
    label = attr if isinstance(attr, str) else None
    return AccessTreeNode(NodeKind.LEAF, attribute=field.attribute(attr), label=label)


def attrs(*names: Attribute, field: Optional[PrimeField] = None) -> List[AccessTreeNode]:
    field = field or default_field()
    return [leaf(n, field) for n in names]


def _check_children(name: str, children: Sequence[AccessTreeNode]) -> None:
    if not children:
        raise MalformedTreeError(f"{name}() requires at least one child")
    for c in children:
        if not isinstance(c, AccessTreeNode):
            raise MalformedTreeError(f"{name}() children must be AccessTreeNode, got {type(c).__name__}")


def _fold_left(kind: NodeKind, children: Sequence[AccessTreeNode]) -> AccessTreeNode:
    node = children[0]
    for c in children[1:]:
        node = AccessTreeNode(kind, left=node, right=c)
    return node


def _fold_right(kind: NodeKind, children: Sequence[AccessTreeNode]) -> AccessTreeNode:
    node = children[-1]
    for c in reversed(children[:-1]):
        node = AccessTreeNode(kind, left=c, right=node)
    return node


def and_(*children: AccessTreeNode) -> AccessTreeNode:
    _check_children("and_", children)
    return _fold_left(NodeKind.AND, children)


def or_(*children: AccessTreeNode) -> AccessTreeNode:
    _check_children("or_", children)
    return _fold_left(NodeKind.OR, children)


def and_right(*children: AccessTreeNode) -> AccessTreeNode:
    _check_children("and_right", children)
    return _fold_right(NodeKind.AND, children)


def or_right(*children: AccessTreeNode) -> AccessTreeNode:
    _check_children("or_right", children)
    return _fold_right(NodeKind.OR, children)
