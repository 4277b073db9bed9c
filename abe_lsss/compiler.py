# -*- coding: utf-8 -*-
"""
compiler.py  (access tree -> LSSS matrix, Lewko–Waters labelling)
-----------------------------------------------------------------
Root gets v = (1); counter c = 1.  Depth-first, left before right:

  OR  : both children get v
  AND : left  gets (0, ..., 0) || -1     (c zeros)
        right gets (v padded to c) || 1
        c += 1
  LEAF: v becomes a row, rho(row) = leaf attribute (a named leaf is
        hashed with the compiling field)

Rows are zero-padded to the final c at the end.  The children of an AND
sum to the parent padded with one zero column, so the AND needs both of
them to cancel the fresh coordinate.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import MalformedTreeError
from .field import PrimeField, default_field
from .matrix import LsssMatrix
from .policy import parse_policy
from .tree import AccessTreeNode, NodeKind, pad_share_vector

log = logging.getLogger(__name__)


def _leaf_attribute(node: AccessTreeNode, field: PrimeField) -> int:
    # named leaves are hashed again with the compiling field, whatever field built them
    if node.label is not None:
        return field.attribute(node.label)
    return field.element(node.attribute)


def compile_tree(tree: AccessTreeNode, field: Optional[PrimeField] = None) -> LsssMatrix:
    """Compile ``tree`` into (M, rho).  The tree is left untouched."""
    if not isinstance(tree, AccessTreeNode):
        raise MalformedTreeError(f"expected AccessTreeNode, got {type(tree).__name__}")
    field = field or default_field()

    rows: List[List[int]] = []
    rho: List[int] = []
    labels: List[Optional[str]] = []
    counter = 1

    # right child pushed first so the left subtree is labelled (and c bumped) first
    stack: List[Tuple[AccessTreeNode, List[int]]] = [(tree, [field.one])]
    while stack:
        node, v = stack.pop()
        if node.kind is NodeKind.LEAF:
            rows.append(v)
            rho.append(_leaf_attribute(node, field))
            labels.append(node.label)
        elif node.kind is NodeKind.OR:
            stack.append((node.right, v))
            stack.append((node.left, v))
        elif node.kind is NodeKind.AND:
            v_left = [0] * counter + [field.minus_one]
            v_right = pad_share_vector(v, counter) + [field.one]
            counter += 1
            stack.append((node.right, v_right))
            stack.append((node.left, v_left))
        else:
            raise MalformedTreeError(f"Unsupported node kind: {node.kind!r}")

    matrix = [pad_share_vector(r, counter) for r in rows]
    log.debug("compiled policy %s into %dx%d LSSS matrix", tree, len(matrix), counter)
    return LsssMatrix(field, matrix, rho, labels)


def compile_policy(policy_str: str, field: Optional[PrimeField] = None) -> LsssMatrix:
    """parse_policy + compile_tree."""
    field = field or default_field()
    return compile_tree(parse_policy(policy_str, field), field)
