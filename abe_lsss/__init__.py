# -*- coding: utf-8 -*-
"""
abe_lsss  (access-policy compiler and LSSS solver)
--------------------------------------------------
  tree = parse_policy("(A and B) or C")        # or and_(leaf("A"), leaf("B"))
  M = compile_tree(tree)                        # encryption: M.compute_vector(i, v)
  rec = evaluate(M, {"A", "B"})                 # decryption: rows + weights, or None
"""

from .compiler import compile_policy, compile_tree
from .errors import (
    IndexOutOfRangeError,
    LsssError,
    MalformedTreeError,
    PolicyNotSatisfied,
    PolicySyntaxError,
)
from .evaluator import PolicyEvaluator, Reconstruction, evaluate, evaluate_or_raise
from .field import PrimeField, default_field
from .matrix import LsssMatrix
from .policy import EXAMPLE_POLICIES, parse_policy
from .solver import solve_weights
from .tree import (
    AccessTreeNode,
    NodeKind,
    and_,
    and_right,
    attrs,
    leaf,
    or_,
    or_right,
    pad_share_vector,
)

__version__ = "0.1.0"
