# -*- coding: utf-8 -*-
"""
evaluator.py  (attribute set -> reconstruction coefficients)
------------------------------------------------------------
Given (M, rho) and the requester's attributes S, compute {ω_i} with

    Σ_{rho(i) ∈ S} ω_i · M_i = (1, 0, ..., 0)

Decryption raises the i-th ciphertext component to ω_i for every returned
row.  ``None`` means "access denied" and is not an error.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple, Optional

from .errors import PolicyNotSatisfied
from .field import Attribute, held_attributes
from .matrix import LsssMatrix
from .solver import solve_weights

log = logging.getLogger(__name__)


class Reconstruction(NamedTuple):
    rows: List[int]      # original row indices of M
    weights: List[int]   # nonzero ω_i, parallel to rows

    def as_dict(self):
        return dict(zip(self.rows, self.weights))


def evaluate(matrix: LsssMatrix, held: Iterable[Attribute]) -> Optional[Reconstruction]:
    """
    Reconstruction coefficients for ``held`` (names or field elements),
    or None if the attributes do not satisfy the policy.  A bare name is
    one attribute, not a sequence of one-letter attributes.
    """
    field = matrix.field
    held_elems = {field.attribute(a) for a in held_attributes(held)}

    sat = matrix.rows_for(held_elems)
    if not sat:
        log.debug("no row of %r matches the held attributes", matrix)
        return None

    weights = solve_weights([matrix.row(i) for i in sat], matrix.column_number(), field)
    if weights is None:
        log.debug("rows %s cannot reconstruct the target vector", sat)
        return None

    rows = [i for i, w in zip(sat, weights) if w != 0]
    nonzero = [w for w in weights if w != 0]
    if not rows:
        return None
    log.debug("policy satisfied with rows %s", rows)
    return Reconstruction(rows, nonzero)


def evaluate_or_raise(matrix: LsssMatrix, held: Iterable[Attribute]) -> Reconstruction:
    held = held_attributes(held)
    res = evaluate(matrix, held)
    if res is None:
        raise PolicyNotSatisfied(attributes=held)
    return res


class PolicyEvaluator:
    """``evaluate`` bound to one compiled policy."""

    def __init__(self, matrix: LsssMatrix):
        self.matrix = matrix

    def evaluate(self, held: Iterable[Attribute]) -> Optional[Reconstruction]:
        return evaluate(self.matrix, held)

    def satisfies(self, held: Iterable[Attribute]) -> bool:
        return evaluate(self.matrix, held) is not None
