# -*- coding: utf-8 -*-
"""
solver.py  (Gaussian elimination over Z_p)
------------------------------------------
Find ω_1..ω_m with  Σ ω_j · vectors[j] = e_1 = (1, 0, ..., 0).

We solve the transposed system  A · ω = e_1  where A = vectors^T  (n x m),
on the augmented matrix [A | e_1]:

  1. forward elimination, taking the first nonzero entry at or below the
     current row as pivot; a column without pivot is a free variable and
     the pivot row stays where it is;
  2. a row whose coefficients are all zero but whose right-hand side is
     not means the system is inconsistent;
  3. back-substitution on the pivot rows, free variables set to 0;
  4. exact check of Σ ω_j · vectors[j] against e_1.

Cost O(n · m²).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .field import PrimeField

log = logging.getLogger(__name__)


def solve_weights(vectors: Sequence[Sequence[int]], width: int,
                  field: PrimeField) -> Optional[List[int]]:
    """
    Return ω (one weight per vector, zeros allowed) or None if e_1 is not in
    the span of ``vectors``.  Every vector must have length ``width``.
    """
    m = len(vectors)
    n = width
    if m == 0 or n == 0:
        return None
    for j, vec in enumerate(vectors):
        if len(vec) != n:
            raise ValueError(f"vector {j} has length {len(vec)}, expected {n}")

    p = field.order
    # aug[r][c] = vectors[c][r] for c < m, aug[r][m] = e_1[r]
    aug: List[List[int]] = []
    for r in range(n):
        row = [vectors[c][r] % p for c in range(m)]
        row.append(field.one if r == 0 else 0)
        aug.append(row)

    pivot_col_of_row: Dict[int, int] = {}
    cur_row = 0
    for col in range(m):
        if cur_row >= n:
            break
        pivot = -1
        for r in range(cur_row, n):
            if aug[r][col] != 0:
                pivot = r
                break
        if pivot < 0:
            continue
        if pivot != cur_row:
            aug[cur_row], aug[pivot] = aug[pivot], aug[cur_row]
        piv_inv = field.inv(aug[cur_row][col])
        prow = aug[cur_row]
        for r in range(cur_row + 1, n):
            if aug[r][col] == 0:
                continue
            factor = (aug[r][col] * piv_inv) % p
            target = aug[r]
            for k in range(col, m + 1):
                target[k] = (target[k] - factor * prow[k]) % p
        pivot_col_of_row[cur_row] = col
        cur_row += 1

    for r in range(n):
        if aug[r][m] != 0 and all(x == 0 for x in aug[r][:m]):
            log.debug("inconsistent system: row %d reduces to 0 = %d", r, aug[r][m])
            return None

    w = [0] * m
    for r in range(cur_row - 1, -1, -1):
        col = pivot_col_of_row[r]
        acc = aug[r][m]
        for k in range(col + 1, m):
            if aug[r][k]:
                acc -= aug[r][k] * w[k]
        w[col] = (acc * field.inv(aug[r][col])) % p

    for r in range(n):
        total = 0
        for c in range(m):
            total += w[c] * vectors[c][r]
        expected = field.one if r == 0 else 0
        if total % p != expected:
            log.debug("candidate weights fail verification at coordinate %d", r)
            return None

    return w
