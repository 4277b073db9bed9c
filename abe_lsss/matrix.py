# -*- coding: utf-8 -*-
"""
matrix.py  (compiled LSSS matrix)
---------------------------------
  M   : l x n matrix over Z_p, one row per leaf of the source tree
  rho : row index -> attribute (leaf order, not sorted)

Encryption computes the share of row i as  λ_i = <M_i, v>  for
v = (s, y_2, ..., y_n); decryption finds ω with  Σ ω_i M_i = (1, 0, ..., 0).
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import IndexOutOfRangeError
from .field import Attribute, PrimeField


class LsssMatrix:
    """Immutable share-generating matrix plus its row labelling."""

    __slots__ = ("_field", "_rows", "_rho", "_labels", "_columns")

    def __init__(self, field: PrimeField, rows: Sequence[Sequence[int]],
                 rho: Sequence[int], labels: Optional[Sequence[Optional[str]]] = None):
        if not rows:
            raise ValueError("LSSS matrix needs at least one row")
        if len(rows) != len(rho):
            raise ValueError(f"rho length {len(rho)} does not match row count {len(rows)}")
        columns = len(rows[0])
        if columns == 0:
            raise ValueError("LSSS matrix needs at least one column")
        for i, r in enumerate(rows):
            if len(r) != columns:
                raise ValueError(f"row {i} has length {len(r)}, expected {columns}")
        if labels is None:
            labels = [None] * len(rows)
        elif len(labels) != len(rows):
            raise ValueError(f"labels length {len(labels)} does not match row count {len(rows)}")

        self._field = field
        self._rows: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(field.element(x) for x in r) for r in rows
        )
        self._rho: Tuple[int, ...] = tuple(field.element(a) for a in rho)
        self._labels: Tuple[Optional[str], ...] = tuple(labels)
        self._columns = columns

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], rho: Sequence[Attribute],
                  field: PrimeField) -> "LsssMatrix":
        """Build from an explicit matrix; rho entries may be names or elements."""
        labels = [a if isinstance(a, str) else None for a in rho]
        return cls(field, rows, [field.attribute(a) for a in rho], labels)

    # ── queries ──────────────────────────────────────────────────────────────

    @property
    def field(self) -> PrimeField:
        return self._field

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return self._rows

    def row_number(self) -> int:
        return len(self._rows)

    def column_number(self) -> int:
        return self._columns

    def _check_row(self, row: int) -> None:
        if not isinstance(row, int) or isinstance(row, bool) or not 0 <= row < len(self._rows):
            raise IndexOutOfRangeError(
                f"row {row!r} out of LSSS matrix range [0, {len(self._rows)})"
            )

    def row(self, row: int) -> Tuple[int, ...]:
        self._check_row(row)
        return self._rows[row]

    def rho(self, row: int) -> int:
        self._check_row(row)
        return self._rho[row]

    def label(self, row: int) -> Optional[str]:
        self._check_row(row)
        return self._labels[row]

    def attributes(self) -> List[int]:
        return list(self._rho)

    def labels(self) -> List[Optional[str]]:
        return list(self._labels)

    def rows_for(self, held: Iterable[int]) -> List[int]:
        """Row indices whose attribute is in ``held`` (duplicates kept)."""
        held_set = set(held)
        return [i for i, a in enumerate(self._rho) if a in held_set]

    # ── share computation ────────────────────────────────────────────────────

    def compute_vector(self, row: int, vector: Sequence[int]) -> int:
        """Inner product <M_row, vector> mod p."""
        self._check_row(row)
        if len(vector) != self._columns:
            raise ValueError(
                f"vector length {len(vector)} does not match column count {self._columns}"
            )
        return self._field.dot(self._rows[row], [self._field.element(x) for x in vector])

    def share(self, secret: int, randoms: Sequence[int]) -> List[int]:
        """λ_i for every row, with v = (secret, *randoms)."""
        v = [secret] + list(randoms)
        return [self.compute_vector(i, v) for i in range(len(self._rows))]

    # ── misc ─────────────────────────────────────────────────────────────────

    def _signed(self, x: int) -> int:
        # show p-1 as -1 etc.
        return x - self._field.order if x > self._field.order // 2 else x

    def format(self) -> str:
        out = [f"matrix rowNumber: {self.row_number()}, columnNumber: {self.column_number()}",
               "ρ(i)  Matrix"]
        for i, r in enumerate(self._rows):
            name = self._labels[i] if self._labels[i] is not None else hex(self._rho[i])[:10]
            cells = " ".join(f"{self._signed(x):>3}" for x in r)
            out.append(f"index {i} || attribute: {name} || {cells}")
        return "\n".join(out)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LsssMatrix):
            return NotImplemented
        return (self._field == other._field and self._rows == other._rows
                and self._rho == other._rho)

    def __hash__(self) -> int:
        return hash((self._field, self._rows, self._rho))

    def __repr__(self) -> str:
        return f"LsssMatrix({self.row_number()}x{self.column_number()})"
