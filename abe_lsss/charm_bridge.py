# -*- coding: utf-8 -*-
"""
charm_bridge.py  (LSSS engine <-> Charm pairing groups)
-------------------------------------------------------
Schemes built on Charm work with ZR elements; the engine works with ints
mod p.  This module ties the two together:

  CharmField(group)              field of order |ZR|, attributes hashed with
                                 group.hash("ATTR:" + name, ZR)
  share_secret(group, M, s)      λ_i = <M_i, (s, y_2, ..., y_n)>  in ZR
  weights_to_zr(group, rec)      ω_i as ZR exponents
  reconstruct_secret(...)        Σ ω_i λ_i   (== s when rec is valid)

Requires the ``pairing`` extra (charm-crypto-framework).
"""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import Any, Dict, List, Optional, Sequence, Union

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .evaluator import Reconstruction
from .field import PrimeField
from .matrix import LsssMatrix


@dataclass(frozen=True)
class CharmField(PrimeField):
    group: Any = dc_field(default=None, compare=False, hash=False, repr=False)

    @classmethod
    def for_group(cls, group: PairingGroup) -> "CharmField":
        return cls(int(group.order()), group)

    def hash_to_field(self, data: Union[str, bytes]) -> int:
        if self.group is None:
            return super().hash_to_field(data)
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return int(self.group.hash("ATTR:" + data, ZR)) % self.order


def to_zr(group: PairingGroup, x: int) -> Any:
    return group.init(ZR, int(x))


def weights_to_zr(group: PairingGroup, rec: Reconstruction) -> Dict[int, Any]:
    """{original_row_index: ω_i as ZR}."""
    return {i: to_zr(group, w) for i, w in zip(rec.rows, rec.weights)}


def share_secret(group: PairingGroup, matrix: LsssMatrix, s: Any,
                 randoms: Optional[Sequence[Any]] = None) -> List[Any]:
    """
    Share secret s using matrix M.
    Secret vector v = (s, y_2, ..., y_n) with fresh random y_j unless given.
    """
    n_cols = matrix.column_number()
    if randoms is None:
        randoms = [group.random(ZR) for _ in range(n_cols - 1)]
    if len(randoms) != n_cols - 1:
        raise ValueError(f"expected {n_cols - 1} random coordinates, got {len(randoms)}")
    v_vec = [s] + list(randoms)
    shares = []
    for row in matrix.rows:
        acc = group.init(ZR, 0)
        for j, a in enumerate(row):
            if a:
                acc = acc + to_zr(group, a) * v_vec[j]
        shares.append(acc)
    return shares


def reconstruct_secret(group: PairingGroup, rec: Reconstruction,
                       shares: Sequence[Any]) -> Any:
    acc = group.init(ZR, 0)
    for i, w in zip(rec.rows, rec.weights):
        acc = acc + to_zr(group, w) * shares[i]
    return acc
