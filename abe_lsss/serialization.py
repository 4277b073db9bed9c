# -*- coding: utf-8 -*-
"""
serialization.py  (LSSS matrix <-> JSON)
----------------------------------------
Layout:

  {"field_order": "<decimal>",
   "M":      [["1", "0"], ...],      # field elements as decimal strings
   "rho":    ["<decimal>", ...],
   "labels": ["A", null, ...]}
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from .field import PrimeField
from .matrix import LsssMatrix


def save_json(path: str, obj: Any) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)

def load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def matrix_to_dict(matrix: LsssMatrix) -> Dict[str, Any]:
    return {
        "field_order": str(matrix.field.order),
        "M": [[str(x) for x in row] for row in matrix.rows],
        "rho": [str(a) for a in matrix.attributes()],
        "labels": matrix.labels(),
    }

def matrix_from_dict(blob: Dict[str, Any], field: Optional[PrimeField] = None) -> LsssMatrix:
    """
    Rebuild the matrix.  rho is stored already hashed, so a policy compiled
    with a field that hashes names its own way (e.g. CharmField) must be
    loaded with that same ``field`` for name lookups to match.
    """
    try:
        order = int(blob["field_order"])
        rows = [[int(x) for x in row] for row in blob["M"]]
        rho = [int(a) for a in blob["rho"]]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed LSSS matrix payload: {e!r}") from e
    if field is None:
        field = PrimeField(order)
    elif field.order != order:
        raise ValueError(f"Field order mismatch: payload has {order}, field has {field.order}")
    return LsssMatrix(field, rows, rho, blob.get("labels"))


def save_matrix(path: str, matrix: LsssMatrix) -> None:
    save_json(path, matrix_to_dict(matrix))

def load_matrix(path: str, field: Optional[PrimeField] = None) -> LsssMatrix:
    return matrix_from_dict(load_json(path), field)
