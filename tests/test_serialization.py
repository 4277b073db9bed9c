import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from abe_lsss import PrimeField, compile_policy, evaluate
from abe_lsss.config import BN254_R
from abe_lsss.serialization import (
    load_json,
    load_matrix,
    matrix_from_dict,
    matrix_to_dict,
    save_matrix,
)

F = PrimeField(BN254_R)


def test_saved_matrix_still_evaluates(tmp_path: Path):
    m = compile_policy("(A and B) or (C and D)", F)
    path = tmp_path / "policy" / "m.json"
    save_matrix(str(path), m)

    blob = load_json(str(path))
    assert blob["labels"] == ["A", "B", "C", "D"]
    assert blob["M"][0] == ["0", str(F.order - 1), "0"]

    m2 = load_matrix(str(path))
    assert m2 == m
    assert m2.field == F
    assert evaluate(m2, {"C", "D"}) == evaluate(m, {"C", "D"})


def test_payload_is_plain_json():
    blob = matrix_to_dict(compile_policy("A", F))
    assert json.loads(json.dumps(blob)) == blob


@pytest.mark.parametrize("blob", [
    {},
    {"field_order": "101", "M": [["1"]]},
    {"field_order": "101", "M": [["1"], ["1", "0"]], "rho": ["1", "2"]},
    {"field_order": "101", "M": [["1"]], "rho": ["1", "2"]},
])
def test_malformed_payload(blob):
    with pytest.raises(ValueError):
        matrix_from_dict(blob)


@dataclass(frozen=True)
class PrefixedField(PrimeField):
    def hash_to_field(self, data):
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return super().hash_to_field("ATTR:" + data)


def test_reload_with_custom_hashing_field(tmp_path: Path):
    f = PrefixedField(BN254_R)
    m = compile_policy("A or B", f)
    path = tmp_path / "m.json"
    save_matrix(str(path), m)

    m2 = load_matrix(str(path), field=f)
    assert m2.field is f
    assert m2 == m
    assert evaluate(m2, {"A"}) == ([0], [1])
    # the plain field hashes names differently and cannot match rho
    assert evaluate(load_matrix(str(path)), {"A"}) is None


def test_reload_with_wrong_field_order():
    blob = matrix_to_dict(compile_policy("A", F))
    with pytest.raises(ValueError):
        matrix_from_dict(blob, field=PrimeField(101))
