import pytest

from abe_lsss import (
    EXAMPLE_POLICIES,
    IndexOutOfRangeError,
    LsssMatrix,
    PrimeField,
    compile_policy,
    evaluate,
)
from abe_lsss.config import BN254_R

F = PrimeField(BN254_R)


def test_queries():
    m = compile_policy("(A and B) or C", F)
    assert m.row_number() == 3
    assert m.column_number() == 2
    assert m.row(2) == (1, 0)
    assert m.rho(1) == F.hash_to_field("B")
    assert m.label(2) == "C"
    assert m.attributes() == [F.hash_to_field(x) for x in "ABC"]


def test_attributes_returns_a_copy():
    m = compile_policy("A or B", F)
    m.attributes().append(42)
    assert m.row_number() == len(m.attributes())


def test_compute_vector_is_inner_product():
    m = compile_policy("A and B", F)
    s, y = 1234, 5678
    assert m.compute_vector(0, [s, y]) == F.neg(y)
    assert m.compute_vector(1, [s, y]) == s + y


@pytest.mark.parametrize("row", [-1, 2, 100])
def test_compute_vector_rejects_bad_row(row):
    m = compile_policy("A and B", F)
    with pytest.raises(IndexOutOfRangeError):
        m.compute_vector(row, [1, 0])
    with pytest.raises(IndexError):
        m.rho(row)


def test_compute_vector_rejects_wrong_length():
    m = compile_policy("A and B", F)
    with pytest.raises(ValueError):
        m.compute_vector(0, [1])


@pytest.mark.parametrize("formula", EXAMPLE_POLICIES)
def test_shares_reconstruct_secret(formula):
    m = compile_policy(formula, F)
    secret = 987654321
    randoms = [F.hash_to_field(f"y{j}") for j in range(1, m.column_number())]
    shares = m.share(secret, randoms)

    rec = evaluate(m, {"A", "B", "C", "D", "E"})
    assert rec is not None
    total = 0
    for i, w in zip(rec.rows, rec.weights):
        total = F.add(total, F.mul(w, shares[i]))
    assert total == secret


def test_from_rows_and_validation():
    m = LsssMatrix.from_rows([[1, 1], [1, 2]], ["A", "B"], F)
    assert m.labels() == ["A", "B"]
    assert m.rho(0) == F.hash_to_field("A")

    with pytest.raises(ValueError):
        LsssMatrix.from_rows([[1, 1], [1]], ["A", "B"], F)
    with pytest.raises(ValueError):
        LsssMatrix.from_rows([[1, 1]], ["A", "B"], F)
    with pytest.raises(ValueError):
        LsssMatrix.from_rows([], [], F)


def test_entries_are_reduced_into_field():
    m = LsssMatrix.from_rows([[1, -1]], ["A"], F)
    assert m.row(0) == (1, F.order - 1)


def test_format_shows_signed_entries():
    text = compile_policy("A and B", F).format()
    assert "rowNumber: 2, columnNumber: 2" in text
    assert "attribute: A" in text
    assert "-1" in text
