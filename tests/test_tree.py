import pytest

from abe_lsss import (
    AccessTreeNode,
    MalformedTreeError,
    NodeKind,
    PrimeField,
    and_,
    and_right,
    attrs,
    leaf,
    or_,
    or_right,
    pad_share_vector,
)
from abe_lsss.config import BN254_R

F = PrimeField(BN254_R)


def test_leaf_hashes_name_to_field():
    a = leaf("A", F)
    assert a.kind is NodeKind.LEAF
    assert a.attribute == F.hash_to_field("A")
    assert a.label == "A"
    assert leaf(F.hash_to_field("A"), F).attribute == a.attribute


def test_builders_fold_left():
    A, B, C = attrs("A", "B", "C", field=F)
    t = and_(A, B, C)
    assert t.kind is NodeKind.AND
    assert t.left == and_(A, B)
    assert t.right == C

    t = or_(A, B, C)
    assert t.left == or_(A, B)


def test_builders_fold_right():
    A, B, C = attrs("A", "B", "C", field=F)
    assert and_right(A, B, C) == AccessTreeNode(NodeKind.AND, left=A, right=and_(B, C))
    assert or_right(A, B, C) == AccessTreeNode(NodeKind.OR, left=A, right=or_(B, C))


def test_single_child_is_returned_as_is():
    A = leaf("A", F)
    assert and_(A) is A
    assert or_(A) is A


@pytest.mark.parametrize("builder", [and_, or_, and_right, or_right])
def test_zero_children_is_a_construction_error(builder):
    with pytest.raises(MalformedTreeError):
        builder()


def test_malformed_nodes_rejected():
    A = leaf("A", F)
    with pytest.raises(MalformedTreeError):
        AccessTreeNode(NodeKind.AND, left=A)
    with pytest.raises(MalformedTreeError):
        AccessTreeNode(NodeKind.LEAF)
    with pytest.raises(MalformedTreeError):
        AccessTreeNode(NodeKind.LEAF, attribute=1, left=A, right=A)
    with pytest.raises(MalformedTreeError):
        AccessTreeNode("threshold", attribute=1)
    with pytest.raises(MalformedTreeError):
        and_(A, "B")


def test_copy_is_deep_and_equal():
    A, B, C = attrs("A", "B", "C", field=F)
    t = or_(and_(A, B), C)
    c = t.copy()
    assert c == t
    assert c is not t
    assert c.left is not t.left
    assert c.left.left is not t.left.left


def test_pad_share_vector():
    v = [1, 2]
    assert pad_share_vector(v, 4) == [1, 2, 0, 0]
    assert v == [1, 2]
    assert pad_share_vector(v, 1) == [1, 2]
    assert pad_share_vector(v, 1) is not v


def test_counts_and_leaf_order():
    A, B, C, D = attrs("A", "B", "C", "D", field=F)
    t = or_(and_(A, B), and_(C, D))
    assert t.leaf_count() == 4
    assert t.and_count() == 2
    assert t.depth() == 3
    assert [n.label for n in t.leaves()] == ["A", "B", "C", "D"]


def test_boolean_evaluation():
    A, B, C = attrs("A", "B", "C", field=F)
    t = or_(and_(A, B), C)
    assert t.is_satisfied_by({"A", "B"}, F)
    assert t.is_satisfied_by({"C"}, F)
    assert not t.is_satisfied_by({"A"}, F)
    assert not t.is_satisfied_by(set(), F)


def test_rendering():
    A, B, C = attrs("A", "B", "C", field=F)
    t = or_(and_(A, B), C)
    assert t.to_formula() == "((A and B) or C)"
    assert str(t) == "((A and B) or C)"
    assert t.pretty().splitlines() == [
        "OR",
        "├── AND",
        "│   ├── LEAF(A)",
        "│   └── LEAF(B)",
        "└── LEAF(C)",
    ]


def test_deep_tree_walks_without_recursion_limit():
    names = [f"a{i}" for i in range(1200)]
    t = and_(*attrs(*names, field=F))
    assert t.depth() == 1200
    assert t.leaf_count() == 1200
    assert t.and_count() == 1199
    assert [n.label for n in t.leaves()] == names

    c = t.copy()
    assert c == t
    assert hash(c) == hash(t)
    assert c != and_(*attrs(*names[:-1], "b", field=F))

    assert t.to_formula().startswith("(" * 1199 + "a0 and a1)")
    assert repr(t).startswith("AccessTreeNode((((")
    assert t.is_satisfied_by(names, F)
    assert not t.is_satisfied_by(names[:-1], F)


def test_single_name_is_one_attribute():
    t = and_(*attrs("A", "B", field=F))
    assert not t.is_satisfied_by("AB", F)
    assert leaf("AB", F).is_satisfied_by("AB", F)
    assert or_(*attrs("A", "B", field=F)).is_satisfied_by("A", F)
