import pytest

from abe_lsss import EXAMPLE_POLICIES, PolicySyntaxError, PrimeField, and_, attrs, or_, parse_policy
from abe_lsss.config import BN254_R
from abe_lsss.errors import MalformedTreeError

F = PrimeField(BN254_R)


def test_and_binds_tighter_than_or():
    A, B, C = attrs("A", "B", "C", field=F)
    assert parse_policy("A or B and C", F) == or_(A, and_(B, C))
    assert parse_policy("A and B or C", F) == or_(and_(A, B), C)


def test_parentheses_and_left_associativity():
    A, B, C = attrs("A", "B", "C", field=F)
    assert parse_policy("(A or B) and C", F) == and_(or_(A, B), C)
    assert parse_policy("A and B and C", F) == and_(A, B, C)
    assert parse_policy("A or (B or C)", F) == or_(A, or_(B, C))


def test_keywords_are_case_insensitive():
    assert parse_policy("A AND B Or C", F) == parse_policy("(A and B) or C", F)


def test_attribute_names_may_contain_punctuation():
    t = parse_policy("dept:finance and user@example.com", F)
    assert [n.label for n in t.leaves()] == ["dept:finance", "user@example.com"]


def test_single_attribute():
    t = parse_policy("  A  ", F)
    assert t.is_leaf and t.label == "A"


@pytest.mark.parametrize("bad", [
    "",
    "   ",
    "(A and B",
    "A and",
    "A B",
    "and",
    "A or )",
    "A # B",
    "()",
])
def test_syntax_errors(bad):
    with pytest.raises(PolicySyntaxError):
        parse_policy(bad, F)


def test_syntax_error_is_a_malformed_tree_and_value_error():
    with pytest.raises(MalformedTreeError):
        parse_policy("(A", F)
    with pytest.raises(ValueError):
        parse_policy("(A", F)


def test_examples_render_back_to_themselves():
    for formula in EXAMPLE_POLICIES:
        t = parse_policy(formula, F)
        assert t.to_formula() == formula
        assert parse_policy(t.to_formula(), F) == t
