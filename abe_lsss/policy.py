# -*- coding: utf-8 -*-
"""
policy.py  (AND/OR policy string -> access tree)
------------------------------------------------
Grammar (keywords are case-insensitive, AND binds tighter than OR):

  or_expr  := and_expr ("or" and_expr)*
  and_expr := atom ("and" atom)*
  atom     := NAME | "(" or_expr ")"

Chains fold left-associatively, so "A or B or C" is ((A or B) or C).
"""

from __future__ import annotations

import re
from typing import List, Optional

from .errors import PolicySyntaxError
from .field import PrimeField, default_field
from .tree import AccessTreeNode, NodeKind, leaf

_TOKEN = re.compile(r"\s*(\(|\)|[A-Za-z0-9_@.:\-]+)\s*")
_KEYWORDS = ("and", "or")


def tokenize(s: str) -> List[str]:
    toks: List[str] = []
    pos = 0
    while pos < len(s):
        m = _TOKEN.match(s, pos)
        if m is None:
            if s[pos:].strip() == "":
                break
            raise PolicySyntaxError(f"Invalid character {s[pos]!r} at position {pos}")
        toks.append(m.group(1))
        pos = m.end()
    if not toks:
        raise PolicySyntaxError("Empty policy")
    return toks


class _Parser:
    def __init__(self, toks: List[str], field: PrimeField):
        self.toks = toks
        self.i = 0
        self.field = field

    def peek(self) -> Optional[str]:
        return self.toks[self.i] if self.i < len(self.toks) else None

    def _peek_keyword(self, kw: str) -> bool:
        cur = self.peek()
        return cur is not None and cur.lower() == kw

    def eat(self, t: Optional[str] = None) -> str:
        cur = self.peek()
        if cur is None:
            raise PolicySyntaxError("Unexpected end of policy")
        if t is not None and cur.lower() != t.lower():
            raise PolicySyntaxError(f"Expected '{t}', got '{cur}'")
        self.i += 1
        return cur

    def parse(self) -> AccessTreeNode:
        node = self.parse_or()
        if self.peek() is not None:
            raise PolicySyntaxError(f"Extra tokens: {self.toks[self.i:]}")
        return node

    def parse_or(self) -> AccessTreeNode:
        node = self.parse_and()
        while self._peek_keyword("or"):
            self.eat("or")
            node = AccessTreeNode(NodeKind.OR, left=node, right=self.parse_and())
        return node

    def parse_and(self) -> AccessTreeNode:
        node = self.parse_atom()
        while self._peek_keyword("and"):
            self.eat("and")
            node = AccessTreeNode(NodeKind.AND, left=node, right=self.parse_atom())
        return node

    def parse_atom(self) -> AccessTreeNode:
        cur = self.peek()
        if cur == "(":
            self.eat("(")
            node = self.parse_or()
            self.eat(")")
            return node
        if cur is None:
            raise PolicySyntaxError("Unexpected end of policy, expected attribute or '('")
        if cur == ")" or cur.lower() in _KEYWORDS:
            raise PolicySyntaxError(f"Unexpected token '{cur}' where attribute expected")
        return leaf(self.eat(), self.field)


def parse_policy(policy_str: str, field: Optional[PrimeField] = None) -> AccessTreeNode:
    """Parse e.g. ``"(A and B) or C"`` into an access tree."""
    field = field or default_field()
    return _Parser(tokenize(policy_str), field).parse()


# Reference formulas used throughout the tests and by `abe-lsss examples`.
EXAMPLE_POLICIES = [
    "(A or B)",
    "(A and B)",
    "(B or C)",
    "(B and C)",
    "((A or B) or C)",
    "((A and B) and C)",
    "(A or (B or C))",
    "(A and (B and C))",
    "((A or B) and C)",
    "(A or (B and C))",
    "(C or D)",
    "(C and D)",
    "((A and B) or (C and D))",
    "((A or B) and (C or D))",
    "(((A and B) or (C and D)) or ((A or B) and (C or D)))",
    "(E and (((A and B) or (C and D)) or ((A or B) and (C or D))))",
]
