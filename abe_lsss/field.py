# -*- coding: utf-8 -*-
"""
field.py  (prime-field arithmetic)
----------------------------------
Share vectors, weights and attribute identities are elements of Z_p.
Elements are plain ints in [0, p); every operation reduces mod p, so
equality is exact and "division" is multiplication by the modular inverse.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from . import config

Attribute = Union[str, int]


@dataclass(frozen=True)
class PrimeField:
    order: int

    def __post_init__(self) -> None:
        if self.order < 2:
            raise ValueError(f"Field order must be >= 2, got {self.order}")

    # ── constants ────────────────────────────────────────────────────────────

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1 % self.order

    @property
    def minus_one(self) -> int:
        return self.order - 1

    # ── arithmetic ───────────────────────────────────────────────────────────

    def element(self, x: int) -> int:
        return int(x) % self.order

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.order

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.order

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.order

    def neg(self, a: int) -> int:
        return (-a) % self.order

    def inv(self, a: int) -> int:
        a %= self.order
        if a == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return pow(a, -1, self.order)

    def div(self, a: int, b: int) -> int:
        return self.mul(a, self.inv(b))

    def is_zero(self, a: int) -> bool:
        return a % self.order == 0

    def equal(self, a: int, b: int) -> bool:
        return (a - b) % self.order == 0

    def dot(self, xs: Sequence[int], ys: Sequence[int]) -> int:
        acc = 0
        for x, y in zip(xs, ys):
            acc += x * y
        return acc % self.order

    def vector(self, values: Iterable[int]) -> List[int]:
        return [self.element(v) for v in values]

    # ── hashing ──────────────────────────────────────────────────────────────

    def hash_to_field(self, data: Union[str, bytes]) -> int:
        """SHA-256 digest read big-endian and reduced mod p."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        digest = hashlib.sha256(data).digest()
        return int.from_bytes(digest, "big") % self.order

    def attribute(self, attr: Attribute) -> int:
        """Field identity of an attribute given by name or as an element."""
        if isinstance(attr, bool):
            raise TypeError("attribute must be a name or a field element, not bool")
        if isinstance(attr, str):
            return self.hash_to_field(attr)
        if isinstance(attr, int):
            return self.element(attr)
        raise TypeError(f"attribute must be str or int, got {type(attr).__name__}")


def held_attributes(held: Union[Attribute, Iterable[Attribute]]) -> List[Attribute]:
    """A single name or element becomes a one-item list; collections are listed."""
    if isinstance(held, (bytes, bytearray)):
        raise TypeError("held attributes must be names or field elements, not bytes")
    if isinstance(held, (str, int)) and not isinstance(held, bool):
        return [held]
    return list(held)


def default_field(order: Optional[str] = None) -> PrimeField:
    """Field configured by ``order`` / ABE_LSSS_FIELD_ORDER, BN254 otherwise."""
    return PrimeField(config.field_order(order))
