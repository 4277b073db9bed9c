# -*- coding: utf-8 -*-
"""
config.py  (environment configuration)
--------------------------------------
  ABE_LSSS_FIELD_ORDER   prime order of the share field (decimal or 0x-hex);
                         defaults to the BN254 scalar field
  ABE_LSSS_LOG_LEVEL     log level used by the command-line tool (WARNING)
"""

from __future__ import annotations

import os
from typing import Optional

# BN254 scalar field order r
BN254_R = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

FIELD_ORDER_ENV = "ABE_LSSS_FIELD_ORDER"
LOG_LEVEL_ENV = "ABE_LSSS_LOG_LEVEL"


def parse_order(text: str) -> int:
    try:
        order = int(text.strip(), 0)
    except ValueError as e:
        raise ValueError(f"Invalid field order: {text!r}") from e
    if order < 2:
        raise ValueError(f"Field order must be >= 2, got {order}")
    return order


def field_order(override: Optional[str] = None) -> int:
    """Field order from an explicit override, then the environment, then BN254."""
    if override:
        return parse_order(override)
    env = os.environ.get(FIELD_ORDER_ENV)
    if env:
        return parse_order(env)
    return BN254_R


def log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
