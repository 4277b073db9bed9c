# -*- coding: utf-8 -*-
"""
errors.py  (exception taxonomy)
-------------------------------
Two tiers:

  * structural errors (malformed tree, bad row index) are caller bugs and
    propagate immediately;
  * "attributes do not satisfy the policy" is an expected outcome and is
    normally returned as ``None``.  ``PolicyNotSatisfied`` only exists for
    callers that prefer to turn that outcome into an exception.
"""

from __future__ import annotations


class LsssError(Exception):
    """Base class for every error raised by abe_lsss."""


class MalformedTreeError(LsssError, ValueError):
    """Invalid access tree: unknown node kind, gate with missing children, ..."""


class PolicySyntaxError(MalformedTreeError):
    """A boolean policy string could not be parsed."""


class IndexOutOfRangeError(LsssError, IndexError):
    """Row index outside ``[0, row_number())``."""


class PolicyNotSatisfied(LsssError):
    """Held attributes cannot reconstruct the target vector."""

    def __init__(self, message: str = "access policy not satisfied", attributes=None):
        super().__init__(message)
        self.attributes = attributes
