"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing
- scores: Mythic+ score coercion
- clock: Naive UTC timestamps

Usage:
======
    from guttakrutt.shared.utils import SecurityUtils, coerce_score, utcnow
"""

from guttakrutt.shared.utils.security import SecurityUtils
from guttakrutt.shared.utils.scores import coerce_score
from guttakrutt.shared.utils.clock import utcnow

__all__ = [
    "SecurityUtils",
    "coerce_score",
    "utcnow",
]
