"""Core module for finprob.

This module contains the distribution type, its error hierarchy and the
numeric context that fixes the tolerance of invariant checks.
"""

from .types import Dist, FiniteDist
from .context import NumericContext
from .errors import DistributionError

__all__ = ["Dist", "FiniteDist", "NumericContext", "DistributionError"]
