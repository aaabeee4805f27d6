"""Numeric context for tolerance-based invariant checks."""

from __future__ import annotations

import logging
import math
from contextvars import ContextVar, Token
from typing import List, Optional

from .errors import OutOfRange

logger = logging.getLogger(__name__)

# Tolerance used for the normalization check when no context is active
DEFAULT_TOLERANCE = 1e-9

# Loosest tolerance a context may set
MAX_TOLERANCE = 1e-3

_active_context: ContextVar[Optional['NumericContext']] = ContextVar(
    "finprob_numeric_context", default=None
)


class NumericContext:
    """Context manager setting the tolerance for normalization checks.

    Weights are IEEE doubles, so ``sum(p) == 1`` is checked as
    ``|sum(p) - 1| <= tol``.  The same tolerance drives extensional
    equality of distributions.  Contexts nest; the innermost one wins.

    The active context is held in a :class:`contextvars.ContextVar`, so
    entering a context in one thread or task leaves the tolerance seen by
    the others unchanged.

    Example:
        >>> with NumericContext(tol=1e-6):
        ...     d = make(["a", "b"], [0.3333333, 0.6666667])
    """

    def __init__(self, tol: float = DEFAULT_TOLERANCE):
        """Initialize a new numeric context.

        Args:
            tol: Absolute tolerance for the normalization check.

        Raises:
            OutOfRange: If *tol* is not in ``(0, MAX_TOLERANCE]``.
        """
        tol = float(tol)
        if not math.isfinite(tol) or tol <= 0 or tol > MAX_TOLERANCE:
            raise OutOfRange(
                f"tol must be in (0, {MAX_TOLERANCE:g}], got {tol}"
            )
        self.tol = tol
        self._tokens: List[Token] = []

    def __enter__(self) -> 'NumericContext':
        """Enter the context, making its tolerance the active one.

        Returns:
            The NumericContext instance.
        """
        self._tokens.append(_active_context.set(self))
        logger.debug("numeric tolerance set to %g", self.tol)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit the context and restore the enclosing tolerance.

        Returns:
            False to propagate any exceptions.
        """
        _active_context.reset(self._tokens.pop())
        return False

    @classmethod
    def get_active_context(cls) -> Optional['NumericContext']:
        """Get the currently active context, or None."""
        return _active_context.get()

    @classmethod
    def is_active(cls) -> bool:
        """Check if a NumericContext is currently active."""
        return _active_context.get() is not None

    def __repr__(self) -> str:
        return f"NumericContext(tol={self.tol})"


def get_tolerance() -> float:
    """Return the tolerance of the innermost active context."""
    ctx = NumericContext.get_active_context()
    if ctx is None:
        return DEFAULT_TOLERANCE
    return ctx.tol
