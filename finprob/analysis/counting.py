"""Mass-to-cardinality bounds (the Wolfowitz counting argument).

If every outcome of a finite set ``S`` has weight in ``[A, B]`` and the
total weight of ``S`` lies in ``[a, b]``, then

    |S| * A <= sum_{x in S} weight(x) <= |S| * B

and therefore ``a / B <= |S| <= b / A``.  This is how the size of a
typical set is bounded from its probability mass.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from ..core.context import get_tolerance
from ..core.errors import OutOfRange
from ..core.types import Dist, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardinalityBound:
    """Closed interval ``[lower, upper]`` known to contain ``|S|``."""

    lower: float
    upper: float

    def contains(self, n: int) -> bool:
        return self.lower <= n <= self.upper

    @property
    def min_size(self) -> int:
        """Smallest integer cardinality allowed by the bound."""
        return max(0, math.ceil(self.lower))

    @property
    def max_size(self) -> int:
        """Largest integer cardinality allowed by the bound."""
        return math.floor(self.upper)


def wolfowitz_bound(
    lower_mass: float,
    upper_mass: float,
    min_weight: float,
    max_weight: float,
) -> CardinalityBound:
    """Bound ``|S|`` from bounds on its mass and on its per-element weights.

    Parameters
    ----------
    lower_mass, upper_mass : float
        ``a <= sum_{x in S} weight(x) <= b``.
    min_weight, max_weight : float
        ``A <= weight(x) <= B`` for every ``x`` in ``S``. Both must be
        positive.

    Returns
    -------
    CardinalityBound
        ``[a / B, b / A]``.

    Raises
    ------
    OutOfRange
        If ``A <= 0`` or ``B <= 0``.
    """
    if not min_weight > 0 or not max_weight > 0:
        raise OutOfRange(
            f"weight bounds must be positive, got A={min_weight}, B={max_weight}"
        )
    return CardinalityBound(
        lower=lower_mass / max_weight,
        upper=upper_mass / min_weight,
    )


def cardinality_bound(
    dist: Dist,
    outcomes: Iterable[Outcome],
    lower_mass: float,
    upper_mass: float,
    min_weight: float,
    max_weight: float,
) -> CardinalityBound:
    """Check the premises of :func:`wolfowitz_bound` on *dist*, then apply it.

    Every outcome in *outcomes* must have weight in
    ``[min_weight, max_weight]`` and their total weight must lie in
    ``[lower_mass, upper_mass]``, both up to the active tolerance.

    Raises
    ------
    OutOfRange
        If a premise does not hold.
    """
    tol = get_tolerance()
    members = tuple(dict.fromkeys(outcomes))
    weights = [dist.pmf(x) for x in members]
    for x, w in zip(members, weights):
        if not min_weight - tol <= w <= max_weight + tol:
            logger.debug("outcome %r has weight %r outside [%r, %r]",
                         x, w, min_weight, max_weight)
            raise OutOfRange(
                f"weight of {x!r} is {w}, outside [{min_weight}, {max_weight}]"
            )
    total = math.fsum(weights)
    if not lower_mass - tol <= total <= upper_mass + tol:
        raise OutOfRange(
            f"total weight {total} is outside [{lower_mass}, {upper_mass}]"
        )
    bound = wolfowitz_bound(lower_mass, upper_mass, min_weight, max_weight)
    logger.debug("|S| = %d within [%g, %g]", len(members), bound.lower, bound.upper)
    return bound
