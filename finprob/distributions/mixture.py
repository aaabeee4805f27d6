"""Mixtures and structural transforms of finite distributions.

Provides:

* :func:`convex_combination`, :func:`reassociate` and :func:`mixture` for
  binary and n-ary mixtures.
* :func:`uniform`, :func:`uniform_on`, :func:`binary` and
  :func:`characterize` for the common small families.
* :func:`restrict`, :func:`condition`, :func:`delete_index` and
  :func:`delete_last` for removing mass and renormalizing.
* :func:`permute` and :func:`relabel` for re-indexing outcomes.

Functions that divide by a remaining mass raise
:class:`~finprob.core.errors.DivisionByZero` when that mass is zero.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Dict, Iterable, Mapping, NamedTuple, Optional, Tuple, Union

from ..core.errors import DistributionError, DivisionByZero, EmptyDomain, OutOfRange
from ..core.types import Event, FiniteDist, Outcome, _union
from .monad import Kernel, bind

logger = logging.getLogger(__name__)

Relabeling = Union[Callable[[Any], Outcome], Mapping[Any, Outcome]]


class BinaryParams(NamedTuple):
    """Parameters reconstructing a two-outcome distribution via :func:`binary`."""

    p: float
    a: Outcome
    b: Outcome


# ------------------------------------------------------------------ #
#  Helpers
# ------------------------------------------------------------------ #

def _check_unit(p: float, name: str = "p") -> float:
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise OutOfRange(f"{name} must be in [0, 1], got {p}")
    return p


def _as_map(g: Relabeling) -> Callable[[Any], Outcome]:
    if isinstance(g, Mapping):
        mapping = g

        def _lookup(x: Any) -> Outcome:
            if x not in mapping:
                raise OutOfRange(f"{x!r} is not mapped")
            return mapping[x]

        return _lookup
    if callable(g):
        return g
    raise TypeError(f"expected a callable or a mapping, got {type(g).__name__}")


def _event_mask(outcomes: Tuple[Outcome, ...], event: Event):
    if callable(event):
        return [bool(event(o)) for o in outcomes]
    members = set(event)
    return [o in members for o in outcomes]


# ------------------------------------------------------------------ #
#  Mixtures
# ------------------------------------------------------------------ #

def convex_combination(p_dist: FiniteDist, q_dist: FiniteDist, p: float) -> FiniteDist:
    """Mixture ``p * P + (1 - p) * Q`` over the union of both domains.

    Raises
    ------
    OutOfRange
        If *p* is outside ``[0, 1]``.
    """
    p = _check_unit(p)
    keys = _union(p_dist.outcomes, q_dist.outcomes)
    weights = [p * p_dist.pmf(x) + (1.0 - p) * q_dist.pmf(x) for x in keys]
    return FiniteDist(keys, weights)


def reassociate_weights(p: float, q: float) -> Tuple[float, float]:
    """Weights ``(r, s)`` such that
    ``mix(P, mix(Q, R, q), p) == mix(mix(P, Q, r), R, s)``.

    ``s = 1 - (1 - p)(1 - q)`` and ``r = p / s``.

    Raises
    ------
    OutOfRange
        If *p* or *q* is outside ``[0, 1]``.
    DivisionByZero
        If ``s == 0``, i.e. ``p == q == 0``.
    """
    p = _check_unit(p, "p")
    q = _check_unit(q, "q")
    # Written as p + q(1 - p) so that s >= p holds after rounding
    s = min(1.0, p + q * (1.0 - p))
    if s == 0.0:
        raise DivisionByZero("p and q are both zero; r = p / s is undefined")
    return p / s, s


def reassociate(
    p_dist: FiniteDist,
    q_dist: FiniteDist,
    r_dist: FiniteDist,
    p: float,
    q: float,
) -> FiniteDist:
    """Compute ``mix(P, mix(Q, R, q), p)`` in the form ``mix(mix(P, Q, r), R, s)``.

    When ``p == q == 0`` the left side is just ``R``; that case returns
    ``R`` (over the union of the three domains) instead of failing.
    """
    p = _check_unit(p, "p")
    q = _check_unit(q, "q")
    if p == 0.0 and q == 0.0:
        logger.debug("reassociating with p == q == 0; mixture reduces to R")
        r, s = 0.0, 0.0
    else:
        r, s = reassociate_weights(p, q)
    return convex_combination(convex_combination(p_dist, q_dist, r), r_dist, s)


def mixture(index: FiniteDist, family: Kernel) -> FiniteDist:
    """n-ary mixture ``weight(a) = sum_i index(i) * family(i)(a)``.

    *family* is a callable or a mapping from index outcomes to
    distributions. With a two-outcome index this is
    :func:`convex_combination`.
    """
    return bind(index, family)


# ------------------------------------------------------------------ #
#  Small families
# ------------------------------------------------------------------ #

def uniform(domain: Iterable[Outcome]) -> FiniteDist:
    """Uniform distribution over a non-empty *domain*.

    Raises
    ------
    EmptyDomain
        If *domain* is empty.
    """
    outcomes = tuple(domain)
    if not outcomes:
        raise EmptyDomain("uniform() needs a non-empty domain")
    n = len(outcomes)
    return FiniteDist(outcomes, [1.0 / n] * n)


def uniform_on(
    subset: Iterable[Outcome],
    domain: Optional[Iterable[Outcome]] = None,
) -> FiniteDist:
    """Uniform on *subset*, zero on the rest of *domain*.

    Raises
    ------
    EmptyDomain
        If *subset* is empty.
    OutOfRange
        If *subset* is not contained in *domain*.
    """
    members = tuple(dict.fromkeys(subset))
    if not members:
        raise EmptyDomain("uniform_on() needs a non-empty subset")
    if domain is None:
        return uniform(members)
    outcomes = tuple(domain)
    known = set(outcomes)
    missing = [c for c in members if c not in known]
    if missing:
        raise OutOfRange(f"Outcomes {missing!r} are not in the domain")
    chosen = set(members)
    w = 1.0 / len(members)
    return FiniteDist(outcomes, [w if o in chosen else 0.0 for o in outcomes])


def binary(p: float, a: Outcome, b: Outcome) -> FiniteDist:
    """Two-outcome distribution with ``weight(a) = 1 - p`` and ``weight(b) = p``."""
    p = _check_unit(p)
    return FiniteDist((a, b), [1.0 - p, p])


def characterize(d: FiniteDist) -> BinaryParams:
    """Recover ``(p, a, b)`` with ``binary(p, a, b) == d`` for a two-outcome *d*.

    ``a`` and ``b`` follow the domain order of *d*, so the answer is unique.

    Raises
    ------
    DistributionError
        If the domain of *d* does not have exactly two outcomes.
    """
    if len(d) != 2:
        raise DistributionError(
            f"characterize() needs a two-outcome distribution, got {len(d)} outcomes"
        )
    a, b = d.outcomes
    return BinaryParams(p=d.pmf(b), a=a, b=b)


# ------------------------------------------------------------------ #
#  Removing mass
# ------------------------------------------------------------------ #

def restrict(d: FiniteDist, x: Outcome) -> FiniteDist:
    """Remove *x* and renormalize: ``weight(y) = d(y) / (1 - d(x))`` for ``y != x``.

    The complement ``1 - d(x)`` is taken as the summed weight of the other
    outcomes, which is the same quantity without cancellation error.

    Raises
    ------
    DivisionByZero
        If ``d(x) == 1`` (no mass left to renormalize).
    """
    px = d.pmf(x)
    rest = math.fsum(w for o, w in d if o != x)
    if px == 1.0 or rest == 0.0:
        raise DivisionByZero(f"Outcome {x!r} carries all the mass; cannot restrict")
    if px == 0.0:
        logger.debug("restricting %r, which already has zero weight", x)
    weights = [0.0 if o == x else w / rest for o, w in d]
    return FiniteDist(d.outcomes, weights)


def condition(d: FiniteDist, event: Event) -> FiniteDist:
    """Condition *d* on *event* (a predicate or a collection of outcomes).

    Raises
    ------
    DivisionByZero
        If the event has zero probability.
    """
    mask = _event_mask(d.outcomes, event)
    mass = math.fsum(w for (_, w), keep in zip(d, mask) if keep)
    if mass == 0.0:
        raise DivisionByZero("Cannot condition on an event of probability zero")
    weights = [w / mass if keep else 0.0 for (_, w), keep in zip(d, mask)]
    return FiniteDist(d.outcomes, weights)


def lift_index(j: int, i: int) -> int:
    """Map ``i`` in ``{0..n-1}`` to ``{0..n} \\ {j}``, skipping *j*."""
    return i if i < j else i + 1


def lower_index(j: int, i: int) -> int:
    """Inverse of :func:`lift_index`: map ``{0..n} \\ {j}`` onto ``{0..n-1}``."""
    if i == j:
        raise OutOfRange(f"index {i} is the deleted index")
    return i if i < j else i - 1


def _integer_range(d: FiniteDist) -> int:
    n = len(d)
    if set(d.outcomes) != set(range(n)) or not all(
        isinstance(o, numbers.Integral) and not isinstance(o, bool) for o in d.outcomes
    ):
        raise DistributionError(
            f"Expected an integer-indexed domain {{0..{n - 1}}}, got {d.outcomes!r}"
        )
    return n


def delete_index(d: FiniteDist, j: int) -> FiniteDist:
    """Delete outcome *j* from an integer-indexed distribution.

    *d* lives on ``{0..n}``; the result lives on ``{0..n-1}`` with
    ``weight(i) = restrict(d, j)(lift_index(j, i))``.

    Raises
    ------
    DistributionError
        If the domain of *d* is not ``{0..n}``.
    OutOfRange
        If *j* is not in the domain.
    DivisionByZero
        If ``d(j) == 1``.
    """
    n1 = _integer_range(d)
    if isinstance(j, bool) or not isinstance(j, numbers.Integral) or not 0 <= j < n1:
        raise OutOfRange(f"index {j!r} is outside 0..{n1 - 1}")
    j = int(j)
    restricted = restrict(d, j)
    return FiniteDist(
        range(n1 - 1),
        [restricted.pmf(lift_index(j, i)) for i in range(n1 - 1)],
    )


def delete_last(d: FiniteDist) -> FiniteDist:
    """Delete the maximal index of an integer-indexed distribution."""
    return delete_index(d, _integer_range(d) - 1)


# ------------------------------------------------------------------ #
#  Re-indexing
# ------------------------------------------------------------------ #

def permute(d: FiniteDist, sigma: Relabeling) -> FiniteDist:
    """Act on *d* by a permutation of its domain: ``weight(x) = d(sigma(x))``.

    Composition follows from the definition:
    ``permute(permute(d, s), t) == permute(d, lambda x: s(t(x)))``.

    Raises
    ------
    OutOfRange
        If *sigma* is not a bijection of the domain onto itself.
    """
    s = _as_map(sigma)
    images = [s(x) for x in d.outcomes]
    if len(set(images)) != len(images) or set(images) != set(d.outcomes):
        raise OutOfRange("sigma is not a permutation of the domain")
    return FiniteDist(d.outcomes, [d.pmf(y) for y in images])


def invert_permutation(sigma: Relabeling, domain: Iterable[Outcome]) -> Dict[Outcome, Outcome]:
    """Return the inverse of *sigma* on *domain* as a mapping."""
    s = _as_map(sigma)
    outcomes = tuple(domain)
    inverse = {s(x): x for x in outcomes}
    if len(inverse) != len(outcomes) or set(inverse) != set(outcomes):
        raise OutOfRange("sigma is not a permutation of the domain")
    return inverse


def relabel(d: FiniteDist, g: Relabeling) -> FiniteDist:
    """Rename every outcome through an injective *g*, keeping its weight.

    Raises
    ------
    OutOfRange
        If *g* sends two outcomes to the same label.
    """
    f = _as_map(g)
    images = [f(x) for x in d.outcomes]
    if len(set(images)) != len(images):
        raise OutOfRange("relabeling is not injective on the domain")
    return FiniteDist(images, d.probs)
