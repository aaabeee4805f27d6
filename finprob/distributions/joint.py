"""Joint, product and n-fold tuple distributions.

Joint distributions are :class:`~finprob.core.types.FiniteDist` instances
whose outcomes are pairs ``(a, b)``; vector distributions have tuples of a
common length as outcomes.  Splitting a vector into ``(head, tail)`` or
``(init, last)`` is a lossless relabeling, so every ``to_*`` function below
has an exact ``from_*`` inverse.

Example
-------
>>> coin = binary(0.5, "H", "T")
>>> pairs = power(coin, 2)
>>> pairs.pmf(("H", "T"))
0.25
>>> head_of(pairs) == coin
True
"""

from __future__ import annotations

import itertools
import logging
import numbers
from typing import Any, Tuple, Union

import numpy as np

from ..core.errors import DistributionError, OutOfRange
from ..core.types import Dist, FiniteDist
from .monad import Kernel, as_kernel, bind, fmap, point_mass
from .mixture import relabel

logger = logging.getLogger(__name__)

# Domains larger than this are logged when built by power()
_LARGE_DOMAIN = 1_000_000


# ------------------------------------------------------------------ #
#  Marginals
# ------------------------------------------------------------------ #

def _check_pairs(j: FiniteDist) -> None:
    for o in j.outcomes:
        if not (isinstance(o, tuple) and len(o) == 2):
            raise DistributionError(f"Expected pair outcomes, got {o!r}")


def marginal_left(j: FiniteDist) -> FiniteDist:
    """Distribution of the first coordinate of a joint distribution."""
    _check_pairs(j)
    return fmap(j, lambda ab: ab[0])


def marginal_right(j: FiniteDist) -> FiniteDist:
    """Distribution of the second coordinate of a joint distribution."""
    _check_pairs(j)
    return fmap(j, lambda ab: ab[1])


# ------------------------------------------------------------------ #
#  Vector <-> pair re-indexing
# ------------------------------------------------------------------ #

def _vector_length(d: FiniteDist) -> int:
    lengths = set()
    for o in d.outcomes:
        if not isinstance(o, tuple):
            raise DistributionError(f"Expected tuple outcomes, got {o!r}")
        lengths.add(len(o))
    if len(lengths) != 1:
        raise DistributionError(f"Vectors have mixed lengths {sorted(lengths)}")
    (n,) = lengths
    return n


def _check_nonempty_vectors(d: FiniteDist) -> int:
    n = _vector_length(d)
    if n == 0:
        raise DistributionError("Cannot split vectors of length 0")
    return n


def _check_split(b: FiniteDist, vector_side: int) -> None:
    """Check every outcome is a pair whose *vector_side* entry is a tuple."""
    _check_pairs(b)
    for o in b.outcomes:
        if not isinstance(o[vector_side], tuple):
            raise DistributionError(f"Expected a tuple in position {vector_side} of {o!r}")


def split_head(v: Tuple) -> Tuple[Any, Tuple]:
    """``(v0, ..., vn) -> (v0, (v1, ..., vn))``."""
    return v[0], v[1:]


def join_head(pair: Tuple[Any, Tuple]) -> Tuple:
    """Inverse of :func:`split_head`."""
    head, tail = pair
    return (head,) + tail


def split_last(v: Tuple) -> Tuple[Tuple, Any]:
    """``(v0, ..., vn) -> ((v0, ..., v(n-1)), vn)``."""
    return v[:-1], v[-1]


def join_last(pair: Tuple[Tuple, Any]) -> Tuple:
    """Inverse of :func:`split_last`."""
    init, last = pair
    return init + (last,)


def to_bivariate(d: FiniteDist) -> FiniteDist:
    """Re-index an ``(n+1)``-vector distribution as ``(head, tail)`` pairs."""
    _check_nonempty_vectors(d)
    return relabel(d, split_head)


def from_bivariate(b: FiniteDist) -> FiniteDist:
    """Re-index ``(head, tail)`` pairs back to ``(n+1)``-vectors."""
    _check_split(b, 1)
    return relabel(b, join_head)


def to_bivariate_last(d: FiniteDist) -> FiniteDist:
    """Re-index an ``(n+1)``-vector distribution as ``(init, last)`` pairs."""
    _check_nonempty_vectors(d)
    return relabel(d, split_last)


def from_bivariate_last(b: FiniteDist) -> FiniteDist:
    """Re-index ``(init, last)`` pairs back to ``(n+1)``-vectors."""
    _check_split(b, 0)
    return relabel(b, join_last)


def head_of(d: FiniteDist) -> FiniteDist:
    return marginal_left(to_bivariate(d))


def tail_of(d: FiniteDist) -> FiniteDist:
    return marginal_right(to_bivariate(d))


def init_of(d: FiniteDist) -> FiniteDist:
    return marginal_left(to_bivariate_last(d))


def last_of(d: FiniteDist) -> FiniteDist:
    return marginal_right(to_bivariate_last(d))


# ------------------------------------------------------------------ #
#  Products
# ------------------------------------------------------------------ #

def product(p: FiniteDist, q: Union[FiniteDist, Kernel]) -> FiniteDist:
    """Joint distribution ``weight(a, b) = p(a) * q(a)(b)``.

    *q* is either a fixed distribution (independent components) or a
    kernel, given as a callable or a mapping, from outcomes of *p* to
    distributions.
    """
    if isinstance(q, Dist):
        def kernel(a: Any) -> Dist:
            return q
    else:
        kernel = as_kernel(q)
    return bind(p, lambda a: fmap(kernel(a), lambda b: (a, b)))


def independent_product(p: FiniteDist, q: FiniteDist) -> FiniteDist:
    """Joint distribution of independent *p* and *q*."""
    return product(p, q)


def power(p: FiniteDist, n: int) -> FiniteDist:
    """n-fold independent tuple distribution: ``weight(v) = prod_i p(v_i)``.

    The domain is every length-*n* vector over ``p``'s domain, in
    lexicographic order. ``power(p, 0)`` is the point mass on ``()``.

    Raises
    ------
    OutOfRange
        If *n* is negative or not an integer.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise OutOfRange(f"n must be a non-negative integer, got {n!r}")
    n = int(n)
    if n == 0:
        return point_mass(())

    size = len(p) ** n
    if size > _LARGE_DOMAIN:
        logger.debug("power(): building a domain of %d vectors", size)

    # The outer product raveled in C order matches itertools.product order.
    weights = np.ones(1)
    for _ in range(n):
        weights = np.multiply.outer(weights, p.probs).ravel()
    outcomes = itertools.product(p.outcomes, repeat=n)
    return FiniteDist(outcomes, weights)
