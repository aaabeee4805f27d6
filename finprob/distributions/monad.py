"""The finite probability monad: point mass, bind and map.

``bind`` is the single primitive that every other combinator in
:mod:`finprob.distributions` reduces to:

* :func:`point_mass` is the unit;
* :func:`bind` sums ``P(a) * f(a)(b)`` over ``a`` for every ``b``;
* :func:`fmap` pushes ``P`` forward along a plain function.

The monad laws hold exactly for point masses (multiplication by ``1.0`` is
exact in IEEE arithmetic) and up to rounding in general.

Example
-------
>>> coin = binary(0.5, "H", "T")
>>> two = coin >> (lambda a: fmap(coin, lambda b: (a, b)))
>>> two.pmf(("H", "T"))
0.25
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..core.errors import DistributionError, OutOfRange
from ..core.types import Dist, FiniteDist, Outcome

logger = logging.getLogger(__name__)

Kernel = Union[Callable[[Any], Dist], Mapping[Any, Dist]]


def as_kernel(f: Kernel) -> Callable[[Any], Dist]:
    """Normalize a callable or an ``{outcome: Dist}`` mapping to a callable.

    Raises
    ------
    TypeError
        If *f* is neither callable nor a mapping.
    """
    if isinstance(f, Mapping):
        mapping = f

        def _lookup(a: Any) -> Dist:
            if a not in mapping:
                raise DistributionError(
                    f"Outcome {a!r} not found in mapping. "
                    f"Available keys: {list(mapping.keys())}"
                )
            return mapping[a]

        return _lookup
    if callable(f):
        return f
    raise TypeError(f"kernel must be callable or a mapping, got {type(f).__name__}")


def point_mass(a: Outcome, domain: Optional[Iterable[Outcome]] = None) -> FiniteDist:
    """Distribution assigning weight 1 to *a*.

    Parameters
    ----------
    a : hashable
        The certain outcome.
    domain : iterable, optional
        Full outcome domain; defaults to ``(a,)``. Must contain *a*.

    Raises
    ------
    OutOfRange
        If *domain* is given and does not contain *a*.
    """
    if domain is None:
        return FiniteDist((a,), [1.0])
    outcomes = tuple(domain)
    if a not in outcomes:
        raise OutOfRange(f"{a!r} is not in the given domain")
    return FiniteDist(outcomes, [1.0 if o == a else 0.0 for o in outcomes])


def bind(p: FiniteDist, f: Kernel) -> FiniteDist:
    """Monadic bind: ``weight(b) = sum_a p(a) * f(a)(b)``.

    *f* must be defined on every outcome of ``p``'s domain (zero-weight ones
    included) and return a :class:`FiniteDist`. The result domain is the
    union of the ``f(a)`` domains in first-seen order; the result is
    validated like any other construction.
    """
    kernel = as_kernel(f)
    terms: Dict[Outcome, List[float]] = {}
    for a, pa in p:
        child = kernel(a)
        if not isinstance(child, FiniteDist):
            raise TypeError(
                f"kernel returned {type(child).__name__} for {a!r}; "
                "expected FiniteDist"
            )
        for b, pb in child:
            terms.setdefault(b, []).append(pa * pb)
    return FiniteDist(terms.keys(), [math.fsum(ts) for ts in terms.values()])


def fmap(p: FiniteDist, g: Callable[[Any], Outcome]) -> FiniteDist:
    """Push *p* forward along *g*: ``weight(b) = sum_{g(a) = b} p(a)``.

    Same result as ``bind(p, lambda a: point_mass(g(a)))`` without building
    the intermediate point masses.
    """
    weights: Dict[Outcome, float] = {}
    for a, pa in p:
        b = g(a)
        weights[b] = weights.get(b, 0.0) + pa
    return FiniteDist(weights.keys(), list(weights.values()))
