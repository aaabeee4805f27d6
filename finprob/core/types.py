"""Core types for finprob finite distributions."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import numpy as np

from .context import get_tolerance
from .errors import DistributionError, EmptyDomain, InvalidWeights

logger = logging.getLogger(__name__)

Outcome = Hashable
Event = Union[Callable[[Any], bool], Iterable[Any]]


# ---------------------------------------------------------------------------
# Distribution ABC
# ---------------------------------------------------------------------------

class Dist(ABC):
    """Abstract base class for probability distributions over finite domains.

    Operator overloads are provided for composition:
    - __rshift__: monadic bind, ``d >> f``
    - __and__: joint distribution of two independent distributions
    """

    @property
    @abstractmethod
    def outcomes(self) -> Tuple[Outcome, ...]:
        """The outcome domain, in a fixed order."""

    @abstractmethod
    def pmf(self, x: Outcome) -> float:
        """Probability mass at *x* (zero outside the domain)."""

    def __rshift__(self, f) -> Dist:
        """Bind this distribution to a kernel ``f: outcome -> Dist``."""
        from ..distributions.monad import bind

        return bind(self, f)

    def __and__(self, other: Dist) -> Dist:
        """Create a joint distribution assuming independence."""
        if not isinstance(other, Dist):
            return NotImplemented
        from ..distributions.joint import independent_product

        return independent_product(self, other)


# ---------------------------------------------------------------------------
# FiniteDist
# ---------------------------------------------------------------------------

class FiniteDist(Dist):
    """An immutable, invariant-checked distribution over a finite domain.

    Parameters
    ----------
    outcomes : iterable
        Distinct hashable outcomes. Must be non-empty.
    weights : array-like
        One weight per outcome. Weights must be finite, non-negative and
        sum to 1 within the active tolerance (see
        :class:`~finprob.core.context.NumericContext`).

    Raises
    ------
    EmptyDomain
        If *outcomes* is empty.
    DistributionError
        If *outcomes* contains duplicates.
    InvalidWeights
        If the weights are malformed, negative or not normalized.

    The invariant is checked once here. Weights accepted within the
    tolerance are rescaled to sum to 1, so every instance is normalized up
    to rounding regardless of the tolerance it was built under. Afterwards
    the instance is never mutated and the weight array is read-only.
    """

    def __init__(self, outcomes: Iterable[Outcome], weights: Any) -> None:
        outcomes = tuple(outcomes)
        if not outcomes:
            raise EmptyDomain("A distribution needs at least one outcome")

        index: Dict[Outcome, int] = {}
        for i, o in enumerate(outcomes):
            if o in index:
                raise DistributionError(f"Duplicate outcome {o!r} in domain")
            index[o] = i

        probs = np.array(weights, dtype=np.float64)
        if probs.shape != (len(outcomes),):
            raise InvalidWeights(
                f"Expected {len(outcomes)} weights, got shape {probs.shape}"
            )
        total = _check_weights(probs)
        # Weights off by more than rounding are rescaled onto the simplex
        if abs(total - 1.0) > len(probs) * np.finfo(np.float64).eps:
            probs = probs / total
        probs = np.minimum(probs, 1.0)
        probs.setflags(write=False)

        self._outcomes = outcomes
        self._index = index
        self._probs = probs

    # ----- factory helpers ------------------------------------------------

    @classmethod
    def from_dict(cls, mapping: Mapping[Outcome, float]) -> FiniteDist:
        """Build a distribution from an ``{outcome: weight}`` mapping."""
        return cls(list(mapping.keys()), list(mapping.values()))

    # ----- accessors ------------------------------------------------------

    @property
    def outcomes(self) -> Tuple[Outcome, ...]:
        return self._outcomes

    @property
    def probs(self) -> np.ndarray:
        """Read-only weight array aligned with :attr:`outcomes`."""
        return self._probs

    def pmf(self, x: Outcome) -> float:
        try:
            i = self._index.get(x)
        except TypeError:
            # Unhashable values are never outcomes
            return 0.0
        if i is None:
            return 0.0
        return float(self._probs[i])

    value = pmf
    __call__ = pmf

    def support(self) -> Iterator[Outcome]:
        """Lazily yield the outcomes with nonzero weight, in domain order."""
        for o, w in zip(self._outcomes, self._probs):
            if w != 0:
                yield o

    def dominated_by(self, other: Dist) -> bool:
        """Return True if ``self << other``.

        That is, every outcome with zero weight under *other* also has zero
        weight under *self*.
        """
        for x in _union(self.outcomes, other.outcomes):
            if other.pmf(x) == 0 and self.pmf(x) != 0:
                return False
        return True

    def prob(self, event: Event) -> float:
        """Total weight of *event*, a predicate or a collection of outcomes."""
        if callable(event):
            mask = [bool(event(o)) for o in self._outcomes]
        else:
            members = set(event)
            mask = [o in members for o in self._outcomes]
        return float(self._probs[np.asarray(mask, dtype=bool)].sum())

    def expectation(self, f: Optional[Callable[[Any], float]] = None) -> float:
        """Expected value of ``f(X)`` (of ``X`` itself when *f* is None)."""
        if f is None:
            values = np.asarray(self._outcomes, dtype=float)
        else:
            values = np.asarray([f(o) for o in self._outcomes], dtype=float)
        return float(np.dot(self._probs, values))

    def mode(self) -> Outcome:
        """Return the most probable outcome (first one on ties)."""
        return self._outcomes[int(np.argmax(self._probs))]

    def to_dict(self) -> Dict[Outcome, float]:
        return {o: float(w) for o, w in zip(self._outcomes, self._probs)}

    # ----- comparison -----------------------------------------------------

    def isclose(self, other: Dist, tol: Optional[float] = None) -> bool:
        """Extensional comparison on the union of both domains.

        Outcomes missing from one domain count as weight zero there.
        """
        if tol is None:
            tol = get_tolerance()
        keys = _union(self.outcomes, other.outcomes)
        a = np.array([self.pmf(x) for x in keys])
        b = np.array([other.pmf(x) for x in keys])
        return bool(np.all(np.abs(a - b) <= tol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dist):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None  # type: ignore[assignment]

    # ----- container protocol ---------------------------------------------

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[Tuple[Outcome, float]]:
        for o, w in zip(self._outcomes, self._probs):
            yield o, float(w)

    def __contains__(self, x: object) -> bool:
        try:
            return x in self._index
        except TypeError:
            return False

    def __repr__(self) -> str:
        body = ", ".join(f"{o!r}: {float(w):.6g}" for o, w in self)
        return f"{type(self).__name__}({{{body}}})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_weights(probs: np.ndarray) -> float:
    """Raise InvalidWeights unless *probs* is a valid weight vector.

    Returns the compensated sum of the weights.
    """
    if not np.all(np.isfinite(probs)):
        logger.debug("rejecting non-finite weights %s", probs)
        raise InvalidWeights("All weights must be finite.")
    if np.any(probs < 0):
        logger.debug("rejecting negative weights %s", probs)
        raise InvalidWeights("All weights must be non-negative.")
    total = math.fsum(probs)
    tol = get_tolerance()
    if abs(total - 1.0) > tol:
        logger.debug("rejecting weights summing to %r (tol=%g)", total, tol)
        raise InvalidWeights(
            f"Weights must sum to 1 (tol={tol:g}), got {total!r}"
        )
    return total


def _union(*domains: Iterable[Outcome]) -> Tuple[Outcome, ...]:
    """Concatenate domains, dropping repeats and keeping first-seen order."""
    seen: Dict[Outcome, None] = {}
    for domain in domains:
        for o in domain:
            seen.setdefault(o, None)
    return tuple(seen)


def make(outcomes: Iterable[Outcome], weights: Any) -> FiniteDist:
    """Validated factory; see :class:`FiniteDist`."""
    return FiniteDist(outcomes, weights)


def value(d: Dist, x: Outcome) -> float:
    """Weight of *x* under *d*, in ``[0, 1]``."""
    return d.pmf(x)


def support(d: FiniteDist) -> Iterator[Outcome]:
    """Lazy sequence of the outcomes of *d* with nonzero weight."""
    return d.support()


def dominated_by(q: FiniteDist, p: Dist) -> bool:
    """Return True if ``q << p`` (``p(x) == 0`` implies ``q(x) == 0``)."""
    return q.dominated_by(p)
