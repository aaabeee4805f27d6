"""Exceptions raised by finprob.

Every error derives from :class:`DistributionError`, itself a
:class:`ValueError`, so callers can catch the whole family at once.
"""


class DistributionError(ValueError):
    """Base class for invalid constructions of finite distributions."""


class InvariantViolation(DistributionError):
    """Weights break non-negativity or normalization."""


class InvalidWeights(InvariantViolation):
    """A weight is negative or non-finite, or the weights do not sum to 1."""


class EmptyDomain(DistributionError):
    """A distribution was requested over an empty outcome set."""


class DivisionByZero(DistributionError, ZeroDivisionError):
    """Renormalization by a complement (or event mass) equal to zero."""


class OutOfRange(DistributionError):
    """A parameter lies outside its admissible range.

    Covers mixing weights outside ``[0, 1]``, maps that are not bijective
    (or injective) on the domain, indices outside the domain and invalid
    numeric bounds.
    """
