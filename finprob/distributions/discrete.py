"""Named discrete families built as finite distributions."""

import numpy as np
from scipy import stats

from ..core.errors import OutOfRange
from ..core.types import FiniteDist


class Bernoulli(FiniteDist):
    """Bernoulli distribution over ``{0, 1}``.

    Parameters
    ----------
    p : float
        Probability of success (1), must be in [0, 1].
    """

    def __init__(self, p=0.5):
        if not 0 <= p <= 1:
            raise OutOfRange(f"p must be in [0, 1], got {p}")
        self.p = float(p)
        super().__init__((0, 1), stats.bernoulli(self.p).pmf([0, 1]))

    def __repr__(self):
        return f"Bernoulli(p={self.p})"


class Binomial(FiniteDist):
    """Binomial distribution over ``{0, ..., n}``.

    Parameters
    ----------
    n : int
        Number of trials, must be >= 0.
    p : float
        Success probability of each trial, must be in [0, 1].
    """

    def __init__(self, n, p=0.5):
        if int(n) != n or n < 0:
            raise OutOfRange(f"n must be a non-negative integer, got {n}")
        if not 0 <= p <= 1:
            raise OutOfRange(f"p must be in [0, 1], got {p}")
        self.n = int(n)
        self.p = float(p)
        support = np.arange(self.n + 1)
        super().__init__(range(self.n + 1), stats.binom(self.n, self.p).pmf(support))

    def __repr__(self):
        return f"Binomial(n={self.n}, p={self.p})"


class Categorical(FiniteDist):
    """Categorical distribution over labels or ``{0, ..., k-1}``.

    Parameters
    ----------
    probs : array-like
        Probabilities for each category. Must be non-negative and sum to 1.
    labels : list, optional
        Hashable labels for each category. Defaults to integer indices.
    """

    def __init__(self, probs, labels=None):
        probs = np.asarray(probs, dtype=float)
        if labels is None:
            labels = range(len(probs))
        super().__init__(labels, probs)

    @property
    def labels(self):
        return list(self.outcomes)

    def __repr__(self):
        return f"Categorical(probs={self.probs}, labels={self.labels})"
