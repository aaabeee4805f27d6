"""Shared fixtures: seeded random distributions and kernels."""

import numpy as np
import pytest

from finprob.core.types import FiniteDist


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)


@pytest.fixture
def random_dist(rng):
    """Factory for a random distribution over a given domain."""

    def _make(domain):
        domain = list(domain)
        return FiniteDist(domain, rng.dirichlet(np.ones(len(domain))))

    return _make


@pytest.fixture
def random_kernel(random_dist):
    """Factory for a random kernel ``domain -> Dist(codomain)`` as a mapping."""

    def _make(domain, codomain):
        return {a: random_dist(codomain) for a in domain}

    return _make
