"""Tests for the named discrete families."""

import numpy as np
import pytest
from scipy import stats

from finprob.core.errors import InvalidWeights, OutOfRange
from finprob.core.types import FiniteDist
from finprob.distributions.discrete import Bernoulli, Binomial, Categorical
from finprob.distributions.joint import power
from finprob.distributions.mixture import binary, characterize
from finprob.distributions.monad import fmap


# ---------------------------------------------------------------------------
# Bernoulli tests
# ---------------------------------------------------------------------------


class TestBernoulli:
    def test_pmf(self):
        b = Bernoulli(0.3)
        assert pytest.approx(b.pmf(1)) == 0.3
        assert pytest.approx(b.pmf(0)) == 0.7

    def test_is_finite_dist(self):
        b = Bernoulli(0.3)
        assert isinstance(b, FiniteDist)
        assert b.outcomes == (0, 1)

    def test_matches_binary(self):
        assert Bernoulli(0.4) == binary(0.4, 0, 1)
        assert characterize(Bernoulli(0.4)).p == pytest.approx(0.4)

    def test_mode(self):
        assert Bernoulli(0.8).mode() == 1
        assert Bernoulli(0.2).mode() == 0

    def test_invalid_p(self):
        with pytest.raises(OutOfRange):
            Bernoulli(-0.1)
        with pytest.raises(ValueError):
            Bernoulli(1.1)

    # P(A & B) for independent events is the (1, 1) cell of the joint
    def test_and_joint_probability(self):
        joint = Bernoulli(0.3) & Bernoulli(0.5)
        assert pytest.approx(joint.pmf((1, 1))) == 0.3 * 0.5

    def test_repr(self):
        assert "Bernoulli" in repr(Bernoulli(0.5))


# ---------------------------------------------------------------------------
# Binomial tests
# ---------------------------------------------------------------------------


class TestBinomial:
    def test_pmf_matches_scipy(self):
        b = Binomial(5, 0.3)
        for k in range(6):
            assert pytest.approx(b.pmf(k)) == stats.binom.pmf(k, 5, 0.3)

    def test_sum_of_bernoulli_power(self):
        n, p = 4, 0.35
        assert fmap(power(Bernoulli(p), n), sum) == Binomial(n, p)

    def test_mean(self):
        assert pytest.approx(Binomial(10, 0.2).expectation()) == 2.0

    def test_zero_trials(self):
        b = Binomial(0, 0.7)
        assert b.outcomes == (0,)
        assert pytest.approx(b.pmf(0)) == 1.0

    def test_invalid(self):
        with pytest.raises(OutOfRange):
            Binomial(-1, 0.5)
        with pytest.raises(OutOfRange):
            Binomial(2.5, 0.5)
        with pytest.raises(OutOfRange):
            Binomial(3, 1.5)

    def test_repr(self):
        assert "Binomial" in repr(Binomial(3, 0.5))


# ---------------------------------------------------------------------------
# Categorical tests
# ---------------------------------------------------------------------------


class TestCategorical:
    def test_pmf(self):
        probs = [0.1, 0.4, 0.5]
        c = Categorical(probs)
        for i, p in enumerate(probs):
            assert pytest.approx(c.pmf(i)) == p
        # Outside the domain returns 0
        assert c.pmf(-1) == 0.0
        assert c.pmf(3) == 0.0

    def test_labels(self):
        c = Categorical([0.6, 0.4], labels=["bull", "bear"])
        assert c.labels == ["bull", "bear"]
        assert pytest.approx(c.pmf("bear")) == 0.4

    def test_mode(self):
        assert Categorical([0.1, 0.6, 0.3]).mode() == 1

    def test_probs_sum_to_one(self):
        c = Categorical([0.25, 0.25, 0.25, 0.25])
        assert pytest.approx(np.sum(c.probs)) == 1.0

    def test_invalid_probs_not_sum_one(self):
        with pytest.raises(InvalidWeights):
            Categorical([0.3, 0.3])

    def test_invalid_probs_negative(self):
        with pytest.raises(InvalidWeights):
            Categorical([-0.1, 0.6, 0.5])

    def test_label_count_mismatch(self):
        with pytest.raises(InvalidWeights):
            Categorical([0.5, 0.5], labels=["a", "b", "c"])

    def test_repr(self):
        assert "Categorical" in repr(Categorical([0.5, 0.5]))
