"""Tests for marginals, vector re-indexing, products and tuple powers."""

import itertools

import numpy as np
import pytest
from scipy import stats

from finprob.core.errors import DistributionError, OutOfRange
from finprob.core.types import make
from finprob.distributions.joint import (
    from_bivariate,
    from_bivariate_last,
    head_of,
    independent_product,
    init_of,
    join_head,
    join_last,
    last_of,
    marginal_left,
    marginal_right,
    power,
    product,
    split_head,
    split_last,
    tail_of,
    to_bivariate,
    to_bivariate_last,
)
from finprob.distributions.mixture import binary, convex_combination, uniform
from finprob.distributions.monad import fmap, point_mass

A = ["a0", "a1", "a2"]
B = ["b0", "b1"]


# ---------------------------------------------------------------------------
# Marginals
# ---------------------------------------------------------------------------


class TestMarginals:
    def test_marginals_of_table(self):
        j = make(
            [("x", 0), ("x", 1), ("y", 0), ("y", 1)],
            [0.1, 0.2, 0.3, 0.4],
        )
        left = marginal_left(j)
        right = marginal_right(j)
        assert pytest.approx(left.pmf("x")) == 0.3
        assert pytest.approx(left.pmf("y")) == 0.7
        assert pytest.approx(right.pmf(0)) == 0.4
        assert pytest.approx(right.pmf(1)) == 0.6

    def test_zero_marginal_forces_zero_joint(self):
        j = make(
            [("x", 0), ("x", 1), ("y", 0), ("y", 1)],
            [0.0, 0.0, 0.4, 0.6],
        )
        left = marginal_left(j)
        right = marginal_right(make([("x", 0), ("y", 0), ("y", 1)], [0.5, 0.5, 0.0]))
        assert left.pmf("x") == 0.0
        assert all(j.pmf(("x", b)) == 0.0 for b in (0, 1))
        assert right.pmf(1) == 0.0

    def test_joint_dominated_by_product_of_marginals(self):
        j = make(
            [("x", 0), ("x", 1), ("y", 0), ("y", 1)],
            [0.0, 0.0, 0.4, 0.6],
        )
        assert j.dominated_by(independent_product(marginal_left(j), marginal_right(j)))

    def test_non_pair_outcomes(self):
        with pytest.raises(DistributionError, match="pair"):
            marginal_left(uniform([1, 2]))


# ---------------------------------------------------------------------------
# Vector re-indexing
# ---------------------------------------------------------------------------


class TestVectorSplit:
    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_split_join_exhaustive(self, n):
        for v in itertools.product("ab", repeat=n):
            assert join_head(split_head(v)) == v
            assert join_last(split_last(v)) == v

    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_bivariate_roundtrip(self, random_dist, n):
        p = random_dist(list(itertools.product(B, repeat=n)))
        assert from_bivariate(to_bivariate(p)) == p
        assert from_bivariate_last(to_bivariate_last(p)) == p
        assert np.array_equal(from_bivariate(to_bivariate(p)).probs, p.probs)

    def test_bivariate_inverse_direction(self, random_dist):
        pairs = [(h, t) for h in A for t in itertools.product(B, repeat=2)]
        b = random_dist(pairs)
        assert to_bivariate(from_bivariate(b)) == b

    def test_bivariate_last_inverse_direction(self, random_dist):
        pairs = [(i, last) for i in itertools.product(B, repeat=2) for last in A]
        b = random_dist(pairs)
        assert to_bivariate_last(from_bivariate_last(b)) == b

    def test_split_shapes(self):
        p = power(uniform(B), 3)
        assert to_bivariate(p).outcomes[0] == ("b0", ("b0", "b0"))
        assert to_bivariate_last(p).outcomes[0] == (("b0", "b0"), "b0")

    def test_empty_vectors_rejected(self):
        with pytest.raises(DistributionError, match="length 0"):
            to_bivariate(point_mass(()))

    def test_mixed_lengths_rejected(self):
        with pytest.raises(DistributionError, match="mixed lengths"):
            to_bivariate(uniform([("a",), ("a", "b")]))

    def test_non_tuple_rejected(self):
        with pytest.raises(DistributionError):
            to_bivariate(uniform(["ab"]))

    def test_from_bivariate_requires_tuple_tail(self):
        with pytest.raises(DistributionError):
            from_bivariate(uniform([("a", "b")]))

    def test_head_tail_init_last(self):
        p = make([("x", 0), ("y", 1)], [0.25, 0.75])
        assert head_of(p) == make(["x", "y"], [0.25, 0.75])
        assert tail_of(p) == make([(0,), (1,)], [0.25, 0.75])
        assert init_of(p) == make([("x",), ("y",)], [0.25, 0.75])
        assert last_of(p) == make([0, 1], [0.25, 0.75])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class TestProduct:
    def test_weights_with_kernel(self):
        p = make(["s", "t"], [0.4, 0.6])
        q = {"s": make([0, 1], [0.5, 0.5]), "t": point_mass(1, domain=[0, 1])}
        j = product(p, q)
        assert pytest.approx(j.pmf(("s", 0))) == 0.2
        assert pytest.approx(j.pmf(("s", 1))) == 0.2
        assert j.pmf(("t", 0)) == 0.0
        assert pytest.approx(j.pmf(("t", 1))) == 0.6

    def test_marginal_recovery(self):
        p = uniform(["a1", "a2"])
        q = binary(0.2, "b1", "b2")
        j = product(p, q)
        assert marginal_left(j) == p
        assert marginal_right(j) == q

    def test_independent_product_weights(self, random_dist):
        p, q = random_dist(A), random_dist(B)
        j = independent_product(p, q)
        for a, b in itertools.product(A, B):
            assert pytest.approx(j.pmf((a, b))) == p.pmf(a) * q.pmf(b)

    def test_and_operator(self, random_dist):
        p, q = random_dist(A), random_dist(B)
        assert (p & q) == independent_product(p, q)

    def test_callable_kernel_marginal_left(self, random_dist, random_kernel):
        p = random_dist(A)
        kernel = random_kernel(A, B)
        j = product(p, lambda a: kernel[a])
        assert marginal_left(j) == p

    @pytest.mark.parametrize("w", [0.0, 0.3, 1.0])
    def test_marginals_commute_with_mixture(self, random_dist, w):
        j1 = product(random_dist(A), random_dist(B))
        j2 = random_dist([(a, b) for a in A for b in B])
        mixed = convex_combination(j1, j2, w)
        assert marginal_left(mixed) == convex_combination(
            marginal_left(j1), marginal_left(j2), w
        )
        assert marginal_right(mixed) == convex_combination(
            marginal_right(j1), marginal_right(j2), w
        )


# ---------------------------------------------------------------------------
# power (n-fold tuple)
# ---------------------------------------------------------------------------


class TestPower:
    def test_fair_coin_pairs(self):
        coin = binary(0.5, "heads", "tails")
        d = power(coin, 2)
        assert len(d) == 4
        for v in itertools.product(["heads", "tails"], repeat=2):
            assert pytest.approx(d.pmf(v)) == 0.25

    def test_weights_are_products(self, random_dist):
        p = random_dist(A)
        d = power(p, 3)
        for v in itertools.product(A, repeat=3):
            expected = p.pmf(v[0]) * p.pmf(v[1]) * p.pmf(v[2])
            assert pytest.approx(d.pmf(v)) == expected

    def test_domain_order(self):
        d = power(uniform([0, 1]), 2)
        assert d.outcomes == ((0, 0), (0, 1), (1, 0), (1, 1))

    def test_zero_power(self):
        d = power(uniform(A), 0)
        assert d.outcomes == ((),)
        assert d.pmf(()) == 1.0

    def test_one_power(self, random_dist):
        p = random_dist(A)
        assert power(p, 1) == fmap(p, lambda a: (a,))

    @pytest.mark.parametrize("n", [0, 1, 2, 3])
    def test_recursive_law(self, random_dist, n):
        p = random_dist(B)
        assert power(p, n + 1) == from_bivariate(product(p, power(p, n)))
        assert head_of(power(p, n + 1)) == p
        assert tail_of(power(p, n + 1)) == power(p, n)

    def test_last_of_power(self, random_dist):
        p = random_dist(A)
        assert last_of(power(p, 3)) == p
        assert init_of(power(p, 3)) == power(p, 2)

    def test_sum_of_bernoulli_power_is_binomial(self):
        n, q = 6, 0.3
        counts = fmap(power(binary(q, 0, 1), n), sum)
        for k in range(n + 1):
            assert pytest.approx(counts.pmf(k)) == stats.binom.pmf(k, n, q)

    def test_normalized_for_larger_n(self, random_dist):
        d = power(random_dist(A), 8)
        assert len(d) == 3 ** 8
        assert pytest.approx(float(np.sum(d.probs)), abs=1e-12) == 1.0

    @pytest.mark.parametrize("n", [2, 5, 10])
    def test_near_tolerance_edge_input(self, n):
        p = make(["a", "b"], [0.5, 0.5 + 9e-10])
        d = power(p, n)
        assert len(d) == 2 ** n
        assert pytest.approx(float(np.sum(d.probs)), abs=1e-12) == 1.0
        assert head_of(d) == p

    @pytest.mark.parametrize("n", [-1, 1.5, True])
    def test_invalid_n(self, n):
        with pytest.raises(OutOfRange):
            power(uniform(A), n)
