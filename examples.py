"""Example usage of the finprob package.

This example demonstrates the core features of the finprob package including:
- Building finite distributions and reading their weights
- Monadic composition with bind and fmap
- Mixtures, restriction and permutation
- Joint distributions, marginals and n-fold tuple powers
- The Wolfowitz counting bound
- Using the NumericContext tolerance manager
"""

import itertools

from finprob import (
    Binomial, Categorical,
    NumericContext, InvalidWeights,
    make, point_mass, bind, fmap,
    binary, uniform, convex_combination, restrict, permute,
    product, marginal_left, marginal_right, power, head_of, tail_of,
    wolfowitz_bound,
)


def core_example():
    """Demonstrate the distribution core."""
    print("=" * 60)
    print("Distribution Core Example")
    print("=" * 60)

    d = make(["a", "b", "c"], [0.2, 0.0, 0.8])
    print(f"\n   {d}")
    print(f"   weight of 'c': {d.pmf('c'):.2f}")
    print(f"   support: {list(d.support())}")
    print(f"   dominated by uniform: {d.dominated_by(uniform(['a', 'b', 'c']))}")

    try:
        make([0, 1], [0.3, 0.3])
    except InvalidWeights as exc:
        print(f"   rejected: {exc}")


def monad_example():
    """Demonstrate bind and fmap."""
    print("\n" + "=" * 60)
    print("Monad Layer Example")
    print("=" * 60)

    die = uniform(range(1, 7))
    # Roll a die, then flip that many fair coins and count heads
    heads = bind(die, lambda k: Binomial(k, 0.5))
    print(f"\n1. P(no heads) = {heads.pmf(0):.4f}")

    parity = fmap(die, lambda k: "even" if k % 2 == 0 else "odd")
    print(f"2. Parity of a die roll: {parity}")

    same = bind(point_mass(3), lambda k: Binomial(k, 0.5)) == Binomial(3, 0.5)
    print(f"3. Left identity holds: {same}")


def transforms_example():
    """Demonstrate mixtures and structural transforms."""
    print("\n" + "=" * 60)
    print("Mixtures & Transforms Example")
    print("=" * 60)

    fair = binary(0.5, "H", "T")
    biased = binary(0.9, "H", "T")
    coin = convex_combination(fair, biased, 0.25)
    print(f"\n1. Mixed coin: {coin}")

    d = restrict(uniform(range(4)), 2)
    print(f"2. Uniform on 0..3 without 2: {d}")

    regime = Categorical([0.6, 0.3, 0.1], labels=["bull", "flat", "bear"])
    rotated = permute(regime, {"bull": "flat", "flat": "bear", "bear": "bull"})
    print(f"3. Rotated regimes: {rotated}")


def joint_example():
    """Demonstrate joint and tuple distributions."""
    print("\n" + "=" * 60)
    print("Joint & Product Example")
    print("=" * 60)

    p = uniform(["a1", "a2"])
    q = binary(0.2, "b1", "b2")
    j = product(p, q)
    print(f"\n1. Joint: {j}")
    print(f"   Left marginal recovers P: {marginal_left(j) == p}")
    print(f"   Right marginal recovers Q: {marginal_right(j) == q}")

    pairs = power(binary(0.5, "heads", "tails"), 2)
    print(f"2. Two fair coins: {pairs}")
    print(f"   head == coin: {head_of(pairs) == binary(0.5, 'heads', 'tails')}")
    print(f"   tail outcomes: {tail_of(pairs).outcomes}")


def counting_example():
    """Demonstrate the Wolfowitz bound on a set of 3-vectors."""
    print("\n" + "=" * 60)
    print("Counting Example")
    print("=" * 60)

    bound = wolfowitz_bound(lower_mass=0.5, upper_mass=0.9, min_weight=0.1, max_weight=0.4)
    print(f"\n   {bound.lower:.2f} <= |S| <= {bound.upper:.2f}")

    d = power(binary(0.3, "H", "T"), 3)
    s = [v for v in itertools.product("HT", repeat=3) if v.count("T") == 1]
    print(f"   |S| = {len(s)}, mass of S = {d.prob(s):.3f}")


def context_manager_example():
    """Demonstrate the NumericContext tolerance manager."""
    print("\n" + "=" * 60)
    print("NumericContext Example")
    print("=" * 60)

    weights = [0.3333, 0.3333, 0.3333]
    with NumericContext(tol=1e-3):
        d = make(["x", "y", "z"], weights)
        print(f"\n   Context active: {NumericContext.is_active()}")
        print(f"   Accepted rounded weights: {d}")

    print(f"   Context active after exit: {NumericContext.is_active()}")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("finprob Package Examples")
    print("=" * 60)

    core_example()
    monad_example()
    transforms_example()
    joint_example()
    counting_example()
    context_manager_example()

    print("\n" + "=" * 60)
    print("Examples completed successfully!")
    print("=" * 60 + "\n")
