"""Combinators and families for finprob.

The monad layer (:mod:`.monad`) is the base; mixtures and structural
transforms (:mod:`.mixture`) and joint/product distributions
(:mod:`.joint`) are built on it.
"""

from .monad import point_mass, bind, fmap
from .mixture import convex_combination, mixture, uniform, binary, restrict, permute
from .joint import marginal_left, marginal_right, product, power
from .discrete import Bernoulli, Binomial, Categorical

__all__ = [
    "point_mass",
    "bind",
    "fmap",
    "convex_combination",
    "mixture",
    "uniform",
    "binary",
    "restrict",
    "permute",
    "marginal_left",
    "marginal_right",
    "product",
    "power",
    "Bernoulli",
    "Binomial",
    "Categorical",
]
