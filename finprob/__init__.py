"""finprob: an algebra of finite probability distributions.

This package provides an invariant-checked finite distribution type and
combinators that keep weights non-negative and normalized under
composition, mixing, conditioning, relabeling, marginalization and
tupling.
"""

import logging

try:
    from finprob._version import version as __version__
except ImportError:
    __version__ = "0.1.0"

from .core.types import Dist, FiniteDist, make, value, support, dominated_by
from .core.context import NumericContext, get_tolerance
from .core.errors import (
    DistributionError,
    InvariantViolation,
    InvalidWeights,
    EmptyDomain,
    DivisionByZero,
    OutOfRange,
)
from .distributions.monad import point_mass, bind, fmap
from .distributions.mixture import (
    convex_combination,
    reassociate,
    reassociate_weights,
    mixture,
    uniform,
    uniform_on,
    binary,
    characterize,
    restrict,
    condition,
    lift_index,
    lower_index,
    delete_index,
    delete_last,
    permute,
    invert_permutation,
    relabel,
)
from .distributions.joint import (
    marginal_left,
    marginal_right,
    split_head,
    join_head,
    split_last,
    join_last,
    to_bivariate,
    from_bivariate,
    to_bivariate_last,
    from_bivariate_last,
    head_of,
    tail_of,
    init_of,
    last_of,
    product,
    independent_product,
    power,
)
from .distributions.discrete import Bernoulli, Binomial, Categorical
from .analysis.counting import CardinalityBound, wolfowitz_bound, cardinality_bound

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Dist",
    "FiniteDist",
    "make",
    "value",
    "support",
    "dominated_by",
    "NumericContext",
    "get_tolerance",
    "DistributionError",
    "InvariantViolation",
    "InvalidWeights",
    "EmptyDomain",
    "DivisionByZero",
    "OutOfRange",
    "point_mass",
    "bind",
    "fmap",
    "convex_combination",
    "reassociate",
    "reassociate_weights",
    "mixture",
    "uniform",
    "uniform_on",
    "binary",
    "characterize",
    "restrict",
    "condition",
    "lift_index",
    "lower_index",
    "delete_index",
    "delete_last",
    "permute",
    "invert_permutation",
    "relabel",
    "marginal_left",
    "marginal_right",
    "split_head",
    "join_head",
    "split_last",
    "join_last",
    "to_bivariate",
    "from_bivariate",
    "to_bivariate_last",
    "from_bivariate_last",
    "head_of",
    "tail_of",
    "init_of",
    "last_of",
    "product",
    "independent_product",
    "power",
    "Bernoulli",
    "Binomial",
    "Categorical",
    "CardinalityBound",
    "wolfowitz_bound",
    "cardinality_bound",
]
