"""
Derivative-free global optimization by recursive simplicial partitioning.

The search domain is mapped onto a simplex which is recursively bisected;
the leaf with the highest potential (a trade-off between its best known value
and its unexplored volume, controlled by ``exploration_depth``) is split
next.

Usage::

    from hypersimplex import minimize

    res = minimize(lambda x: (x[0] - 0.5)**2 + (x[1] - 0.5)**2,
                   bounds=[(0, 1), (0, 1)], maxfev=200)
"""
from ._exceptions import (DegenerateSimplex, EvaluationError,
                          FrontierExhausted, HypersimplexError, InvalidDomain)
from ._frontier import Frontier
from ._minimize import maximize, minimize
from ._optimizer import Optimizer, State, StepResult
from ._potential import DepthScorer, PotentialScorer
from ._simplex import SimplexNode
from ._space import SearchSpace

__version__ = '0.1.0'

__all__ = [
    "minimize",
    "maximize",
    "Optimizer",
    "State",
    "StepResult",
    "SearchSpace",
    "SimplexNode",
    "Frontier",
    "PotentialScorer",
    "DepthScorer",
    "HypersimplexError",
    "InvalidDomain",
    "DegenerateSimplex",
    "EvaluationError",
    "FrontierExhausted",
]
