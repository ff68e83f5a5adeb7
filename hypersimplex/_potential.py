"""
Potential scoring of leaf simplices.

A potential balances exploitation (how good the best vertex of a leaf is
compared to everything seen so far) against exploration (how much unexplored
volume the leaf still covers). The frontier always splits the leaf with the
highest potential.

Scorers are interchangeable objects implementing ``PotentialScorer``; the
optimizer only ever calls ``score``.
"""
from __future__ import annotations

import math
import numbers
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Protocol (structural typing interface)
# ---------------------------------------------------------------------------
@runtime_checkable
class PotentialScorer(Protocol):
    """Protocol for potential scorers."""

    def score(
        self,
        value: float,
        volume: float,
        depth: int,
        context: tuple[float, float],
    ) -> float:
        """Potential of a leaf.

        Parameters
        ----------
        value : best vertex value of the leaf, in minimization sense
        volume : simplex space volume of the leaf
        depth : number of splits from the root
        context : (f_best, f_worst), the global value range at scoring time

        Returns
        -------
        float, higher is more promising
        """
        ...


# ---------------------------------------------------------------------------
# Exploration depth scorer (default)
# ---------------------------------------------------------------------------
class DepthScorer:
    """Potential gated by an integer exploration depth.

    ``potential = q - levels / (exploration_depth + 1/2)`` where
    ``q in [0, 1]`` is the quality of the leaf's best vertex (1 for the best
    value seen, 0 for the worst) and ``levels`` is the number of volume
    halvings separating the leaf from the root.

    Quality is measured on a logarithmic scale above the best value,

        q = 1 - log1p(g / r) / log1p(1 / r)
        g = (value - f_best) / (f_worst - f_best)

    with ``r = resolution``. Values close to the best one stay distinguishable
    when the worst value is far away, which lets the best region run up to
    about exploration_depth levels ahead of its surroundings.

    exploration_depth is the number of splits a promising lineage may run
    ahead of the worst region before that region gets explored again:

    - 0 splits every leaf of depth k before any leaf of depth k + 1, the best
      values first (grid-search like uniform expansion)
    - large values focus on exploitation of the best region
    - 5 is a good default
    """

    resolution = 1e-3  # Fraction of the value range resolved by q

    def __init__(self, exploration_depth: int, root_volume: float):
        if (isinstance(exploration_depth, bool)
                or not isinstance(exploration_depth, numbers.Integral)
                or exploration_depth < 0):
            raise ValueError(f"exploration_depth must be a non-negative "
                             f"integer, got {exploration_depth!r}")
        if not root_volume > 0.0:
            raise ValueError(f"root_volume must be positive, "
                             f"got {root_volume!r}")
        self.exploration_depth = int(exploration_depth)
        self.root_volume = root_volume
        self.weight = self.exploration_depth + 0.5
        self.norm = math.log1p(1.0 / self.resolution)

    def quality(self, value: float, context: tuple[float, float]) -> float:
        f_best, f_worst = context
        spread = f_worst - f_best
        if spread <= 0.0:
            return 1.0
        g = min(1.0, max(0.0, (value - f_best) / spread))
        return 1.0 - math.log1p(g / self.resolution) / self.norm

    def exploration(self, volume: float) -> float:
        """Exploration term, increasing in volume and 0 for the root."""
        levels = math.log2(self.root_volume / volume)
        return -levels / self.weight

    def score(self, value, volume, depth, context):
        return self.quality(value, context) + self.exploration(volume)

    def __repr__(self):
        return f"DepthScorer(exploration_depth={self.exploration_depth})"
