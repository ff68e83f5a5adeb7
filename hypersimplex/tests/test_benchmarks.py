"""Benchmark suite for hypersimplex performance tracking.

Uses pytest-benchmark. Run with:
    pytest hypersimplex/tests/test_benchmarks.py --benchmark-only

Save results:
    pytest hypersimplex/tests/test_benchmarks.py --benchmark-save=v0.1.0

Compare against baseline:
    pytest hypersimplex/tests/test_benchmarks.py --benchmark-compare=0001_v0.1.0

Skip during normal test runs:
    pytest --benchmark-skip
"""
import numpy
import pytest

from hypersimplex import Optimizer, minimize
from hypersimplex._frontier import Frontier
from hypersimplex._simplex import SimplexNode
from hypersimplex._space import SearchSpace
from hypersimplex._subdivide import bisect, split_point
from hypersimplex._vertex import VertexCacheField


# --- Objective functions ---

def sphere(x):
    return numpy.sum((x - 0.3) ** 2)


def rastrigin(x):
    return 10 * len(x) + numpy.sum(x**2 - 10 * numpy.cos(2 * numpy.pi * x))


# --- 1a. Full runs ---

class TestBenchMinimize:
    """Benchmark complete runs at a fixed evaluation budget."""

    @pytest.mark.parametrize("dim", [1, 2, 3, 4, 5])
    def test_bench_sphere(self, benchmark, dim):
        """Benchmark 500 evaluations of a cheap objective."""
        bounds = [(0.0, 1.0)] * dim

        res = benchmark(minimize, sphere, bounds, maxfev=500)
        assert res.nfev == 500

    @pytest.mark.parametrize("exploration_depth", [0, 5, 50])
    def test_bench_exploration_depth(self, benchmark, exploration_depth):
        """Benchmark the cost of the frontier at different trade-offs."""
        bounds = [(-5.12, 5.12)] * 3

        benchmark(minimize, rastrigin, bounds, maxfev=1000,
                  exploration_depth=exploration_depth)


# --- 1b. Ask and tell ---

class TestBenchAskTell:
    """Benchmark the overhead of driving the search externally."""

    def test_bench_ask_tell(self, benchmark):
        def run():
            opt = Optimizer(None, [(0.0, 1.0)] * 3, maxfev=500)
            for _ in range(500):
                x = opt.ask()
                opt.tell(sphere(x))
            return opt

        benchmark(run)


# --- 1c. Components ---

class TestBenchComponents:
    """Benchmark the building blocks of a split."""

    @pytest.mark.parametrize("dim", [2, 5, 10])
    def test_bench_bisect(self, benchmark, dim):
        """Benchmark recursive bisection of every leaf for 6 levels."""
        S = SearchSpace([(0.0, 1.0)] * dim)

        def run():
            V = VertexCacheField(S, sphere)
            leaves = [SimplexNode([V[x] for x in S.corners()])]
            seq = 1
            for _ in range(6):
                new = []
                for leaf in leaves:
                    new.extend(bisect(leaf, V[split_point(leaf)], seq))
                    seq += 2
                leaves = new
            return leaves

        benchmark(run)

    def test_bench_frontier(self, benchmark):
        """Benchmark 10000 pushes followed by 10000 pops."""
        S = SearchSpace([(0.0, 1.0)] * 2)
        V = VertexCacheField(S, sphere)
        corners = [V[x] for x in S.corners()]
        potentials = numpy.random.default_rng(0).normal(size=10000).tolist()

        def run():
            F = Frontier()
            for seq, p in enumerate(potentials):
                node = SimplexNode(corners, seq=seq)
                node.potential = p
                F.push(node)
            while len(F):
                F.pop()

        benchmark(run)
