"""Tests for the priority frontier."""
import numpy
import pytest

from hypersimplex._exceptions import FrontierExhausted
from hypersimplex._frontier import Frontier
from hypersimplex._simplex import SimplexNode
from hypersimplex._vertex import Vertex

X = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
V = [Vertex(x, numpy.array(x), 0.0, index=i) for i, x in enumerate(X)]


def make_node(potential, depth=0, seq=0):
    node = SimplexNode(V, depth=depth, seq=seq)
    node.potential = potential
    return node


class TestFrontier:
    def test_pop_highest_potential(self):
        F = Frontier()
        for seq, p in enumerate([0.1, 0.5, 0.3, -2.0]):
            F.push(make_node(p, seq=seq))
        assert [F.pop().potential for _ in range(4)] == [0.5, 0.3, 0.1, -2.0]

    def test_tie_prefers_shallow(self):
        F = Frontier()
        deep = make_node(1.0, depth=4, seq=0)
        shallow = make_node(1.0, depth=2, seq=1)
        F.push(deep)
        F.push(shallow)
        assert F.pop() is shallow
        assert F.pop() is deep

    def test_tie_prefers_first_created(self):
        F = Frontier()
        nodes = [make_node(1.0, depth=1, seq=s) for s in (5, 2, 9)]
        for node in nodes:
            F.push(node)
        assert [F.pop().seq for _ in range(3)] == [2, 5, 9]

    def test_len_and_iter(self):
        F = Frontier()
        nodes = [make_node(0.0, seq=s) for s in range(4)]
        for node in nodes:
            F.push(node)
        assert len(F) == 4
        assert set(map(id, F)) == set(map(id, nodes))

    def test_peek_does_not_remove(self):
        F = Frontier()
        F.push(make_node(0.2, seq=0))
        F.push(make_node(0.7, seq=1))
        assert F.peek().potential == 0.7
        assert F.max_potential() == 0.7
        assert len(F) == 2

    def test_volume(self):
        F = Frontier()
        for s in range(3):
            F.push(make_node(0.0, seq=s))
        assert F.volume() == pytest.approx(1.5)

    def test_empty(self):
        F = Frontier()
        with pytest.raises(FrontierExhausted):
            F.pop()
        with pytest.raises(FrontierExhausted):
            F.peek()

    def test_unscored_node(self):
        with pytest.raises(ValueError):
            Frontier().push(SimplexNode(V))

    def test_many_nodes(self):
        """Heap order holds across thousands of pushes and pops."""
        rng = numpy.random.default_rng(3)
        F = Frontier()
        potentials = rng.normal(size=5000)
        for s, p in enumerate(potentials):
            F.push(make_node(float(p), seq=s))
        popped = [F.pop().potential for _ in range(len(potentials))]
        assert popped == sorted(potentials.tolist(), reverse=True)
