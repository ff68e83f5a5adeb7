"""Tests for longest-edge bisection."""
import numpy
import pytest

from hypersimplex._exceptions import DegenerateSimplex
from hypersimplex._simplex import SimplexNode
from hypersimplex._space import SearchSpace
from hypersimplex._subdivide import bisect, split_edge, split_point
from hypersimplex._vertex import Vertex, VertexCacheField


def sphere(x):
    return float(numpy.sum((x - 0.5) ** 2))


def root_node(dim):
    S = SearchSpace([(0.0, 1.0)] * dim)
    V = VertexCacheField(S, sphere)
    return SimplexNode([V[x] for x in S.corners()]), V


class TestSplitPoint:
    def test_2d_root(self):
        node, _ = root_node(2)
        assert split_edge(node) == (1, 2)
        assert split_point(node) == (0.5, 0.5)

    def test_3d_root(self):
        node, _ = root_node(3)
        assert split_point(node) == (0.5, 0.5, 0.0)

    def test_collapsed_edge(self):
        """An edge one ulp long cannot be bisected."""
        a = 1.0
        b = numpy.nextafter(1.0, 2.0)
        V = [Vertex((a,), numpy.array([a]), 0.0),
             Vertex((b,), numpy.array([b]), 0.0)]
        node = SimplexNode(V)
        with pytest.raises(DegenerateSimplex):
            split_point(node)


class TestBisect:
    def test_children_halve_volume(self):
        node, V = root_node(2)
        vc = V[split_point(node)]
        c1, c2 = bisect(node, vc, seq=1)
        assert c1.volume == pytest.approx(node.volume / 2)
        assert c2.volume == pytest.approx(node.volume / 2)
        assert c1.volume + c2.volume == pytest.approx(node.volume, rel=1e-12)

    @pytest.mark.parametrize("dim", [1, 2, 3, 4, 5])
    def test_recursive_volume_conservation(self, dim):
        """Bisecting every leaf repeatedly keeps the total volume."""
        root, V = root_node(dim)
        leaves = [root]
        seq = 1
        for _ in range(4):
            new = []
            for leaf in leaves:
                children = bisect(leaf, V[split_point(leaf)], seq)
                seq += 2
                assert sum(c.volume for c in children) == pytest.approx(
                    leaf.volume, rel=1e-9)
                new.extend(children)
            leaves = new
        assert sum(c.volume for c in leaves) == pytest.approx(root.volume,
                                                              rel=1e-9)

    def test_depth_and_seq(self):
        node, V = root_node(2)
        c1, c2 = bisect(node, V[split_point(node)], seq=10)
        assert c1.depth == c2.depth == 1
        assert (c1.seq, c2.seq) == (10, 11)

    def test_children_share_vertices(self):
        """Both children hold the new vertex and the untouched corners by
        reference."""
        node, V = root_node(2)
        vc = V[split_point(node)]
        c1, c2 = bisect(node, vc, seq=1)
        assert vc in c1.V and vc in c2.V
        assert c1.V[0] is node.V[0] and c2.V[0] is node.V[0]
        assert c1.V[2] is node.V[2]
        assert c2.V[1] is node.V[1]

    def test_shared_midpoint_not_reevaluated(self):
        """Neighbours bisecting a common edge reuse the cached vertex."""
        root, V = root_node(2)
        c1, c2 = bisect(root, V[split_point(root)], seq=1)
        grand = []
        for c in (c1, c2):
            grand.extend(bisect(c, V[split_point(c)], seq=len(grand) + 3))
        nfev = V.nfev
        points = [split_point(g) for g in grand]
        assert len(set(points)) < len(points)
        for x in points:
            V[x]
        assert V.nfev == nfev + len(set(points))

    def test_degenerate_child(self):
        """A split vertex that coincides with another corner gives a zero
        volume child."""
        node, V = root_node(2)
        with pytest.raises(DegenerateSimplex):
            bisect(node, node.V[0], seq=1)
