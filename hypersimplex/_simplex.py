import math

import numpy

from hypersimplex._exceptions import DegenerateSimplex


"""Geometry helpers"""
def simplex_volume(S):
    """
    Volume of a simplex in R^dim
    :param S: array of shape (dim + 1, dim) with the vertices as rows
    :return: float, |det(S[1:] - S[0])| / dim!
    """
    S = numpy.asarray(S, dtype=float)
    proj = S[1:] - S[0]
    return abs(numpy.linalg.det(proj)) / math.factorial(proj.shape[0])


def edge_lengths(S):
    """Pairwise Euclidean distance matrix between the vertices of S."""
    S = numpy.asarray(S, dtype=float)
    diff = S[:, numpy.newaxis, :] - S[numpy.newaxis, :, :]
    return numpy.sqrt(numpy.sum(diff ** 2, axis=-1))


def longest_edge(S):
    """
    Index pair (i, j), i < j, of the longest edge of S. Ties are resolved in
    favour of the first pair in row-major order.
    """
    D = numpy.triu(edge_lengths(S), k=1)
    i, j = numpy.unravel_index(numpy.argmax(D), D.shape)
    return int(i), int(j)


"""Simplex objects"""
class SimplexNode:
    def __init__(self, V, depth=0, seq=0):
        """
        A leaf of the partition tree.

        :param V: sequence of dim + 1 shared Vertex objects
        :param depth: int, number of splits from the root
        :param seq: int, creation sequence number (used to break ties)
        :raises DegenerateSimplex: if the vertices are affinely dependent
        """
        self.dim = len(V) - 1
        self.V = tuple(V)
        self.depth = depth
        self.seq = seq

        self.volume = simplex_volume(self.coordinates())
        if not (numpy.isfinite(self.volume) and self.volume > 0.0):
            raise DegenerateSimplex(
                f"Simplex {[v.x for v in self.V]} at depth {depth} has "
                f"volume {self.volume}")

        # Set by the driver when scored, never while inside the frontier
        self.potential = None
        self.context = None

    def vertices(self):
        return self.V

    def coordinates(self):
        """(dim + 1, dim) array of vertex coordinates in simplex space."""
        return numpy.array([v.x for v in self.V], dtype=float)

    def best_vertex(self, sign=1.0):
        """The vertex with the lowest value of sign * f."""
        return min(self.V, key=lambda v: sign * v.f)

    def __repr__(self):
        return (f"SimplexNode(depth={self.depth}, seq={self.seq}, "
                f"volume={self.volume:.3e}, potential={self.potential})")
