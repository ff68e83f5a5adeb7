"""
Longest-edge bisection of leaf simplices.

A leaf is split by inserting a vertex at the midpoint of its longest edge and
replacing each endpoint of that edge in turn, giving two children of exactly
half the parent's volume. Midpoints are looked up by coordinates in the vertex
cache, so an edge shared with a previously split neighbour is never evaluated
twice.
"""
from hypersimplex._exceptions import DegenerateSimplex
from hypersimplex._simplex import SimplexNode, longest_edge


def split_edge(node):
    """Index pair (i, j) of the edge of node that will be bisected."""
    return longest_edge(node.coordinates())


def split_point(node):
    """
    Simplex space coordinates of the vertex that splits node.

    :return: tuple, midpoint of the longest edge
    :raises DegenerateSimplex: if the midpoint cannot be resolved from the
                               edge endpoints in floating point
    """
    i, j = split_edge(node)
    v1, v2 = node.V[i], node.V[j]
    x = tuple(((v1.x_a + v2.x_a) / 2.0).tolist())
    if any(x == v.x for v in node.V):
        raise DegenerateSimplex(f"Edge {v1.x} -- {v2.x} at depth {node.depth} "
                                f"is too short to be bisected")
    return x


def bisect(node, vc, seq):
    """
    Split node into two children around the new vertex vc.

    :param node: SimplexNode, the leaf being split (discarded afterwards)
    :param vc: Vertex at split_point(node)
    :param seq: int, sequence number of the first child, the second child
                receives seq + 1
    :return: tuple of the two child SimplexNodes
    """
    i, j = split_edge(node)
    children = []
    for k, replaced in enumerate((i, j)):
        V = list(node.V)
        V[replaced] = vc
        children.append(SimplexNode(V, depth=node.depth + 1, seq=seq + k))
    return tuple(children)
