"""
Mapping between a user hypercube and the canonical simplex.

All internal geometry lives in the standard simplex
{s : s_i >= 0, sum(s) <= 1}. A user point is first normalized onto the unit
hypercube [0, 1]^dim by a fixed affine transform, then folded onto the
simplex by scaling it along its ray from the origin:

    s = u * max(u) / sum(u)        u = s * sum(s) / max(s)

The corners of the simplex (the origin and the unit vectors e_i) are fixed
points of the fold, so they map to the lower corner of the box and its dim
adjacent corners, and every point of the simplex maps inside the box.
"""
from __future__ import annotations

import math

import numpy

from hypersimplex._exceptions import InvalidDomain


class SearchSpace:
    def __init__(self, bounds):
        """
        :param bounds: sequence of (x_l, x_u) pairs, one per dimension, with
                       x_l < x_u
        :raises InvalidDomain: if the bounds are empty, malformed, non-finite
                               or not strictly increasing
        """
        try:
            B = numpy.array(bounds, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidDomain(f"Bounds {bounds!r} are not a sequence of "
                                f"(min, max) pairs") from e

        if B.ndim != 2 or B.shape[0] == 0 or B.shape[1] != 2:
            raise InvalidDomain(f"Bounds must be a non-empty sequence of "
                                f"(min, max) pairs, got shape {B.shape}")
        if not numpy.all(numpy.isfinite(B)):
            raise InvalidDomain(f"Bounds must be finite, got {B.tolist()}")
        bad = numpy.flatnonzero(B[:, 0] >= B[:, 1])
        if bad.size:
            i = int(bad[0])
            raise InvalidDomain(f"Variable {i} has lower bound {B[i, 0]} "
                                f"which is not below its upper bound "
                                f"{B[i, 1]}")

        self.dim = B.shape[0]
        self.bounds = [tuple(b) for b in B.tolist()]

        # Affine part, built once: x = A @ u + b and u = A_inv @ (x - b)
        self.A = numpy.diag(B[:, 1] - B[:, 0])
        self.A_inv = numpy.diag(1.0 / (B[:, 1] - B[:, 0]))
        self.b = B[:, 0].copy()

        self.root_volume = 1.0 / math.factorial(self.dim)

    def corners(self):
        """The dim + 1 corners of the canonical simplex as coordinate tuples,
        the origin first."""
        C = [tuple([0.0] * self.dim)]
        for i in range(self.dim):
            e_i = [0.0] * self.dim
            e_i[i] = 1.0
            C.append(tuple(e_i))
        return C

    def normalize(self, x):
        """User space --> unit hypercube."""
        return self.A_inv @ (numpy.asarray(x, dtype=float) - self.b)

    def denormalize(self, u):
        """Unit hypercube --> user space."""
        return self.A @ numpy.asarray(u, dtype=float) + self.b

    def to_simplex(self, x):
        """Map a point of the user hypercube into the canonical simplex."""
        u = self.normalize(x)
        total = numpy.sum(u)
        if total > 0.0:
            u = u * (numpy.max(u) / total)
        return u

    def to_user(self, s):
        """Map a point of the canonical simplex into the user hypercube."""
        s = numpy.asarray(s, dtype=float)
        peak = numpy.max(s)
        if peak > 0.0:
            s = s * (numpy.sum(s) / peak)
        return self.denormalize(s)

    def __repr__(self):
        return f"SearchSpace({self.bounds})"
