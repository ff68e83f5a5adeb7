import numpy

from hypersimplex._exceptions import EvaluationError


"""Vertex objects"""
class Vertex:
    """A point of the canonical simplex together with its objective value.

    Vertices are shared by every simplex that has them as a corner, the value
    is assigned once on construction and never changes.
    """
    def __init__(self, x, x_u, f, index=None):
        self.x = x  # Hashable tuple in simplex space
        self.x_a = numpy.array(x)  # Array version of the hashed tuple
        self.x_u = x_u  # The user space point that was evaluated
        self.f = f
        self.index = index

    def __hash__(self):
        return hash(self.x)

    def __repr__(self):
        return f"Vertex(x={self.x}, f={self.f}, index={self.index})"


class VertexScalarField(Vertex):
    """Vertex of a scalar field f: R^n --> R, evaluated on construction.

    Note a vertex is only initiated once for every x in a cache so the field
    is only evaluated once per point.
    """
    def __init__(self, x, x_u, field, field_args=(), index=None):
        try:
            f = field(x_u.copy(), *field_args)
        except Exception as e:
            raise EvaluationError(x_u, e) from e

        super().__init__(x, x_u, checked_value(f, x_u), index=index)


def checked_value(f, x_u):
    """Return f as a float, raising EvaluationError for anything that is not
    a single finite real number."""
    try:
        f_a = numpy.asarray(f, dtype=float)
    except (TypeError, ValueError) as e:
        raise EvaluationError(x_u, f"non-numeric value {f!r}") from e
    if f_a.size != 1:
        raise EvaluationError(x_u, f"expected a scalar, got shape "
                                   f"{f_a.shape}")
    f = float(f_a.ravel()[0])
    if not numpy.isfinite(f):
        raise EvaluationError(x_u, f"non-finite value {f}")
    return f


"""
Cache objects
"""
class VertexCacheBase(object):
    """Arena of vertices keyed by their simplex space coordinates.

    Vertices receive stable indices in creation order, so iterating the cache
    visits them in evaluation order.
    """
    def __init__(self, space):
        self.space = space  # Maps simplex coordinates to user space
        self.cache = {}
        self.nfev = 0  # Objective evaluations
        self.size = 0  # Total size of cache
        self.index = -1

    def __getitem__(self, x):
        return self.cache[x]

    def __contains__(self, x):
        return x in self.cache

    def __len__(self):
        return self.size

    def __iter__(self):
        return iter(self.cache.values())

    def insert(self, x, f):
        """Store a value computed outside the cache (ask-and-tell)."""
        if x in self.cache:
            raise KeyError(f"Vertex {x} already has a value")
        x_u = self.space.to_user(x)
        f = checked_value(f, x_u)
        self.index += 1
        v = Vertex(x, x_u, f, index=self.index)
        self.cache[x] = v
        self.nfev += 1
        self.size += 1
        return v


class VertexCacheField(VertexCacheBase):
    def __init__(self, space, field, field_args=()):
        super().__init__(space)
        self.Vertex = VertexScalarField
        self.field = field
        self.field_args = field_args

    def __getitem__(self, x):
        try:
            return self.cache[x]
        except KeyError:
            # A failing evaluation leaves the cache untouched
            xval = self.Vertex(x, self.space.to_user(x), field=self.field,
                               field_args=self.field_args,
                               index=self.index + 1)
            # NOTE: Logging every generated vertex is a notable slowdown
            self.index += 1
            self.cache[x] = xval
            self.nfev += 1
            self.size += 1
            return xval
