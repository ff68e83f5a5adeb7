"""
Simplicial partitioning optimizer.

The search domain is mapped onto the canonical simplex, which is recursively
bisected. Every live leaf of the partition tree sits in a priority frontier
ordered by potential; each iteration splits the most promising leaf, which
costs at most one objective evaluation (the midpoint of its longest edge).

Usage::

    from hypersimplex import Optimizer

    opt = Optimizer(func, bounds=[(0, 1), (0, 1)], maxfev=200)
    res = opt.run()
    print(res.x, res.fun)
"""
import collections
import enum
import logging
import numbers
import time

import numpy
from scipy.optimize import OptimizeResult

from hypersimplex._exceptions import (DegenerateSimplex, EvaluationError,
                                      HypersimplexError)
from hypersimplex._frontier import Frontier
from hypersimplex._potential import DepthScorer, PotentialScorer
from hypersimplex._simplex import SimplexNode
from hypersimplex._space import SearchSpace
from hypersimplex._subdivide import bisect, split_point
from hypersimplex._vertex import VertexCacheBase, VertexCacheField


class State(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    RUNNING = 'running'
    CONVERGED = 'converged'
    BUDGET_EXHAUSTED = 'budget_exhausted'


TERMINAL_STATES = (State.CONVERGED, State.BUDGET_EXHAUSTED)

STATUS = {State.BUDGET_EXHAUSTED: 0,
          State.CONVERGED: 1,
          State.RUNNING: 2,
          State.UNINITIALIZED: 3}

# depth is None for the initialization step, x_new and f_new are None when
# the split point was already known
StepResult = collections.namedtuple(
    'StepResult', ['state', 'nit', 'nfev', 'fun', 'x', 'depth', 'x_new',
                   'f_new'])


def _check_limit(name, value, integer=True):
    if value is None:
        return None
    kind = numbers.Integral if integer else numbers.Real
    if isinstance(value, bool) or not isinstance(value, kind) or value <= 0:
        raise ValueError(f"{name} must be a positive "
                         f"{'integer' if integer else 'number'}, "
                         f"got {value!r}")
    return value


def _check_target(name, value):
    if value is None:
        return None
    if (isinstance(value, bool) or not isinstance(value, numbers.Real)
            or not numpy.isfinite(value)):
        raise ValueError(f"{name} must be a finite real number, "
                         f"got {value!r}")
    return value


class Optimizer:
    def __init__(self, func, bounds, func_args=(), exploration_depth=5,
                 minimize=True, maxfev=None, maxiter=None, maxtime=None,
                 f_min=None, f_tol=1e-12, patience=None, potential_tol=None,
                 scorer=None):
        """
        Optimizer over the hyperrectangle ``bounds``.

        :param func: objective f(x, *func_args) --> float where x is a numpy
                     array in user space. May be None when the optimizer is
                     driven through ask() and tell().
        :param bounds: list of (x_l, x_u) tuples, one per variable
        :param func_args: tuple, additional arguments passed to func
        :param exploration_depth: int >= 0, number of splits a promising
                region may be refined before the rest of the domain is
                explored again. 0 behaves like a grid search, large values
                are greedy.
        :param minimize: bool, False to maximize func instead
        :param maxfev: int, stop after this many objective evaluations
        :param maxiter: int, stop after this many splits
        :param maxtime: float, stop after this many seconds
        :param f_min: float, stop once a value within f_tol of f_min is found
        :param f_tol: float, tolerance on f_min
        :param patience: int, declare convergence when the best value has not
                         improved for this many splits
        :param potential_tol: float, declare convergence when the highest
                              potential in the frontier falls below this
        :param scorer: PotentialScorer, replaces the default DepthScorer
        :raises InvalidDomain: for malformed bounds
        :raises ValueError: for invalid settings
        """
        # Domain
        self.space = SearchSpace(bounds)
        self.dim = self.space.dim

        # Field function
        self.func = func
        self.func_args = func_args
        self.minimize = bool(minimize)
        self.sign = 1.0 if self.minimize else -1.0

        # Stopping criteria
        self.maxfev = _check_limit('maxfev', maxfev)
        self.maxiter = _check_limit('maxiter', maxiter)
        self.maxtime = _check_limit('maxtime', maxtime, integer=False)
        self.patience = _check_limit('patience', patience)
        self.f_min = _check_target('f_min', f_min)
        if not f_tol >= 0:
            raise ValueError(f"f_tol must be non-negative, got {f_tol!r}")
        self.f_tol = f_tol
        self.potential_tol = _check_target('potential_tol', potential_tol)

        # Potential scoring
        if scorer is None:
            scorer = DepthScorer(exploration_depth, self.space.root_volume)
        elif not isinstance(scorer, PotentialScorer):
            raise TypeError(f"{scorer!r} does not implement PotentialScorer")
        self.scorer = scorer
        self.exploration_depth = exploration_depth

        # Cache of all vertices
        if func is not None:
            self.V = VertexCacheField(self.space, func, func_args)
        else:
            self.V = VertexCacheBase(self.space)

        self.frontier = Frontier()
        self.state = State.UNINITIALIZED
        self.message = "Optimization has not started."
        self.nit = 0  # Splits performed
        self.seq = 0  # Nodes created
        self.stall = 0  # Splits since the last improvement
        self.best = None  # Best vertex
        self.f_best = None  # Values in minimization sense
        self.f_worst = None
        self._pending = None  # (node, x, x_u) awaiting tell()
        self._t0 = None

        if self.maxfev is not None and self.maxfev < self.dim + 1:
            logging.warning(f"maxfev = {self.maxfev} is below the "
                            f"{self.dim + 1} evaluations needed to "
                            f"initialize a {self.dim}-dimensional search")

    # %% Best so far
    @property
    def fun(self):
        """Best objective value found so far (None before any evaluation)."""
        return None if self.best is None else self.best.f

    @property
    def x(self):
        """User space point of the best value found so far."""
        return None if self.best is None else self.best.x_u.copy()

    def result(self):
        """OptimizeResult for the current best, valid at any point."""
        if len(self.V):
            xv = numpy.array([v.x_u for v in self.V])
            funv = numpy.array([v.f for v in self.V])
        else:
            xv = numpy.empty((0, self.dim))
            funv = numpy.empty(0)

        return OptimizeResult(x=self.x, fun=self.fun, nfev=self.V.nfev,
                              nit=self.nit,
                              success=(self.state in TERMINAL_STATES),
                              status=STATUS[self.state], message=self.message,
                              state=self.state, xv=xv, funv=funv)

    # %% Driver
    def run(self):
        """
        Iterate until a stopping criterion is met.

        :return: OptimizeResult
        :raises HypersimplexError: on any fatal error, with the best result
                found up to that point attached as ``error.result``
        """
        if self.func is None:
            raise RuntimeError("run() requires an objective, use ask() and "
                               "tell() without one")
        if all(c is None for c in (self.maxfev, self.maxiter, self.maxtime,
                                   self.f_min, self.patience,
                                   self.potential_tol)):
            raise ValueError("No stopping criterion was specified, set at "
                             "least one of maxfev, maxiter, maxtime, f_min, "
                             "patience or potential_tol")
        try:
            while self.state not in TERMINAL_STATES:
                self.advance()
        except HypersimplexError as e:
            e.result = self.result()
            raise

        logging.info(f"{self.message} Best value {self.fun} at x = {self.x} "
                     f"after {self.V.nfev} evaluations and {self.nit} splits")
        return self.result()

    def advance(self):
        """
        Initialize the search or perform one split.

        :return: StepResult
        """
        self._check_running()
        if self.func is None:
            raise RuntimeError("advance() requires an objective, use ask() "
                               "and tell() without one")
        if self._pending is not None:
            raise RuntimeError("An ask() is still waiting for its tell()")
        if self._t0 is None:
            self._t0 = time.perf_counter()

        if self.state is State.UNINITIALIZED:
            for x in self.space.corners():
                self._record(self.V[x])
            self._build_root()
            return self._step(None, None, improved=True)

        node = self._select()
        try:
            x = split_point(node)
            known = x in self.V
            vc = self.V[x]
            improved = False if known else self._record(vc)
            self._split(node, vc)
        except (EvaluationError, DegenerateSimplex):
            # Keep the partition intact for the partial result
            self.frontier.push(node)
            raise

        return self._step(node.depth, None if known else vc, improved)

    def __iter__(self):
        return self

    def __next__(self):
        """One step, returning (best value, best point) so far."""
        if self.state in TERMINAL_STATES:
            raise StopIteration
        self.advance()
        return self.fun, self.x

    # %% Ask and tell
    def ask(self):
        """
        The next user space point to evaluate. Repeated calls return the same
        point until a value is given to tell().

        Splits whose point was already evaluated are carried out here and
        count as iterations, so a stopping criterion can be met inside ask().
        None is returned in that case and the optimizer is left in its
        terminal state.
        """
        self._check_running()
        if self._pending is not None:
            return self._pending[2].copy()
        if self._t0 is None:
            self._t0 = time.perf_counter()

        if self.state is State.UNINITIALIZED:
            for x in self.space.corners():
                if x not in self.V:
                    self._pending = (None, x, self.space.to_user(x))
                    return self._pending[2].copy()
            self._build_root()

        while True:
            node = self._select()
            try:
                x = split_point(node)
                if x not in self.V:
                    break
                # Split points shared with an earlier split cost nothing
                self._split(node, self.V[x])
            except DegenerateSimplex:
                self.frontier.push(node)
                raise
            self._step(node.depth, None, improved=False)
            if self.state in TERMINAL_STATES:
                return None

        self._pending = (node, x, self.space.to_user(x))
        return self._pending[2].copy()

    def tell(self, value):
        """
        Record the objective value at the last point returned by ask().

        :return: StepResult
        :raises EvaluationError: if value is not a finite scalar, the point
                                 stays pending
        """
        if self._pending is None:
            raise RuntimeError("tell() called without a preceding ask()")
        node, x, x_u = self._pending
        v = self.V.insert(x, value)
        self._pending = None
        improved = self._record(v)

        if node is None:
            if all(c in self.V for c in self.space.corners()):
                self._build_root()
            return self._step(None, v, improved=True)

        try:
            self._split(node, v)
        except DegenerateSimplex:
            self.frontier.push(node)
            raise
        return self._step(node.depth, v, improved=improved)

    # %% Internals
    def _check_running(self):
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"The optimizer has terminated "
                               f"({self.state.value}), create a new one to "
                               f"start another run")

    def _record(self, v):
        """Update the value range with a newly evaluated vertex, returns True
        if it is the new best."""
        g = self.sign * v.f
        if self.f_worst is None or g > self.f_worst:
            self.f_worst = g
        if self.best is None or g < self.f_best:
            self.best = v
            self.f_best = g
            logging.debug(f"New best value {v.f} at x = {v.x_u}")
            return True
        return False

    def _context(self):
        return (self.f_best, self.f_worst)

    def _score(self, node):
        node.context = self._context()
        value = self.sign * node.best_vertex(self.sign).f
        potential = self.scorer.score(value, node.volume, node.depth,
                                      node.context)
        if not numpy.isfinite(potential):
            raise ValueError(f"{self.scorer!r} returned a non-finite "
                             f"potential {potential} for {node}")
        node.potential = float(potential)

    def _build_root(self):
        root = SimplexNode([self.V[x] for x in self.space.corners()],
                           depth=0, seq=self.seq)
        self.seq += 1
        self._score(root)
        self.frontier.push(root)
        self.state = State.RUNNING
        self.message = "Optimization is running."
        logging.info(f"Initialized search over {self.space.bounds} with "
                     f"{self.V.nfev} evaluations, best value {self.fun}")

    def _select(self):
        """Pop the most promising leaf.

        Potentials depend on the value range seen when a leaf was scored. A
        leaf scored under an outdated range is rescored and pushed back,
        at most once per leaf in the frontier.
        """
        node = self.frontier.pop()
        context = self._context()
        n_iter = 0
        max_iter = len(self.frontier)
        while node.context != context and n_iter < max_iter:
            self._score(node)
            self.frontier.push(node)
            node = self.frontier.pop()
            n_iter += 1
        return node

    def _split(self, node, vc):
        children = bisect(node, vc, self.seq)
        self.seq += len(children)
        for child in children:
            self._score(child)
            self.frontier.push(child)
        self.nit += 1

    def _step(self, depth, v, improved):
        if depth is not None:
            self.stall = 0 if improved else self.stall + 1
        if self.state is State.RUNNING:
            self._check_stop()

        if v is None:
            x_new, f_new = None, None
        else:
            x_new, f_new = v.x_u.copy(), v.f
        return StepResult(self.state, self.nit, self.V.nfev, self.fun,
                          self.x, depth, x_new, f_new)

    def _check_stop(self):
        if (self.f_min is not None
                and self.f_best <= self.sign * self.f_min + self.f_tol):
            self._terminate(State.BUDGET_EXHAUSTED,
                            "Target objective value reached.")
        elif self.maxfev is not None and self.V.nfev >= self.maxfev:
            self._terminate(State.BUDGET_EXHAUSTED,
                            "Maximum number of function evaluations reached.")
        elif self.maxiter is not None and self.nit >= self.maxiter:
            self._terminate(State.BUDGET_EXHAUSTED,
                            "Maximum number of iterations reached.")
        elif (self.maxtime is not None
                and time.perf_counter() - self._t0 >= self.maxtime):
            self._terminate(State.BUDGET_EXHAUSTED,
                            "Maximum time reached.")
        elif self.patience is not None and self.stall >= self.patience:
            self._terminate(State.CONVERGED,
                            f"Best value did not improve for "
                            f"{self.patience} iterations.")
        elif (self.potential_tol is not None
                and self.frontier.max_potential() < self.potential_tol):
            self._terminate(State.CONVERGED,
                            "Highest potential fell below potential_tol.")

    def _terminate(self, state, message):
        self.state = state
        self.message = message
