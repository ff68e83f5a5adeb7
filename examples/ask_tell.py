"""
Driving the optimizer from outside.

When the objective is an experiment or a remote job, the optimizer can
propose points with ask() and be given the measured values with tell().
The same search can also be stepped one split at a time as an iterator.
"""
import numpy as np
from hypersimplex import Optimizer, State


def experiment(x):
    """Stand-in for an expensive measurement to be maximized."""
    return float(np.exp(-np.sum((x - np.array([2.0, -1.0]))**2)))


bounds = [(-5.0, 5.0), (-5.0, 5.0)]

# Ask and tell, ask() returns None once a stopping criterion is met while it
# performs splits that need no evaluation
opt = Optimizer(None, bounds, minimize=False, maxfev=150, maxiter=400)
while opt.state not in (State.CONVERGED, State.BUDGET_EXHAUSTED):
    x = opt.ask()
    if x is None:
        break
    opt.tell(experiment(x))
res = opt.result()
print(f"ask/tell:  {res.message} f(x) = {res.fun:.6f} at x = {res.x}")

# Stepping through a run with the iterator protocol
opt = Optimizer(experiment, bounds, minimize=False, maxiter=100)
for i, (fun, x) in enumerate(opt):
    if i % 20 == 0:
        print(f"  split {opt.nit:>4}: best f(x) = {fun:.6f} at x = {x}")
print(f"iterator:  {opt.message} nfev = {opt.result().nfev}")
