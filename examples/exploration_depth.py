"""
The exploration/exploitation trade-off.

exploration_depth is the number of times a promising region may be split
before the rest of the domain is looked at again. With 0 the domain is
covered level by level like a grid, large values refine the best region
greedily.
"""
import numpy as np
from hypersimplex import minimize


def sphere(x):
    return (x[0] - 0.3)**2 + (x[1] - 0.7)**2


bounds = [(0.0, 1.0), (0.0, 1.0)]
optimum = np.array([0.3, 0.7])

print(f"{'depth':>6} {'best f':>12} {'near optimum':>14} {'quadrants':>24}")
for exploration_depth in (0, 2, 5, 20, 50):
    res = minimize(sphere, bounds, maxfev=200,
                   exploration_depth=exploration_depth)

    # Share of evaluations within 0.2 of the optimum
    near = np.mean(np.linalg.norm(res.xv - optimum, axis=1) < 0.2)

    # Share of evaluations in each quadrant of the domain
    quadrants = np.bincount(2 * (res.xv[:, 0] >= 0.5) + (res.xv[:, 1] >= 0.5),
                            minlength=4) / len(res.xv)
    print(f"{exploration_depth:>6} {res.fun:>12.3e} {near:>14.2f} "
          f"{np.array2string(quadrants, precision=2):>24}")
