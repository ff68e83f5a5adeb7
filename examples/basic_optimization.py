"""
Minimizing a multimodal function over a box.

The eggholder function has a large number of local minima on
[-512, 512]^2; its global minimum f(512, 404.2319) = -959.6407 lies on the
boundary of the domain.
"""
import numpy as np
from hypersimplex import minimize


def eggholder(x):
    return (-(x[1] + 47.0)
            * np.sin(np.sqrt(abs(x[0] / 2.0 + (x[1] + 47.0))))
            - x[0] * np.sin(np.sqrt(abs(x[0] - (x[1] + 47.0)))))


bounds = [(-512.0, 512.0), (-512.0, 512.0)]

res = minimize(eggholder, bounds, maxfev=500)
print(res.message)
print(f"Best value f(x) = {res.fun:.4f} at x = {res.x}")
print(f"Evaluations: {res.nfev}, splits: {res.nit}")

# Every evaluated point is kept in the result
order = np.argsort(res.funv)
print("\nFive best evaluations:")
for i in order[:5]:
    print(f"  x={res.xv[i]}, f(x)={res.funv[i]:.4f}")

# Stop as soon as a target value is reached instead
res = minimize(eggholder, bounds, maxfev=2000, f_min=-900.0, f_tol=1e-12)
print(f"\n{res.message} f(x) = {res.fun:.4f} after {res.nfev} evaluations")
