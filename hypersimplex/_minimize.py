from hypersimplex._optimizer import Optimizer


def minimize(func, bounds, maxfev=None, func_args=(), exploration_depth=5,
             **options):
    """
    Find the global minimum of func over the hyperrectangle bounds.

    :param func: objective f(x, *func_args) --> float
    :param bounds: list of (x_l, x_u) tuples, one per variable
    :param maxfev: int, evaluation budget (the dim + 1 corner evaluations of
                   the initialization included)
    :param func_args: tuple, additional arguments passed to func
    :param exploration_depth: int >= 0, see Optimizer
    :param options: further stopping criteria and settings of Optimizer
    :return: OptimizeResult

    Usage::

        res = minimize(lambda x: x[0] * x[1], [(-10, 10), (-20, 20)],
                       maxfev=100)
        print(f"min value: {res.fun} found at {res.x}")
    """
    return Optimizer(func, bounds, func_args=func_args,
                     exploration_depth=exploration_depth, minimize=True,
                     maxfev=maxfev, **options).run()


def maximize(func, bounds, maxfev=None, func_args=(), exploration_depth=5,
             **options):
    """
    Find the global maximum of func over the hyperrectangle bounds, with the
    same arguments as minimize(). The returned ``fun`` is the maximum itself.
    """
    return Optimizer(func, bounds, func_args=func_args,
                     exploration_depth=exploration_depth, minimize=False,
                     maxfev=maxfev, **options).run()
