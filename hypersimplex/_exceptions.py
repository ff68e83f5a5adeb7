"""Exceptions raised by hypersimplex.

Errors propagate to the caller without retries. Optimizer.run() attaches the
best result found so far to the raised error as ``error.result``.
"""


class HypersimplexError(Exception):
    """Base class for all hypersimplex errors."""


class InvalidDomain(HypersimplexError, ValueError):
    """The hypercube bounds are malformed (raised before any evaluation)."""


class DegenerateSimplex(HypersimplexError, ArithmeticError):
    """A simplex with zero (or non-finite) volume was constructed.

    This indicates a construction bug or exhausted floating point resolution,
    not a condition the caller can recover from.
    """


class EvaluationError(HypersimplexError, RuntimeError):
    """The objective failed at ``point`` (user space)."""

    def __init__(self, point, reason):
        self.point = point
        self.reason = reason
        super().__init__(f"Objective evaluation failed at x = {point}: "
                         f"{reason}")


class FrontierExhausted(HypersimplexError, RuntimeError):
    """No leaf simplex is left to subdivide."""
