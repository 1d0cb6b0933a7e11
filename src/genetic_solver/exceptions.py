"""
Exception hierarchy for the genetic solver.
"""


class GeneticSolverError(Exception):
    """Base for all genetic solver exceptions."""

    pass


class ConfigurationError(GeneticSolverError, ValueError):
    """Invalid genome size, missing client capability or bad setting."""

    pass


class InvalidTransitionError(GeneticSolverError):
    """An entity was asked to move backwards in its lifecycle."""

    pass


class EvaluationError(GeneticSolverError):
    """A fitness evaluation failed or produced an unusable result."""

    pass
