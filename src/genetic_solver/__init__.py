"""
genetic-solver: an asynchronous genetic algorithm for real-valued genomes.
"""

from .core import Entity, EntityState, Population, Candidate, Progress
from .exceptions import (
    GeneticSolverError,
    ConfigurationError,
    InvalidTransitionError,
    EvaluationError,
)
from .optimization import GeneticSolver, SolverConfig
from .selection import select_rank, DEFAULT_RANK_SELECTION_BIAS

__version__ = "0.1.0"

__all__ = [
    "GeneticSolver",
    "SolverConfig",
    "Entity",
    "EntityState",
    "Population",
    "Candidate",
    "Progress",
    "select_rank",
    "DEFAULT_RANK_SELECTION_BIAS",
    "GeneticSolverError",
    "ConfigurationError",
    "InvalidTransitionError",
    "EvaluationError",
]
