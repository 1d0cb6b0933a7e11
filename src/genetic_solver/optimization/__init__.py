"""
Optimization module for the genetic solver.

This module contains the machinery that advances generations: the evaluation
scheduler, the generation evolver, the periodic tick driver, and the
GeneticSolver facade that ties them together.
"""

from .config import SolverConfig, parse_ratio
from .scheduler import EvaluationScheduler
from .evolver import GenerationEvolver
from .driver import TickDriver
from .solver import GeneticSolver, make_rng

__all__ = [
    "SolverConfig",
    "parse_ratio",
    "EvaluationScheduler",
    "GenerationEvolver",
    "TickDriver",
    "GeneticSolver",
    "make_rng",
]
