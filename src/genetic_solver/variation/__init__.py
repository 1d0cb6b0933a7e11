"""
Variation operators: crossover and mutation.
"""

from .crossover import SinglePointCrossover
from .mutation import PointMutation

__all__ = [
    "SinglePointCrossover",
    "PointMutation",
]
