"""
Core data model: entities and the two-generation population.
"""

from .entity import (
    Entity,
    EntityState,
    ORIGIN_INITIAL,
    ORIGIN_ELITE,
    ORIGIN_CLONE,
    ORIGIN_OFFSPRING,
)
from .population import Population, Candidate, Progress

__all__ = [
    "Entity",
    "EntityState",
    "ORIGIN_INITIAL",
    "ORIGIN_ELITE",
    "ORIGIN_CLONE",
    "ORIGIN_OFFSPRING",
    "Population",
    "Candidate",
    "Progress",
]
