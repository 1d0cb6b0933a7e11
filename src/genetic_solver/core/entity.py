"""
Core data structure for the genetic solver.

This module defines the Entity class, which represents a single candidate
solution: a fixed-length real-valued genome, its fitness and the lifecycle
state that tracks whether the fitness is known yet.
"""

from dataclasses import dataclass
from enum import IntEnum
import numpy as np

from ..exceptions import InvalidTransitionError


class EntityState(IntEnum):
    """Lifecycle of an entity within one generation."""

    NEW = 0
    PENDING = 1
    EVALUATED = 2


# How an entity came to exist
ORIGIN_INITIAL = "initial"
ORIGIN_ELITE = "elite"
ORIGIN_CLONE = "clone"
ORIGIN_OFFSPRING = "offspring"


@dataclass(eq=False)
class Entity:
    """
    Represents a single candidate solution.

    Entities only ever move forward through their lifecycle:
    NEW -> PENDING (fitness evaluation dispatched) -> EVALUATED (result
    recorded). Carry-over entities (elites, or children produced with neither
    crossover nor mutation) are constructed directly in the EVALUATED state
    with their parent's fitness.

    Attributes:
        genome: Gene values, float64 array of the solver's genome size
        fitness: Fitness score, meaningful only once EVALUATED
        state: Current lifecycle state
        origin: How the entity was produced (initial/elite/clone/offspring)
    """

    genome: np.ndarray
    fitness: float = 0.0
    state: EntityState = EntityState.NEW
    origin: str = ORIGIN_INITIAL

    def __post_init__(self):
        self.genome = np.array(self.genome, dtype=np.float64)
        self.state = EntityState(self.state)

    @classmethod
    def carried_over(cls, parent: "Entity", origin: str) -> "Entity":
        """
        Build an already-evaluated copy of a parent.

        Args:
            parent: Evaluated entity to copy
            origin: ORIGIN_ELITE or ORIGIN_CLONE

        Returns:
            New entity sharing the parent's genome values, fitness and state
        """
        if parent.state is not EntityState.EVALUATED:
            raise InvalidTransitionError(
                f"Only evaluated entities can be carried over, got {parent.state.name}"
            )
        return cls(
            genome=parent.genome.copy(),
            fitness=parent.fitness,
            state=EntityState.EVALUATED,
            origin=origin,
        )

    @property
    def size(self) -> int:
        """Number of genes."""
        return len(self.genome)

    def is_new(self) -> bool:
        return self.state is EntityState.NEW

    def is_pending(self) -> bool:
        return self.state is EntityState.PENDING

    def is_evaluated(self) -> bool:
        return self.state is EntityState.EVALUATED

    def mark_pending(self) -> None:
        """Transition NEW -> PENDING when a fitness evaluation is dispatched."""
        if self.state is not EntityState.NEW:
            raise InvalidTransitionError(
                f"Cannot dispatch an entity in state {self.state.name}"
            )
        self.state = EntityState.PENDING

    def mark_evaluated(self, fitness: float) -> None:
        """Transition PENDING -> EVALUATED and record the fitness."""
        if self.state is not EntityState.PENDING:
            raise InvalidTransitionError(
                f"Cannot record fitness for an entity in state {self.state.name}"
            )
        self.fitness = float(fitness)
        self.state = EntityState.EVALUATED

    def __repr__(self) -> str:
        fitness_str = f"{self.fitness:.4f}" if self.is_evaluated() else "None"
        return (
            f"Entity(state={self.state.name}, "
            f"origin={self.origin}, "
            f"fitness={fitness_str}, "
            f"genes={self.size})"
        )
