"""
Population management for the genetic solver.

This module defines the Population class, which holds exactly two generations:
the fully evaluated ``current`` snapshot that serves queries, and the ``next``
generation that is being evaluated.
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Optional
import numpy as np

from .entity import Entity, EntityState, ORIGIN_INITIAL

logger = logging.getLogger(__name__)


class Candidate(NamedTuple):
    """Query result for one ranked member of the current generation."""

    fitness: float
    genome: np.ndarray


class Progress(NamedTuple):
    """Processing counts of the next generation."""

    generation: int
    new: int
    pending: int
    evaluated: int


class Population:
    """
    Holds the current and next generations of entities.

    ``current`` is replaced wholesale on every evolution step and never mutated
    afterwards, so it is safe to read at any time. ``next`` is owned by the
    scheduler and the evolver until the generation barrier is crossed.

    Attributes:
        genome_size: Number of genes in every entity
        current: Last evaluated generation, sorted fittest first
        next: Generation under evaluation
        generation: 0 before initialization, then 1 and +1 per evolution
    """

    def __init__(self, genome_size: int):
        """
        Initialize an empty Population.

        Args:
            genome_size: Number of genes per entity
        """
        self.genome_size = genome_size
        self.current: List[Entity] = []
        self.next: List[Entity] = []
        self.generation: int = 0

    def is_initialized(self) -> bool:
        """Check whether the first generation has been created."""
        return len(self.next) > 0

    def initialize(self, size: int, init_gene: Callable[[int], float]) -> None:
        """
        Fill the next generation with freshly initialized entities.

        Args:
            size: Number of entities to create
            init_gene: Client gene factory, called once per gene per entity
        """
        while len(self.next) < size:
            genome = [init_gene(i) for i in range(self.genome_size)]
            self.next.append(Entity(genome=genome, origin=ORIGIN_INITIAL))
        self.generation = 1

        logger.info(f"Initialized population with {len(self.next)} entities "
                    f"of {self.genome_size} genes")

    def count(self, state: EntityState) -> int:
        """Count entities of the next generation in the given state."""
        return sum(1 for entity in self.next if entity.state is state)

    def is_ready_to_evolve(self) -> bool:
        """Generation barrier: every entity of the next generation is evaluated."""
        return self.is_initialized() and all(entity.is_evaluated() for entity in self.next)

    def publish(self, ranked: List[Entity], next_generation: List[Entity]) -> None:
        """
        Replace both generations at once and advance the generation counter.

        Args:
            ranked: Evaluated entities sorted fittest first, the new ``current``
            next_generation: Entities making up the new ``next``
        """
        self.current = ranked
        self.next = next_generation
        self.generation += 1

    def candidate(self, rank: int) -> Optional[Candidate]:
        """
        Get the entity at the given rank of the current generation.

        Args:
            rank: 0 for the fittest entity

        Returns:
            Candidate with a copy of the genome, or None if rank is out of range
        """
        current = self.current
        if rank < 0 or rank >= len(current):
            return None
        entity = current[rank]
        return Candidate(fitness=entity.fitness, genome=entity.genome.copy())

    def progress(self) -> Progress:
        """Snapshot of the next generation's processing counts."""
        counts = {state: 0 for state in EntityState}
        for entity in self.next:
            counts[entity.state] += 1
        return Progress(
            generation=self.generation,
            new=counts[EntityState.NEW],
            pending=counts[EntityState.PENDING],
            evaluated=counts[EntityState.EVALUATED],
        )

    def statistics(self) -> Dict[str, any]:
        """
        Compute statistics of the current generation.

        Returns:
            Dictionary with fitness statistics of ``current`` and the
            origin counts of ``next``
        """
        current = self.current
        if not current:
            return {
                "size": 0,
                "origins": {},
                "avg_fitness": None,
                "best_fitness": None,
                "worst_fitness": None,
            }

        fitness_scores = np.array([entity.fitness for entity in current])
        origins: Dict[str, int] = {}
        for entity in self.next:
            origins[entity.origin] = origins.get(entity.origin, 0) + 1

        return {
            "size": len(current),
            "origins": origins,
            "avg_fitness": float(np.mean(fitness_scores)),
            "best_fitness": float(np.max(fitness_scores)),
            "worst_fitness": float(np.min(fitness_scores)),
        }

    def __repr__(self) -> str:
        progress = self.progress()
        return (
            f"Population(generation={progress.generation}, "
            f"current={len(self.current)}, "
            f"new={progress.new}, "
            f"pending={progress.pending}, "
            f"evaluated={progress.evaluated})"
        )

    def __len__(self) -> int:
        """Get the size of the next generation."""
        return len(self.next)
