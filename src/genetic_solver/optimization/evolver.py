"""
Generation evolver for the genetic solver.

Once every entity of the next generation is evaluated, the evolver ranks it,
publishes it as the queryable ``current`` generation and builds a fresh
``next`` generation through elitism, rank selection, crossover and mutation.
"""

import logging
from typing import List

import numpy as np

from ..core.entity import Entity, ORIGIN_ELITE, ORIGIN_CLONE, ORIGIN_OFFSPRING
from ..core.population import Population
from ..exceptions import GeneticSolverError
from ..selection.rank import select_rank
from ..variation.crossover import SinglePointCrossover
from ..variation.mutation import PointMutation
from .config import SolverConfig

logger = logging.getLogger(__name__)


class GenerationEvolver:
    """
    Produces each new generation from the last evaluated one.

    Example usage:
        ```python
        evolver = GenerationEvolver(population, crossover, mutation, config, rng)
        if population.is_ready_to_evolve():
            evolver.advance()
        ```
    """

    def __init__(
        self,
        population: Population,
        crossover: SinglePointCrossover,
        mutation: PointMutation,
        config: SolverConfig,
        rng: np.random.Generator
    ):
        """
        Initialize the generation evolver.

        Args:
            population: Population to evolve
            crossover: Crossover operator
            mutation: Mutation operator
            config: Solver configuration (read on every advance)
            rng: Random number generator for selection and coin flips
        """
        self.population = population
        self.crossover = crossover
        self.mutation = mutation
        self.config = config
        self.rng = rng

    def advance(self) -> None:
        """
        Turn the evaluated next generation into the current one and build a new
        next generation.

        Steps:
        1. Rank the next generation fittest first (stable, so ties keep
           insertion order)
        2. Copy the top ``keep_fittest_candidates`` entities verbatim
        3. Fill up to ``population`` entities with reproduced children
        4. Publish both generations and bump the generation counter
        """
        if not self.population.is_ready_to_evolve():
            raise GeneticSolverError("Cannot evolve before every entity is evaluated")

        ranked = sorted(self.population.next, key=lambda e: e.fitness, reverse=True)
        target_size = self.config.population

        n_elites = min(self.config.keep_fittest_candidates, target_size, len(ranked))
        next_generation = [Entity.carried_over(entity, ORIGIN_ELITE)
                           for entity in ranked[:n_elites]]

        while len(next_generation) < target_size:
            next_generation.append(self.reproduce(ranked))

        self.population.publish(ranked, next_generation)

        logger.debug(f"Generation {self.population.generation}: {n_elites} elites + "
                     f"{target_size - n_elites} children")

    def reproduce(self, ranked: List[Entity]) -> Entity:
        """
        Create one child from a ranked generation.

        A child produced with neither crossover nor mutation is an exact copy
        of its parent, so it inherits the parent's fitness and is already
        evaluated. Any other child starts as NEW.

        Args:
            ranked: Evaluated entities sorted fittest first

        Returns:
            New child entity
        """
        size = len(ranked)
        bias = self.config.rank_selection_bias
        do_cross = self.rng.random() < self.config.crossover_chance
        do_mut = self.rng.random() < self.config.mutation_chance

        parent = ranked[select_rank(size, bias, self.rng)]

        if not (do_cross or do_mut):
            return Entity.carried_over(parent, ORIGIN_CLONE)

        if do_cross:
            other = ranked[select_rank(size, bias, self.rng)]
            genome = self.crossover.crossover(parent.genome, other.genome)
        else:
            genome = parent.genome.copy()

        if do_mut:
            self.mutation.mutate(genome)

        return Entity(genome=genome, origin=ORIGIN_OFFSPRING)
