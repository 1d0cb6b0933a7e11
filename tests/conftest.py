"""
Shared fixtures for the genetic solver tests.
"""

import asyncio

import pytest
import numpy as np
from genetic_solver.core.entity import Entity
from genetic_solver.core.population import Population


async def _drain(cycles: int = 5) -> None:
    for _ in range(cycles):
        await asyncio.sleep(0)


@pytest.fixture
def drain():
    """Coroutine that lets pending event-loop callbacks (evaluation completions) run."""
    return _drain


@pytest.fixture
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def make_evaluated():
    """Factory for entities that went through a full NEW -> EVALUATED cycle."""
    def factory(genome, fitness):
        entity = Entity(genome=genome)
        entity.mark_pending()
        entity.mark_evaluated(fitness)
        return entity
    return factory


@pytest.fixture
def evaluated_population():
    """
    Factory for a population whose next generation is fully evaluated.

    Entity i has every gene equal to i and fitness equal to the genome sum,
    so fitter entities sit at the end of ``next`` before ranking.
    """
    def factory(size: int = 10, genome_size: int = 6):
        population = Population(genome_size=genome_size)
        population.initialize(size, lambda index: 0.0)
        for i, entity in enumerate(population.next):
            entity.genome[:] = float(i)
            entity.mark_pending()
            entity.mark_evaluated(float(entity.genome.sum()))
        return population
    return factory
