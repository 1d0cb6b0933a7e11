"""
Fixtures for unit tests.
"""

import pytest
from genetic_solver.core.entity import Entity
from genetic_solver.core.population import Population


@pytest.fixture
def sample_entity():
    """Create a sample new entity for testing."""
    return Entity(genome=[0.1, 0.2, 0.3, 0.4, 0.5])


@pytest.fixture
def sample_population():
    """Create a population whose next generation is fully evaluated."""
    population = Population(genome_size=5)
    population.initialize(10, lambda index: float(index))
    for i, entity in enumerate(population.next):
        entity.genome[:] = float(i)
        entity.mark_pending()
        entity.mark_evaluated(float(i) * 5)
    return population
