"""
Genetic solver: the public entry point of the package.

This module wires the population, the evaluation scheduler, the generation
evolver and the tick driver together behind a small API for configuring the
search and querying its progress.
"""

import asyncio
import logging
import numbers
from typing import Any, Callable, List, Optional, Union

import numpy as np

from ..core.entity import Entity, ORIGIN_ELITE, ORIGIN_CLONE
from ..core.population import Population, Candidate, Progress
from ..exceptions import ConfigurationError
from ..variation.crossover import SinglePointCrossover
from ..variation.mutation import PointMutation
from .config import SolverConfig
from .driver import TickDriver
from .evolver import GenerationEvolver
from .scheduler import EvaluationScheduler, FitnessFunction

logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


def make_rng(source: RandomSource) -> np.random.Generator:
    """
    Build the solver's random number generator.

    Args:
        source: An existing Generator (used as is), an int seed, or None for
                fresh OS entropy

    Returns:
        numpy Generator
    """
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


class GeneticSolver:
    """
    Evolves fixed-length real-valued genomes towards higher fitness.

    The client supplies how genes are created and mutated, and how a genome's
    fitness is measured. Fitness evaluation is asynchronous and may take any
    amount of time; the solver keeps at most ``max_simultaneous_calls``
    evaluations in flight and only advances to a new generation once every
    entity of the current one has been evaluated.

    The solver starts paused. Each tick (run by the driver, or called directly)
    initializes the first generation if needed, dispatches evaluations, and
    evolves a new generation once the barrier is reached.

    Example usage:
        ```python
        async def measure(genome):
            return float(genome.sum())

        solver = GeneticSolver(
            genome_size=20,
            init_gene=lambda i: solver.rng.random(),
            mutate_gene=lambda i, old: solver.rng.random(),
            measure_fitness=measure,
            population=200,
            max_simultaneous_calls=50,
        )
        best = await solver.run(generations=20)
        ```
    """

    def __init__(
        self,
        genome_size: int,
        init_gene: Callable[[int], float],
        mutate_gene: Callable[[int, float], float],
        measure_fitness: FitnessFunction,
        after_generation: Optional[Callable[[], Any]] = None,
        config: Optional[SolverConfig] = None,
        rng: RandomSource = None,
        **overrides: Any
    ):
        """
        Initialize the genetic solver.

        Args:
            genome_size: Number of genes per genome, a positive integer
            init_gene: ``index -> value``, called once per gene of every
                       entity of the first generation
            mutate_gene: ``(index, old_value) -> new_value``, called once per
                         mutation
            measure_fitness: ``genome -> awaitable fitness``; may also return a
                             ``concurrent.futures.Future`` or a plain number
            after_generation: Optional hook called with no arguments after each
                              new generation is built
            config: Solver configuration (defaults to SolverConfig())
            rng: Generator, seed, or None to seed from ``config.seed``
            **overrides: SolverConfig fields to override, e.g. population=200

        Raises:
            ConfigurationError: If genome_size is invalid or a required
                                capability is missing
        """
        if (isinstance(genome_size, bool)
                or not isinstance(genome_size, numbers.Integral)
                or genome_size <= 0):
            raise ConfigurationError(f"Bad genome size: {genome_size!r}")

        for name, capability in (("init_gene", init_gene),
                                 ("mutate_gene", mutate_gene),
                                 ("measure_fitness", measure_fitness)):
            if not callable(capability):
                raise ConfigurationError(f"Client must provide a callable {name}")
        if after_generation is not None and not callable(after_generation):
            raise ConfigurationError("after_generation must be callable")

        config = config if config is not None else SolverConfig()
        if overrides:
            try:
                config = config.replace(**overrides)
            except TypeError as e:
                raise ConfigurationError(f"Unknown solver setting: {e}") from e

        self.genome_size = int(genome_size)
        self.init_gene = init_gene
        self.mutate_gene = mutate_gene
        self.measure_fitness = measure_fitness
        self.after_generation = after_generation
        self.rng = make_rng(rng if rng is not None else config.seed)
        self.paused = True
        self._stop_at: Optional[int] = None

        self.population = Population(self.genome_size)
        self.scheduler = EvaluationScheduler(self.population, measure_fitness, config)
        self.evolver = GenerationEvolver(
            self.population,
            crossover=SinglePointCrossover(self.rng),
            mutation=PointMutation(mutate_gene, self.rng),
            config=config,
            rng=self.rng,
        )
        self._driver = TickDriver(self.tick, lambda: self._config.tick_interval)
        self.config = config

        logger.info(f"Initialized GeneticSolver with {self.genome_size} genes, "
                    f"population {config.population}")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> SolverConfig:
        """Solver configuration; fields may be changed at any time."""
        return self._config

    @config.setter
    def config(self, config: SolverConfig) -> None:
        self._config = config
        self.scheduler.config = config
        self.evolver.config = config
        logging.getLogger("genetic_solver").setLevel(getattr(logging, config.log_level))

    def pause(self) -> None:
        """Stop ticks from doing work; evaluations in flight keep running."""
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    # ------------------------------------------------------------------
    # Core loop
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """
        Run one step of the solver.

        Must be called from within a running event loop, since evaluations are
        scheduled on it.
        """
        if self.paused:
            return

        population = self.population
        if not population.is_initialized():
            population.initialize(self._config.population, self.init_gene)

        self.scheduler.step()

        if population.is_ready_to_evolve():
            self.evolver.advance()
            self._log_generation_stats()
            if self._stop_at is not None and population.generation >= self._stop_at:
                self.paused = True
            if self.after_generation is not None:
                self.after_generation()

    def _log_generation_stats(self) -> None:
        if not self._config.log_generation_stats:
            return

        stats = self.population.statistics()
        origins = stats["origins"]
        logger.info(
            f"Gen {self.population.generation}: "
            f"fitness={stats['avg_fitness']:.3f}/{stats['best_fitness']:.3f}, "
            f"elites={origins.get(ORIGIN_ELITE, 0)}, "
            f"clones={origins.get(ORIGIN_CLONE, 0)}, "
            f"pop_size={len(self.population)}"
        )

    # ------------------------------------------------------------------
    # Driver lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start ticking in the background (idempotent). Does not unpause."""
        self._driver.start()

    async def stop(self, cancel_evaluations: bool = False) -> None:
        """
        Stop ticking.

        Args:
            cancel_evaluations: Also cancel evaluations still in flight; their
                                entities stay pending
        """
        try:
            await self._driver.stop()
        finally:
            if cancel_evaluations:
                self.scheduler.cancel_all()

    def is_running(self) -> bool:
        return self._driver.is_running()

    async def run(self, generations: int, timeout: Optional[float] = None) -> Optional[Candidate]:
        """
        Unpause, drive the solver until it reaches a generation, then pause.

        If the driver was not already running, it is started here and stopped
        again before returning.

        Args:
            generations: Generation number to reach
            timeout: Optional limit in seconds (raises asyncio.TimeoutError)

        Returns:
            The fittest candidate of the current generation
        """
        async def wait_for_generation():
            while self.population.generation < generations:
                self._driver.raise_if_stopped()
                await asyncio.sleep(self._config.tick_interval)

        started_here = not self.is_running()
        self._stop_at = generations
        self.resume()
        self.start()
        try:
            await asyncio.wait_for(wait_for_generation(), timeout)
        finally:
            self._stop_at = None
            self.pause()
            if started_here:
                await self._driver.stop()

        return self.get_candidate(0)

    async def __aenter__(self) -> "GeneticSolver":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop(cancel_evaluations=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self.population.generation

    @property
    def current(self) -> List[Entity]:
        """The last evaluated generation, fittest first (a shallow copy)."""
        return list(self.population.current)

    def get_candidate(self, rank: int) -> Optional[Candidate]:
        """
        Get a ranked candidate of the current generation.

        Args:
            rank: 0 for the fittest

        Returns:
            Candidate(fitness, genome) with an independent genome copy, or None
            if there is no candidate at that rank
        """
        return self.population.candidate(rank)

    def get_progress(self) -> Progress:
        """Generation number and new/pending/evaluated counts of the next generation."""
        return self.population.progress()

    def __repr__(self) -> str:
        return (
            f"GeneticSolver(genes={self.genome_size}, "
            f"generation={self.generation}, "
            f"paused={self.paused}, "
            f"running={self.is_running()})"
        )
