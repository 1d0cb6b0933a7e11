"""
Evaluation scheduler for the genetic solver.

Each tick, the scheduler dispatches fitness evaluations for new entities of the
next generation, never letting more than the configured number run at once.
Evaluations are independent asyncio futures; the scheduler does not wait for
them. Their results are recorded by done-callbacks, which run on the event loop
thread and are therefore the single writer of each entity's final state.
"""

import asyncio
import concurrent.futures
import inspect
import logging
import math
import numbers
from typing import Any, Awaitable, Callable, Set

import numpy as np

from ..core.entity import Entity, EntityState
from ..core.population import Population
from ..exceptions import EvaluationError
from .config import SolverConfig

logger = logging.getLogger(__name__)

FitnessFunction = Callable[[np.ndarray], Awaitable[float]]


class EvaluationScheduler:
    """
    Dispatches fitness evaluations under a concurrency cap.

    Attributes:
        population: Population whose next generation is evaluated
        measure_fitness: Client evaluator, ``genome -> awaitable float``
        config: Solver configuration (read on every step)
        in_flight: Futures of evaluations that have not completed yet
    """

    def __init__(
        self,
        population: Population,
        measure_fitness: FitnessFunction,
        config: SolverConfig
    ):
        """
        Initialize the evaluation scheduler.

        Args:
            population: Population to evaluate
            measure_fitness: Client fitness evaluator
            config: Solver configuration
        """
        self.population = population
        self.measure_fitness = measure_fitness
        self.config = config
        self.in_flight: Set[asyncio.Future] = set()

    def step(self) -> int:
        """
        Dispatch evaluations for new entities while capacity allows.

        Returns:
            Number of evaluations dispatched during this step
        """
        entities = self.population.next
        pending = self.population.count(EntityState.PENDING)
        max_calls = self.config.concurrency_cap(len(entities))

        if pending >= max_calls:
            return 0

        dispatched = 0
        for entity in entities:
            if pending >= max_calls:
                break
            if not entity.is_new():
                continue
            entity.mark_pending()
            pending += 1
            dispatched += 1
            self._dispatch(entity)

        if dispatched:
            logger.debug(f"Dispatched {dispatched} evaluations "
                         f"({pending}/{max_calls} in flight)")
        return dispatched

    def _dispatch(self, entity: Entity) -> None:
        """Start one evaluation and attach its completion callback."""
        try:
            result = self.measure_fitness(entity.genome.copy())
        except Exception:
            logger.exception("Fitness evaluation raised before it could be scheduled; "
                             "entity stays pending")
            return

        future = self._as_future(result)
        self.in_flight.add(future)
        future.add_done_callback(lambda f: self._complete(entity, f))

    @staticmethod
    def _as_future(result: Any) -> asyncio.Future:
        """Wrap whatever the evaluator returned into an asyncio future."""
        if isinstance(result, concurrent.futures.Future):
            return asyncio.wrap_future(result)
        if inspect.isawaitable(result):
            return asyncio.ensure_future(result)

        future = asyncio.get_running_loop().create_future()
        future.set_result(result)
        return future

    def _complete(self, entity: Entity, future: asyncio.Future) -> None:
        """Record a finished evaluation on its entity."""
        self.in_flight.discard(future)

        if future.cancelled():
            logger.debug("Fitness evaluation cancelled; entity stays pending")
            return

        try:
            fitness = self._check_result(future.result())
        except Exception as e:
            logger.error(f"Fitness evaluation failed, entity stays pending: {e}",
                         exc_info=e)
            return

        entity.mark_evaluated(fitness)

    @staticmethod
    def _check_result(result: Any) -> float:
        if isinstance(result, bool) or not isinstance(result, numbers.Real):
            raise EvaluationError(
                f"Fitness must be a real number, got {type(result).__name__}"
            )
        if math.isnan(result):
            raise EvaluationError("Fitness must be a real number, got NaN")
        return float(result)

    def cancel_all(self) -> int:
        """
        Cancel every evaluation still in flight.

        Returns:
            Number of evaluations cancelled
        """
        cancelled = 0
        for future in list(self.in_flight):
            if future.cancel():
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} in-flight evaluations")
        return cancelled
