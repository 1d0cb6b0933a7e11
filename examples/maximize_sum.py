#!/usr/bin/env python3
"""
Trivial example problem for the genetic solver.

A genome is 20 floats in [0, 1); fitness is simply their sum. The fitness
function is asynchronous and sleeps a little to stand in for an expensive or
remote evaluation, so the concurrency cap actually matters.

Usage:
    python examples/maximize_sum.py
    python examples/maximize_sum.py --generations 50 --seed 7
    python examples/maximize_sum.py --config config/solver.yaml
"""

import asyncio
import argparse
import logging
from pathlib import Path

from genetic_solver import GeneticSolver, SolverConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Maximize the sum of a genome of floats with the genetic solver",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (see config/solver.yaml)"
    )
    parser.add_argument(
        "--generations",
        type=int,
        default=20,
        help="Generation number to stop at (default: 20)"
    )
    parser.add_argument(
        "--genome-size",
        type=int,
        default=20,
        help="Number of genes per genome (default: 20)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides the config file)"
    )
    parser.add_argument(
        "--latency",
        type=float,
        default=0.005,
        help="Simulated seconds per fitness evaluation (default: 0.005)"
    )
    return parser.parse_args()


async def main():
    args = parse_args()

    if args.config:
        config = SolverConfig.from_yaml(args.config)
    else:
        config = SolverConfig(
            population=200,
            max_simultaneous_calls=50,
            mutation_chance=0.8,
            crossover_chance=0.4,
            keep_fittest_candidates=3,
            rank_selection_bias=1.5,
        )
    if args.seed is not None:
        config.seed = args.seed

    async def measure_fitness(genome):
        await asyncio.sleep(args.latency)
        return float(genome.sum())

    def after_generation():
        best = solver.get_candidate(0)
        logger.info(f"Generation {solver.generation}, best fitness: {best.fitness:.4f}")

    solver = GeneticSolver(
        genome_size=args.genome_size,
        init_gene=lambda index: solver.rng.random(),
        mutate_gene=lambda index, old_value: solver.rng.random(),
        measure_fitness=measure_fitness,
        after_generation=after_generation,
        config=config,
    )

    async with solver:
        best = await solver.run(generations=args.generations)

    logger.info(f"Best genome after {solver.generation} generations "
                f"(fitness {best.fitness:.4f}):")
    logger.info(", ".join(f"{gene:.3f}" for gene in best.genome))


if __name__ == "__main__":
    asyncio.run(main())
