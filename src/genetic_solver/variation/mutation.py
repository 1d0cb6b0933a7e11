"""
Point mutation for real-valued genomes.
"""

import logging
from typing import Callable
import numpy as np


logger = logging.getLogger(__name__)


class PointMutation:
    """
    Replaces one randomly chosen gene using the client's mutation rule.
    """

    def __init__(
        self,
        mutate_gene: Callable[[int, float], float],
        rng: np.random.Generator
    ):
        """
        Initialize the mutation operator.

        Args:
            mutate_gene: Client rule ``(index, old_value) -> new_value``
            rng: Random number generator used for gene index choice
        """
        self.mutate_gene = mutate_gene
        self.rng = rng

    def mutate(self, genome: np.ndarray) -> int:
        """
        Mutate a genome in place.

        Args:
            genome: Genome to modify

        Returns:
            Index of the mutated gene
        """
        index = int(self.rng.integers(len(genome)))
        old_value = float(genome[index])
        genome[index] = self.mutate_gene(index, old_value)

        logger.debug(f"Mutated gene {index}: {old_value:.4f} -> {genome[index]:.4f}")
        return index
