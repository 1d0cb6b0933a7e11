"""
Single-point crossover for real-valued genomes.
"""

import logging
import numpy as np


logger = logging.getLogger(__name__)


class SinglePointCrossover:
    """
    Single-point crossover operator.

    The child takes parent A's genes before a cut index and parent B's genes
    from the cut onwards. The cut is drawn uniformly from [1, N-2], so both
    parents contribute at least one gene whenever N >= 3.
    """

    def __init__(self, rng: np.random.Generator):
        """
        Initialize the crossover operator.

        Args:
            rng: Random number generator used for cut point choice
        """
        self.rng = rng

    def choose_cut(self, genome_size: int) -> int:
        """
        Draw a cut index.

        Genomes shorter than 3 genes have no interior range; the cut is then 1,
        so a 2-gene child takes gene 0 from parent A and gene 1 from parent B,
        and a 1-gene child is a copy of parent A. Every call consumes exactly
        one draw from the generator, whatever N is.

        Args:
            genome_size: Number of genes N

        Returns:
            Cut index in [1, N-2] (or 1 when N < 3)
        """
        return 1 + int(self.rng.integers(max(genome_size - 2, 1)))

    def crossover(self, parent_a: np.ndarray, parent_b: np.ndarray) -> np.ndarray:
        """
        Build a child genome from two parent genomes.

        Args:
            parent_a: Genome contributing the head
            parent_b: Genome contributing the tail

        Returns:
            New child genome (parents are not modified)
        """
        if len(parent_a) != len(parent_b):
            raise ValueError(
                f"Parent genomes differ in length: {len(parent_a)} != {len(parent_b)}"
            )

        cut = self.choose_cut(len(parent_a))
        child = parent_a.copy()
        child[cut:] = parent_b[cut:]

        logger.debug(f"Crossover at cut index {cut}")
        return child
