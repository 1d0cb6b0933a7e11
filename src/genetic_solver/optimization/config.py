"""
Configuration for the genetic solver.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Optional, Any, Dict, Union
from pathlib import Path
import yaml

from ..selection.rank import DEFAULT_RANK_SELECTION_BIAS

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_ratio(value: Union[str, int, float]) -> float:
    """
    Parse a probability that can be a fraction string, int, or float.

    Args:
        value: Ratio value as:
               - Fraction string like "2/5"
               - Integer like 1 (will be converted to float)
               - Float like 0.4

    Returns:
        Float representation of the ratio

    Raises:
        ValueError: If the value cannot be parsed

    Examples:
        >>> parse_ratio("2/5")
        0.4
        >>> parse_ratio(0.5)
        0.5
        >>> parse_ratio(1)
        1.0
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid ratio: {value!r}")

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        value = value.strip()

        if '/' in value:
            numerator, denominator = value.split('/', 1)
            try:
                return float(numerator) / float(denominator)
            except (ValueError, ZeroDivisionError) as e:
                raise ValueError(f"Invalid fraction format: {value!r}") from e

        return float(value)

    raise ValueError(f"Unknown ratio type: {type(value).__name__}")


@dataclass
class SolverConfig:
    """
    Configuration for the genetic solver.

    Every field may be changed while the solver is running; each tick reads
    the values it needs afresh.
    """

    # Population
    population: int = 100
    max_simultaneous_calls: Optional[int] = 0  # 0/None: unbounded, capped at population

    # Variation
    mutation_chance: float = 0.9
    crossover_chance: float = 0.3

    # Selection
    keep_fittest_candidates: int = 3
    rank_selection_bias: float = DEFAULT_RANK_SELECTION_BIAS

    # Driver
    tick_interval: float = 0.01
    seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"
    log_generation_stats: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.population < 1:
            raise ValueError("population must be at least 1")
        if self.max_simultaneous_calls is not None and self.max_simultaneous_calls < 0:
            raise ValueError("max_simultaneous_calls must be non-negative")
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError("mutation_chance must be between 0 and 1")
        if not 0.0 <= self.crossover_chance <= 1.0:
            raise ValueError("crossover_chance must be between 0 and 1")
        if self.keep_fittest_candidates < 0:
            raise ValueError("keep_fittest_candidates must be non-negative")
        if self.keep_fittest_candidates > self.population:
            logger.warning(
                f"keep_fittest_candidates={self.keep_fittest_candidates} exceeds "
                f"population={self.population}, elites will be clamped"
            )
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    def concurrency_cap(self, population_size: int) -> int:
        """
        Active limit on simultaneous fitness evaluations.

        Args:
            population_size: Size of the generation being evaluated

        Returns:
            max_simultaneous_calls, or population_size when unset/zero
        """
        return self.max_simultaneous_calls or population_size

    def replace(self, **overrides: Any) -> "SolverConfig":
        """Return a validated copy with some fields replaced."""
        values = self.to_dict()
        values.update(overrides)
        return type(self)(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_yaml(cls, config_path: Path) -> "SolverConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            SolverConfig instance
        """
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}

        # Extract nested parameters if present
        solver_config = dict(config.get("solver", config))

        for key in ("mutation_chance", "crossover_chance"):
            if key in solver_config:
                solver_config[key] = parse_ratio(solver_config[key])

        known = {f.name for f in fields(cls)}
        unknown = set(solver_config) - known
        if unknown:
            logger.warning(f"Ignoring unknown solver settings: {', '.join(sorted(unknown))}")

        return cls(**{k: v for k, v in solver_config.items() if k in known})

    @classmethod
    def from_env(cls) -> "SolverConfig":
        """
        Load configuration from environment variables.

        Reads the following environment variables:
        - POPULATION_SIZE: population
        - MAX_SIMULTANEOUS_CALLS: max_simultaneous_calls
        - MUTATION_RATE: mutation_chance (supports fractions like "4/5")
        - CROSSOVER_RATE: crossover_chance (supports fractions like "2/5")
        - KEEP_FITTEST: keep_fittest_candidates
        - RANK_SELECTION_BIAS: rank_selection_bias
        - TICK_INTERVAL: tick_interval
        - SEED: seed
        - LOG_LEVEL: log_level

        Returns:
            SolverConfig instance
        """
        seed = os.getenv("SEED")
        return cls(
            population=int(os.getenv("POPULATION_SIZE", "100")),
            max_simultaneous_calls=int(os.getenv("MAX_SIMULTANEOUS_CALLS", "0")),
            mutation_chance=parse_ratio(os.getenv("MUTATION_RATE", "0.9")),
            crossover_chance=parse_ratio(os.getenv("CROSSOVER_RATE", "0.3")),
            keep_fittest_candidates=int(os.getenv("KEEP_FITTEST", "3")),
            rank_selection_bias=float(
                os.getenv("RANK_SELECTION_BIAS", str(DEFAULT_RANK_SELECTION_BIAS))
            ),
            tick_interval=float(os.getenv("TICK_INTERVAL", "0.01")),
            seed=int(seed) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def to_yaml(self, save_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            save_path: Path where to save the configuration
        """
        with open(save_path, 'w') as f:
            yaml.dump({"solver": self.to_dict()}, f, default_flow_style=False)

        logger.info(f"Saved configuration to {save_path}")
