"""
Unit tests for solver configuration.
"""

import logging

import pytest
from genetic_solver.optimization.config import SolverConfig, parse_ratio
from genetic_solver.selection.rank import DEFAULT_RANK_SELECTION_BIAS


class TestParseRatio:
    """Test suite for parse_ratio helper."""

    def test_float(self):
        assert parse_ratio(0.4) == 0.4

    def test_int(self):
        assert parse_ratio(1) == 1.0

    def test_fraction_string(self):
        assert parse_ratio("2/5") == pytest.approx(0.4)

    def test_float_string(self):
        assert parse_ratio(" 0.25 ") == 0.25

    def test_invalid_fraction(self):
        with pytest.raises(ValueError):
            parse_ratio("1/0")

    def test_invalid_type(self):
        with pytest.raises(ValueError):
            parse_ratio([0.5])

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            parse_ratio(True)


class TestSolverConfig:
    """Test suite for SolverConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SolverConfig()

        assert config.population == 100
        assert config.max_simultaneous_calls == 0
        assert config.mutation_chance == 0.9
        assert config.crossover_chance == 0.3
        assert config.keep_fittest_candidates == 3
        assert config.rank_selection_bias == 1.5
        assert config.rank_selection_bias == DEFAULT_RANK_SELECTION_BIAS
        assert config.tick_interval == 0.01
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_config_validation_invalid_population(self):
        with pytest.raises(ValueError, match="population must be at least 1"):
            SolverConfig(population=0)

    def test_config_validation_invalid_max_calls(self):
        with pytest.raises(ValueError, match="max_simultaneous_calls must be non-negative"):
            SolverConfig(max_simultaneous_calls=-1)

    def test_config_validation_invalid_mutation_chance(self):
        with pytest.raises(ValueError, match="mutation_chance must be between 0 and 1"):
            SolverConfig(mutation_chance=1.5)

    def test_config_validation_invalid_crossover_chance(self):
        with pytest.raises(ValueError, match="crossover_chance must be between 0 and 1"):
            SolverConfig(crossover_chance=-0.1)

    def test_config_validation_invalid_keep(self):
        with pytest.raises(ValueError, match="keep_fittest_candidates must be non-negative"):
            SolverConfig(keep_fittest_candidates=-2)

    def test_config_validation_invalid_tick_interval(self):
        with pytest.raises(ValueError, match="tick_interval must be positive"):
            SolverConfig(tick_interval=0)

    def test_config_validation_invalid_log_level(self):
        with pytest.raises(ValueError, match="log_level must be one of"):
            SolverConfig(log_level="LOUD")

    def test_log_level_normalized(self):
        assert SolverConfig(log_level="debug").log_level == "DEBUG"

    def test_keep_exceeding_population_warns(self, caplog):
        """Test warning when more elites than entities are requested."""
        caplog.set_level(logging.WARNING)

        SolverConfig(population=2, keep_fittest_candidates=5)

        assert any(
            "elites will be clamped" in record.message
            for record in caplog.records
            if record.levelname == "WARNING"
        )

    def test_concurrency_cap(self):
        """Test unset or zero cap falls back to the population size."""
        assert SolverConfig(max_simultaneous_calls=0).concurrency_cap(200) == 200
        assert SolverConfig(max_simultaneous_calls=None).concurrency_cap(200) == 200
        assert SolverConfig(max_simultaneous_calls=50).concurrency_cap(200) == 50

    def test_replace(self):
        """Test replace returns a new validated copy."""
        config = SolverConfig()

        updated = config.replace(population=20, mutation_chance=0.5)

        assert updated.population == 20
        assert updated.mutation_chance == 0.5
        assert config.population == 100

        with pytest.raises(ValueError):
            config.replace(population=0)

    def test_config_from_yaml(self, tmp_path):
        """Test loading configuration from YAML file."""
        config_path = tmp_path / "solver.yaml"
        config_path.write_text("""
solver:
  population: 200
  max_simultaneous_calls: 50
  mutation_chance: 0.8
  crossover_chance: "2/5"
  keep_fittest_candidates: 3
  rank_selection_bias: 1.5
  seed: 7
""")

        config = SolverConfig.from_yaml(config_path)

        assert config.population == 200
        assert config.max_simultaneous_calls == 50
        assert config.mutation_chance == 0.8
        assert config.crossover_chance == pytest.approx(0.4)
        assert config.keep_fittest_candidates == 3
        assert config.seed == 7

    def test_config_from_flat_yaml(self, tmp_path):
        """Test a YAML file without the solver section."""
        config_path = tmp_path / "flat.yaml"
        config_path.write_text("population: 12\nkeep_fittest_candidates: 1\n")

        config = SolverConfig.from_yaml(config_path)

        assert config.population == 12
        assert config.keep_fittest_candidates == 1

    def test_config_from_yaml_unknown_keys(self, tmp_path, caplog):
        """Test unknown settings are ignored with a warning."""
        caplog.set_level(logging.WARNING)
        config_path = tmp_path / "extra.yaml"
        config_path.write_text("solver:\n  population: 12\n  n_islands: 4\n")

        config = SolverConfig.from_yaml(config_path)

        assert config.population == 12
        assert any("n_islands" in record.message for record in caplog.records)

    def test_config_to_yaml(self, tmp_path):
        """Test saving configuration to YAML file."""
        config = SolverConfig(population=30, crossover_chance=0.35, seed=3)

        save_path = tmp_path / "saved.yaml"
        config.to_yaml(save_path)

        assert save_path.exists()
        loaded = SolverConfig.from_yaml(save_path)
        assert loaded.population == 30
        assert loaded.crossover_chance == 0.35
        assert loaded.seed == 3

    def test_config_from_env(self, monkeypatch):
        """Test loading configuration from environment variables."""
        monkeypatch.setenv("POPULATION_SIZE", "40")
        monkeypatch.setenv("MAX_SIMULTANEOUS_CALLS", "8")
        monkeypatch.setenv("MUTATION_RATE", "4/5")
        monkeypatch.setenv("CROSSOVER_RATE", "0.4")
        monkeypatch.setenv("KEEP_FITTEST", "2")
        monkeypatch.setenv("SEED", "11")

        config = SolverConfig.from_env()

        assert config.population == 40
        assert config.max_simultaneous_calls == 8
        assert config.mutation_chance == pytest.approx(0.8)
        assert config.crossover_chance == 0.4
        assert config.keep_fittest_candidates == 2
        assert config.seed == 11
        assert config.rank_selection_bias == DEFAULT_RANK_SELECTION_BIAS

    def test_config_from_env_defaults(self, monkeypatch):
        """Test environment loading without any variables set."""
        for name in ("POPULATION_SIZE", "MAX_SIMULTANEOUS_CALLS", "MUTATION_RATE",
                     "CROSSOVER_RATE", "KEEP_FITTEST", "RANK_SELECTION_BIAS",
                     "TICK_INTERVAL", "SEED", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = SolverConfig.from_env()

        assert config.population == 100
        assert config.seed is None
