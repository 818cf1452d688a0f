"""
Tests for studies/01_colony_growth

Every study is a test. Observation is methodology.
"""

import importlib

import pytest

from slime_colony.core.trail import WrapMode
from slime_colony.environments.slime_field import FieldConfig

observe = importlib.import_module("slime_colony.studies.01_colony_growth.observe")


class TestColonyGrowthStudy:
    """Tests for the colony growth study entry points."""

    def test_run_study_headless(self, capsys):
        config = FieldConfig(grid_size=16, population=12, seed=4)
        field = observe.run_study(config, steps=20, animate=False)

        assert field.time == 20
        assert field.trail.total() == pytest.approx(12 * 20)
        out = capsys.readouterr().out
        assert "Cells visited" in out

    def test_build_config_from_flags(self):
        args = observe.parse_args([
            "--grid-size", "32", "--population", "8",
            "--seed", "1", "--wrap", "modulo", "--no-animate",
        ])
        config = observe.build_config(args)
        assert config.grid_size == 32
        assert config.population == 8
        assert config.seed == 1
        assert config.wrap_mode is WrapMode.MODULO

    def test_flags_override_yaml(self, tmp_path):
        path = tmp_path / "field.yaml"
        path.write_text("grid_size: 50\npopulation: 30\ndt: 0.5\n")
        args = observe.parse_args(["--config", str(path), "--population", "4"])
        config = observe.build_config(args)
        assert config.grid_size == 50
        assert config.population == 4
        assert config.dt == 0.5

    def test_build_config_validates(self):
        args = observe.parse_args(["--grid-size", "4", "--dt", "5"])
        with pytest.raises(ValueError):
            observe.build_config(args)

    def test_main_headless(self, capsys):
        observe.main([
            "--steps", "5", "--grid-size", "8",
            "--population", "3", "--seed", "0", "--no-animate",
        ])
        assert "Study complete" in capsys.readouterr().out
