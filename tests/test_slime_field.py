"""
Tests for environments/slime_field.py

The clock around the pure tick.
"""

import numpy as np
import pytest

from slime_colony.core.agent import Agent
from slime_colony.core.colony import Colony
from slime_colony.core.trail import Trail, WrapMode
from slime_colony.environments.slime_field import SlimeField, FieldConfig, tick


class TestTick:
    """Tests for the pure tick function."""

    def test_steer_move_deposit(self):
        trail = Trail(3)
        trail.set(2, 1, 0.1)   # left probe of (1,1) heading (1,1)
        colony = Colony([Agent.at(1.0, 1.0, 1.0, 1.0)])

        new_colony, new_trail = tick(colony, trail, 1.0)

        agent = new_colony[0]
        # Turned left to (√2, 0), then moved along it
        assert agent.vel.x == pytest.approx(np.sqrt(2.0))
        assert agent.pos.x == pytest.approx(1.0 + np.sqrt(2.0))
        assert agent.pos.y == pytest.approx(1.0)
        assert new_trail.get(2, 1) == pytest.approx(1.1)

    def test_inputs_unchanged(self):
        trail = Trail(5)
        colony = Colony.spawn_random(10, 5.0, rng=0)
        before_trail = trail.copy()
        before_colony = Colony(colony.agents)

        tick(colony, trail, 1.0)

        assert trail == before_trail
        assert colony == before_colony

    def test_deterministic(self):
        colony = Colony.spawn_random(30, 16.0, rng=11)
        a_colony, a_trail = colony, Trail(16)
        b_colony, b_trail = colony, Trail(16)
        for _ in range(20):
            a_colony, a_trail = tick(a_colony, a_trail, 1.0)
            b_colony, b_trail = tick(b_colony, b_trail, 1.0)
        assert a_colony == b_colony
        assert a_trail == b_trail

    def test_no_decay(self):
        colony = Colony.spawn_random(25, 12.0, rng=5)
        trail = Trail(12)
        previous = trail.cells.copy()
        for _ in range(30):
            colony, trail = tick(colony, trail, 1.0)
            assert np.all(trail.cells >= previous)
            previous = trail.cells.copy()
        assert trail.total() == pytest.approx(25 * 30)


class TestFieldConfig:
    """Tests for FieldConfig."""

    def test_default_config(self):
        config = FieldConfig()
        assert config.grid_size == 200
        assert config.population == 1000
        assert config.dt == 1.0
        assert config.wrap_mode is WrapMode.SINGLE

    def test_wrap_mode_from_string(self):
        assert FieldConfig(wrap_mode="modulo").wrap_mode is WrapMode.MODULO

    def test_invalid_wrap_mode(self):
        with pytest.raises(ValueError):
            FieldConfig(wrap_mode="bounce")

    def test_validate_rejects_bad_sizes(self):
        with pytest.raises(ValueError):
            FieldConfig(grid_size=0).validate()
        with pytest.raises(ValueError):
            FieldConfig(population=-1).validate()

    def test_validate_rejects_large_dt_for_single_wrap(self):
        with pytest.raises(ValueError):
            FieldConfig(grid_size=10, dt=10.0).validate()
        FieldConfig(grid_size=10, dt=10.0, wrap_mode="modulo").validate()

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError):
            FieldConfig.from_dict({"grid_size": 10, "decay": 0.9})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "field.yaml"
        path.write_text("grid_size: 64\npopulation: 10\nseed: 3\nwrap_mode: modulo\n")
        config = FieldConfig.from_yaml(path)
        assert config.grid_size == 64
        assert config.population == 10
        assert config.seed == 3
        assert config.wrap_mode is WrapMode.MODULO

    def test_from_yaml_nested(self, tmp_path):
        path = tmp_path / "study.yaml"
        path.write_text("field:\n  grid_size: 32\n  dt: 0.5\n")
        config = FieldConfig.from_yaml(path)
        assert config.grid_size == 32
        assert config.dt == 0.5

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            FieldConfig.from_yaml(path)


class TestSlimeField:
    """Tests for SlimeField."""

    def test_initialization(self):
        field = SlimeField(FieldConfig(grid_size=20, population=15, seed=1))
        assert field.time == 0
        assert len(field.colony) == 15
        assert field.trail.size == 20
        assert field.trail.total() == 0.0

    def test_explicit_state(self):
        colony = Colony([Agent.at(0.0, 0.0, 0.0, 1.0)])
        trail = Trail(3)
        field = SlimeField(FieldConfig(grid_size=3, population=1), colony, trail)
        field.step()
        assert field.colony[0].pos.y == pytest.approx(1.0)
        assert field.trail.get(0, 1) == 1.0

    def test_mismatched_colony_raises(self):
        colony = Colony([Agent.at(0.0, 0.0, 0.0, 1.0)])
        with pytest.raises(ValueError):
            SlimeField(FieldConfig(grid_size=3, population=2), colony=colony)

    def test_mismatched_trail_raises(self):
        with pytest.raises(ValueError):
            SlimeField(FieldConfig(grid_size=3, population=0), trail=Trail(4))

    def test_step_advances_time(self):
        field = SlimeField(FieldConfig(grid_size=10, population=5, seed=0))
        field.step()
        assert field.time == 1
        assert field.trail.total() == 5.0

    def test_run(self):
        field = SlimeField(FieldConfig(grid_size=10, population=5, seed=0))
        assert field.run(7) == 7
        assert field.time == 7

    def test_run_stops_on_callback(self):
        field = SlimeField(FieldConfig(grid_size=10, population=5, seed=0))
        taken = field.run(50, callback=lambda f: f.time >= 3)
        assert taken == 3
        assert field.time == 3

    def test_same_seed_same_result(self):
        config = FieldConfig(grid_size=16, population=20, seed=9)
        a = SlimeField(config)
        b = SlimeField(FieldConfig(grid_size=16, population=20, seed=9))
        a.run(10)
        b.run(10)
        assert a.trail == b.trail

    def test_positions_stay_on_grid(self):
        field = SlimeField(FieldConfig(grid_size=8, population=40, seed=2))
        field.run(25)
        positions = field.get_positions()
        assert positions.shape == (40, 2)
        assert np.all(positions >= 0.0)
        assert np.all(positions < 8.0)
        assert field.get_velocities().shape == (40, 2)

    def test_repr(self):
        field = SlimeField(FieldConfig(grid_size=10, population=2, seed=0))
        field.step()
        repr_str = repr(field)
        assert "SlimeField" in repr_str
        assert "agents=2" in repr_str
        assert "time=1" in repr_str


class TestFieldStateChecks:
    """Explicit state must agree with the config."""

    def test_mismatched_wrap_mode_raises(self):
        trail = Trail(3, wrap_mode=WrapMode.MODULO)
        with pytest.raises(ValueError):
            SlimeField(FieldConfig(grid_size=3, population=0), trail=trail)

    def test_matching_wrap_mode_accepted(self):
        trail = Trail(3, wrap_mode=WrapMode.MODULO)
        field = SlimeField(
            FieldConfig(grid_size=3, population=0, wrap_mode="modulo"),
            trail=trail,
        )
        assert field.trail.wrap_mode is WrapMode.MODULO

    def test_fast_agent_small_dt(self):
        colony = Colony([Agent.at(1.0, 1.0, 10.0, 0.0)])
        field = SlimeField(FieldConfig(grid_size=3, population=1, dt=0.1), colony)
        field.step()
        assert field.colony[0].pos.x == pytest.approx(2.0)
        assert field.trail.get(2, 1) == 1.0
