"""
Integration Tests
=================

The seven mesh demonstrations end to end.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from scenarios import (
    TourConfig, run_all, main,
    grid_1, grid_2, grid_3, grid_4, grid_5, grid_6, grid_7
)


EXAMPLE_MESH = os.path.join(os.path.dirname(__file__), '..', 'examples',
                            'untitled.msh')


@pytest.fixture
def config(tmp_path):
    return TourConfig(input_mesh=EXAMPLE_MESH, output_dir=str(tmp_path),
                      distortion_seed=0, verbose=False)


class TestScenarios:
    """Each scenario reports its mesh and writes one EPS file."""

    def test_grid_1_read(self, config):
        info = grid_1(config)
        assert info.n_active_cells == 6
        assert info.boundary_counts == {10: 3, 20: 2, 30: 3, 40: 2}
        assert os.path.isfile(config.output_path(1))

    def test_grid_2_merge(self, config):
        info = grid_2(config)
        assert info.n_active_cells == 14
        assert info.boundary_counts == {0: 14, 1: 8}

    def test_grid_3_move_and_refine(self, config):
        info = grid_3(config)
        assert info.dim == 2
        assert info.n_active_cells == 8 * 4 ** 2
        assert info.boundary_counts == {0: 32, 1: 32}

    def test_grid_4_extrude(self, config):
        info = grid_4(config)
        assert info.dim == 3
        assert info.n_active_cells == 16
        assert info.boundary_counts == {0: 16, 1: 16, 2: 8, 3: 8}

    def test_grid_5_sine(self, config):
        info = grid_5(config)
        assert info.n_active_cells == 28
        assert info.boundary_counts == {0: 32}

    def test_grid_6_tanh(self, config):
        info = grid_6(config)
        assert info.n_active_cells == 1600

    def test_grid_7_distort(self, config):
        info = grid_7(config)
        assert info.n_active_cells == 256
        assert info.boundary_counts == {0: 64}


class TestRunAll:
    """Tests for the sequential runner."""

    def test_all_files_written(self, config):
        result = run_all(config)

        assert result.success
        assert sorted(result.reports) == list(range(1, 8))
        for index in range(1, 8):
            assert os.path.isfile(config.output_path(index))
        assert main(config) == 0

    def test_failure_stops_run(self, config):
        config.input_mesh = os.path.join(config.output_dir, "absent.msh")

        with pytest.raises(FileNotFoundError):
            run_all(config)
        assert not os.path.exists(config.output_path(1))
        assert not os.path.exists(config.output_path(2))

    def test_isolated_failure(self, config, capsys):
        config.input_mesh = os.path.join(config.output_dir, "absent.msh")
        config.isolate_failures = True

        result = run_all(config)

        assert not result.success
        assert [index for index, _ in result.failures] == [1]
        assert isinstance(result.failures[0][1], FileNotFoundError)
        assert sorted(result.reports) == list(range(2, 8))
        assert "grid-1 failed: FileNotFoundError" in capsys.readouterr().out
        assert main(config) == 1

    def test_custom_scenarios(self, config):
        """Scenarios are numbered by their position."""
        result = run_all(config, scenarios=[grid_5, grid_2])
        assert result.reports[1].n_active_cells == 28
        assert result.reports[2].n_active_cells == 14
        assert os.path.isfile(config.output_path(2))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
