"""
Tests for Grid Tools
====================
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mesh.generators import (
    subdivided_hyper_rectangle, hyper_cube_with_cylindrical_hole
)
from mesh.grid_tools import (
    transform, shift, scale, rotate, on_line, move_vertices, distort_random,
    find_duplicate_vertices, compact_vertices
)
from scenarios.grids import grid_5_transform, TanhStretch


class TestTransform:
    """Tests for coordinate transforms."""

    def test_function_transform(self):
        """Plain function: sine bend of a strip."""
        tria = subdivided_hyper_rectangle([14, 2], [0, 0], [10, 1])
        ids_before = dict(tria.boundary_ids)
        cells_before = tria.cells.copy()
        original = tria.vertices.copy()

        transform(grid_5_transform, tria)

        assert np.allclose(tria.vertices[:, 0], original[:, 0])
        expected = original[:, 1] + np.sin(original[:, 0] * np.pi / 5)
        assert np.allclose(tria.vertices[:, 1], expected)
        assert np.array_equal(tria.cells, cells_before)
        assert tria.boundary_ids == ids_before

    def test_callable_object_round_trip(self):
        """Stretching then inverting restores every vertex."""
        tria = subdivided_hyper_rectangle([8, 8], [0, 0], [1, 1])
        original = tria.vertices.copy()
        stretch = TanhStretch(2.0)

        transform(stretch, tria)
        assert not np.allclose(tria.vertices, original)
        assert np.allclose(tria.vertices[:, 1].max(), 1.0)

        transform(stretch.inverse, tria)
        assert np.allclose(tria.vertices, original, atol=1e-12)

    def test_each_vertex_once(self):
        """Shared vertices are not transformed repeatedly."""
        tria = subdivided_hyper_rectangle([4, 4], [0, 0], [1, 1])
        original = tria.vertices.copy()
        shift([0.5, -0.25], tria)
        assert np.allclose(tria.vertices - original, [0.5, -0.25])

    def test_wrong_shape(self):
        tria = subdivided_hyper_rectangle([2, 2], [0, 0], [1, 1])
        with pytest.raises(ValueError):
            transform(lambda p: np.append(p, 0.0), tria)

    def test_scale_and_rotate(self):
        tria = subdivided_hyper_rectangle([2, 2], [0, 0], [1, 1])
        scale(2.0, tria)
        assert np.isclose(tria.cell_measures().sum(), 4.0)

        rotate(np.pi / 2, tria)
        assert np.allclose(tria.vertices[:, 0].max(), 0.0, atol=1e-12)
        assert np.isclose(tria.cell_measures().sum(), 4.0)

        with pytest.raises(ValueError):
            scale(0.0, tria)


class TestMoveVertices:
    """Tests for predicate-based vertex moves."""

    def test_move_top_edge(self):
        """Each vertex on y = 1 moves once and leaves the selection."""
        tria = hyper_cube_with_cylindrical_hole(0.25, 1.0)
        select = on_line(1, 1.0)

        n_moved = move_vertices(tria, select, [0.0, 0.5])

        assert n_moved == 3
        assert len(tria.get_vertices_in_region(select)) == 0
        assert len(tria.get_vertices_in_region(on_line(1, 1.5))) == 3

    def test_small_offset_moves_repeatedly(self):
        """An offset that stays inside the selection moves per cell."""
        tria = hyper_cube_with_cylindrical_hole(0.25, 1.0)
        n_moved = move_vertices(tria, on_line(1, 1.0), [0.0, 1e-7])

        # each of the three vertices belongs to two cells
        assert n_moved == 6
        assert np.isclose(tria.vertices[5, 1], 1.0 + 2e-7)

    def test_on_line_tolerance(self):
        select = on_line(0, 2.0)
        assert select(np.array([2.0 + 1e-6, 5.0]))
        assert not select(np.array([2.0 + 1e-4, 5.0]))


class TestDistortRandom:
    """Tests for random distortion."""

    def test_boundary_fixed(self):
        """Boundary vertices stay, interior ones move by factor * h."""
        tria = subdivided_hyper_rectangle([16, 16], [0, 0], [1, 1])
        original = tria.vertices.copy()

        moved = distort_random(0.3, tria, keep_boundary=True, seed=42)

        boundary = tria.boundary_vertices
        assert len(boundary) == 64
        assert np.array_equal(tria.vertices[boundary], original[boundary])
        assert len(moved) == 17 * 17 - 64

        distances = np.linalg.norm(tria.vertices[moved] - original[moved],
                                   axis=1)
        assert np.allclose(distances, 0.3 / 16)

    def test_boundary_free(self):
        """Without keep_boundary every vertex moves."""
        tria = subdivided_hyper_rectangle([4, 4], [0, 0], [1, 1])
        original = tria.vertices.copy()

        moved = distort_random(0.1, tria, keep_boundary=False, seed=1)

        assert len(moved) == 25
        assert np.all(np.linalg.norm(tria.vertices - original, axis=1) > 0)

    def test_reproducible(self):
        """Same seed, same coordinates."""
        tria_a = subdivided_hyper_rectangle([8, 8], [0, 0], [1, 1])
        tria_b = subdivided_hyper_rectangle([8, 8], [0, 0], [1, 1])
        tria_c = subdivided_hyper_rectangle([8, 8], [0, 0], [1, 1])

        distort_random(0.3, tria_a, seed=7)
        distort_random(0.3, tria_b, seed=7)
        distort_random(0.3, tria_c, seed=8)

        assert np.array_equal(tria_a.vertices, tria_b.vertices)
        assert not np.array_equal(tria_a.vertices, tria_c.vertices)


class TestVertexBookkeeping:
    """Tests for duplicate detection and compaction."""

    def test_find_duplicates(self):
        vertices = np.array([[0, 0], [1, 0], [0, 0], [1, 1e-14]], dtype=float)
        representative = find_duplicate_vertices(vertices, 1e-12)
        assert list(representative) == [0, 1, 0, 1]

    def test_compact(self):
        vertices = np.array([[9, 9], [0, 0], [1, 0], [0, 1], [1, 1]],
                            dtype=float)
        cells = np.array([[1, 2, 3, 4]])
        new_vertices, new_cells, new_ids = compact_vertices(
            vertices, cells, {(1, 3): 5, (0, 1): 2})

        assert len(new_vertices) == 4
        assert list(new_cells[0]) == [0, 1, 2, 3]
        assert new_ids == {(0, 2): 5}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
