"""
Tests for Mesh I/O
==================
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import meshio

from mesh.generators import hyper_cube_with_cylindrical_hole, \
    extrude_triangulation
from mesh.mesh_io import read_msh, write_msh, write_vtk
from postprocess.grid_out import boundary_histogram


EXAMPLE_MESH = os.path.join(os.path.dirname(__file__), '..', 'examples',
                            'untitled.msh')

TRIANGLE_MESH = """$MeshFormat
2.2 0 8
$EndMeshFormat
$Nodes
3
1 0 0 0
2 1 0 0
3 0 1 0
$EndNodes
$Elements
1
1 2 2 1 1 1 2 3
$EndElements
"""


class TestReadMsh:
    """Tests for the Gmsh reader."""

    def test_read_example(self):
        """Quads become cells, physical line tags become boundary tags."""
        tria = read_msh(EXAMPLE_MESH)

        assert tria.dim == 2
        assert tria.n_vertices == 12
        assert tria.n_active_cells == 6
        assert boundary_histogram(tria) == {10: 3, 20: 2, 30: 3, 40: 2}
        assert np.allclose(tria.cell_measures(), 1.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_msh(str(tmp_path / "absent.msh"))

    def test_no_quadrilaterals(self, tmp_path):
        """A triangle-only file has no cells this reader can use."""
        path = tmp_path / "triangle.msh"
        path.write_text(TRIANGLE_MESH)
        with pytest.raises(ValueError):
            read_msh(str(path))


class TestWriters:
    """Tests for meshio based writers."""

    def test_msh_keeps_tags(self, tmp_path):
        """Written boundary faces carry their tags back in."""
        tria = hyper_cube_with_cylindrical_hole(0.25, 1.0)
        tria.refine_global(1)
        path = str(tmp_path / "hole.msh")

        write_msh(tria, path)
        loaded = read_msh(path)

        assert loaded.n_active_cells == tria.n_active_cells
        assert loaded.n_vertices == tria.n_vertices
        assert boundary_histogram(loaded) == boundary_histogram(tria)

    def test_write_vtk(self, tmp_path):
        tria = extrude_triangulation(hyper_cube_with_cylindrical_hole(), 2, 1.0)
        path = str(tmp_path / "hole.vtu")

        write_vtk(tria, path)

        data = meshio.read(path)
        assert len(data.points) == tria.n_vertices
        assert data.cells[0].type == "hexahedron"
        assert len(data.cells[0].data) == tria.n_active_cells


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
