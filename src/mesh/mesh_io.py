"""
Mesh I/O Functions
==================

Read and write mesh files through meshio.
"""

import os
import meshio
import numpy as np

from .triangulation import Triangulation, local_faces
from .grid_tools import compact_vertices


# counterclockwise (gmsh / VTK) position -> lexicographic local index
QUAD_TO_LEXICOGRAPHIC = [0, 1, 3, 2]
HEX_TO_LEXICOGRAPHIC = [0, 1, 3, 2, 4, 5, 7, 6]


def read_msh(filename: str, dim: int = 2) -> Triangulation:
    """
    Read a Gmsh .msh file and return a Triangulation.

    Quadrilaterals (dim=2) or hexahedra (dim=3) become cells. Physical
    tags of line (dim=2) or quad (dim=3) elements become boundary tags of
    the matching boundary faces; other boundary faces get tag 0. Points
    not used by any cell are dropped.

    Args:
        filename: path to .msh file
        dim: expected mesh dimension

    Returns:
        Triangulation instance
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"mesh file not found: {filename}")
    if dim not in (2, 3):
        raise ValueError(f"Unsupported dimension: {dim}")

    mesh_data = meshio.read(filename, file_format="gmsh")
    vertices = mesh_data.points[:, :dim]

    if dim == 2:
        cell_type, face_type, order = "quad", "line", QUAD_TO_LEXICOGRAPHIC
    else:
        cell_type, face_type, order = "hexahedron", "quad", \
            HEX_TO_LEXICOGRAPHIC
    physical = mesh_data.cell_data.get("gmsh:physical")

    cells = []
    face_tags = {}
    for block_idx, cell_block in enumerate(mesh_data.cells):
        if cell_block.type == cell_type:
            cells.append(cell_block.data[:, order])
        elif cell_block.type == face_type and physical is not None:
            for face, tag in zip(cell_block.data, physical[block_idx]):
                face_tags[tuple(sorted(int(v) for v in face))] = int(tag)

    if not cells:
        raise ValueError(f"No {cell_type} cells found in {filename}")

    vertices, cells, face_tags = compact_vertices(vertices, np.vstack(cells),
                                                  face_tags)
    return Triangulation(vertices, cells, face_tags)


def _to_meshio(tria: Triangulation) -> meshio.Mesh:
    """
    Convert a mesh to a meshio.Mesh.

    Boundary faces are added as a second cell block carrying their tags
    as gmsh physical tags.
    """
    if tria.dim == 2:
        points = np.column_stack([tria.vertices, np.zeros(tria.n_vertices)])
        cell_type, face_type = "quad", "line"
        cell_order, face_order = QUAD_TO_LEXICOGRAPHIC, [0, 1]
    else:
        points = tria.vertices
        cell_type, face_type = "hexahedron", "quad"
        cell_order, face_order = HEX_TO_LEXICOGRAPHIC, QUAD_TO_LEXICOGRAPHIC

    faces, tags = [], []
    for cell_idx, cell in enumerate(tria.cells):
        for local, key in enumerate(tria.cell_faces(cell_idx)):
            if key in tria.boundary_ids:
                face = cell[list(local_faces(tria.dim)[local])]
                faces.append(face[face_order])
                tags.append(tria.boundary_ids[key])

    cells = [(cell_type, tria.cells[:, cell_order]),
             (face_type, np.array(faces, dtype=np.int64))]
    physical = [np.zeros(tria.n_cells, dtype=int), np.array(tags, dtype=int)]
    cell_data = {"gmsh:physical": physical, "gmsh:geometrical": physical}

    return meshio.Mesh(points=points, cells=cells, cell_data=cell_data)


def write_msh(tria: Triangulation, filename: str) -> None:
    """
    Write a Gmsh 2.2 ASCII file.

    read_msh on the written file restores cells and boundary tags.
    """
    meshio.write(filename, _to_meshio(tria), file_format="gmsh22",
                 binary=False)


def write_vtk(tria: Triangulation, filename: str) -> None:
    """
    Write cells and cell measures to a VTK file for ParaView.

    Args:
        tria: Triangulation instance
        filename: output filename (should end with .vtk or .vtu)
    """
    mesh = _to_meshio(tria)
    meshio.write(filename, meshio.Mesh(
        points=mesh.points,
        cells=[(mesh.cells[0].type, mesh.cells[0].data)],
        cell_data={"measure": [tria.cell_measures()]},
    ))
