"""
Mesh Generators
===============

Construction of standard meshes, merging and extrusion.
"""

import itertools
import numpy as np
from typing import Sequence

from .triangulation import Triangulation, local_faces
from .grid_tools import compact_vertices, find_duplicate_vertices


def subdivided_hyper_rectangle(repetitions: Sequence[int],
                               p1: Sequence[float], p2: Sequence[float],
                               colorize: bool = False) -> Triangulation:
    """
    Create a structured mesh on the box spanned by two opposite corners.

    Args:
        repetitions: number of cells along each axis (its length is dim)
        p1, p2: opposite corners of the box
        colorize: tag boundary faces by direction, 2k for the face at
            p1[k] and 2k + 1 for the face at p2[k]; otherwise all faces
            get tag 0

    Returns:
        Triangulation instance
    """
    dim = len(repetitions)
    if dim not in (2, 3):
        raise ValueError("repetitions must have 2 or 3 entries")
    if any(n < 1 for n in repetitions):
        raise ValueError("repetitions must be positive")
    lower = np.minimum(np.asarray(p1, dtype=np.float64),
                       np.asarray(p2, dtype=np.float64))
    upper = np.maximum(np.asarray(p1, dtype=np.float64),
                       np.asarray(p2, dtype=np.float64))
    if lower.shape != (dim,) or np.any(upper - lower <= 0):
        raise ValueError("corners must span a box of positive size")

    n_points = [n + 1 for n in repetitions]
    strides = np.cumprod([1] + n_points[:-1])

    # Create vertices, axis 0 running fastest
    coords = [np.linspace(lower[k], upper[k], n_points[k]) for k in range(dim)]
    vertices = np.zeros((int(np.prod(n_points)), dim))
    for index in itertools.product(*[range(n) for n in reversed(n_points)]):
        index = index[::-1]
        idx = int(np.dot(index, strides))
        vertices[idx] = [coords[k][index[k]] for k in range(dim)]

    # Create cells
    cells = []
    for index in itertools.product(*[range(n) for n in reversed(repetitions)]):
        index = index[::-1]
        cell = []
        for i in range(2 ** dim):
            corner = [index[k] + ((i >> k) & 1) for k in range(dim)]
            cell.append(int(np.dot(corner, strides)))
        cells.append(cell)

    tria = Triangulation(vertices, np.array(cells))

    if colorize:
        tol = 1e-10 * np.linalg.norm(upper - lower)
        for key in tria.boundary_faces:
            center = tria.vertices[list(key)].mean(axis=0)
            for axis in range(dim):
                if abs(center[axis] - lower[axis]) < tol:
                    tria.set_boundary_id(key, 2 * axis)
                elif abs(center[axis] - upper[axis]) < tol:
                    tria.set_boundary_id(key, 2 * axis + 1)

    return tria


def hyper_cube(left: float = 0.0, right: float = 1.0, dim: int = 2,
               colorize: bool = False) -> Triangulation:
    """
    Create a single-cell mesh on [left, right]^dim.

    Convenience function that calls subdivided_hyper_rectangle.
    """
    return subdivided_hyper_rectangle([1] * dim, [left] * dim, [right] * dim,
                                      colorize=colorize)


def hyper_cube_with_cylindrical_hole(inner_radius: float = 0.25,
                                     outer_radius: float = 0.5
                                     ) -> Triangulation:
    """
    Create the square [-R, R]^2 with a circular hole of radius r.

    The mesh has 8 cells, one per 45 degree sector. Each cell runs from
    the circle out to the square. The outer boundary has tag 0, the hole
    has tag 1.

    Args:
        inner_radius: radius r of the hole
        outer_radius: half edge length R of the square

    Returns:
        Triangulation instance
    """
    if not 0 < inner_radius < outer_radius:
        raise ValueError("need 0 < inner_radius < outer_radius")

    R = outer_radius
    outer = np.array([[-R, -R], [0, -R], [R, -R], [R, 0],
                      [R, R], [0, R], [-R, R], [-R, 0]], dtype=np.float64)
    inner = inner_radius * outer / np.linalg.norm(outer, axis=1)[:, None]
    vertices = np.vstack([outer, inner])

    cells = []
    boundary_ids = {}
    for i in range(8):
        j = (i + 1) % 8
        # local axis 0 points outwards, axis 1 counterclockwise
        cells.append([8 + i, i, 8 + j, j])
        boundary_ids[tuple(sorted((8 + i, 8 + j)))] = 1

    return Triangulation(vertices, np.array(cells), boundary_ids)


def merge_triangulations(tria_1: Triangulation,
                         tria_2: Triangulation) -> Triangulation:
    """
    Create a mesh holding the cells of two meshes.

    Vertices of the two inputs are identified when their coordinates agree
    up to 1e-12 times the size of the combined mesh. Nothing else connects
    the inputs: if the vertices along the common interface do not match,
    the result has duplicate vertices there and the pieces stay apart.
    Tags of faces that remain on the boundary are kept; faces on the
    common interface become interior.

    Returns:
        new Triangulation; the inputs are not modified
    """
    if tria_1.dim != tria_2.dim:
        raise ValueError("cannot merge meshes of different dimension")

    offset = tria_1.n_vertices
    vertices = np.vstack([tria_1.vertices, tria_2.vertices])
    cells = np.vstack([tria_1.cells, tria_2.cells + offset])
    boundary_ids = dict(tria_1.boundary_ids)
    for key, boundary_id in tria_2.boundary_ids.items():
        boundary_ids[tuple(v + offset for v in key)] = boundary_id

    used = np.unique(cells)
    extent = vertices[used].max(axis=0) - vertices[used].min(axis=0)
    tol = 1e-12 * max(np.linalg.norm(extent), 1.0)

    representative = find_duplicate_vertices(vertices, tol)
    cells = representative[cells]
    boundary_ids = {tuple(sorted(int(representative[v]) for v in key)): bid
                    for key, bid in boundary_ids.items()}

    vertices, cells, boundary_ids = compact_vertices(vertices, cells,
                                                     boundary_ids)
    return Triangulation(vertices, cells, boundary_ids)


def extrude_triangulation(tria: Triangulation, n_layers: int,
                          height: float) -> Triangulation:
    """
    Sweep a 2-d mesh along z into a 3-d mesh of hexahedra.

    Side faces keep the tag of the 2-d boundary face they come from. With
    `m` the largest tag of the 2-d mesh, the bottom cap (z = 0) gets tag
    m + 1 and the top cap (z = height) gets tag m + 2.

    Args:
        tria: 2-d mesh
        n_layers: number of cell layers, positive
        height: total extent in z, positive

    Returns:
        3-d Triangulation with n_layers * tria.n_cells cells
    """
    if tria.dim != 2:
        raise ValueError("only 2-d meshes can be extruded")
    if int(n_layers) != n_layers or n_layers < 1:
        raise ValueError("n_layers must be a positive integer")
    n_layers = int(n_layers)
    if height <= 0:
        raise ValueError("height must be positive")

    vertices_2d, cells_2d, ids_2d = compact_vertices(tria.vertices,
                                                     tria.cells,
                                                     tria.boundary_ids)
    n = len(vertices_2d)
    z = np.linspace(0.0, height, n_layers + 1)

    vertices = np.vstack([np.column_stack([vertices_2d, np.full(n, zk)])
                          for zk in z])

    cells = []
    for layer in range(n_layers):
        for cell in cells_2d:
            cells.append(list(cell + layer * n) + list(cell + (layer + 1) * n))
    cells = np.array(cells, dtype=np.int64)

    max_id = max(ids_2d.values(), default=0)
    bottom_id, top_id = max_id + 1, max_id + 2

    boundary_ids = {}
    for layer in range(n_layers):
        for (a, b), boundary_id in ids_2d.items():
            key = (a + layer * n, b + layer * n,
                   a + (layer + 1) * n, b + (layer + 1) * n)
            boundary_ids[tuple(sorted(key))] = boundary_id

    bottom, top = local_faces(3)[4], local_faces(3)[5]
    n_bottom = len(cells_2d)
    for cell in cells[:n_bottom]:
        boundary_ids[tuple(sorted(int(cell[i]) for i in bottom))] = bottom_id
    for cell in cells[len(cells) - n_bottom:]:
        boundary_ids[tuple(sorted(int(cell[i]) for i in top))] = top_id

    return Triangulation(vertices, cells, boundary_ids)
