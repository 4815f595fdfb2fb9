"""
Global Refinement
=================

Split every cell of a Triangulation into 2**dim children.
"""

import itertools
import numpy as np
from typing import Dict, List, Tuple, TYPE_CHECKING

from .triangulation import local_faces, local_edges

if TYPE_CHECKING:
    from .boundaries import Boundary
    from .triangulation import Triangulation


def _parent_vertices(grid_point: Tuple[int, ...], dim: int) -> List[int]:
    """
    Local parent vertices spanning a point of the 3**dim child grid.

    Along each axis a grid coordinate of 0 or 2 pins the parent vertex to
    that side, 1 lets it take both sides.
    """
    result = []
    for i in range(2 ** dim):
        if all(g == 1 or (i >> k) & 1 == g // 2
               for k, g in enumerate(grid_point)):
            result.append(i)
    return result


def refine_once(tria: 'Triangulation'
                ) -> Tuple[np.ndarray, np.ndarray, Dict[tuple, int]]:
    """
    Compute one uniform refinement of a mesh.

    New vertices are edge midpoints, face centers (3-d) and cell centers.
    Each is identified by the global parent vertices it spans, so vertices
    on shared edges and faces are created once. Points lying on a boundary
    face, or on an edge of one, are handed to the boundary description
    attached to the face's tag, whichever cell creates them. In 2-d the
    cell center is the transfinite interpolation
    0.5 * sum(edge midpoints) - 0.25 * sum(corners), which reduces to the
    vertex average for straight edges.

    Args:
        tria: mesh to refine (not modified)

    Returns:
        vertices: new vertex array
        cells: new cell array
        boundary_ids: tags of the child boundary faces
    """
    dim = tria.dim
    faces = local_faces(dim)
    attached = tria.attached_boundaries
    grid = list(itertools.product(range(3), repeat=dim))
    # sub-objects of lower dimension are needed to place higher ones
    grid.sort(key=lambda g: sum(1 for c in g if c == 1))

    new_vertices = [v for v in tria.vertices]
    point_index: Dict[tuple, int] = {}
    new_cells = []
    new_boundary_ids: Dict[tuple, int] = {}
    curved = _curved_sub_objects(tria, attached)

    for cell_idx, cell in enumerate(tria.cells):
        local_index = {}
        for g in grid:
            parents = _parent_vertices(g, dim)
            key = tuple(sorted(int(cell[i]) for i in parents))
            if len(parents) == 1:
                local_index[g] = int(cell[parents[0]])
                continue
            if key in point_index:
                local_index[g] = point_index[key]
                continue

            order = len(parents).bit_length() - 1
            if order == 2:
                # face (or 2-d cell): blend the edge midpoints around it
                corners = tria.vertices[[int(cell[i]) for i in parents]]
                midpoints = [new_vertices[local_index[e]]
                             for e in _sub_points(g, 1)]
                point = 0.5 * np.sum(midpoints, axis=0) - \
                    0.25 * np.sum(corners, axis=0)
            elif order == 3:
                centers = [new_vertices[local_index[f]]
                           for f in _sub_points(g, 2)]
                point = np.mean(centers, axis=0)
            else:
                point = np.mean(tria.vertices[list(key)], axis=0)

            if order < dim and key in curved:
                point = attached[curved[key]].project(point)

            point_index[key] = len(new_vertices)
            local_index[g] = len(new_vertices)
            new_vertices.append(np.asarray(point, dtype=np.float64))

        first_child = len(new_cells)
        for child in range(2 ** dim):
            offset = [(child >> k) & 1 for k in range(dim)]
            child_cell = []
            for i in range(2 ** dim):
                g = tuple(offset[k] + ((i >> k) & 1) for k in range(dim))
                child_cell.append(local_index[g])
            new_cells.append(child_cell)

        # children inherit the tag of the parent face they lie on
        for face_idx, face in enumerate(faces):
            parent_key = tria.cell_faces(cell_idx)[face_idx]
            if parent_key not in tria.boundary_ids:
                continue
            axis, side = divmod(face_idx, 2)
            for child in range(2 ** dim):
                if (child >> axis) & 1 != side:
                    continue
                child_cell = new_cells[first_child + child]
                child_key = tuple(sorted(child_cell[i] for i in face))
                new_boundary_ids[child_key] = tria.boundary_ids[parent_key]

    return (np.array(new_vertices, dtype=np.float64).reshape(-1, dim),
            np.array(new_cells, dtype=np.int64),
            new_boundary_ids)


def _curved_sub_objects(tria: 'Triangulation',
                        attached: Dict[int, 'Boundary']) -> Dict[tuple, int]:
    """
    Boundary faces with an attached description, and their edges.

    Collected over the whole mesh first, so an edge is curved even when
    the cell that creates its midpoint only touches the boundary along
    that edge.

    Returns:
        {sorted vertex key: boundary tag}
    """
    curved: Dict[tuple, int] = {}
    if not attached:
        return curved

    faces = local_faces(tria.dim)
    face_edges = local_edges(tria.dim - 1)
    for cell_idx, cell in enumerate(tria.cells):
        for face_idx, key in enumerate(tria.cell_faces(cell_idx)):
            boundary_id = tria.boundary_ids.get(key)
            if boundary_id not in attached:
                continue
            curved.setdefault(key, boundary_id)
            if tria.dim == 3:
                nodes = [int(cell[i]) for i in faces[face_idx]]
                for a, b in face_edges:
                    edge = (min(nodes[a], nodes[b]), max(nodes[a], nodes[b]))
                    curved.setdefault(edge, boundary_id)
    return curved


def _sub_points(grid_point: Tuple[int, ...], order: int) -> List[tuple]:
    """
    Grid points of the sub-objects of given order bounding a grid point.

    For a face center (order 2) and order 1 these are the midpoints of
    its four edges.
    """
    free = [k for k, g in enumerate(grid_point) if g == 1]
    result = []
    for pinned in itertools.combinations(free, len(free) - order):
        for sides in itertools.product((0, 2), repeat=len(pinned)):
            point = list(grid_point)
            for axis, side in zip(pinned, sides):
                point[axis] = side
            result.append(tuple(point))
    return result
