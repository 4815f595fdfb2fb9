"""
Quadrilateral / Hexahedral Triangulation
========================================

Core mesh class: a shared vertex arena plus tensor-product cells.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from .boundaries import Boundary, StraightBoundary


FaceKey = Tuple[int, ...]


def local_faces(dim: int) -> List[Tuple[int, ...]]:
    """
    Local vertex indices of each face of a reference cell.

    Vertices are numbered lexicographically: bit k of the local index is
    the position of the vertex along axis k. Face 2k + s holds the
    vertices whose bit k equals s.
    """
    n_vertices = 2 ** dim
    faces = []
    for axis in range(dim):
        for side in (0, 1):
            faces.append(tuple(i for i in range(n_vertices)
                               if (i >> axis) & 1 == side))
    return faces


def local_edges(dim: int) -> List[Tuple[int, int]]:
    """Local vertex pairs of each edge of a reference cell."""
    edges = []
    for axis in range(dim):
        for i in range(2 ** dim):
            if not (i >> axis) & 1:
                edges.append((i, i | (1 << axis)))
    return edges


class Triangulation:
    """
    Mesh of quadrilaterals (dim=2) or hexahedra (dim=3).

    Vertex coordinates live in a single array that every cell indexes into,
    so moving a vertex moves it for all cells sharing it.

    Attributes:
        vertices: np.ndarray, shape (n_vertices, dim)
            Vertex coordinates
        cells: np.ndarray, shape (n_cells, 2**dim)
            Vertex indices of each cell, lexicographic local order
        boundary_ids: dict
            Boundary tag of each boundary face, keyed by the sorted tuple
            of the face's vertex indices
        face_to_cells: dict
            Cells adjacent to each face (1 on the boundary, 2 inside)
        n_levels: int
            Number of global refinements applied so far
    """

    def __init__(self, vertices: np.ndarray, cells: np.ndarray,
                 boundary_ids: Optional[Dict[FaceKey, int]] = None):
        """
        Initialize mesh and compute face connectivity.

        Args:
            vertices: shape (n_vertices, dim), vertex coordinates
            cells: shape (n_cells, 2**dim), vertex indices per cell
            boundary_ids: optional tags of boundary faces; untagged
                boundary faces get tag 0
        """
        self.vertices = np.asarray(vertices, dtype=np.float64)
        self.cells = np.asarray(cells, dtype=np.int64)

        if self.vertices.ndim != 2 or self.vertices.shape[1] not in (2, 3):
            raise ValueError("vertices must have shape (n_vertices, 2) or "
                             "(n_vertices, 3)")
        if self.cells.ndim != 2 or self.cells.shape[1] != 2 ** self.dim:
            raise ValueError(f"cells must have shape (n_cells, {2 ** self.dim})"
                             f" for a {self.dim}-d mesh")
        if self.cells.size and (self.cells.min() < 0 or
                                self.cells.max() >= self.n_vertices):
            raise ValueError("cell references a vertex that does not exist")

        self.n_levels = 0
        self._boundaries: Dict[int, Boundary] = {}
        self._build_face_connectivity()
        self._assign_boundary_ids(boundary_ids or {})

    @property
    def dim(self) -> int:
        """Spatial dimension of the mesh."""
        return self.vertices.shape[1]

    @property
    def n_vertices(self) -> int:
        """Number of vertices in the arena (used or not)."""
        return len(self.vertices)

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    @property
    def n_active_cells(self) -> int:
        """Number of active cells. No hierarchy is kept, so all cells."""
        return len(self.cells)

    @property
    def n_faces(self) -> int:
        return len(self.face_to_cells)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    def _build_face_connectivity(self) -> None:
        """
        Create the face list and face-cell adjacency.

        Faces are identified by their sorted vertex indices, so two cells
        share a face exactly when they reference the same vertices.
        """
        self.face_to_cells: Dict[FaceKey, List[int]] = {}
        self.cell_to_faces: List[List[FaceKey]] = []

        faces = local_faces(self.dim)
        for cell_idx, cell in enumerate(self.cells):
            keys = []
            for face in faces:
                key = tuple(sorted(int(cell[i]) for i in face))
                self.face_to_cells.setdefault(key, []).append(cell_idx)
                keys.append(key)
            self.cell_to_faces.append(keys)

        for key, adjacent in self.face_to_cells.items():
            if len(adjacent) > 2:
                raise ValueError(f"face {key} is shared by {len(adjacent)} "
                                 "cells")

        edge_set = set()
        for cell in self.cells:
            for i, j in local_edges(self.dim):
                n1, n2 = int(cell[i]), int(cell[j])
                edge_set.add((min(n1, n2), max(n1, n2)))
        self.edges = np.array(sorted(edge_set), dtype=np.int64).reshape(-1, 2)

    def _assign_boundary_ids(self, boundary_ids: Dict[FaceKey, int]) -> None:
        """Tag every boundary face; interior entries are dropped."""
        boundary_ids = {tuple(sorted(key)): value
                        for key, value in boundary_ids.items()}
        self.boundary_ids: Dict[FaceKey, int] = {}
        for key in self.boundary_faces:
            self.boundary_ids[key] = int(boundary_ids.get(key, 0))

    @property
    def boundary_faces(self) -> List[FaceKey]:
        """Keys of faces that belong to exactly one cell."""
        return [key for key, adjacent in self.face_to_cells.items()
                if len(adjacent) == 1]

    def is_boundary_face(self, key: FaceKey) -> bool:
        return len(self.face_to_cells.get(tuple(sorted(key)), ())) == 1

    def boundary_id(self, key: FaceKey) -> int:
        """Return the tag of a boundary face."""
        key = tuple(sorted(key))
        if key not in self.boundary_ids:
            raise KeyError(f"{key} is not a boundary face")
        return self.boundary_ids[key]

    def set_boundary_id(self, key: FaceKey, boundary_id: int) -> None:
        """Re-tag a boundary face."""
        key = tuple(sorted(key))
        if key not in self.boundary_ids:
            raise KeyError(f"{key} is not a boundary face")
        self.boundary_ids[key] = int(boundary_id)

    def cell_faces(self, cell_idx: int) -> List[FaceKey]:
        """Return the face keys of a cell in local face order."""
        return self.cell_to_faces[cell_idx]

    def cell_vertices(self, cell_idx: int) -> np.ndarray:
        """
        Return coordinates of a cell's vertices.

        Returns:
            coordinates: shape (2**dim, dim)
        """
        return self.vertices[self.cells[cell_idx]]

    @property
    def used_vertices(self) -> np.ndarray:
        """Sorted indices of vertices referenced by at least one cell."""
        return np.unique(self.cells)

    @property
    def boundary_vertices(self) -> np.ndarray:
        """Sorted indices of vertices lying on a boundary face."""
        nodes = set()
        for key in self.boundary_faces:
            nodes.update(key)
        return np.array(sorted(nodes), dtype=np.int64)

    def get_vertices_in_region(self, region_func) -> np.ndarray:
        """
        Get indices of used vertices satisfying a condition.

        Args:
            region_func: function(point) -> bool

        Returns:
            vertex_indices: array of vertex indices
        """
        return np.array([i for i in self.used_vertices
                         if region_func(self.vertices[i])], dtype=np.int64)

    def cell_measures(self) -> np.ndarray:
        """
        Area (2-d) or volume (3-d) of every cell.

        Quadrilaterals use the shoelace formula; hexahedra are split into
        six tetrahedra around the 0-7 diagonal.

        Returns:
            measures: shape (n_cells,)
        """
        X = self.vertices[self.cells]
        if self.dim == 2:
            # counterclockwise order from lexicographic numbering
            P = X[:, [0, 1, 3, 2]]
            x, y = P[..., 0], P[..., 1]
            return 0.5 * np.abs(np.sum(x * np.roll(y, -1, axis=1) -
                                       np.roll(x, -1, axis=1) * y, axis=1))

        volumes = np.zeros(self.n_cells)
        for a, b in ((1, 3), (1, 5), (2, 3), (2, 6), (4, 5), (4, 6)):
            d1 = X[:, a] - X[:, 0]
            d2 = X[:, b] - X[:, 0]
            d3 = X[:, 7] - X[:, 0]
            volumes += np.abs(np.einsum('ij,ij->i', d1, np.cross(d2, d3))) / 6
        return volumes

    def minimal_vertex_edge_lengths(self) -> np.ndarray:
        """
        Shortest edge length adjacent to each vertex.

        Returns:
            lengths: shape (n_vertices,), inf for unused vertices
        """
        lengths = np.full(self.n_vertices, np.inf)
        edge_lengths = np.linalg.norm(self.vertices[self.edges[:, 1]] -
                                      self.vertices[self.edges[:, 0]], axis=1)
        np.minimum.at(lengths, self.edges[:, 0], edge_lengths)
        np.minimum.at(lengths, self.edges[:, 1], edge_lengths)
        return lengths

    def set_boundary(self, boundary_id: int,
                     boundary: Optional[Boundary] = None) -> None:
        """
        Attach a boundary descriptor to a tag, or detach it.

        The descriptor decides where vertices created on faces with this
        tag are placed during refinement.

        Args:
            boundary_id: boundary tag
            boundary: descriptor, or None to go back to straight faces
        """
        if boundary is None:
            self._boundaries.pop(boundary_id, None)
        else:
            self._boundaries[boundary_id] = boundary

    def get_boundary(self, boundary_id: int) -> Boundary:
        """Return the descriptor attached to a tag (straight by default)."""
        return self._boundaries.get(boundary_id, StraightBoundary())

    @property
    def attached_boundaries(self) -> Dict[int, Boundary]:
        return dict(self._boundaries)

    def refine_global(self, times: int = 1) -> None:
        """
        Uniformly refine all cells, in place.

        Args:
            times: number of refinement sweeps
        """
        from .refinement import refine_once

        for _ in range(times):
            vertices, cells, boundary_ids = refine_once(self)
            self.vertices = vertices
            self.cells = cells
            self._build_face_connectivity()
            self._assign_boundary_ids(boundary_ids)
            self.n_levels += 1

    def copy(self) -> 'Triangulation':
        """Deep copy of geometry and tags; descriptors are shared."""
        other = Triangulation(self.vertices.copy(), self.cells.copy(),
                              dict(self.boundary_ids))
        other.n_levels = self.n_levels
        other._boundaries = dict(self._boundaries)
        return other

    def __repr__(self) -> str:
        return (f"Triangulation(dim={self.dim}, n_vertices={self.n_vertices},"
                f" n_cells={self.n_cells})")
