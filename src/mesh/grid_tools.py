"""
Grid Tools
==========

Operations that move vertices of an existing mesh without changing its
topology, plus vertex bookkeeping used when meshes are combined.
"""

import numpy as np
from scipy.spatial import cKDTree
from typing import Callable, Dict, Optional, Sequence, Tuple

from .triangulation import Triangulation


def transform(func: Callable[[np.ndarray], np.ndarray],
              tria: Triangulation) -> None:
    """
    Apply a point map to every used vertex of a mesh, in place.

    `func` may be a plain function or any object with `__call__`. Each
    vertex is mapped once from its current coordinates; cells, faces and
    boundary tags are unchanged.

    Args:
        func: callable taking a point of shape (dim,) and returning one
        tria: mesh to transform
    """
    for i in tria.used_vertices:
        new_point = np.asarray(func(tria.vertices[i].copy()), dtype=np.float64)
        if new_point.shape != (tria.dim,):
            raise ValueError(f"transform returned shape {new_point.shape}, "
                             f"expected ({tria.dim},)")
        tria.vertices[i] = new_point


def shift(offset: Sequence[float], tria: Triangulation) -> None:
    """Translate all vertices by `offset`."""
    offset = np.asarray(offset, dtype=np.float64)
    transform(lambda p: p + offset, tria)


def scale(factor: float, tria: Triangulation) -> None:
    """Scale all vertex coordinates about the origin."""
    if factor <= 0:
        raise ValueError("scaling factor must be positive")
    transform(lambda p: factor * p, tria)


def rotate(angle: float, tria: Triangulation) -> None:
    """Rotate a 2-d mesh about the origin by `angle` radians."""
    if tria.dim != 2:
        raise ValueError("rotate is only defined for 2-d meshes")
    c, s = np.cos(angle), np.sin(angle)
    R = np.array([[c, -s], [s, c]])
    transform(lambda p: R @ p, tria)


def on_line(axis: int, value: float,
            tol: float = 1e-5) -> Callable[[np.ndarray], bool]:
    """
    Predicate selecting points whose coordinate `axis` equals `value`.

    Example:
        on_line(1, 1.0) selects points with |y - 1| < 1e-5
    """
    def select(point: np.ndarray) -> bool:
        return abs(point[axis] - value) < tol
    return select


def move_vertices(tria: Triangulation,
                  select: Callable[[np.ndarray], bool],
                  offset: Sequence[float]) -> int:
    """
    Move vertices selected by a coordinate predicate.

    Cells are visited in order and each of their vertices is tested with
    its current coordinates. A vertex shared by several cells is tested
    again for each of them, so the offset must carry it out of the
    selection; otherwise it moves once per visiting cell.

    Args:
        tria: mesh to modify in place
        select: function(point) -> bool
        offset: displacement added to each selected vertex

    Returns:
        n_moved: number of vertex moves performed
    """
    offset = np.asarray(offset, dtype=np.float64)
    n_moved = 0
    for cell in tria.cells:
        for v in cell:
            if select(tria.vertices[v]):
                tria.vertices[v] += offset
                n_moved += 1
    return n_moved


def distort_random(factor: float, tria: Triangulation,
                   keep_boundary: bool = True,
                   seed: Optional[int] = None) -> np.ndarray:
    """
    Randomly displace vertices of a mesh, in place.

    Every vertex moves by `factor` times the shortest edge adjacent to it,
    in a uniformly random direction. The factor is not checked against
    cell inversion; values above roughly 0.5 can produce tangled cells.

    Args:
        factor: displacement as a fraction of the local edge length
        tria: mesh to modify
        keep_boundary: leave vertices on boundary faces in place
        seed: random seed for reproducibility

    Returns:
        moved: indices of the vertices that were displaced
    """
    rng = np.random.default_rng(seed)
    lengths = tria.minimal_vertex_edge_lengths()

    fixed = set(tria.boundary_vertices) if keep_boundary else set()
    moved = np.array([v for v in tria.used_vertices if v not in fixed],
                     dtype=np.int64)

    for v in moved:
        direction = rng.uniform(-1.0, 1.0, tria.dim)
        norm = np.linalg.norm(direction)
        while norm == 0:
            direction = rng.uniform(-1.0, 1.0, tria.dim)
            norm = np.linalg.norm(direction)
        tria.vertices[v] += factor * lengths[v] * direction / norm

    return moved


def find_duplicate_vertices(vertices: np.ndarray,
                            tol: float) -> np.ndarray:
    """
    Map each vertex to the smallest index of a vertex coinciding with it.

    Two vertices coincide when their distance is at most `tol`.

    Returns:
        representative: shape (n_vertices,)
    """
    parent = np.arange(len(vertices))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    if len(vertices):
        for i, j in cKDTree(vertices).query_pairs(r=tol):
            ri, rj = find(i), find(j)
            if ri != rj:
                parent[max(ri, rj)] = min(ri, rj)

    return np.array([find(i) for i in range(len(vertices))], dtype=np.int64)


def compact_vertices(vertices: np.ndarray, cells: np.ndarray,
                     boundary_ids: Optional[Dict[tuple, int]] = None
                     ) -> Tuple[np.ndarray, np.ndarray, Dict[tuple, int]]:
    """
    Drop vertices no cell references and renumber the rest.

    Returns:
        vertices, cells, boundary_ids in the new numbering
    """
    used = np.unique(cells)
    new_index = np.full(len(vertices), -1, dtype=np.int64)
    new_index[used] = np.arange(len(used))

    new_ids = {}
    for key, boundary_id in (boundary_ids or {}).items():
        if all(new_index[v] >= 0 for v in key):
            new_ids[tuple(sorted(int(new_index[v]) for v in key))] = boundary_id

    return vertices[used].copy(), new_index[cells], new_ids
