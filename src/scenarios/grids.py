"""
Mesh Demonstrations
===================

Seven independent ways of building and modifying a mesh. Each scenario
constructs its own meshes, reports them with mesh_info and writes one
EPS file.
"""

import os
import numpy as np
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mesh import (
    HyperBallBoundary,
    boundary_attached,
    distort_random,
    extrude_triangulation,
    hyper_cube_with_cylindrical_hole,
    merge_triangulations,
    move_vertices,
    on_line,
    read_msh,
    subdivided_hyper_rectangle,
    transform,
)
from postprocess import MeshInfo, mesh_info

from .config import TourConfig


def grid_1(config: TourConfig) -> MeshInfo:
    """Read a mesh generated by Gmsh."""
    tria = read_msh(config.input_mesh)
    return mesh_info(tria, config.output_path(1), verbose=config.verbose)


def grid_2(config: TourConfig) -> MeshInfo:
    """
    Merge the square with a hole and a rectangle attached to its right.

    The rectangle (1, -1)-(4, 1) is split 3 x 2, so its left edge has
    vertices at y = -1, 0, 1 like the right edge of the square.
    """
    tria_1 = hyper_cube_with_cylindrical_hole(0.25, 1.0)
    tria_2 = subdivided_hyper_rectangle([3, 2], [1.0, -1.0], [4.0, 1.0])

    tria = merge_triangulations(tria_1, tria_2)
    return mesh_info(tria, config.output_path(2), verbose=config.verbose)


def grid_3(config: TourConfig) -> MeshInfo:
    """
    Move the top edge up by 0.5, then refine twice with a curved hole.

    The moved vertices end up at y = 1.5 and are not selected again when
    a neighboring cell visits them.
    """
    tria = hyper_cube_with_cylindrical_hole(0.25, 1.0)
    move_vertices(tria, on_line(1, 1.0), [0.0, 0.5])

    with boundary_attached(tria, 1, HyperBallBoundary((0.0, 0.0), 0.25)):
        tria.refine_global(2)
        return mesh_info(tria, config.output_path(3), verbose=config.verbose)


def grid_4(config: TourConfig) -> MeshInfo:
    """Extrude the square with a hole into two layers of height 1."""
    tria = hyper_cube_with_cylindrical_hole(0.25, 1.0)
    out = extrude_triangulation(tria, 2, 2.0)
    return mesh_info(out, config.output_path(4), verbose=config.verbose)


def grid_5_transform(point: np.ndarray) -> np.ndarray:
    return np.array([point[0], point[1] + np.sin(point[0] / 5.0 * np.pi)])


def grid_5(config: TourConfig) -> MeshInfo:
    """Bend a 10 x 1 strip into a sine wave with a plain function."""
    tria = subdivided_hyper_rectangle([14, 2], [0.0, 0.0], [10.0, 1.0])
    transform(grid_5_transform, tria)
    return mesh_info(tria, config.output_path(5), verbose=config.verbose)


class TanhStretch:
    """
    Map y -> tanh(s y) / tanh(s), leaving x alone.

    Grades a mesh on [0, 1] toward y = 1. The object form shows that a
    transform can carry its own parameters.
    """

    def __init__(self, strength: float = 2.0):
        self.strength = strength

    def trans(self, y: float) -> float:
        return np.tanh(self.strength * y) / np.tanh(self.strength)

    def inverse_trans(self, y: float) -> float:
        return np.arctanh(y * np.tanh(self.strength)) / self.strength

    def __call__(self, point: np.ndarray) -> np.ndarray:
        return np.array([point[0], self.trans(point[1])])

    def inverse(self, point: np.ndarray) -> np.ndarray:
        return np.array([point[0], self.inverse_trans(point[1])])


def grid_6(config: TourConfig) -> MeshInfo:
    """Grade a 40 x 40 unit square with a callable object."""
    tria = subdivided_hyper_rectangle([40, 40], [0.0, 0.0], [1.0, 1.0])
    transform(TanhStretch(2.0), tria)
    return mesh_info(tria, config.output_path(6), verbose=config.verbose)


def grid_7(config: TourConfig) -> MeshInfo:
    """Randomly distort the interior vertices of a 16 x 16 unit square."""
    tria = subdivided_hyper_rectangle([16, 16], [0.0, 0.0], [1.0, 1.0])
    distort_random(0.3, tria, keep_boundary=True, seed=config.distortion_seed)
    return mesh_info(tria, config.output_path(7), verbose=config.verbose)


SCENARIOS = [grid_1, grid_2, grid_3, grid_4, grid_5, grid_6, grid_7]
