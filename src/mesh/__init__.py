"""
Mesh Module
===========

Quadrilateral and hexahedral meshes with a shared vertex arena, boundary
descriptions, generators and vertex transformations.
"""

from .triangulation import Triangulation
from .boundaries import (
    Boundary,
    StraightBoundary,
    HyperBallBoundary,
    CylinderBoundary,
    boundary_attached,
)
from .mesh_io import read_msh, write_msh, write_vtk
from .generators import (
    hyper_cube,
    subdivided_hyper_rectangle,
    hyper_cube_with_cylindrical_hole,
    merge_triangulations,
    extrude_triangulation,
)
from .grid_tools import (
    transform,
    shift,
    scale,
    rotate,
    on_line,
    move_vertices,
    distort_random,
    find_duplicate_vertices,
)

__all__ = [
    "Triangulation",
    "Boundary",
    "StraightBoundary",
    "HyperBallBoundary",
    "CylinderBoundary",
    "boundary_attached",
    "read_msh",
    "write_msh",
    "write_vtk",
    "hyper_cube",
    "subdivided_hyper_rectangle",
    "hyper_cube_with_cylindrical_hole",
    "merge_triangulations",
    "extrude_triangulation",
    "transform",
    "shift",
    "scale",
    "rotate",
    "on_line",
    "move_vertices",
    "distort_random",
    "find_duplicate_vertices",
]
