"""
Postprocessing Module
=====================

Mesh report and EPS export.
"""

from .grid_out import (
    EpsFlags,
    MeshInfo,
    project_vertices,
    write_eps,
    boundary_histogram,
    mesh_info,
)

__all__ = [
    "EpsFlags",
    "MeshInfo",
    "project_vertices",
    "write_eps",
    "boundary_histogram",
    "mesh_info",
]
