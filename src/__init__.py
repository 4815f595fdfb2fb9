"""
Mesh Tour
=========

Construction and manipulation of quadrilateral and hexahedral meshes.

Modules:
    mesh: Triangulation, boundary descriptions, generators, grid tools, I/O
    postprocess: Mesh report and EPS export
    scenarios: Seven mesh demonstrations and their runner
"""

from . import mesh
from . import postprocess
from . import scenarios

__version__ = "0.1.0"
__all__ = ["mesh", "postprocess", "scenarios"]
