"""
Grid Output
===========

Mesh summary report and EPS export.
"""

import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from mesh.triangulation import Triangulation


IMAGE_FORMATS = ('eps', 'ps', 'pdf', 'svg', 'png')


@dataclass
class EpsFlags:
    """Drawing options for write_eps."""
    size: float = 6.0           # Figure width and height [inch]
    line_width: float = 0.5     # Edge line width [pt]
    color: str = 'k'            # Edge color
    azimuth: float = 60.0       # 3-d only: tilt of the view from the z axis [deg]
    turn: float = 30.0          # 3-d only: rotation about the z axis [deg]


@dataclass
class MeshInfo:
    """Summary of a mesh as printed by mesh_info."""
    dim: int
    n_active_cells: int
    boundary_counts: Dict[int, int] = field(default_factory=dict)
    filename: Optional[str] = None


def project_vertices(tria: 'Triangulation',
                     flags: Optional[EpsFlags] = None) -> np.ndarray:
    """
    2-d drawing coordinates of the vertices.

    2-d meshes are drawn as they are. 3-d meshes are rotated by `turn`
    about the z axis, then viewed orthographically from a direction
    tilted by `azimuth` from the z axis.

    Returns:
        points: shape (n_vertices, 2)
    """
    if tria.dim == 2:
        return tria.vertices.copy()

    flags = flags or EpsFlags()
    turn = np.radians(flags.turn)
    tilt = np.radians(flags.azimuth)
    x, y, z = tria.vertices.T
    xr = x * np.cos(turn) - y * np.sin(turn)
    yr = x * np.sin(turn) + y * np.cos(turn)
    return np.column_stack([xr, z * np.sin(tilt) + yr * np.cos(tilt)])


def write_eps(tria: 'Triangulation', filename: str,
              flags: Optional[EpsFlags] = None) -> None:
    """
    Draw all cell edges and save them as an image.

    The file extension picks the format (eps, ps, pdf, svg or png); a
    path without extension is written as eps. If drawing fails no file
    is left behind.

    Args:
        tria: Triangulation instance
        filename: output path; OSError if it cannot be opened
        flags: drawing options
    """
    fmt = os.path.splitext(filename)[1].lstrip('.').lower() or 'eps'
    if fmt not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {fmt}")

    flags = flags or EpsFlags()
    points = project_vertices(tria, flags)
    segments = points[tria.edges]

    fig, ax = plt.subplots(figsize=(flags.size, flags.size))
    try:
        lc = LineCollection(segments, colors=flags.color,
                            linewidths=flags.line_width)
        ax.add_collection(lc)
        ax.autoscale()
        ax.set_aspect('equal')
        ax.set_axis_off()
        with open(filename, 'wb') as out:
            try:
                fig.savefig(out, format=fmt, bbox_inches='tight')
            except Exception:
                out.close()
                os.remove(filename)
                raise
    finally:
        plt.close(fig)


def boundary_histogram(tria: 'Triangulation') -> Dict[int, int]:
    """
    Count boundary faces per boundary tag over all active cells.

    Returns:
        counts: {tag: number of faces}, in ascending tag order
    """
    counts: Dict[int, int] = {}
    for cell_idx in range(tria.n_active_cells):
        for key in tria.cell_faces(cell_idx):
            if key in tria.boundary_ids:
                tag = tria.boundary_ids[key]
                counts[tag] = counts.get(tag, 0) + 1
    return dict(sorted(counts.items()))


def mesh_info(tria: 'Triangulation', filename: str,
              verbose: bool = True,
              flags: Optional[EpsFlags] = None) -> MeshInfo:
    """
    Print a summary of a mesh and write it to an EPS file.

    Output format:
        Mesh info:
         dimension: 2
         no. of cells: 8
         boundary indicators: 0(8 times) 1(8 times)
         written to grid-1.eps

    Args:
        tria: Triangulation instance
        filename: EPS output path
        verbose: print the report
        flags: drawing options

    Returns:
        MeshInfo with the reported numbers
    """
    info = MeshInfo(dim=tria.dim, n_active_cells=tria.n_active_cells,
                    boundary_counts=boundary_histogram(tria))

    if verbose:
        print("Mesh info:")
        print(f" dimension: {info.dim}")
        print(f" no. of cells: {info.n_active_cells}")
        print(" boundary indicators: " + " ".join(
            f"{tag}({count} times)"
            for tag, count in info.boundary_counts.items()))

    write_eps(tria, filename, flags)
    info.filename = filename

    if verbose:
        print(f" written to {filename}")
        print()

    return info
