"""
Boundary Descriptions
=====================

Analytic shapes used to place new boundary vertices during refinement.
"""

import numpy as np
from contextlib import contextmanager
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .triangulation import Triangulation


class Boundary:
    """
    Base boundary description.

    Refinement first computes the straight average of the parent vertices
    of a new boundary vertex and then passes it to `project`.
    """

    def project(self, point: np.ndarray) -> np.ndarray:
        """Map a candidate point onto the boundary."""
        raise NotImplementedError


class StraightBoundary(Boundary):
    """Straight faces: new vertices stay where interpolation puts them."""

    def project(self, point: np.ndarray) -> np.ndarray:
        return np.asarray(point, dtype=np.float64)


class HyperBallBoundary(Boundary):
    """
    Circle (2-d) or sphere (3-d) of given center and radius.

    New vertices are pushed radially onto the sphere.
    """

    def __init__(self, center: Sequence[float], radius: float):
        if radius <= 0:
            raise ValueError("radius must be positive")
        self.center = np.asarray(center, dtype=np.float64)
        self.radius = float(radius)

    def project(self, point: np.ndarray) -> np.ndarray:
        point = np.asarray(point, dtype=np.float64)
        direction = point - self.center
        norm = np.linalg.norm(direction)
        if norm == 0:
            raise ValueError("cannot project the center onto the sphere")
        return self.center + self.radius * direction / norm

    def __repr__(self) -> str:
        return (f"HyperBallBoundary(center={self.center.tolist()}, "
                f"radius={self.radius})")


class CylinderBoundary(Boundary):
    """
    Infinite cylinder around a line parallel to a coordinate axis (3-d).

    Only the component of a point normal to the axis is rescaled.
    """

    def __init__(self, radius: float, axis: int = 2,
                 point_on_axis: Optional[Sequence[float]] = None):
        if radius <= 0:
            raise ValueError("radius must be positive")
        if axis not in (0, 1, 2):
            raise ValueError(f"Unknown axis: {axis}")
        self.radius = float(radius)
        self.axis = axis
        if point_on_axis is None:
            point_on_axis = np.zeros(3)
        self.point_on_axis = np.asarray(point_on_axis, dtype=np.float64)

    def project(self, point: np.ndarray) -> np.ndarray:
        point = np.asarray(point, dtype=np.float64)
        radial = point - self.point_on_axis
        radial[self.axis] = 0.0
        norm = np.linalg.norm(radial)
        if norm == 0:
            raise ValueError("cannot project a point on the cylinder axis")
        return point + (self.radius / norm - 1.0) * radial


@contextmanager
def boundary_attached(tria: 'Triangulation', boundary_id: int,
                      boundary: Boundary):
    """
    Attach a boundary description for the duration of a block.

    The description is detached again on every exit path, so the mesh
    never keeps a reference to a description its owner has released.

    Example:
        with boundary_attached(tria, 1, HyperBallBoundary((0, 0), 0.25)):
            tria.refine_global(2)
    """
    tria.set_boundary(boundary_id, boundary)
    try:
        yield boundary
    finally:
        tria.set_boundary(boundary_id)
