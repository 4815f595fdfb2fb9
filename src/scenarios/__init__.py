"""
Scenarios Module
================

The seven mesh demonstrations and the sequential runner.
"""

from .config import TourConfig
from .grids import (
    grid_1,
    grid_2,
    grid_3,
    grid_4,
    grid_5,
    grid_6,
    grid_7,
    grid_5_transform,
    TanhStretch,
    SCENARIOS,
)
from .runner import TourResult, run_all, main

__all__ = [
    "TourConfig",
    "grid_1",
    "grid_2",
    "grid_3",
    "grid_4",
    "grid_5",
    "grid_6",
    "grid_7",
    "grid_5_transform",
    "TanhStretch",
    "SCENARIOS",
    "TourResult",
    "run_all",
    "main",
]
