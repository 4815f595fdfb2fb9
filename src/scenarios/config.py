"""
Tour Configuration
==================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class TourConfig:
    """Configuration for the mesh demonstrations."""
    input_mesh: str = "untitled.msh"          # Gmsh file read by grid_1
    output_dir: str = "."                     # Where EPS files go
    filename_pattern: str = "grid-{index}.eps"
    distortion_seed: Optional[int] = None     # Seed for grid_7
    isolate_failures: bool = False            # Keep going after a failure
    verbose: bool = True                      # Print mesh reports

    def output_path(self, index: int) -> str:
        """Path of the EPS file written by scenario `index`."""
        return os.path.join(self.output_dir,
                            self.filename_pattern.format(index=index))
