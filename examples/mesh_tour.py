"""
Mesh Tour Example
=================

Builds and modifies meshes in seven different ways and writes
grid-1.eps ... grid-7.eps to the current directory.
"""

import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from scenarios import TourConfig, main


if __name__ == "__main__":
    config = TourConfig(
        input_mesh=os.path.join(os.path.dirname(__file__), 'untitled.msh'),
    )
    sys.exit(main(config))
