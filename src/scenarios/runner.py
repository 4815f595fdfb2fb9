"""
Scenario Runner
===============

Run the mesh demonstrations one after another.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from postprocess import MeshInfo

from .config import TourConfig
from .grids import SCENARIOS


@dataclass
class TourResult:
    """Outcome of run_all."""
    reports: Dict[int, MeshInfo] = field(default_factory=dict)
    failures: List[Tuple[int, BaseException]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def run_all(config: Optional[TourConfig] = None,
            scenarios: Optional[Sequence[Callable[[TourConfig], MeshInfo]]]
            = None) -> TourResult:
    """
    Run scenarios in order, numbering them from 1.

    By default the first failure propagates and the remaining scenarios
    do not run. With `config.isolate_failures` a failure is printed with
    its scenario number and the run moves on to the next scenario.

    Args:
        config: TourConfig (optional)
        scenarios: scenario functions; the seven demonstrations by default

    Returns:
        TourResult with one report per successful scenario
    """
    config = config or TourConfig()
    scenarios = SCENARIOS if scenarios is None else scenarios
    result = TourResult()

    for index, scenario in enumerate(scenarios, start=1):
        try:
            result.reports[index] = scenario(config)
        except Exception as exc:
            if not config.isolate_failures:
                raise
            print(f"grid-{index} failed: {type(exc).__name__}: {exc}")
            result.failures.append((index, exc))

    return result


def main(config: Optional[TourConfig] = None) -> int:
    """Run all scenarios and return the process exit status."""
    result = run_all(config)
    return 0 if result.success else 1
