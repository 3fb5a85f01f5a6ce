from __future__ import annotations
from typing import Sequence, TYPE_CHECKING

from ..network.topology import map_topology
from .picard import SolverConfig, picard_solve
from .state import commit_solution

if TYPE_CHECKING:
    from ..components.base import Component
    from ..network.wire import Wire


def solve(components: Sequence[Component], wires: Sequence[Wire], dt: float,
          sim_time: float = 0.0, config: SolverConfig | None = None) -> None:
    """
    Advance the circuit by one tick.

    Builds the index map from the current topology, runs the fixed Picard
    budget and, only once every iteration has produced a finite solution,
    writes telemetry and reactive state to the components and wires. The call
    is atomic with respect to that state: either everything is updated or
    nothing is.

    Args:
        components: Ordered components; the first one's port 0 is ground.
        wires: Ordered wires connecting component ports.
        dt: Tick length in seconds (must be positive).
        sim_time: Absolute simulation time, used by AC sources.
        config: Solver settings; defaults to SolverConfig().

    Raises:
        ValueError: If dt is not positive.
        NumericDivergenceError: If the iteration produced a non-finite value.
            Telemetry is left exactly as it was before the call.
    """
    if not dt > 0:
        raise ValueError("dt must be positive.")
    if config is None:
        config = SolverConfig()

    index = map_topology(components, wires)
    if index.size == 0:
        return

    solution = picard_solve(components, wires, index, dt, sim_time, config)
    commit_solution(components, wires, solution, dt, sim_time, config)
