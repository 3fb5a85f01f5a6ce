"""
Top-level namespace for ohmsim, a time-stepped circuit solver.

Each call to ``solve`` advances a circuit of resistive, reactive, diode and
source elements by one tick using modified nodal analysis:
- ohmsim.components: element kinds and their MNA stamps.
- ohmsim.network: port numbering (topology) and wires.
- ohmsim.solver: linear solver, Picard iteration driver and state updater.
- ohmsim.simulation: fixed-interval scheduler with telemetry history.
"""

from . import components  # noqa: F401
from . import network  # noqa: F401
from . import solver  # noqa: F401
from .circuit import Circuit  # noqa: F401
from .network.wire import Port, Wire  # noqa: F401
from .simulation import SimResult, Simulation, SimulationSettings  # noqa: F401
from .solver import NumericDivergenceError, SolverConfig, solve  # noqa: F401

__all__ = [
    "Circuit",
    "NumericDivergenceError",
    "Port",
    "SimResult",
    "Simulation",
    "SimulationSettings",
    "SolverConfig",
    "Wire",
    "components",
    "network",
    "solve",
    "solver",
]
