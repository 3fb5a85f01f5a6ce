from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING
import numpy as np

from ..components.base import StampData, stamp_resistance
from ..config import (
    ALPHA_COMPONENT,
    ALPHA_WIRE,
    G_MIN,
    MAX_ITERATIONS,
    PEAK_DECAY,
    PIVOT_TOL,
    RMS_ALPHA,
    WIRE_RESISTANCE,
)
from ..logging import tick_logger
from ..network.topology import GROUND, NodeIndex
from .linear import solve_linear_system

if TYPE_CHECKING:
    from ..components.base import Component
    from ..network.wire import Wire

Array = np.ndarray


@dataclass
class SolverConfig:
    """
    Configuration parameters for one solve call.

    Attributes:
        max_iter: Fixed number of stamp/solve iterations (default: 50). There is
            no tolerance test: the last iteration is always the answer.
        pivot_tol: Pivot magnitude below which a column is a free variable.
        g_min: Shunt conductance added to every port diagonal.
        wire_resistance: Resistance stamped for every wire.
        alpha_component: Smoothing weight of the new current for components.
        alpha_wire: Smoothing weight of the new current for wires.
        peak_decay: Per-tick decay of the peak trackers.
        rms_alpha: Weight of the new sample in the mean-square accumulators.
    """
    max_iter: int = MAX_ITERATIONS
    pivot_tol: float = PIVOT_TOL
    g_min: float = G_MIN
    wire_resistance: float = WIRE_RESISTANCE
    alpha_component: float = ALPHA_COMPONENT
    alpha_wire: float = ALPHA_WIRE
    peak_decay: float = PEAK_DECAY
    rms_alpha: float = RMS_ALPHA

    def __post_init__(self) -> None:
        if self.max_iter < 1:
            raise ValueError("max_iter must be at least 1.")


class NumericDivergenceError(RuntimeError):
    """
    Raised when an iteration produces a non-finite value.

    The tick is abandoned before any telemetry is written; the caller decides
    whether to pause, reset or retry with a smaller dt.
    """

    def __init__(self, iteration: int, sim_time: float) -> None:
        super().__init__(
            f"Non-finite solution at iteration {iteration} (t = {sim_time:.6g} s)."
        )
        self.iteration = iteration
        self.sim_time = sim_time


@dataclass
class Solution:
    """Converged unknown vector of one tick, addressed through its NodeIndex."""
    x: Array
    index: NodeIndex
    iterations: int

    def port_voltage(self, component_id: str, port: int) -> float:
        return float(self.x[self.index.ports[(component_id, port)]])

    def branch_voltage(self, component_id: str) -> float:
        u, v = self.index.terminals(component_id)
        return float(self.x[u] - self.x[v])

    def aux(self, component_id: str) -> float:
        return float(self.x[self.index.source(component_id)])


def assemble(components: Sequence[Component], wires: Sequence[Wire], index: NodeIndex,
             x_prev: Array, dt: float, sim_time: float,
             config: SolverConfig | None = None) -> StampData:
    """
    Build A and b for one iteration.

    Wires are stamped first, then components in declaration order. Afterwards
    every port diagonal receives g_min and the ground row is replaced by the
    identity equation V[0] = 0.
    """
    if config is None:
        config = SolverConfig()
    data = StampData.empty(index, dt=dt, sim_time=sim_time, x_prev=x_prev)

    for wire in wires:
        ends = index.wire_ends(wire)
        if ends is not None:
            stamp_resistance(data, ends[0], ends[1], config.wire_resistance)

    for comp in components:
        comp.stamp(data)

    ports = np.arange(index.n_ports)
    data.A[ports, ports] += config.g_min
    data.A[GROUND, :] = 0.0
    data.A[GROUND, GROUND] = 1.0
    data.b[GROUND] = 0.0
    return data


def picard_solve(components: Sequence[Component], wires: Sequence[Wire], index: NodeIndex,
                 dt: float, sim_time: float, config: SolverConfig | None = None) -> Solution:
    """
    Settle the nonlinear elements by fixed-point (Picard) iteration.

    Every iteration restamps the whole network using the previous iteration's
    solution to choose each diode's region, then solves the linear system. The
    loop always runs ``max_iter`` times and returns the last result.

    Raises:
        NumericDivergenceError: If any iteration yields NaN or infinity.
    """
    if config is None:
        config = SolverConfig()

    x = np.zeros(index.size)
    for iteration in range(config.max_iter):
        data = assemble(components, wires, index, x, dt, sim_time, config)
        with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
            x = solve_linear_system(data.A, data.b, config.pivot_tol)
        if not np.all(np.isfinite(x)):
            raise NumericDivergenceError(iteration, sim_time)
        x[GROUND] = 0.0

    tick_logger(sim_time).debug("%d unknowns, %d iterations", index.size, config.max_iter)
    return Solution(x=x, index=index, iterations=config.max_iter)
