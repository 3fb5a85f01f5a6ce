from __future__ import annotations
from typing import Sequence, TYPE_CHECKING
import numpy as np

from ..components.base import EvalContext, SimData
from .picard import Solution, SolverConfig

if TYPE_CHECKING:
    from ..components.base import Component
    from ..network.wire import Wire


def track(sim: SimData, voltage: float, current: float, alpha: float, config: SolverConfig) -> None:
    """
    Fold one tick into an element's telemetry.

    The displayed current is exponentially smoothed with weight ``alpha``; the
    voltage is taken as solved. Power, peaks and mean squares are then derived
    from the displayed values.
    """
    sim.current = sim.current * (1 - alpha) + current * alpha
    sim.voltage = voltage
    sim.power = abs(sim.voltage) * abs(sim.current)

    sim.peak_voltage = max(abs(sim.voltage), sim.peak_voltage * config.peak_decay)
    sim.peak_current = max(abs(sim.current), sim.peak_current * config.peak_decay)

    beta = config.rms_alpha
    sim.v_sq_sum = sim.v_sq_sum * (1 - beta) + sim.voltage ** 2 * beta
    sim.rms_voltage = float(np.sqrt(sim.v_sq_sum))
    sim.i_sq_sum = sim.i_sq_sum * (1 - beta) + sim.current ** 2 * beta
    sim.rms_current = float(np.sqrt(sim.i_sq_sum))


def update_component(comp: Component, solution: Solution, dt: float, sim_time: float,
                     config: SolverConfig) -> None:
    if comp.n_ports < 2:
        return
    i_aux = solution.aux(comp.id) if comp.num_aux_vars() else 0.0
    ctx = EvalContext(v_branch=solution.branch_voltage(comp.id), dt=dt,
                      sim_time=sim_time, i_aux=i_aux)
    # the law must see the previous tick's stored state, so commit comes after
    current = comp.branch_current(ctx)
    comp.commit(ctx, current)
    track(comp.sim, ctx.v_branch, current, config.alpha_component, config)


def update_wire(wire: Wire, solution: Solution, config: SolverConfig) -> None:
    ends = solution.index.wire_ends(wire)
    if ends is None:
        return
    u, v = ends
    voltage = float(solution.x[u] - solution.x[v])
    track(wire.sim, voltage, voltage / config.wire_resistance, config.alpha_wire, config)


def commit_solution(components: Sequence[Component], wires: Sequence[Wire], solution: Solution,
                    dt: float, sim_time: float, config: SolverConfig | None = None) -> None:
    """
    Write the tick's telemetry and reactive state for every element.
    """
    if config is None:
        config = SolverConfig()
    for comp in components:
        update_component(comp, solution, dt, sim_time, config)
    for wire in wires:
        update_wire(wire, solution, config)
