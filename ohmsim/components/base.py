from __future__ import annotations
from dataclasses import dataclass, field, fields, astuple
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Tuple, TYPE_CHECKING
import numpy as np

from ..config import MIN_RESISTANCE

if TYPE_CHECKING:
    from ..network.topology import NodeIndex

Array = np.ndarray


class ComponentKind(str, Enum):
    BATTERY = "battery"
    SWITCH = "switch"
    PUSH_BUTTON = "pushbutton"
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    POLARIZED_CAPACITOR = "capacitor_pol"
    INDUCTOR = "inductor"
    AC_SOURCE = "ac_source"
    DIODE = "diode"
    LED = "led"
    LAMP = "lamp"
    JUNCTION = "junction"


@dataclass
class SimData:
    """
    Per-element telemetry plus the state carried from one tick to the next.

    Attributes:
        voltage: Branch voltage V(port0) - V(port1) of the last tick.
        current: Smoothed branch current (positive from port0 to port1).
        power: |voltage| * |current|.
        peak_voltage / peak_current: Slowly decaying peak magnitudes.
        rms_voltage / rms_current: Square root of the exponential mean square.
        stored_voltage: Capacitor voltage at the end of the previous tick.
        stored_current: Inductor current at the end of the previous tick.
        v_sq_sum / i_sq_sum: Mean-square accumulators behind the RMS values.
    """
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    peak_voltage: float = 0.0
    peak_current: float = 0.0
    rms_voltage: float = 0.0
    rms_current: float = 0.0
    stored_voltage: float = 0.0
    stored_current: float = 0.0
    v_sq_sum: float = 0.0
    i_sq_sum: float = 0.0

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, 0.0)

    def snapshot(self) -> Tuple[float, ...]:
        return astuple(self)


@dataclass(frozen=True)
class EvalContext:
    """Operating point of one component after the iterations of a tick."""
    v_branch: float           # V(port0) - V(port1)
    dt: float                 # tick length
    sim_time: float           # absolute time of the tick
    i_aux: float = 0.0        # solved branch-current unknown (ideal sources only)


@dataclass
class StampData:
    """
    Shared view of the MNA system during stamping.

    Attributes:
        A: Conductance/constraint matrix, shape (size, size).
        b: Right-hand side vector (injected currents and source values).
        index: Port and source unknown numbering for this tick.
        x_prev: Solution of the previous iteration (zeros on the first one).
        dt: Tick length in seconds.
        sim_time: Absolute simulation time of the tick.
    """
    A: Array
    b: Array
    index: NodeIndex
    x_prev: Array
    dt: float
    sim_time: float

    @classmethod
    def empty(cls, index: NodeIndex, dt: float, sim_time: float = 0.0,
              x_prev: Array | None = None) -> StampData:
        size = index.size
        if x_prev is None:
            x_prev = np.zeros(size)
        return cls(A=np.zeros((size, size)), b=np.zeros(size), index=index,
                   x_prev=x_prev, dt=dt, sim_time=sim_time)

    def terminals(self, component_id: str) -> Tuple[int, int]:
        return self.index.terminals(component_id)

    def previous_voltage(self, u: int, v: int) -> float:
        return float(self.x_prev[u] - self.x_prev[v])


def stamp_conductance(data: StampData, u: int, v: int, g: float) -> None:
    data.A[u, u] += g
    data.A[v, v] += g
    data.A[u, v] -= g
    data.A[v, u] -= g


def stamp_resistance(data: StampData, u: int, v: int, r: float) -> None:
    stamp_conductance(data, u, v, 1.0 / max(MIN_RESISTANCE, r))


def stamp_current_source(data: StampData, u: int, v: int, i_eq: float) -> None:
    """
    Companion-model source term: the branch current is G*(Vu - Vv) + i_eq,
    flowing from u to v, so i_eq moves to the right-hand side with opposite sign.
    """
    data.b[u] -= i_eq
    data.b[v] += i_eq


def stamp_voltage_source(data: StampData, aux_idx: int, plus: int, minus: int, voltage: float) -> None:
    data.A[aux_idx, plus] += 1.0
    data.A[aux_idx, minus] -= 1.0
    data.A[plus, aux_idx] += 1.0
    data.A[minus, aux_idx] -= 1.0
    data.b[aux_idx] += voltage


@dataclass
class Component(ABC):
    """
    Abstract base class for every element the solver can stamp.

    Each concrete kind owns its parameters, its stamp (the contribution to the
    MNA matrix for one iteration) and its constitutive law, which the state
    updater evaluates once at the final operating point of the tick. Telemetry
    and the reactive state carried across ticks live in ``sim``.

    Current convention: positive current flows from port 0 to port 1 through
    the component.

    Subclasses must implement:
        - stamp: Add the element's contribution to the global system
        - branch_current: Current through the element at a given operating point

    Subclasses may optionally override:
        - num_aux_vars: Extra unknowns (ideal voltage sources)
        - commit: Persist reactive state after the tick has been accepted
    """
    id: str
    sim: SimData = field(default_factory=SimData, repr=False, compare=False)

    kind: ClassVar[ComponentKind]
    n_ports: ClassVar[int] = 2

    def num_aux_vars(self) -> int:
        return 0

    @abstractmethod
    def stamp(self, data: StampData) -> None:
        """
        Add this element's contribution to the global A, b system.
        """

    @abstractmethod
    def branch_current(self, ctx: EvalContext) -> float:
        """
        Return the current flowing from port 0 to port 1.
        """

    def commit(self, ctx: EvalContext, current: float) -> None:
        """Store whatever state the next tick's stamp depends on."""

    def reset(self) -> None:
        self.sim.reset()
