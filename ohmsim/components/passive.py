from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Dict
from .base import (
    Component,
    ComponentKind,
    EvalContext,
    StampData,
    stamp_conductance,
    stamp_current_source,
    stamp_resistance,
)
from ..config import (
    CAPACITOR_LEAK,
    DEFAULT_CAPACITANCE,
    DEFAULT_CAPACITANCE_UNIT,
    DEFAULT_INDUCTANCE,
    DEFAULT_LAMP_RESISTANCE,
    DEFAULT_RESISTANCE,
    INDUCTOR_ESR,
    INDUCTOR_MIN_DT,
    MIN_RESISTANCE,
    R_CLOSED_SWITCH,
    R_OPEN_SWITCH,
)

CAPACITANCE_UNITS: Dict[str, float] = {
    "mF": 1e-3,
    "µF": 1e-6,
    "uF": 1e-6,
    "nF": 1e-9,
    "pF": 1e-12,
}


def capacitance_farads(value: float, unit: str = DEFAULT_CAPACITANCE_UNIT) -> float:
    """
    Convert an editor capacitance (value + unit label) into farads.
    Unknown labels fall back to microfarads.
    """
    return value * CAPACITANCE_UNITS.get(unit, 1e-6)


@dataclass
class Resistor(Component):
    resistance: float = DEFAULT_RESISTANCE

    kind: ClassVar[ComponentKind] = ComponentKind.RESISTOR

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        stamp_resistance(data, u, v, self.resistance)

    def branch_current(self, ctx: EvalContext) -> float:
        return ctx.v_branch / max(MIN_RESISTANCE, self.resistance)


@dataclass
class Lamp(Resistor):
    """
    Incandescent lamp rendered as a fixed resistor.

    The filament's temperature coefficient is not modelled, so the lamp is an
    ordinary resistor whose power drives its glow.
    """
    resistance: float = DEFAULT_LAMP_RESISTANCE

    kind: ClassVar[ComponentKind] = ComponentKind.LAMP

    def glow(self) -> float:
        """
        Brightness in [0, 1]: visible above 10 mW, saturating at 200 mW.
        """
        power = abs(self.sim.power)
        if power <= 0.01:
            return 0.0
        return min(1.0, power * 5.0)


@dataclass
class Switch(Component):
    closed: bool = False

    kind: ClassVar[ComponentKind] = ComponentKind.SWITCH

    @property
    def resistance(self) -> float:
        return R_CLOSED_SWITCH if self.closed else R_OPEN_SWITCH

    def toggle(self) -> None:
        self.closed = not self.closed

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        stamp_resistance(data, u, v, self.resistance)

    def branch_current(self, ctx: EvalContext) -> float:
        return ctx.v_branch / self.resistance


@dataclass
class PushButton(Switch):
    """Momentary switch; the editor holds ``closed`` only while pressed."""

    kind: ClassVar[ComponentKind] = ComponentKind.PUSH_BUTTON


@dataclass
class Capacitor(Component):
    """
    Capacitor integrated with backward Euler.

    Over one tick the element is replaced by its companion model, a conductance
    G = C/dt in parallel with a current source I_eq = -G * V_prev, where V_prev
    is the voltage stored at the end of the previous tick. A 1 TOhm leak keeps a
    floating capacitor from leaving its nodes undetermined.

    Attributes:
        capacitance: Numeric value in ``unit``.
        unit: One of "mF", "µF", "nF", "pF".
    """
    capacitance: float = DEFAULT_CAPACITANCE
    unit: str = DEFAULT_CAPACITANCE_UNIT

    kind: ClassVar[ComponentKind] = ComponentKind.CAPACITOR

    @property
    def farads(self) -> float:
        return capacitance_farads(self.capacitance, self.unit)

    def companion(self, dt: float) -> tuple[float, float]:
        """Return (G, I_eq) of the backward-Euler companion model."""
        g = self.farads / dt
        return g, -g * self.sim.stored_voltage

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        g, i_eq = self.companion(data.dt)
        stamp_conductance(data, u, v, g)
        stamp_conductance(data, u, v, CAPACITOR_LEAK)
        stamp_current_source(data, u, v, i_eq)

    def branch_current(self, ctx: EvalContext) -> float:
        g, _ = self.companion(ctx.dt)
        return g * (ctx.v_branch - self.sim.stored_voltage)

    def commit(self, ctx: EvalContext, current: float) -> None:
        self.sim.stored_voltage = ctx.v_branch


@dataclass
class PolarizedCapacitor(Capacitor):
    kind: ClassVar[ComponentKind] = ComponentKind.POLARIZED_CAPACITOR


@dataclass
class Inductor(Component):
    """
    Inductor integrated with backward Euler, including a 0.1 Ohm series resistance.

    The companion model is G_eq = 1 / (R_s + L/dt) in parallel with
    I_eq = i_prev * (L/dt) * G_eq, which solves v = R_s*i + L*(i - i_prev)/dt.
    The step is clamped to 1 µs so that a vanishing dt cannot short the element.

    Attributes:
        inductance: Inductance in henries.
    """
    inductance: float = DEFAULT_INDUCTANCE

    kind: ClassVar[ComponentKind] = ComponentKind.INDUCTOR

    def companion(self, dt: float) -> tuple[float, float]:
        l_over_dt = self.inductance / max(INDUCTOR_MIN_DT, dt)
        g_eq = 1.0 / (INDUCTOR_ESR + l_over_dt)
        return g_eq, self.sim.stored_current * l_over_dt * g_eq

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        g_eq, i_eq = self.companion(data.dt)
        stamp_conductance(data, u, v, g_eq)
        stamp_current_source(data, u, v, i_eq)

    def branch_current(self, ctx: EvalContext) -> float:
        g_eq, i_eq = self.companion(ctx.dt)
        return g_eq * ctx.v_branch + i_eq

    def commit(self, ctx: EvalContext, current: float) -> None:
        self.sim.stored_current = current


@dataclass
class Junction(Component):
    """Single-port wiring point; it only gives wires a shared node to meet at."""

    kind: ClassVar[ComponentKind] = ComponentKind.JUNCTION
    n_ports: ClassVar[int] = 1

    def stamp(self, data: StampData) -> None:
        return None

    def branch_current(self, ctx: EvalContext) -> float:
        return 0.0
