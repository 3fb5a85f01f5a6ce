from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar
from .base import (
    Component,
    ComponentKind,
    EvalContext,
    StampData,
    stamp_conductance,
    stamp_current_source,
)
from ..config import (
    DIODE_FORWARD_VOLTAGE,
    DIODE_G_OFF,
    DIODE_R_ON,
    LED_FORWARD_VOLTAGE,
    LED_GLOW_THRESHOLD,
    LED_MAX_CURRENT,
    SCHOTTKY_FORWARD_VOLTAGE,
    ZENER_VOLTAGE,
)


class DiodeType(str, Enum):
    RECTIFIER = "rectifier"
    ZENER = "zener"
    SCHOTTKY = "schottky"


class Region(str, Enum):
    FORWARD = "forward"
    BREAKDOWN = "breakdown"
    BLOCKING = "blocking"


@dataclass
class Diode(Component):
    """
    Piecewise-linear diode with three regions.

    - Forward (Vd > V_fwd): I = (Vd - V_fwd) / R_on
    - Zener breakdown (zener type only, Vd < -V_zener): I = (Vd + V_zener) / R_on
    - Blocking: I = Vd * G_off

    The region is not solved for. While stamping, it is chosen from the branch
    voltage of the *previous* iteration (zero on the first one), and the driver
    simply repeats the stamp/solve cycle so the choice can settle. Port 0 is the
    anode, port 1 the cathode.

    Attributes:
        diode_type: rectifier (0.7 V), schottky (0.3 V) or zener (0.7 V forward
            plus reverse breakdown at zener_voltage).
        zener_voltage: Reverse breakdown magnitude in volts.
    """
    diode_type: DiodeType = DiodeType.RECTIFIER
    zener_voltage: float = ZENER_VOLTAGE

    kind: ClassVar[ComponentKind] = ComponentKind.DIODE

    def __post_init__(self) -> None:
        self.diode_type = DiodeType(self.diode_type)

    @property
    def forward_voltage(self) -> float:
        if self.diode_type is DiodeType.SCHOTTKY:
            return SCHOTTKY_FORWARD_VOLTAGE
        return DIODE_FORWARD_VOLTAGE

    def region(self, vd: float) -> Region:
        if vd > self.forward_voltage:
            return Region.FORWARD
        if self.diode_type is DiodeType.ZENER and vd < -self.zener_voltage:
            return Region.BREAKDOWN
        return Region.BLOCKING

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        region = self.region(data.previous_voltage(u, v))
        if region is Region.FORWARD:
            stamp_conductance(data, u, v, 1.0 / DIODE_R_ON)
            stamp_current_source(data, u, v, -self.forward_voltage / DIODE_R_ON)
        elif region is Region.BREAKDOWN:
            stamp_conductance(data, u, v, 1.0 / DIODE_R_ON)
            stamp_current_source(data, u, v, self.zener_voltage / DIODE_R_ON)
        else:
            stamp_conductance(data, u, v, DIODE_G_OFF)

    def branch_current(self, ctx: EvalContext) -> float:
        vd = ctx.v_branch
        region = self.region(vd)
        if region is Region.FORWARD:
            return (vd - self.forward_voltage) / DIODE_R_ON
        if region is Region.BREAKDOWN:
            return (vd + self.zener_voltage) / DIODE_R_ON
        return vd * DIODE_G_OFF


@dataclass
class LED(Diode):
    """
    Light-emitting diode: a diode whose forward drop is set per part.

    Attributes:
        voltage_drop: Forward voltage in volts (2.0 V by default).
        max_current: Current at which the LED reaches full brightness.
    """
    voltage_drop: float = LED_FORWARD_VOLTAGE
    max_current: float = LED_MAX_CURRENT

    kind: ClassVar[ComponentKind] = ComponentKind.LED

    @property
    def forward_voltage(self) -> float:
        return self.voltage_drop

    def intensity(self) -> float:
        """Brightness in [0, 1] from the smoothed forward current."""
        current = max(0.0, self.sim.current)
        if current <= LED_GLOW_THRESHOLD:
            return 0.0
        span = self.max_current - LED_GLOW_THRESHOLD
        if span <= 0:
            return 1.0
        return min(1.0, (current - LED_GLOW_THRESHOLD) / span)
