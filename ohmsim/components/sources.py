from __future__ import annotations
from dataclasses import dataclass
from abc import abstractmethod
from typing import ClassVar
import numpy as np
from .base import (
    Component,
    ComponentKind,
    EvalContext,
    StampData,
    stamp_voltage_source,
)
from ..config import (
    DEFAULT_AC_AMPLITUDE,
    DEFAULT_AC_FREQUENCY,
    DEFAULT_BATTERY_VOLTAGE,
)


@dataclass
class VoltageSource(Component):
    """
    Ideal voltage source with one extra MNA unknown.

    The constraint row enforces V(port1) - V(port0) = value, so port 1 is the
    positive terminal. The extra unknown is the current entering the source at
    port 1; the branch current reported from port 0 to port 1 is its negation.
    """

    def num_aux_vars(self) -> int:
        return 1

    @abstractmethod
    def value(self, sim_time: float) -> float:
        """Source voltage at absolute time ``sim_time``."""

    def stamp(self, data: StampData) -> None:
        u, v = data.terminals(self.id)
        aux = data.index.source(self.id)
        stamp_voltage_source(data, aux, v, u, self.value(data.sim_time))

    def branch_current(self, ctx: EvalContext) -> float:
        return -ctx.i_aux


@dataclass
class Battery(VoltageSource):
    voltage: float = DEFAULT_BATTERY_VOLTAGE

    kind: ClassVar[ComponentKind] = ComponentKind.BATTERY

    def value(self, sim_time: float) -> float:
        return self.voltage


@dataclass
class ACSource(VoltageSource):
    """
    Sinusoidal source: amplitude * sin(2*pi*frequency*t), evaluated at the
    absolute time of the tick.
    """
    amplitude: float = DEFAULT_AC_AMPLITUDE
    frequency: float = DEFAULT_AC_FREQUENCY

    kind: ClassVar[ComponentKind] = ComponentKind.AC_SOURCE

    def value(self, sim_time: float) -> float:
        return self.amplitude * float(np.sin(2 * np.pi * self.frequency * sim_time))
