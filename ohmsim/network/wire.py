from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple
from ..components.base import SimData


class Port(NamedTuple):
    """A (component id, port index) pair naming one terminal."""
    component: str
    index: int


@dataclass
class Wire:
    """
    Connection between two component ports.

    Wires are not merged into shared nodes: the solver stamps each one as a very
    small resistor between its endpoints, so a wire carries its own telemetry
    (voltage drop, smoothed current, power) like any other element.

    Attributes:
        id: Unique wire identifier.
        a: First endpoint.
        b: Second endpoint. Positive current flows from a to b.
        sim: Telemetry and smoothing accumulators, updated once per tick.
    """
    id: str
    a: Port
    b: Port
    sim: SimData = field(default_factory=SimData, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.a = Port(*self.a)
        self.b = Port(*self.b)

    def reset(self) -> None:
        self.sim.reset()
