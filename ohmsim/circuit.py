from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List
from .components.base import Component
from .solver.picard import SolverConfig
from .solver.step import solve
from .network.wire import Port, Wire


@dataclass
class Circuit:
    """
    Ordered collection of components and wires handed to the solver each tick.

    Declaration order matters: the first component's port 0 is the ground
    reference and stamps are applied in insertion order.
    """

    components: Dict[str, Component] = field(default_factory=dict)
    wires: Dict[str, Wire] = field(default_factory=dict)

    def add_component(self, component: Component) -> Component:
        if component.id in self.components:
            raise ValueError(f"Component '{component.id}' already exists.")
        self.components[component.id] = component
        return component

    def add_wire(self, wire: Wire) -> Wire:
        if wire.id in self.wires:
            raise ValueError(f"Wire '{wire.id}' already exists.")
        self.wires[wire.id] = wire
        return wire

    def connect(self, comp_a: str, port_a: int, comp_b: str, port_b: int,
                wire_id: str | None = None) -> Wire:
        """
        Wire port ``port_a`` of ``comp_a`` to port ``port_b`` of ``comp_b``.
        """
        if wire_id is None:
            n = len(self.wires)
            while f"w{n}" in self.wires:
                n += 1
            wire_id = f"w{n}"
        return self.add_wire(Wire(wire_id, Port(comp_a, port_a), Port(comp_b, port_b)))

    def remove_component(self, component_id: str) -> Component:
        """Remove a component together with every wire attached to it."""
        comp = self.component(component_id)
        del self.components[component_id]
        for wire_id in [w.id for w in self.wires.values()
                        if component_id in (w.a.component, w.b.component)]:
            del self.wires[wire_id]
        return comp

    def component(self, component_id: str) -> Component:
        if component_id not in self.components:
            raise KeyError(f"Component '{component_id}' not present in the circuit.")
        return self.components[component_id]

    def component_list(self) -> List[Component]:
        return list(self.components.values())

    def wire_list(self) -> List[Wire]:
        return list(self.wires.values())

    def reset(self) -> None:
        """Zero all telemetry and reactive state ("reset simulation")."""
        for comp in self.components.values():
            comp.reset()
        for wire in self.wires.values():
            wire.reset()

    def solve(self, dt: float, sim_time: float = 0.0, config: SolverConfig | None = None) -> None:
        solve(self.component_list(), self.wire_list(), dt, sim_time, config)
