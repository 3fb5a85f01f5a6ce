from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..components.base import Component
    from .wire import Wire

GROUND = 0


@dataclass(frozen=True)
class NodeIndex:
    """
    Mapping from circuit terminals to rows/columns of the MNA system.

    Attributes:
        ports: (component id, port index) -> unknown index. Index 0 is ground.
        sources: component id -> index of the branch-current unknown of an ideal source.
        n_ports: Number of port unknowns; source unknowns follow them.
    """
    ports: Dict[Tuple[str, int], int]
    sources: Dict[str, int]
    n_ports: int

    @property
    def size(self) -> int:
        return self.n_ports + len(self.sources)

    def port(self, component_id: str, index: int) -> int | None:
        return self.ports.get((component_id, index))

    def terminals(self, component_id: str) -> Tuple[int, int]:
        """Return the (port 0, port 1) unknowns of a two-terminal component."""
        return self.ports[(component_id, 0)], self.ports[(component_id, 1)]

    def source(self, component_id: str) -> int:
        if component_id not in self.sources:
            raise KeyError(f"Component '{component_id}' has no branch-current unknown.")
        return self.sources[component_id]

    def wire_ends(self, wire: Wire) -> Tuple[int, int] | None:
        """
        Resolve both endpoints of a wire, or None when either one is dangling.
        """
        u = self.ports.get(tuple(wire.a))
        v = self.ports.get(tuple(wire.b))
        if u is None or v is None:
            return None
        return u, v


def map_topology(components: Sequence[Component], wires: Sequence[Wire] = ()) -> NodeIndex:
    """
    Assign one unknown per component port plus one per ideal voltage source.

    Ports are numbered in component declaration order (port 0 before port 1), so
    the first declared component's port 0 becomes the ground reference. Junctions
    contribute a single shared port. Branch-current unknowns of the sources are
    appended after all ports, again in declaration order.

    Wires take no part in the numbering: each one is stamped later as a resistor
    between two existing port unknowns.
    """
    ports: Dict[Tuple[str, int], int] = {}
    for comp in components:
        for idx in range(comp.n_ports):
            ports.setdefault((comp.id, idx), len(ports))

    n_ports = len(ports)
    sources: Dict[str, int] = {}
    for comp in components:
        if comp.num_aux_vars():
            sources[comp.id] = n_ports + len(sources)

    return NodeIndex(ports=ports, sources=sources, n_ports=n_ports)
