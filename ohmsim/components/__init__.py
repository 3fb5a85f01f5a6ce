from __future__ import annotations
from typing import Dict, Type

from .base import (  # noqa: F401
    Component,
    ComponentKind,
    EvalContext,
    SimData,
    StampData,
    stamp_conductance,
    stamp_current_source,
    stamp_resistance,
    stamp_voltage_source,
)
from .passive import (  # noqa: F401
    Capacitor,
    Inductor,
    Junction,
    Lamp,
    PolarizedCapacitor,
    PushButton,
    Resistor,
    Switch,
    capacitance_farads,
)
from .semiconductor import LED, Diode, DiodeType, Region  # noqa: F401
from .sources import ACSource, Battery, VoltageSource  # noqa: F401

COMPONENT_TYPES: Dict[ComponentKind, Type[Component]] = {
    cls.kind: cls
    for cls in (
        Battery,
        Switch,
        PushButton,
        Resistor,
        Capacitor,
        PolarizedCapacitor,
        Inductor,
        ACSource,
        Diode,
        LED,
        Lamp,
        Junction,
    )
}


def create_component(kind: ComponentKind | str, id: str, **params) -> Component:
    """
    Build a component from its kind tag and editor parameters.

    Raises:
        ValueError: If ``kind`` is not a known component kind.
        TypeError: If a parameter does not belong to that kind.
    """
    cls = COMPONENT_TYPES[ComponentKind(kind)]
    return cls(id, **params)
