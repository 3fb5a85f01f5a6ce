"""Shared circuits for the ohmsim test suite.

Every fixture returns a fresh Circuit whose first component is the battery or
source, so that its port 0 is the ground reference.
"""

import pytest

from ohmsim.circuit import Circuit
from ohmsim.components import ACSource, Battery, Capacitor, Diode, Resistor


def run_ticks(circuit, n, dt=1e-3, t0=0.0, advance=True):
    """Solve ``n`` consecutive ticks; returns the final sim time."""
    t = t0
    for _ in range(n):
        circuit.solve(dt, t)
        if advance:
            t += dt
    return t


@pytest.fixture
def battery_resistor():
    """9 V battery driving a 1 kOhm resistor through two wires."""
    circuit = Circuit()
    circuit.add_component(Battery("B1", voltage=9.0))
    circuit.add_component(Resistor("R1", resistance=1000.0))
    circuit.connect("B1", 1, "R1", 0, wire_id="w_top")
    circuit.connect("R1", 1, "B1", 0, wire_id="w_bottom")
    return circuit


@pytest.fixture
def rc_circuit():
    """5 V battery, 1 kOhm, 100 µF in series (RC = 0.1 s)."""
    circuit = Circuit()
    circuit.add_component(Battery("B1", voltage=5.0))
    circuit.add_component(Resistor("R1", resistance=1000.0))
    circuit.add_component(Capacitor("C1", capacitance=100.0, unit="µF"))
    circuit.connect("B1", 1, "R1", 0)
    circuit.connect("R1", 1, "C1", 0)
    circuit.connect("C1", 1, "B1", 0)
    return circuit


@pytest.fixture
def rectifier():
    """10 V / 60 Hz source, rectifier diode and 1 kOhm load."""
    circuit = Circuit()
    circuit.add_component(ACSource("V1", amplitude=10.0, frequency=60.0))
    circuit.add_component(Diode("D1"))
    circuit.add_component(Resistor("R1", resistance=1000.0))
    circuit.connect("V1", 1, "D1", 0)
    circuit.connect("D1", 1, "R1", 0)
    circuit.connect("R1", 1, "V1", 0)
    return circuit
