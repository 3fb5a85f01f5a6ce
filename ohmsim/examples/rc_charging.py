"""
RC charging example.

Circuit:
    Battery (5 V) -> R1 (1 kOhm) -> C1 (100 µF) -> back to the battery.

The capacitor charges with time constant RC = 0.1 s. The script compares the
simulated capacitor voltage against V * (1 - exp(-t/RC)).
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import numpy as np

from ohmsim.circuit import Circuit
from ohmsim.components import Battery, Capacitor, Resistor
from ohmsim.simulation import Simulation, SimulationSettings


def build_circuit() -> Circuit:
    circuit = Circuit()
    circuit.add_component(Battery("B1", voltage=5.0))
    circuit.add_component(Resistor("R1", resistance=1e3))
    circuit.add_component(Capacitor("C1", capacitance=100.0, unit="µF"))
    circuit.connect("B1", 1, "R1", 0)
    circuit.connect("R1", 1, "C1", 0)
    circuit.connect("C1", 1, "B1", 0)
    return circuit


def main() -> None:
    circuit = build_circuit()
    sim = Simulation(circuit, SimulationSettings(tick_rate=1e-3))
    result = sim.run(t_stop=0.5)

    t, v_cap = result.branch_voltage("C1")
    expected = 5.0 * (1 - np.exp(-t / 0.1))
    print(f"Final capacitor voltage: {v_cap[-1]:.4f} V (target 5 V)")
    print(f"Largest deviation from the analytic curve: {np.max(np.abs(v_cap - expected)):.4f} V")

    try:
        import matplotlib.pyplot as plt

        plt.figure(figsize=(7, 4))
        plt.plot(t * 1e3, v_cap, label="v_C1 (backward Euler)")
        plt.plot(t * 1e3, expected, "--", label="analytic")
        plt.xlabel("Time [ms]")
        plt.ylabel("Voltage [V]")
        plt.title("RC Charging")
        plt.grid(True)
        plt.legend()
        plt.tight_layout()
        plt.show()
    except ImportError:
        pass


if __name__ == "__main__":
    main()
