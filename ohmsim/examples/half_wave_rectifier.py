"""
Half-wave rectifier example.

Circuit:
    AC source (10 V, 60 Hz) -> D1 (rectifier) -> Rload (1 kOhm) -> back to the source,
    with an LED + 330 Ohm branch across the load to show conduction.
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from ohmsim.circuit import Circuit
from ohmsim.components import ACSource, Diode, LED, Resistor, Junction
from ohmsim.simulation import Simulation, SimulationSettings
from ohmsim.utils import format_unit


def main() -> None:
    circuit = Circuit()
    circuit.add_component(ACSource("V1", amplitude=10.0, frequency=60.0))
    circuit.add_component(Diode("D1"))
    circuit.add_component(Junction("J1"))
    circuit.add_component(Resistor("Rload", resistance=1e3))
    circuit.add_component(Resistor("R2", resistance=330.0))
    circuit.add_component(LED("LED1", voltage_drop=2.0))

    circuit.connect("V1", 1, "D1", 0)
    circuit.connect("D1", 1, "J1", 0)
    circuit.connect("J1", 0, "Rload", 0)
    circuit.connect("J1", 0, "R2", 0)
    circuit.connect("R2", 1, "LED1", 0)
    circuit.connect("LED1", 1, "V1", 0)
    circuit.connect("Rload", 1, "V1", 0)

    settings = SimulationSettings(tick_rate=1e-4, steps_per_frame=10)
    sim = Simulation(circuit, settings)
    for _ in range(50):
        sim.frame()

    load = circuit.component("Rload").sim
    led = circuit.component("LED1")
    print(f"t = {sim.time * 1e3:.1f} ms")
    print(f"Rload: Vrms = {format_unit(load.rms_voltage, 'V')}, Ipk = {format_unit(load.peak_current, 'A')}")
    print(f"LED1: I = {format_unit(led.sim.current, 'A')}, intensity = {led.intensity():.2f}")

    try:
        import matplotlib.pyplot as plt

        hist = sim.history("Rload")
        plt.figure(figsize=(7, 4))
        plt.plot([s.time * 1e3 for s in hist], [s.voltage for s in hist], label="v_Rload")
        plt.xlabel("Time [ms]")
        plt.ylabel("Voltage [V]")
        plt.title("Half-Wave Rectifier")
        plt.grid(True)
        plt.legend()
        plt.tight_layout()
        plt.show()
    except ImportError:
        pass


if __name__ == "__main__":
    main()
