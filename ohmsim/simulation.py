from __future__ import annotations
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List
import threading
import numpy as np

from .circuit import Circuit
from .components.base import SimData
from .config import DEFAULT_TICK_RATE
from .logging import tick_logger
from .solver.picard import NumericDivergenceError, SolverConfig
from .solver.step import solve

Array = np.ndarray


@dataclass
class SimulationSettings:
    """
    Scheduler parameters.

    Attributes:
        tick_rate: Base tick length in seconds (default: 1 ms).
        time_step_multiplier: Scale applied to tick_rate to obtain dt.
        steps_per_frame: Solve calls issued back-to-back by ``frame`` (fast-forward).
        history: Number of telemetry samples kept per element.
    """
    tick_rate: float = DEFAULT_TICK_RATE
    time_step_multiplier: float = 1.0
    steps_per_frame: int = 1
    history: int = 1000

    @property
    def dt(self) -> float:
        return self.tick_rate * self.time_step_multiplier


@dataclass(frozen=True)
class TelemetrySample:
    time: float
    voltage: float
    current: float


@dataclass
class SimResult:
    """
    Telemetry recorded by ``Simulation.run``.

    Attributes:
        t: Sample times (the first sample is the state before the first step).
        names: Element ids (components first, then wires) in column order.
        voltages: Branch voltage history, shape (len(t), len(names)).
        currents: Displayed (smoothed) current history, same shape.
        diverged: True when the run stopped early on a divergent tick.
    """
    t: Array
    names: List[str]
    voltages: Array
    currents: Array
    diverged: bool = False

    def _column(self, name: str) -> int:
        try:
            return self.names.index(name)
        except ValueError as exc:
            raise KeyError(f"Element '{name}' not present in this simulation.") from exc

    def branch_voltage(self, name: str) -> tuple[Array, Array]:
        return self.t, self.voltages[:, self._column(name)]

    def branch_current(self, name: str) -> tuple[Array, Array]:
        return self.t, self.currents[:, self._column(name)]


@dataclass
class Simulation:
    """
    Fixed-interval driver around ``solve``.

    Owns the simulation clock and issues strictly sequential solve calls. Each
    tick runs inside one critical section over the circuit. A host that edits
    topology or parameters from another thread must do so inside ``edit()``,
    which takes the same lock, so an edit always lands between ticks.
    """
    circuit: Circuit
    settings: SimulationSettings = field(default_factory=SimulationSettings)
    config: SolverConfig = field(default_factory=SolverConfig)
    time: float = 0.0

    _lock: threading.Lock = field(init=False, repr=False, compare=False, default_factory=threading.Lock)
    _history: Dict[str, Deque[TelemetrySample]] = field(init=False, repr=False, compare=False, default_factory=dict)

    @property
    def dt(self) -> float:
        return self.settings.dt

    @contextmanager
    def edit(self) -> Iterator[Circuit]:
        """
        Hold the tick lock while the caller mutates the circuit.

            with sim.edit() as circuit:
                circuit.component("R1").resistance = 10.0
        """
        with self._lock:
            yield self.circuit

    def _elements(self) -> Dict[str, SimData]:
        sims = {c.id: c.sim for c in self.circuit.components.values()}
        sims.update({w.id: w.sim for w in self.circuit.wires.values()})
        return sims

    def _record(self) -> None:
        for name, sim in self._elements().items():
            trace = self._history.get(name)
            if trace is None or trace.maxlen != self.settings.history:
                trace = deque(trace or (), maxlen=self.settings.history)
                self._history[name] = trace
            trace.append(TelemetrySample(self.time, sim.voltage, sim.current))

    def _tick(self) -> bool:
        # caller holds _lock
        dt = self.dt
        try:
            solve(self.circuit.component_list(), self.circuit.wire_list(),
                  dt, self.time, self.config)
        except NumericDivergenceError as exc:
            tick_logger(self.time).warning("Solver diverged, tick discarded: %s", exc)
            return False
        self.time += dt
        self._record()
        return True

    def step(self) -> bool:
        """
        Run one tick at the current time and advance the clock by dt.

        Returns:
            True on success. False when the tick diverged: telemetry is kept
            as it was and the clock does not advance.
        """
        with self._lock:
            return self._tick()

    def frame(self) -> int:
        """
        Issue ``steps_per_frame`` ticks back-to-back.

        Returns:
            Number of ticks completed; fewer than requested after a divergence.
        """
        done = 0
        for _ in range(self.settings.steps_per_frame):
            if not self.step():
                break
            done += 1
        return done

    def run(self, t_stop: float) -> SimResult:
        """
        Step until the clock reaches ``t_stop`` and return the recorded telemetry.

        The element set is fixed when the run starts; each sample is taken
        under the same lock as the tick that produced it.
        """
        with self._lock:
            elements = self._elements()
            names = list(elements)
            t = [self.time]
            volts = [[elements[n].voltage for n in names]]
            amps = [[elements[n].current for n in names]]
        diverged = False

        while True:
            with self._lock:
                if self.time >= t_stop - 0.5 * self.dt:
                    break
                if not self._tick():
                    diverged = True
                    break
                t.append(self.time)
                volts.append([elements[n].voltage for n in names])
                amps.append([elements[n].current for n in names])

        return SimResult(
            t=np.array(t),
            names=names,
            voltages=np.array(volts).reshape(len(t), len(names)),
            currents=np.array(amps).reshape(len(t), len(names)),
            diverged=diverged,
        )

    def history(self, name: str) -> List[TelemetrySample]:
        with self._lock:
            return list(self._history.get(name, ()))

    def reset(self) -> None:
        """Rewind the clock and zero all telemetry, reactive state and history."""
        with self._lock:
            self.time = 0.0
            self.circuit.reset()
            self._history.clear()
