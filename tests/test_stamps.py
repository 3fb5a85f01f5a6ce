"""Tests for the per-kind MNA stamps."""

import numpy as np
import pytest

from ohmsim.components import (
    LED,
    ACSource,
    Battery,
    Capacitor,
    Diode,
    DiodeType,
    Inductor,
    Junction,
    Lamp,
    PolarizedCapacitor,
    PushButton,
    Resistor,
    StampData,
    Switch,
    capacitance_farads,
)
from ohmsim.network import map_topology


def stamp_one(comp, dt=1e-3, sim_time=0.0, vd_prev=0.0):
    """Stamp a single component; ``vd_prev`` is the previous-iteration branch voltage."""
    index = map_topology([comp])
    x_prev = np.zeros(index.size)
    x_prev[0] = vd_prev
    data = StampData.empty(index, dt=dt, sim_time=sim_time, x_prev=x_prev)
    comp.stamp(data)
    return data


def conductance(data):
    """Symmetric two-port conductance stamped between ports 0 and 1."""
    g = data.A[0, 0]
    assert data.A[1, 1] == pytest.approx(g)
    assert data.A[0, 1] == pytest.approx(-g)
    assert data.A[1, 0] == pytest.approx(-g)
    return g


class TestPassiveStamps:

    def test_resistor(self):
        data = stamp_one(Resistor("R1", resistance=1000.0))
        assert conductance(data) == pytest.approx(1e-3)
        np.testing.assert_array_equal(data.b, 0.0)

    def test_zero_resistance_is_clamped(self):
        data = stamp_one(Resistor("R1", resistance=0.0))
        assert conductance(data) == pytest.approx(1e14)

    def test_lamp_defaults_to_100_ohm(self):
        assert conductance(stamp_one(Lamp("L1"))) == pytest.approx(0.01)

    @pytest.mark.parametrize("cls", [Switch, PushButton])
    def test_switch_states(self, cls):
        assert conductance(stamp_one(cls("S1", closed=True))) == pytest.approx(1000.0)
        assert conductance(stamp_one(cls("S1", closed=False))) == pytest.approx(1e-12)

    def test_switch_toggle(self):
        sw = Switch("S1")
        sw.toggle()
        assert sw.closed

    @pytest.mark.parametrize("cls", [Capacitor, PolarizedCapacitor])
    def test_capacitor_companion(self, cls):
        cap = cls("C1", capacitance=10.0, unit="µF")
        cap.sim.stored_voltage = 2.0
        data = stamp_one(cap, dt=1e-3)
        g = 10e-6 / 1e-3
        assert conductance(data) == pytest.approx(g + 1e-12)
        # I_eq = -G * V_prev is moved to the right-hand side
        assert data.b[0] == pytest.approx(g * 2.0)
        assert data.b[1] == pytest.approx(-g * 2.0)

    def test_capacitance_units(self):
        assert capacitance_farads(1.0, "mF") == pytest.approx(1e-3)
        assert capacitance_farads(1.0, "µF") == pytest.approx(1e-6)
        assert capacitance_farads(1.0, "nF") == pytest.approx(1e-9)
        assert capacitance_farads(1.0, "pF") == pytest.approx(1e-12)
        assert capacitance_farads(1.0, "bogus") == pytest.approx(1e-6)

    def test_inductor_companion(self):
        ind = Inductor("L1", inductance=0.1)
        ind.sim.stored_current = 0.5
        data = stamp_one(ind, dt=1e-3)
        g_eq = 1.0 / (0.1 + 100.0)
        assert conductance(data) == pytest.approx(g_eq)
        i_eq = 0.5 * 100.0 * g_eq
        assert data.b[0] == pytest.approx(-i_eq)
        assert data.b[1] == pytest.approx(i_eq)

    def test_inductor_clamps_dt(self):
        ind = Inductor("L1", inductance=1e-3)
        g_tiny, _ = ind.companion(1e-12)
        g_floor, _ = ind.companion(1e-6)
        assert g_tiny == g_floor

    def test_junction_stamps_nothing(self):
        data = stamp_one(Junction("J1"))
        np.testing.assert_array_equal(data.A, 0.0)
        np.testing.assert_array_equal(data.b, 0.0)


class TestDiodeStamps:

    def test_blocking_on_first_iteration(self):
        data = stamp_one(Diode("D1"), vd_prev=0.0)
        assert conductance(data) == pytest.approx(1e-12)
        np.testing.assert_array_equal(data.b, 0.0)

    def test_forward(self):
        data = stamp_one(Diode("D1"), vd_prev=1.0)
        assert conductance(data) == pytest.approx(10.0)
        assert data.b[0] == pytest.approx(7.0)
        assert data.b[1] == pytest.approx(-7.0)

    def test_schottky_threshold(self):
        diode = Diode("D1", diode_type="schottky")
        assert diode.diode_type is DiodeType.SCHOTTKY
        assert conductance(stamp_one(diode, vd_prev=0.5)) == pytest.approx(10.0)
        assert conductance(stamp_one(Diode("D2"), vd_prev=0.5)) == pytest.approx(1e-12)

    def test_zener_breakdown(self):
        data = stamp_one(Diode("D1", diode_type=DiodeType.ZENER), vd_prev=-6.0)
        assert conductance(data) == pytest.approx(10.0)
        assert data.b[0] == pytest.approx(-56.0)
        assert data.b[1] == pytest.approx(56.0)

    def test_rectifier_does_not_break_down(self):
        data = stamp_one(Diode("D1"), vd_prev=-50.0)
        assert conductance(data) == pytest.approx(1e-12)

    def test_led_uses_voltage_drop(self):
        led = LED("LED1", voltage_drop=2.0)
        assert conductance(stamp_one(led, vd_prev=1.5)) == pytest.approx(1e-12)
        data = stamp_one(led, vd_prev=2.5)
        assert data.b[0] == pytest.approx(20.0)

    def test_diode_current_law(self):
        from ohmsim.components import EvalContext
        zener = Diode("D1", diode_type="zener", zener_voltage=5.0)

        def law(vd):
            return zener.branch_current(EvalContext(v_branch=vd, dt=1e-3, sim_time=0.0))

        assert law(0.8) == pytest.approx(1.0)
        assert law(-5.1) == pytest.approx(-1.0)
        assert law(-1.0) == pytest.approx(-1e-12)


class TestSourceStamps:

    def test_battery_constraint_row(self):
        data = stamp_one(Battery("B1", voltage=9.0))
        # unknowns: port0, port1, branch current
        assert data.A[2, 1] == 1.0
        assert data.A[2, 0] == -1.0
        assert data.A[1, 2] == 1.0
        assert data.A[0, 2] == -1.0
        assert data.b[2] == 9.0

    def test_ac_source_uses_absolute_time(self):
        src = ACSource("V1", amplitude=10.0, frequency=60.0)
        assert stamp_one(src, sim_time=1 / 240).b[2] == pytest.approx(10.0)
        assert stamp_one(src, sim_time=3 / 240).b[2] == pytest.approx(-10.0)
        assert stamp_one(src, sim_time=0.0).b[2] == pytest.approx(0.0)

    def test_stamps_accumulate(self):
        comps = [Resistor("R1", resistance=100.0)]
        index = map_topology(comps)
        data = StampData.empty(index, dt=1e-3)
        comps[0].stamp(data)
        comps[0].stamp(data)
        assert data.A[0, 0] == pytest.approx(0.02)
