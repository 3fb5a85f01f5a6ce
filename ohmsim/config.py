"""Default physical constants and solver settings for ohmsim.

This module centralizes the numbers shared by the stamp library, the
iteration driver and the state updater.
"""

# Universal shunt added to every port diagonal so that floating sub-networks stay solvable
G_MIN = 1e-12

# Pivots smaller than this are treated as free variables by the linear solver
PIVOT_TOL = 1e-20

# Fixed Picard budget per tick (no early exit)
MAX_ITERATIONS = 50

# Wires are stamped as tiny resistors between their two endpoints
WIRE_RESISTANCE = 1e-4

# Lower clamp applied before inverting any stamped resistance
MIN_RESISTANCE = 1e-14

# Ideal switch rendered as a closed/open resistor pair
R_CLOSED_SWITCH = 0.001
R_OPEN_SWITCH = 1e12

# Capacitor self-discharge path (1 TOhm)
CAPACITOR_LEAK = 1e-12

# Inductor series resistance and minimum step used in its companion model
INDUCTOR_ESR = 0.1
INDUCTOR_MIN_DT = 1e-6

# Piecewise-linear diode
DIODE_R_ON = 0.1
DIODE_G_OFF = 1e-12
DIODE_FORWARD_VOLTAGE = 0.7
SCHOTTKY_FORWARD_VOLTAGE = 0.3
ZENER_VOLTAGE = 5.6
LED_FORWARD_VOLTAGE = 2.0
LED_MAX_CURRENT = 0.02
LED_GLOW_THRESHOLD = 1e-4

# Telemetry smoothing
ALPHA_COMPONENT = 0.5
ALPHA_WIRE = 0.2
PEAK_DECAY = 0.999
RMS_ALPHA = 0.005

# Component parameter defaults
DEFAULT_RESISTANCE = 1000.0
DEFAULT_LAMP_RESISTANCE = 100.0
DEFAULT_CAPACITANCE = 10.0
DEFAULT_CAPACITANCE_UNIT = "µF"
DEFAULT_INDUCTANCE = 100e-3
DEFAULT_BATTERY_VOLTAGE = 9.0
DEFAULT_AC_AMPLITUDE = 10.0
DEFAULT_AC_FREQUENCY = 60.0

# Scheduler defaults (1 ms tick)
DEFAULT_TICK_RATE = 1e-3
