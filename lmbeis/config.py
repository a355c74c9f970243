"""
Numeric configuration for the transfer-function and perturbation engines.
"""

# =============================================================================
# Temperature
# =============================================================================

DEFAULT_TDEGC = 25.0
"""
Default evaluation temperature [degC].
"""

DEFAULT_TREF = 298.15
"""
Default Arrhenius reference temperature [K].
"""

# =============================================================================
# Root finding (MSMR inverse OCP)
# =============================================================================

ROOT_XTOL = 1e-12
"""
Absolute tolerance on the potential [V].

Needed near 0 V, where a purely relative tolerance is meaningless.
"""

ROOT_RTOL = 1e-12
"""
Relative tolerance on the potential (brentq requires at least 4 machine epsilon).

Must stay at or below 1e-10 for the impedance formulas to be accurate.
"""

ROOT_MAXITER = 200
"""
Iteration cap of Brent's method, per setpoint.

Pure bisection over a 10 V bracket reaches 1e-12 V in about 44 steps.
"""

MSMR_BRACKET_WIDTH = 100.0
"""
Half-width of the OCP search bracket beyond the extreme gallery
potentials, in units of omega/f (thermal voltages).

At 100 thermal voltages a gallery is occupied to within exp(-100).
"""

MSMR_CAPACITY_RTOL = 1e-6
"""
Tolerance on sum(X) == 1 when validating MSMR parameters.
"""

# =============================================================================
# Transfer functions
# =============================================================================

SMALL_ARG = 1e-4
"""
Below this magnitude the hyperbolic ratios are evaluated from their
Taylor series instead of the exponential forms.

The exponential forms are written with expm1 and stay accurate down to
here; the series only has to cover the removable singularity at 0.
"""

EXCESS_SERIES_ARG = 0.1
"""
Below this magnitude b*coth(b) - 1 is summed as a series through b^12.

The closed form cancels to about eps/(b^2/3) relative; at 0.1 the two
branches agree to better than 1e-13.
"""
