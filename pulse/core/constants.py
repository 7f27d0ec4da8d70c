"""Constants for Pulse curve calculations."""

# Denominator floor used wherever a divisor could vanish
EPS = 1e-9

# Curve sampling defaults
DEFAULT_CURVE_STEPS = 120
DEFAULT_U_MAX = 10.0  # half-lives
DEGENERATE_WINDOW_SEC = 600.0  # seconds, used when no premium rate is defined

# Token precision
TOKEN_DECIMALS = 18  # STRK
U128 = 1 << 128  # u256 = low + high * 2**128

# Epoch numbering
GENESIS_EPOCH_INDEX = 1
