"""Package-wide constants and model defaults."""

PACKAGE_NAME = "closure_sim"
PACKAGE_VERSION = "0.3.0"

# Configuration keys
TYPE_KEY = "type"

# Object registry / lagrangian naming
DEFAULT_REGION_NAME = "region0"
CLOUD_PREFIX = "lagrangian"
DEFAULT_CLOUD_NAME = "defaultCloud"

# Physical defaults
GRAVITY = 9.81
DEFAULT_RESIDUAL_ALPHA = 1e-6

# Wall boiling
DEFAULT_WALL_BOILING_RELAX = 0.5
BUBBLE_INFLUENCE_FACTOR = 4.0  # bubble influence area, multiples of the departure footprint
WAITING_TIME_FRACTION = 0.8  # quenching period as a fraction of the departure period
MIN_WALL_SUPERHEAT = 1e-4  # K, floor on Tw - T_liquid when forming a coefficient

# Parallel exchange
EXCHANGE_TIMEOUT_S = 30.0
