"""Protocol constants for bridge pricing.

Centralizes the fixed-point scales and solver bounds shared by the
pricing engine and the pool accounting helpers.
"""

# Neutral decimal scale used for pool balances, vUSD and LP amounts
SYSTEM_PRECISION = 3

# Newton iteration bounds for the invariant solver.
# Iteration stops once two successive iterates differ by <= CONVERGENCE_EPSILON.
MAX_SOLVER_ITERATIONS = 255
CONVERGENCE_EPSILON = 1

# accRewardPerShareP is a fixed-point value scaled by 2^52
REWARD_PRECISION_BITS = 52
REWARD_PRECISION_FACTOR = 1 << REWARD_PRECISION_BITS

# Cache lifetimes (seconds)
DEFAULT_POOL_INFO_TTL_SECONDS = 20.0
DEFAULT_CHAIN_DETAILS_TTL_SECONDS = 300.0

# Backend pricing/status API
DEFAULT_CORE_API_URL = "https://core.api.allbridgecoreapi.net"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

SDK_VERSION = "0.1.0"
