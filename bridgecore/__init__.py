"""Cross-chain transfer pricing through vUSD liquidity pools."""

from bridgecore.constants import SDK_VERSION
from bridgecore.errors import (
    BridgeCoreError,
    ConvergenceError,
    FetchFailure,
    InsufficientPoolLiquidity,
    ValidationError,
)
from bridgecore.sdk import BridgeCoreSdk

__version__ = SDK_VERSION
__all__ = [
    "BridgeCoreSdk",
    "BridgeCoreError",
    "ValidationError",
    "InsufficientPoolLiquidity",
    "FetchFailure",
    "ConvergenceError",
    "__version__",
]
