"""Chain and messenger identifiers."""

from enum import Enum


class ChainType(str, Enum):
    """Family of chain a pool lives on; selects the pool service variant."""

    EVM = "EVM"
    SOLANA = "SOLANA"
    TRX = "TRX"


class Messenger(str, Enum):
    """Cross-chain messaging protocol used to deliver a transfer."""

    ALLBRIDGE = "allbridge"
    WORMHOLE = "wormhole"
    CCTP = "cctp"


# Chain symbol -> (chain type, display name)
CHAIN_PROPERTIES: dict[str, tuple[ChainType, str]] = {
    "ETH": (ChainType.EVM, "Ethereum"),
    "BSC": (ChainType.EVM, "BNB Chain"),
    "POL": (ChainType.EVM, "Polygon"),
    "ARB": (ChainType.EVM, "Arbitrum"),
    "OPT": (ChainType.EVM, "Optimism"),
    "AVA": (ChainType.EVM, "Avalanche"),
    "BAS": (ChainType.EVM, "Base"),
    "CEL": (ChainType.EVM, "Celo"),
    "SOL": (ChainType.SOLANA, "Solana"),
    "TRX": (ChainType.TRX, "Tron"),
}


def chain_type_for_symbol(chain_symbol: str) -> ChainType:
    """Look up the chain type for a chain symbol.

    Raises:
        KeyError: If the chain symbol is not known
    """
    return CHAIN_PROPERTIES[chain_symbol][0]
