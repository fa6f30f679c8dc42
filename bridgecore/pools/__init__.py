"""Liquidity pool services."""

from .services import ChainPoolService, ChainPoolServiceRegistry, LiquidityPoolService

__all__ = ["ChainPoolService", "ChainPoolServiceRegistry", "LiquidityPoolService"]
