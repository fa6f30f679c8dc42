"""SDK configuration and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

import structlog

from bridgecore.constants import (
    DEFAULT_CHAIN_DETAILS_TTL_SECONDS,
    DEFAULT_CORE_API_URL,
    DEFAULT_POOL_INFO_TTL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)

ENV_PREFIX = "BRIDGECORE_"


@dataclass(frozen=True)
class SdkConfig:
    """Centralized configuration for one SDK instance.

    Attributes:
        core_api_url: Base URL of the backend pricing/status API
        core_api_headers: Extra headers sent with every API request
        pool_info_ttl_seconds: Maximum age of a cached pool snapshot
        chain_details_ttl_seconds: Maximum age of the cached token catalogue
        request_timeout_seconds: HTTP timeout handed to the transport
    """

    core_api_url: str = DEFAULT_CORE_API_URL
    core_api_headers: dict[str, str] = field(default_factory=dict)
    pool_info_ttl_seconds: float = DEFAULT_POOL_INFO_TTL_SECONDS
    chain_details_ttl_seconds: float = DEFAULT_CHAIN_DETAILS_TTL_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.pool_info_ttl_seconds < 0:
            raise ValueError(f"pool_info_ttl_seconds must be >= 0, got {self.pool_info_ttl_seconds}")
        if self.chain_details_ttl_seconds < 0:
            raise ValueError(
                f"chain_details_ttl_seconds must be >= 0, got {self.chain_details_ttl_seconds}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SdkConfig:
        """Build a config from BRIDGECORE_* environment variables.

        Configuration via environment variables:
        - BRIDGECORE_CORE_API_URL: Backend API base URL
        - BRIDGECORE_POOL_INFO_TTL: Pool snapshot TTL in seconds
        - BRIDGECORE_CHAIN_DETAILS_TTL: Token catalogue TTL in seconds
        - BRIDGECORE_REQUEST_TIMEOUT: HTTP timeout in seconds
        """
        env = os.environ if environ is None else environ
        return cls(
            core_api_url=env.get(f"{ENV_PREFIX}CORE_API_URL", DEFAULT_CORE_API_URL),
            pool_info_ttl_seconds=float(
                env.get(f"{ENV_PREFIX}POOL_INFO_TTL", DEFAULT_POOL_INFO_TTL_SECONDS)
            ),
            chain_details_ttl_seconds=float(
                env.get(f"{ENV_PREFIX}CHAIN_DETAILS_TTL", DEFAULT_CHAIN_DETAILS_TTL_SECONDS)
            ),
            request_timeout_seconds=float(
                env.get(f"{ENV_PREFIX}REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_SECONDS)
            ),
        )


# Default configuration instance
DEFAULT_SDK_CONFIG = SdkConfig()


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output."""
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
