"""Backend API transport and its caching wrapper."""

from .caching import CachingCoreClient
from .core_api import CoreApi, CoreApiClient, map_chain_details_response, map_pool_info_response

__all__ = [
    "CoreApi",
    "CoreApiClient",
    "CachingCoreClient",
    "map_chain_details_response",
    "map_pool_info_response",
]
