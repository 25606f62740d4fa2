"""API clients package for external service integrations."""

from .base import (
    BaseAPIClient,
    APIConnectionError
)

from .stremio import (
    StremioAPIClient,
    AddonCollectionSetRequest,
    AddonCollectionSetResponse,
    SyncResultPayload,
    DEFAULT_API_BASE,
    ADDON_COLLECTION_SET_PATH,
    ADDON_COLLECTION_SET_TYPE
)

__all__ = [
    # Base classes and exceptions
    "BaseAPIClient",
    "APIConnectionError",

    # Stremio
    "StremioAPIClient",
    "AddonCollectionSetRequest",
    "AddonCollectionSetResponse",
    "SyncResultPayload",
    "DEFAULT_API_BASE",
    "ADDON_COLLECTION_SET_PATH",
    "ADDON_COLLECTION_SET_TYPE"
]
