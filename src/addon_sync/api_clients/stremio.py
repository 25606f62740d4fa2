"""Stremio API client implementation."""

from typing import List, Dict, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseAPIClient
from ..utils.logging import log_async_execution_time


DEFAULT_API_BASE = "https://api.strem.io/api/"
ADDON_COLLECTION_SET_PATH = "addonCollectionSet"
ADDON_COLLECTION_SET_TYPE = "AddonCollectionSet"


class AddonCollectionSetRequest(BaseModel):
    """Request body for ``addonCollectionSet``."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default=ADDON_COLLECTION_SET_TYPE)
    auth_key: str = Field(..., alias="authKey")
    addons: List[Any] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation, keys in Stremio's order."""
        return self.model_dump(by_alias=True)


class SyncResultPayload(BaseModel):
    """The ``result`` object of an ``addonCollectionSet`` reply."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    # Usually a string, but Stremio does not promise it
    error: Any = None


class AddonCollectionSetResponse(BaseModel):
    """Reply to ``addonCollectionSet``; ``result`` is absent on unknown failures."""

    model_config = ConfigDict(extra="allow")

    result: Optional[SyncResultPayload] = None


class StremioAPIClient(BaseAPIClient):
    """Client for the Stremio user API."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        timeout_seconds: Optional[float] = None
    ):
        super().__init__(base_url, timeout_seconds)
        self.logger.info("Stremio client initialized", base_url=self.base_url)

    @log_async_execution_time
    async def addon_collection_set(self, auth_key: str, addons: List[Any]) -> Any:
        """Replace the user's addon collection.

        Args:
            auth_key: Stremio authentication key
            addons: Addon descriptors, sent verbatim

        Returns:
            Decoded JSON reply from Stremio

        Raises:
            APIConnectionError: If the request fails or the reply is not JSON
        """
        request = AddonCollectionSetRequest(auth_key=auth_key, addons=addons)

        self.logger.info(
            "Sending addon collection",
            url=self.url_for(ADDON_COLLECTION_SET_PATH),
            addon_count=len(addons)
        )

        return await self._post_json(ADDON_COLLECTION_SET_PATH, request.to_payload())

    def get_client_info(self) -> Dict[str, Any]:
        return {
            "client_type": self.__class__.__name__,
            "base_url": self.base_url,
            "session_open": self.session is not None and not self.session.closed,
            "timeout_seconds": self.timeout_seconds
        }
