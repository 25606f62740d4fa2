"""Sync controller: file intake, validation, remote sync and result reporting."""

from typing import Any, Iterable, Optional

from pydantic import ValidationError

from .addon_file import is_json_file, parse_addon_file
from .errors import (
    AddonSyncError,
    InvalidFileType,
    InvalidFileFormat,
    MissingCredential,
    MissingAddonData,
    TransportError,
    UnknownSyncFailure,
    RemoteRejected
)
from .models import StatusMessage, SyncState, UploadedFile
from ..api_clients.base import APIConnectionError
from ..api_clients.stremio import AddonCollectionSetResponse
from ..utils.logging import get_logger


SYNC_COMPLETE_MESSAGE = "Sync complete!"


def interpret_sync_response(data: Any) -> StatusMessage:
    """Map an ``addonCollectionSet`` reply onto a status message.

    Raises:
        UnknownSyncFailure: If the reply carries no usable ``result``
        RemoteRejected: If Stremio reports ``success: false``
    """
    if not isinstance(data, dict) or data.get("result") is None:
        raise UnknownSyncFailure()

    try:
        response = AddonCollectionSetResponse.model_validate(data)
    except ValidationError:
        raise UnknownSyncFailure()

    if not response.result.success:
        raise RemoteRejected(response.result.error)

    return StatusMessage.success(SYNC_COMPLETE_MESSAGE)


class SyncController:
    """Owns the state of one user's upload-and-sync interaction."""

    def __init__(
        self,
        client,
        accepted_content_types: Iterable[str] = ("application/json",),
        strict_collection: bool = False
    ):
        """Initialize the controller.

        Args:
            client: Object with an async ``addon_collection_set(auth_key, addons)``,
                normally a shared StremioAPIClient
            accepted_content_types: Media types that count as JSON
            strict_collection: Reject ``addons.addons`` values that are not lists
        """
        self.client = client
        self.accepted_content_types = tuple(accepted_content_types)
        self.strict_collection = strict_collection
        self.state = SyncState()
        self.logger = get_logger(self.__class__.__name__)

    def _report(self, message: StatusMessage) -> StatusMessage:
        self.state.message = message
        return message

    def _report_error(self, error: AddonSyncError) -> StatusMessage:
        self.logger.warning("Action failed", code=error.code, error=error.message)
        return self._report(StatusMessage.error(error.message))

    def set_credential(self, auth_key: Optional[str]) -> None:
        self.state.auth_key = auth_key or ""

    def load_file(self, uploaded: UploadedFile) -> StatusMessage:
        """Load the addon collection from an uploaded JSON file.

        A type mismatch leaves the loaded collection untouched. A format
        failure empties it. Success replaces it entirely.
        """
        try:
            if not is_json_file(uploaded, self.accepted_content_types):
                raise InvalidFileType()

            self.state.file_name = uploaded.name

            result = parse_addon_file(uploaded.text, require_list=self.strict_collection)
            if not result.ok:
                self.state.addons = []
                raise InvalidFileFormat(result.error)

        except InvalidFileFormat as e:
            self.logger.warning("Addon file rejected", file_name=uploaded.name, reason=e.reason)
            return self._report_error(e)
        except InvalidFileType as e:
            self.logger.info("Non-JSON upload ignored", file_name=uploaded.name,
                             content_type=uploaded.content_type)
            return self._report_error(e)

        self.state.addons = result.addons
        count = self.state.addon_count

        self.logger.info("Addon file loaded", file_name=uploaded.name, addon_count=count)

        return self._report(StatusMessage.success(
            f"JSON file loaded successfully ({count if count is not None else 'unknown'} items)"
        ))

    def _check_sync_preconditions(self) -> None:
        if not self.state.has_auth_key:
            raise MissingCredential()
        if not self.state.has_addons:
            raise MissingAddonData()

    async def sync_addons(self) -> Optional[StatusMessage]:
        """Push the loaded addons to Stremio.

        Returns the resulting status message, or the current one unchanged if
        a sync is already running.
        """
        if self.state.is_loading:
            self.logger.warning("Sync already in progress")
            return self.state.message

        try:
            self._check_sync_preconditions()
        except AddonSyncError as e:
            return self._report_error(e)

        self.state.is_loading = True
        self.state.message = None
        self.logger.info("Syncing addons", addon_count=len(self.state.addons))

        try:
            data = await self.client.addon_collection_set(self.state.auth_key, self.state.addons)
            message = interpret_sync_response(data)

        except APIConnectionError as e:
            return self._report_error(TransportError(e))
        except UnknownSyncFailure as e:
            self.logger.error("Sync failed without result", response=data)
            return self._report_error(e)
        except RemoteRejected as e:
            return self._report_error(e)
        finally:
            self.state.is_loading = False

        self.logger.info("Sync complete", addon_count=len(self.state.addons))
        return self._report(message)

    def snapshot(self) -> dict:
        return self.state.to_dict()
