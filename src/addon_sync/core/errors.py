"""Error taxonomy for file intake and addon sync.

Every error carries a stable ``code`` and the ``message`` shown to the user.
The controller turns each one into a single error status message.
"""

from typing import Any


class AddonSyncError(Exception):
    """Base exception for addon sync failures."""

    code = "ADDON_SYNC_ERROR"
    default_message = "Addon sync failed"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFileType(AddonSyncError):
    """Uploaded file is not declared as JSON."""

    code = "INVALID_FILE_TYPE"
    default_message = "Please upload a valid JSON file"


class InvalidFileFormat(AddonSyncError):
    """Uploaded file does not parse or lacks ``addons.addons``."""

    code = "INVALID_FILE_FORMAT"
    default_message = "Invalid JSON file format"

    def __init__(self, reason: str = ""):
        super().__init__()
        self.reason = reason


class MissingCredential(AddonSyncError):
    code = "MISSING_CREDENTIAL"
    default_message = "No auth key provided"


class MissingAddonData(AddonSyncError):
    code = "MISSING_ADDON_DATA"
    default_message = "No addons data loaded. Please upload a JSON file first."


class TransportError(AddonSyncError):
    """The request never produced a usable reply."""

    code = "TRANSPORT_ERROR"

    def __init__(self, cause: Any):
        super().__init__(f"Error syncing addons: {cause}")
        self.cause = cause


class UnknownSyncFailure(AddonSyncError):
    """Reply parsed but carried no ``result``."""

    code = "UNKNOWN_SYNC_FAILURE"
    default_message = "Sync failed with unknown error"


class RemoteRejected(AddonSyncError):
    """Stremio answered with ``result.success == false``."""

    code = "REMOTE_REJECTED"

    def __init__(self, remote_error: Any):
        super().__init__(f"Failed to sync addons: {remote_error}")
        self.remote_error = remote_error
