"""Core sync logic package."""

from .models import MessageType, StatusMessage, UploadedFile, ExtractionResult, SyncState
from .addon_file import extract_addon_collection, parse_addon_file, is_json_file
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
from .controller import SyncController, interpret_sync_response, SYNC_COMPLETE_MESSAGE

__all__ = [
    "MessageType",
    "StatusMessage",
    "UploadedFile",
    "ExtractionResult",
    "SyncState",
    "extract_addon_collection",
    "parse_addon_file",
    "is_json_file",
    "AddonSyncError",
    "InvalidFileType",
    "InvalidFileFormat",
    "MissingCredential",
    "MissingAddonData",
    "TransportError",
    "UnknownSyncFailure",
    "RemoteRejected",
    "SyncController",
    "interpret_sync_response",
    "SYNC_COMPLETE_MESSAGE"
]
