"""Domain models for the sync controller."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MessageType(str, Enum):
    """Kinds of status message."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """User-facing outcome of the most recent action."""

    type: MessageType
    text: str

    @classmethod
    def success(cls, text: str) -> "StatusMessage":
        return cls(MessageType.SUCCESS, text)

    @classmethod
    def error(cls, text: str) -> "StatusMessage":
        return cls(MessageType.ERROR, text)

    @property
    def is_error(self) -> bool:
        return self.type == MessageType.ERROR

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True)
class UploadedFile:
    """A file handed over by the browser."""

    name: str
    content_type: Optional[str]
    content: bytes

    @property
    def media_type(self) -> str:
        """Declared MIME type without parameters, lowercased."""
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def text(self) -> str:
        # BOM is dropped and undecodable bytes replaced, the way browsers read text
        return self.content.decode("utf-8-sig", errors="replace")


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of pulling the addon collection out of a document.

    Exactly one of ``addons`` (on success) or ``error`` is meaningful.
    """

    addons: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def found(cls, addons: Any) -> "ExtractionResult":
        return cls(addons=addons)

    @classmethod
    def failed(cls, error: str) -> "ExtractionResult":
        return cls(error=error)


@dataclass
class SyncState:
    """Transient state owned by one sync controller."""

    auth_key: str = ""
    addons: Any = None
    file_name: Optional[str] = None
    message: Optional[StatusMessage] = None
    is_loading: bool = False

    def __post_init__(self):
        if self.addons is None:
            self.addons = []

    @property
    def has_auth_key(self) -> bool:
        return bool(self.auth_key)

    @property
    def has_addons(self) -> bool:
        return isinstance(self.addons, list) and len(self.addons) > 0

    @property
    def addon_count(self) -> Optional[int]:
        """Number of loaded addons, None when the loaded value is not a list."""
        if isinstance(self.addons, list):
            return len(self.addons)
        return None

    @property
    def can_sync(self) -> bool:
        return not self.is_loading and self.has_auth_key and self.has_addons

    def to_dict(self) -> Dict[str, Any]:
        """Render state for the page; the auth key itself is never included."""
        return {
            "fileName": self.file_name,
            "addonCount": self.addon_count,
            "hasAddons": self.has_addons,
            "hasAuthKey": self.has_auth_key,
            "isLoading": self.is_loading,
            "canSync": self.can_sync,
            "message": self.message.to_dict() if self.message else None
        }
