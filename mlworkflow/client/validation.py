"""
Client-side checks applied to each file before anything is sent.
"""
import mimetypes
import os
from dataclasses import dataclass, field
from typing import Optional

from mlworkflow.core.config import settings

ALLOWED_CONTENT_TYPES = (
    "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)

# file-picker filter, applied on top of the MIME check; same set as ALLOWED_CONTENT_TYPES
EXTENSION_TYPES = {
    ".csv": "text/csv",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
ACCEPTED_EXTENSIONS = tuple(EXTENSION_TYPES)

MAX_FILE_BYTES = settings.MAX_UPLOAD_BYTES

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload CSV or Excel files."


def too_large_message(max_bytes: int = MAX_FILE_BYTES) -> str:
    return f"File is too large. Maximum size is {max_bytes // (1024 * 1024)}MB."


def guess_content_type(name: str) -> str:
    ext = os.path.splitext(name)[1].lower()
    if ext in EXTENSION_TYPES:
        return EXTENSION_TYPES[ext]
    return mimetypes.guess_type(name)[0] or "application/octet-stream"


def format_size(size: int) -> str:
    """Kilobytes rounded half-up, e.g. ``"0 KB"`` for 100 bytes."""
    return f"{int(size / 1024 + 0.5)} KB"


@dataclass
class PendingFile:
    """A file picked or dropped by the user and not yet uploaded."""

    name: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def display_size(self) -> str:
        return format_size(self.size)

    @classmethod
    def from_path(cls, path: str, content_type: Optional[str] = None) -> "PendingFile":
        with open(path, "rb") as f:
            data = f.read()
        name = os.path.basename(path)
        return cls(name=name, content_type=content_type or guess_content_type(name), data=data)


def validate_file(f: PendingFile, max_bytes: int = MAX_FILE_BYTES) -> Optional[str]:
    """
    Check one file.

    Returns:
        None when the file is acceptable, otherwise the message to show
    """
    if f.content_type not in ALLOWED_CONTENT_TYPES:
        return INVALID_TYPE_MESSAGE
    if f.size > max_bytes:
        return too_large_message(max_bytes)
    return None


def has_accepted_extension(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in ACCEPTED_EXTENSIONS


def validate_picked_file(f: PendingFile, max_bytes: int = MAX_FILE_BYTES) -> Optional[str]:
    """Picker check: the extension filter first, then ``validate_file``."""
    if not has_accepted_extension(f.name):
        return INVALID_TYPE_MESSAGE
    return validate_file(f, max_bytes)
