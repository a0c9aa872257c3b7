"""
Drag-and-drop / file-picker upload widget, without the UI.

The widget owns the pending selection and a small state object:

    idle -> validating -> idle | error
    idle -> uploading(progress) -> success | error

Only one upload can be in flight per widget, and a successful upload is not
sent again until a new selection is made.
"""
import enum
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

import httpx

from mlworkflow.client.progress import iter_with_progress
from mlworkflow.client.validation import MAX_FILE_BYTES, PendingFile, validate_file, validate_picked_file
from mlworkflow.core.config import settings
from mlworkflow.core.logging_utils import get_logger

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Network error"
UPLOAD_FAILED_MESSAGE = "Failed to upload files"


class UploadStatus(str, enum.Enum):
    idle = "idle"
    validating = "validating"
    uploading = "uploading"
    success = "success"
    error = "error"


@dataclass
class WidgetState:
    status: UploadStatus = UploadStatus.idle
    progress: int = 0
    message: str = ""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return UPLOAD_FAILED_MESSAGE


class UploadWidget:
    def __init__(
        self,
        client: httpx.Client,
        upload_url: str = "/api/upload",
        on_complete: Optional[Callable[[], None]] = None,
        handoff_delay: float = settings.HANDOFF_DELAY_SECONDS,
        max_bytes: int = MAX_FILE_BYTES,
        chunk_size: int = 64 * 1024,
    ):
        self.client = client
        self.upload_url = upload_url
        self.on_complete = on_complete
        self.handoff_delay = handoff_delay
        self.max_bytes = max_bytes
        self.chunk_size = chunk_size

        self.files: List[PendingFile] = []
        self.state = WidgetState()
        self.rejected: List[Tuple[str, str]] = []
        self.handoff: Optional[threading.Timer] = None
        self._listeners: List[Callable[[WidgetState], None]] = []

    # -------- state --------
    def subscribe(self, listener: Callable[[WidgetState], None]) -> None:
        self._listeners.append(listener)

    def _set(self, status: UploadStatus, *, progress: Optional[int] = None, message: str = "") -> None:
        self.state.status = status
        self.state.message = message
        if progress is not None:
            self.state.progress = progress
        self._notify()

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self.state)

    @property
    def uploading(self) -> bool:
        return self.state.status is UploadStatus.uploading

    @property
    def can_upload(self) -> bool:
        # a finished upload is not resent; a new drop/pick re-arms the widget
        return bool(self.files) and self.state.status not in (UploadStatus.uploading, UploadStatus.success)

    def listing(self) -> List[Tuple[str, str]]:
        """(name, size) pairs for the pending selection."""
        return [(f.name, f.display_size) for f in self.files]

    # -------- selection --------
    def drop(self, files: Iterable[PendingFile]) -> List[PendingFile]:
        return self._select(files, validate_file)

    def pick(self, files: Iterable[PendingFile]) -> List[PendingFile]:
        """Picker selection: ``.csv``/``.xls``/``.xlsx`` names only."""
        return self._select(files, validate_picked_file)

    def _select(
        self,
        files: Iterable[PendingFile],
        check: Callable[[PendingFile, int], Optional[str]],
    ) -> List[PendingFile]:
        self._set(UploadStatus.validating)
        self.rejected = []
        valid = []
        for f in files:
            msg = check(f, self.max_bytes)
            if msg:
                self.rejected.append((f.name, msg))
            else:
                valid.append(f)

        # an all-invalid drop keeps the previous selection
        if valid:
            self.files = valid

        if self.rejected:
            self._set(UploadStatus.error, message=self.rejected[-1][1])
        else:
            self._set(UploadStatus.idle)
        return valid

    def remove(self, index: int) -> None:
        del self.files[index]
        self._set(UploadStatus.idle)

    # -------- submission --------
    def _on_progress(self, value: int) -> None:
        if value > self.state.progress:
            self.state.progress = value
            self._notify()

    def _build_request(self) -> httpx.Request:
        parts = [("files", (f.name, f.data, f.content_type)) for f in self.files]
        encoded = self.client.build_request("POST", self.upload_url, files=parts)
        body = encoded.read()
        headers = {
            "Content-Type": encoded.headers["Content-Type"],
            "Content-Length": str(len(body)),
        }
        return self.client.build_request(
            "POST",
            self.upload_url,
            content=iter_with_progress(body, self.chunk_size, self._on_progress),
            headers=headers,
        )

    def upload(self) -> Optional[dict]:
        """
        Send the pending files as one multipart request.

        Returns:
            The decoded response body on success, otherwise None with the
            widget in the error state
        """
        if not self.can_upload:
            return None

        self._set(UploadStatus.uploading, progress=0)
        try:
            response = self.client.send(self._build_request())
        except httpx.TransportError as e:
            logger.warning("Upload to %s failed: %s", self.upload_url, e)
            self._set(UploadStatus.error, message=NETWORK_ERROR_MESSAGE)
            return None

        if not response.is_success:
            message = _error_message(response)
            logger.error("Upload rejected with %d: %s", response.status_code, message)
            self._set(UploadStatus.error, message=message)
            return None

        try:
            data = response.json()
        except ValueError:
            data = {}
        self._set(UploadStatus.success, progress=100)
        self._schedule_handoff()
        return data

    def _schedule_handoff(self) -> None:
        # leave the success message visible before handing off
        if self.on_complete is None:
            return
        if self.handoff is not None:
            self.handoff.cancel()
        self.handoff = threading.Timer(self.handoff_delay, self.on_complete)
        self.handoff.daemon = True
        self.handoff.start()
