import os
import shutil
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, List, Optional

from mlworkflow.core.config import settings
from mlworkflow.core.exceptions import StorageError
from mlworkflow.core.logging_utils import get_logger

logger = get_logger(__name__)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def stored_name_for(dataset_id: str, original_name: str, moment: Optional[datetime] = None) -> str:
    # colons and dots are not filesystem-safe everywhere
    stamp = iso_timestamp(moment).replace(":", "-").replace(".", "-")
    base = os.path.basename(original_name.replace("\\", "/"))
    ext = base.rsplit(".", 1)[1] if "." in base else ""
    name = f"{dataset_id}-{stamp}"
    return f"{name}.{ext}" if ext else name


@dataclass(frozen=True)
class StoredDataset:
    dataset_id: str
    original_name: str
    stored_name: str
    path: str
    size: int
    content_type: Optional[str]
    uploaded_at: str


class DatasetStore:
    """
    Directory-backed dataset storage.

    The directory is the only source of truth: nothing is cached between
    calls, and every entry in it counts as a dataset.
    """

    def __init__(self, root: str, chunk_size: int = settings.UPLOAD_CHUNK_BYTES):
        self.root = os.path.abspath(root)
        self.chunk_size = chunk_size

    def exists(self) -> bool:
        return os.path.isdir(self.root)

    def list(self) -> List[str]:
        if not self.exists():
            return []
        try:
            return sorted(os.listdir(self.root))
        except OSError as e:
            raise StorageError(f"cannot list {self.root}") from e

    def count(self) -> Optional[int]:
        """Number of entries, or None when the directory does not exist."""
        if not self.exists():
            return None
        try:
            return len(os.listdir(self.root))
        except OSError as e:
            raise StorageError(f"cannot list {self.root}") from e

    def store(self, fileobj: BinaryIO, original_name: str, content_type: Optional[str] = None) -> StoredDataset:
        dataset_id = str(uuid.uuid4())
        stored_name = stored_name_for(dataset_id, original_name)
        path = os.path.join(self.root, stored_name)

        try:
            os.makedirs(self.root, exist_ok=True)
            # stream to disk
            with open(path, "wb") as out:
                shutil.copyfileobj(fileobj, out, length=self.chunk_size)
            size = os.path.getsize(path)
        except OSError as e:
            raise StorageError(f"cannot write {path}") from e

        logger.info("Stored dataset %s (%s, %d bytes) as %s", dataset_id, original_name, size, stored_name)
        return StoredDataset(
            dataset_id=dataset_id,
            original_name=original_name,
            stored_name=stored_name,
            path=path,
            size=size,
            content_type=content_type,
            uploaded_at=iso_timestamp(),
        )


def get_store() -> DatasetStore:
    return DatasetStore(settings.UPLOAD_DIR)
