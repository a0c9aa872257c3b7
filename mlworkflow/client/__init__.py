from mlworkflow.client.models_page import ModelsPage, PageStep
from mlworkflow.client.upload_widget import UploadStatus, UploadWidget, WidgetState
from mlworkflow.client.validation import PendingFile, validate_file

__all__ = [
    "ModelsPage",
    "PageStep",
    "PendingFile",
    "UploadStatus",
    "UploadWidget",
    "WidgetState",
    "validate_file",
]
