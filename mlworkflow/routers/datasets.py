# mlworkflow/routers/datasets.py
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from mlworkflow.core.exceptions import StorageError
from mlworkflow.core.logging_utils import get_logger
from mlworkflow.repositories.dataset_repo import DatasetStore, get_store
from mlworkflow.schemas.dataset import DatasetPresenceOut, ErrorOut, UploadedFileOut, UploadOut

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["datasets"])

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorOut(error=message).model_dump())

@router.post(
    "/upload",
    response_model=UploadOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def upload_datasets(request: Request, store: DatasetStore = Depends(get_store)):
    # multipart field "files"; text values under that name are not files
    form = await request.form()
    files = [f for f in form.getlist("files") if isinstance(f, UploadFile)]
    if not files:
        return _error(400, "No files uploaded")

    # no rollback: files written before a failure stay on disk
    stored = []
    try:
        for f in files:
            rec = await run_in_threadpool(store.store, f.file, f.filename or "", f.content_type)
            stored.append(UploadedFileOut(
                dataset_id=rec.dataset_id,
                original_name=rec.original_name,
                stored_name=rec.stored_name,
                path=rec.path,
                size=rec.size,
                type=rec.content_type,
                uploaded_at=rec.uploaded_at,
            ))
    except StorageError:
        logger.exception("Upload error after %d of %d file(s)", len(stored), len(files))
        return _error(500, "File upload failed")

    return UploadOut(
        success=True,
        message=f"{len(files)} file(s) uploaded successfully",
        dataset_ids=[s.dataset_id for s in stored],
        files=stored,
    )

@router.get(
    "/datasets/check",
    response_model=DatasetPresenceOut,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorOut}},
)
def check_datasets(store: DatasetStore = Depends(get_store)):
    try:
        count = store.count()
    except StorageError:
        logger.exception("Error checking for datasets")
        return _error(500, "Failed to check for datasets")

    if count is None:
        return DatasetPresenceOut(has_datasets=False)
    return DatasetPresenceOut(has_datasets=count > 0, count=count)
