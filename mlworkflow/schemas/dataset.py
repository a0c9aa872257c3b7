from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class UploadedFileOut(CamelModel):
    dataset_id: str
    original_name: str
    stored_name: str
    path: str
    size: int
    type: str | None
    uploaded_at: str

class UploadOut(CamelModel):
    success: bool
    message: str
    dataset_ids: list[str]
    files: list[UploadedFileOut]

class DatasetPresenceOut(CamelModel):
    has_datasets: bool
    count: int | None = None

class ErrorOut(BaseModel):
    error: str
