from pydantic import BaseModel, ConfigDict

class ModelDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    tag: str
    description: str
    path: str

class CatalogOut(BaseModel):
    kind: str
    title: str
    description: str
    badge: str
    models: list[ModelDescriptor]
