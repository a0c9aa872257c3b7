from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from mlworkflow.core.exceptions import CatalogError
from mlworkflow.schemas.catalog import CatalogOut
from mlworkflow.schemas.dataset import ErrorOut
from mlworkflow.services.catalog import TargetType, catalog_for

router = APIRouter(prefix="/api", tags=["models"])

@router.get("/models", response_model=CatalogOut, responses={400: {"model": ErrorOut}})
def recommended_models(
    labeled: bool = Query(...),
    target_type: TargetType | None = Query(None, alias="targetType"),
):
    try:
        return catalog_for(labeled, target_type)
    except CatalogError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
