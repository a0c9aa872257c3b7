from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mlworkflow.core.config import settings
from mlworkflow.core.logging_utils import get_logger
from mlworkflow.routers import datasets, models

logger = get_logger(__name__)

app = FastAPI(title="ML Workflow: datasets and model catalog")

# CORS (keep or tighten as you like)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup() -> None:
    # the directory is created by the first upload, not here
    logger.info("Dataset storage directory: %s", settings.UPLOAD_DIR)

@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    # clients read the "error" field, never FastAPI's "detail" list
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("query", "body"))
    message = first.get("msg", "Invalid request")
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": f"{field}: {message}" if field else message})

# Routers
app.include_router(datasets.router)
app.include_router(models.router)
