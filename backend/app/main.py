import logging
import os
import sys
from pathlib import Path

# Add backend directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.config import settings
from app.db.db import Base, SessionLocal, engine
from app.routes import catalog_router, recommendation_router
from app.services.catalog_service import load_catalog_csv, seed_catalog
from app.services.errors import ServiceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def resolve_catalog_path(raw_path: str) -> Path:
    """Relative paths are tried against the working directory, then the repo root."""
    path = Path(raw_path)
    if path.is_absolute() or path.exists():
        return path
    return REPO_ROOT / path


def init_catalog() -> int:
    """Create tables and seed the catalog from CSV when the table is empty."""
    Base.metadata.create_all(bind=engine)
    records = load_catalog_csv(resolve_catalog_path(settings.catalog_csv_path))
    with SessionLocal() as db:
        return seed_catalog(db, records)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler - runs on startup and shutdown"""
    # Startup
    init_catalog()
    yield
    # Shutdown


app = FastAPI(
    title="Card Funnel API",
    version="0.1.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# CORS middleware - MUST be added first before other middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):  # type: ignore[override]
    """Handle validation errors with HTTP 400 using the standard error envelope."""
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request payload.",
                "details": {"errors": jsonable_encoder(exc.errors())}
            }
        }
    )


@app.exception_handler(ServiceError)
async def service_exception_handler(request, exc: ServiceError):  # type: ignore[override]
    logger.warning("Service error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):  # type: ignore[override]
    """Handle general exceptions - log and return 500 error"""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "Internal server error.",
                "details": {}
            }
        }
    )


# Register routers
app.include_router(catalog_router)
app.include_router(recommendation_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
