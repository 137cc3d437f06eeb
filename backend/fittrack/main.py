"""FitTrack - FastAPI Application Entry Point."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from fittrack.config import get_settings
from fittrack.database import engine, Base
from fittrack.errors import FitTrackError
from fittrack.logging_config import setup_logging
from fittrack.routers import auth_router, communities_router, steps_router, workouts_router


settings = get_settings()
logger = logging.getLogger(__name__)
request_logger = logging.getLogger("fittrack.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: logging and database tables
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("%s started", settings.app_name)
    yield
    # Shutdown: Cleanup if needed


app = FastAPI(
    title="FitTrack API",
    description="Step counting, workout logs and communities",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        settings.frontend_url,
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    request_logger.info(
        f"Request: {request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Duration: {duration:.2f}s"
    )
    return response


# ============== Error handlers ==============

@app.exception_handler(FitTrackError)
async def fittrack_error_handler(request: Request, exc: FitTrackError):
    body = {"detail": exc.message}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message, "field": field or None})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(steps_router, prefix="/api")
app.include_router(workouts_router, prefix="/api")
app.include_router(communities_router, prefix="/api")


@app.get("/")
def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/api/health")
def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "OK", "message": "Server is running"}
