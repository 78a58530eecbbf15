"""
Job Portal - Main Application

FastAPI backend with:
- Relational store accessed with parameterized SQL (PostgreSQL / SQLite)
- JWT authentication (bcrypt password hashes)
- One JSON envelope for every error: {"success": false, "message": ...}

Run: uvicorn jobportal.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.api.routes import api_router
from jobportal.core.config import get_settings
from jobportal.db.database import check_database_connection
from jobportal.db.schema import init_schema

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_schema()
    yield


# Create FastAPI app
app = FastAPI(
    title="Job Portal",
    description="""
    Job board for freelancers and companies.

    ## Features
    - **Users**: registration, JWT login, role-specific profile details
    - **Jobs**: paginated postings owned by company accounts
    - **Applications**: apply, withdraw while pending, accept/reject
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# ============================================================
# ERROR ENVELOPE
# ============================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal Server Error"})


@app.get("/", tags=["Health"])
async def root():
    return {"success": True, "message": "Job Portal API is running"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    connected = check_database_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "disconnected",
    }
