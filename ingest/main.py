"""FastAPI main application module."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ingest.config.database import init_models
from ingest.config.settings import settings
from ingest.middleware.exception_handler import register_exception_handlers
from ingest.middleware.logging_middleware import RequestLoggingMiddleware
from ingest.routers import access, accounts, destinations, policies, projects

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
)

# Register exception handlers
register_exception_handlers(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
)

# Request/Response logging middleware
app.add_middleware(RequestLoggingMiddleware)


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Create tables on startup outside of tests."""
    if not settings.TESTING:
        await init_models()


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Include routers
app.include_router(
    accounts.router,
    prefix=f"{settings.API_PREFIX}/accounts",
    tags=["Accounts"],
)

app.include_router(
    policies.router,
    prefix=f"{settings.API_PREFIX}/policies",
    tags=["Policies"],
)

app.include_router(
    access.router,
    prefix=f"{settings.API_PREFIX}/access",
    tags=["Access"],
)

app.include_router(
    destinations.router,
    prefix=f"{settings.API_PREFIX}/destinations",
    tags=["Destinations"],
)

app.include_router(
    projects.router,
    prefix=f"{settings.API_PREFIX}/projects",
    tags=["Projects"],
)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Ingest Access API",
        "version": settings.API_VERSION,
        "docs_url": f"{settings.API_PREFIX}/docs",
    }
