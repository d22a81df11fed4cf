"""
CivicDesk - Main Application
============================

Municipal complaint intake, routing, SLA tracking and resolution workflow.

Modules:
- Routing: Department classification and priority assignment
- Complaints: Intake, role-scoped listings and the status workflow
- SLA: Per-complaint deadlines, dashboard and analytics

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects and business rules
- Infrastructure: Database, department configuration
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from civicdesk.config import settings
from civicdesk.core import ApplicationException

# Infrastructure
from civicdesk.infrastructure.database import close_database, create_tables, init_database
from civicdesk.routing.infrastructure import department_config_manager

# Module Routers
from civicdesk.complaints.interfaces import complaints_router
from civicdesk.routing.interfaces import routing_router
from civicdesk.sla.interfaces import sla_router

# Shared HTTP plumbing
from civicdesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    application_exception_handler,
    global_exception_handler,
)

# Logging
from civicdesk.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database
    3. Create database tables
    4. Load the department table and watch it for changes

    SHUTDOWN:
    1. Stop the config watcher
    2. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting CivicDesk", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })
    app.state.settings = settings

    logger.info("Initializing database")
    init_database()

    # Create tables (for development - use migrations in production)
    logger.info("Creating database tables")
    try:
        await create_tables()
    except Exception as e:
        logger.warning(f"Database not available - running in degraded mode: {e}")

    logger.info("Loading department configuration")
    department_config_manager.load(settings.department_config_path)
    if settings.watch_department_config:
        department_config_manager.start_watching()

    logger.info("CivicDesk started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down CivicDesk")
    department_config_manager.stop_watching()
    await close_database()
    logger.info("CivicDesk shutdown complete")


app = FastAPI(
    title="CivicDesk API",
    description="""
    ## Municipal Complaint Management

    Citizens file complaints; each is routed to a department, given a
    priority and an SLA deadline, and worked through a fixed workflow by
    department staff.

    ---

    ### Routing
    - `POST /routing/classify` - Department and priority for a description
    - `GET /routing/departments` - Department table with SLA hours

    ### Complaints
    - `POST /complaints` - File a complaint (409 on duplicates)
    - `GET /complaints` - Search, filter, sort and paginate
    - `GET /complaints/{id}` - One complaint with SLA and next statuses
    - `PATCH /complaints/{id}/status` - Advance the workflow

    ### SLA
    - `GET /sla/complaints/{id}` - SLA status
    - `GET /sla/dashboard` - Aggregates for the caller's scope
    - `GET /sla/analytics` - Cross-department analytics (main admin)

    ---

    ### Workflow

    `New → Seen → Assigned → In Progress → Completed → Closed`

    ### Caller identity

    Requests carry `X-Actor-Username`, `X-Actor-Role` (`main_admin` or
    `sub_admin`) and, for sub-admins, `X-Actor-Department`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(routing_router)
app.include_router(complaints_router)
app.include_router(sla_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "department_config": "loaded (6 departments)"
                    }
                }
            }
        }
    }
})
async def health_check(request: Request):
    """Health check endpoint for load balancers and orchestrators."""
    if department_config_manager.is_loaded:
        count = len(department_config_manager.config.departments)
        config_state = f"loaded ({count} departments)"
    else:
        config_state = "not_loaded"

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "department_config": config_state
        }
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "CivicDesk",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "routing": {
                "prefix": "/routing",
                "endpoints": [
                    "POST /routing/classify - Classify a description",
                    "GET /routing/departments - List departments"
                ]
            },
            "complaints": {
                "prefix": "/complaints",
                "endpoints": [
                    "POST /complaints - File a complaint",
                    "GET /complaints - List complaints",
                    "GET /complaints/{id} - Get one complaint",
                    "PATCH /complaints/{id}/status - Advance status"
                ]
            },
            "sla": {
                "prefix": "/sla",
                "endpoints": [
                    "GET /sla/complaints/{id} - SLA status",
                    "GET /sla/dashboard - Dashboard",
                    "GET /sla/analytics - Analytics"
                ]
            }
        }
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "civicdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )
