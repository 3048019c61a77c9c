from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from app.api.routers.employees import router as employees_router
from app.core.config import settings
from app.core.database import create_db_and_tables
from app.core.exceptions import register_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.models.employee import Employee

setup_logging()
logger = get_logger(__name__)

tags_metadata = [
    {"name": "employees", "description": "Employee records: CRUD, paged list and search."},
    {"name": "health", "description": "Service liveness."},
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Create the employees table on startup."""
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}")
    create_db_and_tables(Employee)
    yield
    logger.info("Application shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    register_exception_handlers(app)
    app.include_router(employees_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["health"])
    def health_check():
        """Report service name, version and the database backend in use."""
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "database": make_url(settings.database_url).get_backend_name(),
        }

    return app


app = create_app()
