"""FastAPI application with clean architecture and dependency injection"""

from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth_controller import router as auth_router
from .task_controller import router as task_router
from ...application.services.dependency_injection import DIContainer
from ...application.services.service_configuration import configure_services
from ...domain.exceptions import DomainError, NotFoundError, AuthenticationError
from ...infrastructure.config.settings import AppConfig, get_config
from ...infrastructure.database.connection import MongoConnection, DatabaseConnectionError
from ...infrastructure.logging.logger import configure_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events with proper cleanup"""
    config: AppConfig = app.state.config

    # A container injected at creation time owns its own resources
    if app.state.container_injected:
        yield
        return

    configure_logging(config.logging, config.service.environment)
    logger.info(f"{config.service.name} v{config.service.version} starting up ({config.service.environment})")

    connection = MongoConnection(config.database, environment=config.service.environment)
    app.state.connection = connection

    try:
        if await connection.connect():
            await connection.ensure_indexes()

        container = configure_services(DIContainer(), config, connection=connection)
        app.state.container = container
        logger.info("Dependency injection container configured")

        yield

    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise

    finally:
        logger.info(f"{config.service.name} shutting down...")
        try:
            container = getattr(app.state, "container", None)
            if container is not None:
                await container.cleanup()
                logger.info("Dependency injection container cleaned up")
            await connection.close()
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")


def create_application(
    settings: Optional[AppConfig] = None,
    container: Optional[DIContainer] = None
) -> FastAPI:
    """Create and configure FastAPI application"""
    config = settings or get_config()

    app = FastAPI(
        title="Task Manager API",
        description="Task management API with JWT authentication",
        version=config.service.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.config = config
    app.state.container = container
    app.state.container_injected = container is not None
    app.state.connection = None

    # Add middleware
    setup_middleware(app, config)

    # Add routers
    app.include_router(auth_router)
    app.include_router(task_router)

    # Add exception handlers
    setup_exception_handlers(app)

    setup_service_routes(app)

    return app


def setup_middleware(app: FastAPI, config: AppConfig):
    """Setup application middleware"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.origins,
        allow_credentials=True,
        allow_methods=config.cors.methods,
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        message = f"{request.method} {request.url.path} {response.status_code} {duration_ms:.2f} ms"

        if response.status_code >= 400 and config.service.is_production:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
        return response


def setup_exception_handlers(app: FastAPI):
    """Setup custom exception handlers"""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"]
            }
            for error in exc.errors()
        ]
        logger.warning(f"Validation failed for {request.url.path}: {errors}")
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": errors}
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if isinstance(exc, NotFoundError):
            status_code = 404
        elif isinstance(exc, AuthenticationError):
            status_code = 401
        else:
            status_code = 400
        logger.warning(f"Domain error in {request.url.path}: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"Value error in {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DatabaseConnectionError)
    async def database_error_handler(request: Request, exc: DatabaseConnectionError):
        logger.error(f"Database unavailable in {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Database unavailable"})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception in {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def setup_service_routes(app: FastAPI):
    """Root and health endpoints"""

    @app.get("/", tags=["service"])
    async def root():
        config: AppConfig = app.state.config
        return {
            "message": "Task Manager API",
            "version": config.service.version,
            "status": "running",
            "docs": "/docs",
            "health": "/health"
        }

    @app.get("/health", tags=["service"])
    async def health_check():
        config: AppConfig = app.state.config
        connection: Optional[MongoConnection] = app.state.connection

        if connection is not None:
            database = await connection.health_check()
        else:
            database = {"status": "not configured"}

        healthy = database["status"] != "unhealthy" and app.state.container is not None
        content = {
            "status": "healthy" if healthy else "unhealthy",
            "service": config.service.name,
            "version": config.service.version,
            "environment": config.service.environment,
            "components": {
                "database": database,
                "dependency_injection": "ok" if app.state.container is not None else "missing"
            }
        }
        return JSONResponse(status_code=200 if healthy else 503, content=content)


def main():
    """Run the API server"""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "task_manager.presentation.api.app:create_application",
        factory=True,
        host=config.service.host,
        port=config.service.port,
        reload=config.service.debug
    )


if __name__ == "__main__":
    main()
