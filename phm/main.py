# PHM/backend/phm/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from phm import config
from phm.database import Database
from phm.errors import PHMError, InternalError
from phm.middleware import log_requests
from phm.routes import auth, users, crops, storage, transport, bookings, dashboard, contact
import logging
import datetime
import sys
import fastapi
import sqlalchemy

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(database_url: str = None) -> FastAPI:
    """
    Build the API. The Database handle is created at startup, stored on
    app.state and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- STARTUP ---
        logger.info("🚀 Starting PHM API...")
        database = Database(database_url or config.DATABASE_URL, echo=config.DEBUG)
        app.state.database = database

        if database.check_connection():
            logger.info("✅ Database connection established")
            # Development convenience; production schemas are managed outside the app
            database.create_tables()
        else:
            logger.error("❌ Could not connect to the database")

        yield

        # --- SHUTDOWN ---
        database.close()
        logger.info("👋 PHM API stopped")

    app = FastAPI(
        title="PHM API",
        description="Post-harvest marketplace: crops, storage and transport bookings",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration, login and token verification"},
            {"name": "users", "description": "Own profile and password"},
            {"name": "crops", "description": "Crop listings of the marketplace"},
            {"name": "storage", "description": "Storage facilities"},
            {"name": "transport", "description": "Transport vehicles"},
            {"name": "bookings", "description": "Storage and transport reservations"},
            {"name": "dashboard", "description": "Dashboard per user type"},
            {"name": "contact", "description": "Contact form"},
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(crops.router)
    app.include_router(storage.router)
    app.include_router(transport.router)
    app.include_router(bookings.router)
    app.include_router(dashboard.router)
    app.include_router(contact.router)

    register_service_routes(app)
    return app


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(PHMError)
    async def phm_error_handler(request: Request, exc: PHMError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"{request.method} {request.url.path} -> 400 invalid request")
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid or missing fields", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unexpected error on {request.method} {request.url.path}")
        error = InternalError("Internal server error")
        return JSONResponse(status_code=error.status_code, content={"detail": error.message})


def register_service_routes(app: FastAPI):

    @app.get("/")
    def root():
        """API root - general information"""
        return {
            "success": True,
            "message": "PHM backend running 🚀",
            "version": app.version,
            "environment": config.ENVIRONMENT,
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc"
            },
            "endpoints": {
                "auth": "/auth",
                "users": "/users",
                "crops": "/crops",
                "storage": "/storage",
                "transport": "/transport",
                "bookings": "/bookings",
                "dashboard": "/dashboard",
                "contact": "/contact",
                "docs": "/docs"
            },
            "health_check": "/health"
        }

    @app.get("/health")
    def health_check(request: Request):
        """Health endpoint for monitoring"""
        db_status = request.app.state.database.check_connection()
        return {
            "status": "healthy" if db_status else "unhealthy",
            "database": "connected" if db_status else "disconnected",
            "version": app.version,
            "timestamp": datetime.datetime.now().isoformat()
        }

    @app.get("/info")
    def info():
        return {
            "name": app.title,
            "description": app.description,
            "version": app.version,
            "python_version": sys.version,
            "fastapi_version": fastapi.__version__,
            "sqlalchemy_version": sqlalchemy.__version__,
            "environment": config.ENVIRONMENT
        }


# uvicorn phm.main:app
app = create_app()
