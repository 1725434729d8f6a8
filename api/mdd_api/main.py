from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import traceback
from mdd_api.core.config import settings
from mdd_api.core.database import init_db
from mdd_api.core.exceptions import ErrorKind, MddException

# Import models to register them with SQLModel
from mdd_api import models  # noqa: F401

# Import API router
from mdd_api.api.v1 import api_router

logging.basicConfig(level=settings.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SUBSCRIPTION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.LOOKUP_FAILURE: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHENTICATION_FAILURE: status.HTTP_401_UNAUTHORIZED,
}

app = FastAPI(title="MDD API", version="1.0.0")


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances JSON can't encode; input may hold a password
    return [{key: value for key, value in error.items() if key not in ("ctx", "input")} for error in exc.errors()]


# Add exception handler for validation errors to log details
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors; request bodies may hold passwords, so they are not logged."""
    logger.error(f"Validation error on {request.method} {request.url.path}")
    logger.error(f"Validation errors: {jsonable_errors(exc)}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc)},
    )


# Add exception handler for custom application exceptions
@app.exception_handler(MddException)
async def mdd_exception_handler(request: Request, exc: MddException):
    """Handle custom application exceptions by their error kind."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.warning(f"Application exception on {request.method} {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


# Add global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions to prevent 502 errors."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    # In development, show full error details
    if settings.is_development:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
                "traceback": traceback.format_exc()
            },
        )
    # In production, return generic message
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal server error occurred. Please try again later.",
            "type": "InternalServerError"
        },
    )

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db()


@app.get("/")
async def root():
    return {
        "message": "MDD API",
        "status": "running",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


# Include API router
app.include_router(api_router, prefix=settings.api_v1_prefix)
