"""
Hotel Point - application entry point
Points-based hotel booking backend
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hotel_point.config import settings
from hotel_point.database import init_db
from hotel_point.errors import (
    BookingError, ConflictError, DependencyError, NotFoundError,
    UnauthorizedError, ValidationError
)
from hotel_point.routers import auth, bookings, points, admin

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# error kind -> HTTP status
ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    UnauthorizedError: 403,
    DependencyError: 500,
}


def status_for(error: BookingError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan"""
    init_db()
    logger.info(f"{settings.APP_NAME} started")
    yield


# Create the application
app = FastAPI(
    title="Hotel Point",
    description="Points-based hotel booking backend",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    code = status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=code, content=exc.to_dict())


# Routers
app.include_router(auth.router)
app.include_router(bookings.router)
app.include_router(points.router)
app.include_router(admin.router)


@app.get("/")
def root():
    """Service info"""
    return {"name": settings.APP_NAME, "version": "1.0.0"}


@app.get("/health")
def health_check():
    """Health check"""
    return {"status": "healthy"}
