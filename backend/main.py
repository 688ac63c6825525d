# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import SessionLocal, engine, get_db, init_db
from seed import seed_defaults
from utils.errors import AppError

# Routers
from routes.auth import router as auth_router
from routes.wildlife import router as wildlife_router
from routes.accommodations import router as accommodations_router
from routes.admin import router as admin_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)
    init_db()

    # One-time bootstrap; every seed step skips tables that already have rows
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            inserted = seed_defaults(db)
            logger.info("Seed check complete: %s", inserted)
        finally:
            db.close()

    yield

    logger.info("Shutting down, closing database connections")
    engine.dispose()


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# === Error responses: always {"error": message} ===

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{field}: {msg}" if field else msg)
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed")


# Router registration
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(wildlife_router, prefix=settings.API_PREFIX)
app.include_router(accommodations_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    p = settings.API_PREFIX
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": {
            "health": f"{p}/health",
            "auth": f"{p}/auth",
            "wildlife": {
                "all": f"{p}/wildlife",
                "gates": f"{p}/wildlife/gates",
                "sightings": f"{p}/wildlife/sightings",
                "stats": f"{p}/wildlife/stats",
                "bigFive": f"{p}/wildlife/big-five-summary",
            },
            "accommodations": {
                "all": f"{p}/accommodations",
                "byId": f"{p}/accommodations/:id",
                "byGate": f"{p}/accommodations/gate/:gateName",
                "reviews": f"{p}/accommodations/:id/reviews",
            },
        },
    }


@app.get(f"{settings.API_PREFIX}/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Database connection failed")
    return {"status": "OK", "message": f"{settings.APP_NAME} is running", "database": "connected"}
