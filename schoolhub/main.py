import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.staticfiles import StaticFiles
from dotenv import load_dotenv

# Load environment variables as early as possible
load_dotenv()

from .core.config import settings
from .db.session import get_readiness
from .exceptions import http_exception_handler
from .middleware import SecurityMiddleware, LoggingMiddleware, ErrorHandlingMiddleware, RequestSizeLimitMiddleware
from .routers import schools_router, upload_router, health_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting SchoolHub API...")
    readiness = get_readiness()
    try:
        readiness.ensure_schema()
    except Exception:
        # Do not crash the app; report via health endpoint
        logger.exception("Database initialization failed, running in offline mode")
    yield
    logger.info("Shutting down SchoolHub API...")
    readiness.teardown()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

app.add_exception_handler(HTTPException, http_exception_handler)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schools_router.router)
app.include_router(upload_router.router)
app.include_router(health_router.router)

# Uploaded school images are public
os.makedirs(settings.IMAGE_UPLOAD_DIR, exist_ok=True)
app.mount(settings.IMAGE_ROUTE_PREFIX, StaticFiles(directory=settings.IMAGE_UPLOAD_DIR), name="school-images")


def run() -> None:
    import uvicorn
    uvicorn.run("schoolhub.main:app", host=settings.HOST, port=settings.PORT)
