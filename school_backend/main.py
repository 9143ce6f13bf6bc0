import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import sys

from school_backend.api.v1.attendance import router as attendance_router
from school_backend.api.v1.classes import class_router
from school_backend.api.v1.fees import fee_router, fee_type_router
from school_backend.api.v1.pictures import picture_router
from school_backend.api.v1.students import student_router
from school_backend.api.v1.subjects import subject_router
from school_backend.api.v1.teachers import teacher_router
from school_backend.config import settings
from school_backend.database import database
from school_backend.services.media_upload import media_uploader


def configure_logging():
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding='utf-8'))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    try:
        if await database.connect():
            await database.ensure_tables()
        else:
            logger.warning("Database unreachable at startup, tables will be created on the first request")

        if not media_uploader.is_configured():
            logger.warning("Media host credentials missing, image uploads are disabled")

    except Exception as e:
        logger.error(f"Error during startup: {e}", exc_info=True)

    logger.info("Application startup complete")
    yield

    logger.info("Shutting down application...")
    try:
        await database.disconnect()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(student_router)
app.include_router(class_router)
app.include_router(fee_type_router)
app.include_router(fee_router)
app.include_router(teacher_router)
app.include_router(subject_router)
app.include_router(attendance_router)
app.include_router(picture_router)


@app.get("/")
async def root():
    return "Live Here"


@app.get("/health")
async def health_check():
    db_status = await database.check_connection()
    return {
        "status": "healthy" if db_status else "degraded",
        "database": "connected" if db_status else "disconnected",
        "media_upload": "configured" if media_uploader.is_configured() else "not_configured"
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if str(exc) else "Unknown error"
        }
    )


def run():
    uvicorn.run("school_backend.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
