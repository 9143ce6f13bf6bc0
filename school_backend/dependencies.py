from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from school_backend.database import database
from school_backend.services.media_upload import MediaUploader, media_uploader
from school_backend.utils.http_errors import database_error


async def get_db() -> AsyncSession:
    """
    Yields one pooled session per request, committed when the route returns.

    Tables are created on first use when the database was down at startup.
    """
    try:
        await database.ensure_tables()
    except SQLAlchemyError as e:
        raise database_error("creating tables", e)

    async with database.get_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_uploader() -> MediaUploader:
    """Dependency returning the shared media uploader"""
    return media_uploader
