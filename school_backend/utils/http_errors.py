import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

logger = logging.getLogger(__name__)


def database_error(action: str, e: SQLAlchemyError) -> HTTPException:
    """Map a database failure to the HTTP error returned to the client"""
    if isinstance(e, IntegrityError):
        logger.error(f"Database integrity error {action}: {str(e)}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Database constraint violation. Check your input data."
        )
    logger.error(f"Database error {action}: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Database service temporarily unavailable"
    )
