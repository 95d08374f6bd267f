import logging

from fastapi import HTTPException

from studypilot.errors import StudyPilotError

logger = logging.getLogger(__name__)


def to_http(error: Exception) -> HTTPException:
    """Map a domain error to its HTTP status; anything else is a 500."""
    if isinstance(error, StudyPilotError):
        return HTTPException(status_code=error.status_code, detail=error.message)
    logger.exception(f"Unhandled error: {error}")
    return HTTPException(status_code=500, detail=str(error))
