from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageUnavailable
from ..logger import logger

router = APIRouter()


@router.get("/health")
def health_check():
    """Liveness only; never touches the store."""
    return {"status": "Backend is running!"}


@router.get("/health/ready")
def readiness_check(request: Request):
    """Check if service is ready (including database)"""
    try:
        request.app.state.database.ping()
    except SQLAlchemyError as e:
        error = StorageUnavailable.from_exception(e)
        logger.error(f"Readiness check failed: {error.message}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Database unavailable"},
        )
    return {"status": "ready", "database": "connected"}
