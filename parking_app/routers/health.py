# parking_app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB.
"""

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(request: Request):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
    }

    try:
        request.app.state.db.ping()
        result["database"] = "ok"
    except SQLAlchemyError as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
