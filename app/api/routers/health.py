# app/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.utils.settings import ENVIRONMENT

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health(request: Request):
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": ENVIRONMENT,
        "storage": request.app.state.backend.name,
    }
