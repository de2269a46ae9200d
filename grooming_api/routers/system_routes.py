# grooming_api/routers/system_routes.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from grooming_api.config import Settings
from grooming_api.deps import get_settings
from grooming_api.schemas import ConnectionTestResponse, HealthResponse

router = APIRouter(
    tags=["system"],
)


@router.get("/health", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc),
        "env": settings.environment,
    }


# Used by the mobile app to check it can reach the server
@router.get("/api/test", response_model=ConnectionTestResponse)
def connection_test():
    return {
        "message": "🎉 Connessione al server OK!",
        "server_time": datetime.now(timezone.utc),
    }
