# grooming_api/routers/auth_routes.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from grooming_api.auth import login as authenticate
from grooming_api.config import Settings
from grooming_api.db import get_session
from grooming_api.deps import get_settings
from grooming_api.schemas import LoginRequest, LoginResponse

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Optional[LoginRequest] = None,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    credentials = credentials or LoginRequest()
    result = authenticate(session, settings, credentials.email, credentials.password)
    return {"message": "Login effettuato con successo", **result}
