# grooming_api/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from grooming_api.booking import list_services
from grooming_api.db import get_session
from grooming_api.schemas import ServicePublic

router = APIRouter(
    prefix="/api",
    tags=["services"],
)


@router.get("/services", response_model=List[ServicePublic])
def get_services(session: Session = Depends(get_session)):
    return list_services(session)
