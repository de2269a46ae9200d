# grooming_api/routers/appointments_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from grooming_api import booking
from grooming_api.auth import get_current_user
from grooming_api.db import get_session
from grooming_api.schemas import (
    AppointmentCreate,
    AppointmentCreated,
    AppointmentPublic,
    AppointmentWithService,
    StatusUpdate,
)

router = APIRouter(
    prefix="/api",
    tags=["appointments"],
)


@router.get("/appointments", response_model=List[AppointmentWithService])
def list_appointments(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return booking.list_appointments(session)


# Public: clients book without an account
@router.post("/appointments", response_model=AppointmentCreated)
def create_appointment(
    appt: Optional[AppointmentCreate] = None,
    session: Session = Depends(get_session),
):
    appointment = booking.create_appointment(session, appt or AppointmentCreate())
    return {
        "message": "Appuntamento creato con successo",
        "appointment": appointment,
    }


@router.put("/appointments/{appt_id}/status", response_model=AppointmentPublic)
def update_appointment_status(
    appt_id: int,
    update: Optional[StatusUpdate] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    update = update or StatusUpdate()
    proposed = (
        update.proposed_changes.model_dump(exclude_unset=True)
        if update.proposed_changes is not None
        else None
    )
    return booking.update_status(
        session,
        appt_id,
        update.status,
        rejection_reason=update.rejection_reason,
        proposed_changes=proposed,
        actor_id=current_user.get("userId"),
    )
