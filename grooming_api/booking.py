# grooming_api/booking.py

import logging
from datetime import date, time
from typing import List, Optional

from sqlmodel import Session, select

from .data import APPOINTMENT_STATUSES
from .errors import BadRequest, NotFound, store_errors
from .models import Appointment, Service, User, utcnow
from .notifications import notify_admins, record_notification
from .schemas import AppointmentCreate

logger = logging.getLogger(__name__)


def list_services(session: Session) -> List[Service]:
    with store_errors(session, "Errore recupero servizi"):
        return list(
            session.exec(
                select(Service).where(Service.active == True).order_by(Service.name)  # noqa: E712
            ).all()
        )


def create_appointment(session: Session, data: AppointmentCreate) -> Appointment:
    """Store a public booking request as a pending appointment.

    The service reference is taken as given: it is not checked against the
    catalog, so unknown or inactive services are accepted.
    """
    if (
        not data.client_name
        or not data.pet_name
        or not data.service_id
        or not data.appointment_date
        or not data.appointment_time
    ):
        raise BadRequest("Campi obbligatori mancanti")

    try:
        appointment_date = date.fromisoformat(data.appointment_date)
        appointment_time = time.fromisoformat(data.appointment_time)
    except ValueError:
        raise BadRequest("Data o ora non valida")

    with store_errors(session, "Errore creazione appuntamento"):
        appointment = Appointment(
            client_name=data.client_name,
            client_phone=data.client_phone,
            client_email=data.client_email,
            pet_name=data.pet_name,
            pet_breed=data.pet_breed,
            service_id=data.service_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            notes=data.notes,
            status="pending",
        )
        session.add(appointment)
        session.flush()  # fills appointment.id

        notify_admins(
            session,
            "Nuova richiesta di appuntamento",
            f"{appointment.client_name} ha richiesto un appuntamento per {appointment.pet_name} "
            f"il {appointment_date.isoformat()} alle {appointment_time.strftime('%H:%M')}",
            type="appointment",
            appointment_id=appointment.id,
        )

        session.commit()
        session.refresh(appointment)

    logger.info("Created appointment %s for %s", appointment.id, appointment.pet_name)
    return appointment


def list_appointments(session: Session) -> List[dict]:
    """All appointments, newest first, with the name, duration and price of their service."""
    stmt = (
        select(Appointment, Service.name, Service.duration, Service.price)
        .join(Service, Appointment.service_id == Service.id, isouter=True)
        .order_by(Appointment.created_at.desc(), Appointment.id.desc())
    )

    with store_errors(session, "Errore recupero appuntamenti"):
        rows = session.exec(stmt).all()

    return [
        {
            **appointment.model_dump(),
            "service_name": service_name,
            "duration": duration,
            "price": price,
        }
        for appointment, service_name, duration, price in rows
    ]


def update_status(
    session: Session,
    appointment_id: int,
    status: Optional[str],
    rejection_reason: Optional[str] = None,
    proposed_changes: Optional[dict] = None,
    actor_id: Optional[int] = None,
) -> Appointment:
    """Move an appointment to `status`, replacing its reason and counter-proposal.

    Rejection reason and proposed changes are stored as supplied (None clears
    them) whatever the new status is.
    """
    if status not in APPOINTMENT_STATUSES:
        raise BadRequest("Stato non valido")

    with store_errors(session, "Errore aggiornamento appuntamento"):
        appointment = session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFound("Appuntamento non trovato")

        previous = appointment.status
        appointment.status = status
        appointment.rejection_reason = rejection_reason
        appointment.proposed_changes = proposed_changes
        # updated_at never moves backwards, even if the clock does
        appointment.updated_at = max(utcnow(), appointment.updated_at)
        session.add(appointment)

        if actor_id is not None and session.get(User, actor_id) is not None:
            record_notification(
                session,
                actor_id,
                "Appuntamento aggiornato",
                f"Appuntamento #{appointment.id} ({appointment.pet_name}): {previous} -> {status}",
                type="appointment",
                appointment_id=appointment.id,
            )

        session.commit()
        session.refresh(appointment)

    logger.info("Appointment %s status %s -> %s", appointment_id, previous, status)
    return appointment
