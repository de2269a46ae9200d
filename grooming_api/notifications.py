# grooming_api/notifications.py

"""Notification rows recorded alongside appointment events.

Nothing here commits: rows are added to the caller's session so they become
durable in the same transaction as the change that triggered them. There is
no delivery subsystem; the stored rows are the whole feature.
"""

import logging
from typing import List, Optional

from sqlmodel import Session, select

from .models import Notification, User

logger = logging.getLogger(__name__)


def record_notification(
    session: Session,
    user_id: int,
    title: str,
    message: str,
    type: str = "info",
    appointment_id: Optional[int] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        appointment_id=appointment_id,
    )
    session.add(notification)
    return notification


def notify_admins(
    session: Session,
    title: str,
    message: str,
    type: str = "info",
    appointment_id: Optional[int] = None,
) -> List[Notification]:
    admins = session.exec(select(User).where(User.role == "admin")).all()
    recorded = [
        record_notification(session, admin.id, title, message, type, appointment_id)
        for admin in admins
    ]
    logger.debug("Recorded %d admin notifications for appointment %s", len(recorded), appointment_id)
    return recorded
