# grooming_api/models.py

from typing import Optional
from datetime import datetime, date as Date, time, timezone
from decimal import Decimal

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON, DateTime, TypeDecorator
from sqlmodel import SQLModel, Field, Column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC timestamps on every backend.

    SQLite drops the offset on write, so values are normalised to UTC going
    in and tagged as UTC coming back out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def timestamp_field():
    # a fresh Column per model field
    return Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, index=True, unique=True)
    password_hash: str = Field(max_length=255)
    role: str = Field(default="admin", max_length=50)
    fcm_token: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = timestamp_field()


class Service(SQLModel, table=True):
    __tablename__ = "services"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    duration: int  # minutes
    price: Decimal = Field(max_digits=10, decimal_places=2)
    description: Optional[str] = None
    active: bool = True
    created_at: datetime = timestamp_field()


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"

    id: Optional[int] = Field(default=None, primary_key=True)

    client_name: str = Field(max_length=255)
    client_phone: Optional[str] = Field(default=None, max_length=20)
    client_email: Optional[str] = Field(default=None, max_length=255)
    pet_name: str = Field(max_length=255)
    pet_breed: Optional[str] = Field(default=None, max_length=255)
    # not checked against the catalog; may point at an inactive service
    service_id: Optional[int] = Field(default=None, foreign_key="services.id")
    appointment_date: Date
    appointment_time: time
    notes: Optional[str] = None

    status: str = Field(default="pending", max_length=50)
    rejection_reason: Optional[str] = None
    proposed_changes: Optional[dict] = Field(
        default=None,
        # None is stored as SQL NULL, not the JSON literal null
        sa_column=Column(
            JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
            nullable=True,
        ),
    )

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    title: str = Field(max_length=255)
    message: str
    type: str = Field(default="info", max_length=50)  # "info", "appointment", ...
    read: bool = False
    appointment_id: Optional[int] = Field(default=None, foreign_key="appointments.id")
    created_at: datetime = timestamp_field()
