# grooming_api/schemas.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, date, time
from decimal import Decimal
from typing import Optional


# Requests use the camelCase keys the mobile app sends. Required fields are
# Optional here so that missing ones reach the booking layer and get the
# same error message as empty ones.

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AppointmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_name: Optional[str] = Field(default=None, alias="clientName")
    client_phone: Optional[str] = Field(default=None, alias="clientPhone")
    client_email: Optional[str] = Field(default=None, alias="clientEmail")
    pet_name: Optional[str] = Field(default=None, alias="petName")
    pet_breed: Optional[str] = Field(default=None, alias="petBreed")
    service_id: Optional[int] = Field(default=None, alias="serviceId")
    appointment_date: Optional[str] = Field(default=None, alias="appointmentDate")  # YYYY-MM-DD
    appointment_time: Optional[str] = Field(default=None, alias="appointmentTime")  # HH:MM
    notes: Optional[str] = None


class ProposedChanges(BaseModel):
    model_config = ConfigDict(extra="allow")

    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None


class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[str] = None
    rejection_reason: Optional[str] = Field(default=None, alias="rejectionReason")
    proposed_changes: Optional[ProposedChanges] = Field(default=None, alias="proposedChanges")


class UserSummary(BaseModel):
    id: int
    email: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserSummary


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration: int
    price: Decimal
    description: Optional[str] = None
    active: bool
    created_at: datetime


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_name: str
    client_phone: Optional[str] = None
    client_email: Optional[str] = None
    pet_name: str
    pet_breed: Optional[str] = None
    service_id: Optional[int] = None
    appointment_date: date
    appointment_time: time
    notes: Optional[str] = None
    status: str
    rejection_reason: Optional[str] = None
    proposed_changes: Optional[dict] = None
    created_at: datetime
    updated_at: datetime


class AppointmentWithService(AppointmentPublic):
    # null when the service reference no longer resolves
    service_name: Optional[str] = None
    duration: Optional[int] = None
    price: Optional[Decimal] = None


class AppointmentCreated(BaseModel):
    message: str
    appointment: AppointmentPublic


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    env: str


class ConnectionTestResponse(BaseModel):
    message: str
    server_time: datetime
