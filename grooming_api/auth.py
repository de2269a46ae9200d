# grooming_api/auth.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session, select

from .config import ALGORITHM, ACCESS_TOKEN_EXPIRE, Settings
from .deps import get_settings
from .errors import BadRequest, Forbidden, Unauthorized, store_errors
from .models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# Raw header: a credential under any scheme is checked as a token
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(
    data: dict,
    secret: str,
    expires_delta: timedelta = ACCESS_TOKEN_EXPIRE,
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + expires_delta
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    """Return the claims of a token signed with `secret`.

    Malformed, expired and wrongly signed tokens all raise Forbidden.
    """
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected session token: %s", exc)
        raise Forbidden("Token non valido") from exc


def verify(token: Optional[str], settings: Settings) -> dict:
    if not token:
        raise Forbidden("Token non valido")
    return decode_access_token(token, settings.jwt_secret)


def login(session: Session, settings: Settings, email: Optional[str], password: Optional[str]) -> dict:
    if not email or not password:
        raise BadRequest("Email e password richiesti")

    with store_errors(session, "Errore durante il login"):
        user = session.exec(
            select(User).where(User.email == email)
        ).first()

    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise Unauthorized("Credenziali non valide")

    token = create_access_token({"userId": user.id, "email": user.email}, settings.jwt_secret)
    logger.info("User %s logged in", user.email)
    return {
        "token": token,
        "user": {"id": user.id, "email": user.email, "role": user.role},
    }


def get_current_user(
    authorization: Optional[str] = Depends(authorization_header),
    settings: Settings = Depends(get_settings),
) -> dict:
    _scheme, token = get_authorization_scheme_param(authorization)
    if not token:
        raise Unauthorized("Token di accesso richiesto")
    return verify(token, settings)
