# grooming_api/errors.py

"""Errors raised by the service layer.

Each carries the HTTP status the API boundary answers with and a
human-readable message that is safe to show to the caller.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class InternalError(ApiError):
    status_code = 500


@contextmanager
def store_errors(session, message: str):
    """Turn store failures into an InternalError carrying `message`.

    The original exception is logged with its traceback and never reaches
    the caller.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("%s: %s", message, exc)
        raise InternalError(message) from exc
