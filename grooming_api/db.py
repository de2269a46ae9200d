# grooming_api/db.py

import logging

from fastapi import Request
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from .auth import hash_password
from .config import Settings
from .data import SERVICES
from . import models

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the engine (and its connection pool) for the configured store."""
    url = settings.database_url
    timeout = settings.db_timeout_seconds

    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={
                "check_same_thread": False,  # required for SQLite + FastAPI
                "timeout": timeout,
            },
        )

    connect_args = {
        "connect_timeout": timeout,
        "options": f"-c statement_timeout={timeout * 1000}",
    }
    if settings.is_production:
        connect_args["sslmode"] = "require"

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args=connect_args,
    )


def init_db(engine: Engine, settings: Settings) -> bool:
    """Check connectivity and bootstrap an empty store.

    Tables are created and seeded only when `users` is missing, so reruns
    against an initialised store are no-ops. Returns True when the schema
    was created.
    """
    logger.info("Checking database...")
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connected")

    if inspect(engine).has_table("users"):
        logger.info("Database tables already exist")
        return False

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        for name, duration, price, description in SERVICES:
            session.add(models.Service(name=name, duration=duration, price=price, description=description))
        session.add(
            models.User(
                email=settings.admin_email,
                password_hash=hash_password(settings.admin_password),
                role="admin",
            )
        )
        session.commit()

    logger.info("Database initialized successfully, admin user: %s", settings.admin_email)
    return True


# Dependency: one session per request
def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session

