# -*- coding: utf-8 -*-
"""
SQLAlchemy setup for the catalog service.

The engine (and its connection pool) lives in a `Database` object created at
application startup and disposed at shutdown; route handlers receive a
request-scoped session through `get_db`.
"""

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from catalog.config import Settings

# Declarative base shared by all models
Base = declarative_base()


class Database:
    """Owns the engine, its pool and the session factory."""

    def __init__(self, settings: Settings):
        descriptor = settings.database
        url = descriptor.render()

        engine_args = {}
        connect_args = {}
        if descriptor.backend == "sqlite":
            connect_args = {"check_same_thread": False}
        else:
            engine_args = {
                "pool_size": settings.pool_size,
                "pool_timeout": settings.pool_timeout,
            }
            if descriptor.backend == "postgresql":
                connect_args = {"connect_timeout": settings.connect_timeout}

        # pool_pre_ping: checks the connection is alive before handing it out
        # pool_recycle: replaces connections older than an hour
        self.engine = create_engine(
            url,
            connect_args=connect_args,
            pool_pre_ping=True,
            pool_recycle=3600,
            **engine_args,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logging.info(f"Database engine created for {descriptor.safe_url()}")

    def create_tables(self):
        # registers Product on Base.metadata
        from catalog.models import product  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()
        logging.info("Database connection pool disposed")


# Request-scoped session, used with Depends
def get_db(request: Request):
    database: Database = request.app.state.database
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
