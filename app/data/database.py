# app/data/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.utils.settings import DATABASE_URL
from app.utils.retry import db_connect_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url.startswith("sqlite"):
        # in-memory sqlite has to share one connection between threads
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def wait_for_database(engine: Engine) -> None:
    @db_connect_retry()
    def _ping():
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    logger.info(f"Connecting to database {engine.url.render_as_string(hide_password=True)}")
    _ping()
