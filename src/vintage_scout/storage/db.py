from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from ..exceptions import ConfigurationError, PersistenceError

Base = declarative_base()


def make_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine; SQLite gets the thread check disabled for executor use."""
    # SQLAlchemy 2.x doesn't accept 'postgres://'
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+psycopg2://", 1)

    try:
        if database_url.startswith("sqlite"):
            connect_args = kwargs.pop("connect_args", {})
            connect_args.setdefault("check_same_thread", False)
            return create_engine(database_url, connect_args=connect_args, **kwargs)
        return create_engine(database_url, pool_pre_ping=True, **kwargs)
    except (ArgumentError, ImportError) as e:
        raise ConfigurationError(f"Invalid database URL '{database_url}': {e}") from e


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Ensure models are registered before create_all
    from . import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to initialize database: {e}") from e
