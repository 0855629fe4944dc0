from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

# Register every table with SQLModel metadata
import quietseed.models  # noqa: F401

def make_engine(database_url: str) -> Engine:
    connect_args = {}
    kwargs = {}
    # check_same_thread is needed for SQLite, remove for PostgreSQL
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # An in-memory database only lives as long as its single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, **kwargs)

def create_db_and_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
