"""Database engine and session factory for the SQL user store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from promptbook.core.config import settings

connect_args: dict[str, bool] = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
# Engines connect lazily, so the default in-memory store never touches this database.
engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
