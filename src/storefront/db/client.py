# src/storefront/db/client.py
"""Database engine and session management."""

from typing import Iterator, Optional

from pydantic import BaseModel
from rich.markup import escape
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.logging import color_palette, log
from storefront.db.models import Base


class PoolConfig(BaseModel):
    """Connection pool settings (ignored for SQLite)."""

    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800
    pool_pre_ping: bool = True


class DbConfig(BaseModel):
    """Database connection settings."""

    url: str = "sqlite:///./storefront.db"
    echo: bool = False
    pool: PoolConfig = PoolConfig()

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and (self.url in ("sqlite://", "sqlite:///") or ":memory:" in self.url)


class DbClient:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(self, config: DbConfig, engine: Optional[Engine] = None):
        self.config = config
        self.engine = engine or self._create_engine()
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def _create_engine(self) -> Engine:
        if self.config.is_sqlite:
            kwargs = {"connect_args": {"check_same_thread": False}}
            if self.config.is_memory:
                # one shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
            return create_engine(self.config.url, echo=self.config.echo, **kwargs)

        pool = self.config.pool
        return create_engine(
            self.config.url,
            echo=self.config.echo,
            pool_size=pool.pool_size,
            max_overflow=pool.max_overflow,
            pool_recycle=pool.pool_recycle,
            pool_pre_ping=pool.pool_pre_ping,
        )

    def get_db(self) -> Iterator[Session]:
        """FastAPI dependency yielding a session that is closed after the request."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)
        log.success(
            f"Ensured tables: {', '.join(color_palette['table'](t) for t in Base.metadata.tables)}"
        )

    def test_connection(self) -> bool:
        """Run a trivial query; returns False instead of raising when the database is unreachable."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log.error(f"Database connection failed: {escape(str(e))}")
            return False
