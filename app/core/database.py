import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine (connection pool) and the session factory.

    Built once by the application factory and handed to request handlers
    through ``app.state.db``; tests build their own against SQLite.
    """

    def __init__(self, url: str, pool_size: int = 20, pool_timeout: int = 2, pool_recycle: int = 30):
        self.url = url
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(url, **kwargs)
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_engine(
                url,
                pool_size=pool_size,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
                pool_pre_ping=True,
            )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.DB_POOL_SIZE,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        import app.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        import app.models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database connection check failed: %s", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()
