import logging

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from school_backend.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    def __init__(self):
        self.engine = None
        self.async_session = None
        self.is_connected = False
        self.tables_created = False

    def _engine_options(self, url) -> dict:
        """Pool options derived from the DB_* settings"""
        options = {
            "echo": settings.DB_ECHO,
            "pool_pre_ping": True,
        }
        backend = url.get_backend_name()
        if backend == "sqlite":
            return options

        options.update(
            pool_size=settings.DB_MAX_CLIENTS,
            max_overflow=0,
            pool_timeout=settings.DB_CONNECTION_TIMEOUT,
            pool_recycle=settings.DB_IDLE_TIMEOUT,
        )
        if backend == "mysql":
            options["connect_args"] = {"connect_timeout": settings.DB_CONNECTION_TIMEOUT}
        elif backend == "postgresql":
            options["connect_args"] = {"timeout": settings.DB_CONNECTION_TIMEOUT}
        return options

    async def connect(self):
        """Create the pooled engine and verify one connection can be checked out"""
        url = make_url(settings.database_url)

        self.engine = create_async_engine(url, **self._engine_options(url))

        if url.get_backend_name() == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # Create async session factory
        self.async_session = sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        self.is_connected = True

        if await self.check_connection():
            logger.info(f"Connected to the database successfully: {url.database}")
            return True
        return False

    async def disconnect(self):
        """Dispose of the engine and its pooled connections"""
        if self.engine:
            await self.engine.dispose()
            self.is_connected = False
            self.tables_created = False
            logger.info("Database connection closed")

    async def check_connection(self) -> bool:
        """Borrow a connection from the pool and release it again"""
        if not self.engine:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Error connecting to the database: {e}")
            return False

    def get_session(self) -> AsyncSession:
        """Get async database session"""
        if not self.is_connected:
            raise RuntimeError("Database is not connected. Call connect() first.")
        return self.async_session()

    async def create_tables(self):
        """Create all tables defined in Base metadata"""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Tables created successfully")
        except Exception as e:
            logger.error(f"Error creating tables: {e}")
            raise

    async def ensure_tables(self):
        """Create the tables once, on the first call that reaches the database"""
        if self.tables_created:
            return
        await self.create_tables()
        self.tables_created = True


# Create global database instance
database = Database()
