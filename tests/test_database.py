from sqlalchemy.engine import make_url

from school_backend.config import settings
from school_backend.database import Database, database
from school_backend.models.picture import Picture


def test_mysql_engine_uses_bounded_pool():
    options = Database()._engine_options(make_url("mysql+aiomysql://u:p@h/db"))

    assert options["pool_size"] == settings.DB_MAX_CLIENTS
    assert options["max_overflow"] == 0
    assert options["pool_timeout"] == settings.DB_CONNECTION_TIMEOUT
    assert options["pool_recycle"] == settings.DB_IDLE_TIMEOUT
    assert options["pool_pre_ping"] is True
    assert options["connect_args"] == {"connect_timeout": settings.DB_CONNECTION_TIMEOUT}


def test_postgres_engine_passes_connect_timeout():
    options = Database()._engine_options(make_url("postgresql+asyncpg://u:p@h/db"))

    assert options["pool_size"] == settings.DB_MAX_CLIENTS
    assert options["connect_args"] == {"timeout": settings.DB_CONNECTION_TIMEOUT}


def test_sqlite_engine_keeps_default_pool():
    options = Database()._engine_options(make_url("sqlite+aiosqlite:///school.db"))

    assert "pool_size" not in options
    assert "connect_args" not in options


def test_missing_tables_are_created_on_next_request(client, student):
    async def drop_pictures():
        async with database.engine.begin() as conn:
            await conn.run_sync(Picture.__table__.drop)

    client.portal.call(drop_pictures)
    database.tables_created = False

    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"]), "image_url": "https://cdn.example.com/a.png"}
    )
    assert response.status_code == 201, response.text
    assert database.tables_created is True
