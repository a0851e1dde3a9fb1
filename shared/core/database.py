from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import DATABASE_URL, settings

Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def _engine_options(url: str) -> dict:
    if _is_memory_sqlite(url):
        # single shared connection so an in-memory db survives across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    if make_url(url).get_backend_name() == "sqlite":
        # one connection per session; writers wait up to `timeout` seconds for the lock
        return {"connect_args": {"check_same_thread": False, "timeout": 15}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": settings.DB_POOL_SIZE,          # max idle connections
        "max_overflow": settings.DB_MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": 30,                          # wait time before failing
    }


def _serialize_sqlite_writers(db_engine: Engine):
    """Open every file-SQLite transaction with BEGIN IMMEDIATE.

    SQLite ignores SELECT ... FOR UPDATE; taking the write lock at BEGIN makes a
    second booker wait until the first commits, so its conflict check sees the row.
    """

    @event.listens_for(db_engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(db_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str) -> Engine:
    db_engine = create_engine(url, **_engine_options(url))
    if db_engine.dialect.name == "sqlite" and not _is_memory_sqlite(url):
        _serialize_sqlite_writers(db_engine)
    return db_engine


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
