from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from pawsocial.config import settings


def configure_sqlite(engine):
    """
    Make every SQLite transaction take the write lock at BEGIN.

    pysqlite otherwise defers BEGIN until the first INSERT/UPDATE/DELETE,
    so the reads a mutation checks (blocks, existing follows) would run
    outside the transaction that writes.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Request handlers run on a threadpool; each gets its own session.
    # timeout = seconds to wait for another writer's lock
    connect_args = {"check_same_thread": False, "timeout": 30}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

if engine.dialect.name == "sqlite":
    configure_sqlite(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
