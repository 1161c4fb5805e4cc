# app/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from app.core.settings import settings

ENGINE_URL = settings.SQLALCHEMY_DATABASE_URL


def enable_sqlite_foreign_keys(eng: Engine) -> None:
    # SQLite ignores ON DELETE CASCADE unless the pragma is set per connection
    @event.listens_for(eng, "connect")
    def _fk_pragma(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


_connect_args = {"check_same_thread": False} if ENGINE_URL.startswith("sqlite") else {}

engine = create_engine(
    ENGINE_URL,
    pool_pre_ping=True,
    pool_recycle=1800,  # keep hosted connections fresh
    connect_args=_connect_args,
)
if ENGINE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
