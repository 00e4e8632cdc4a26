from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .settings import get_settings

settings = get_settings()

def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # TestClient runs sync endpoints on worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}

# Create the SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _sqlite_foreign_keys(dbapi_conn, _record):
        # ON DELETE CASCADE is a no-op in sqlite without this
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

# Session factory
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# Dependency for FastAPI routes: one session per request, passed down explicitly
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
