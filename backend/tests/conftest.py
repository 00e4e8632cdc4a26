"""
Point the app at a throwaway sqlite file and create the schema before any
test module imports liftlog.main. Runs before collection.
"""
import os
import tempfile
import uuid

_DB_DIR = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ["SQLALCHEMY_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'liftlog.db')}"
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret")

import pytest  # noqa: E402

from liftlog.db import Base, SessionLocal, engine  # noqa: E402
from liftlog import models  # noqa: E402,F401

Base.metadata.create_all(engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user_id():
    # Identity provider subjects are opaque strings
    return f"user_{uuid.uuid4().hex[:12]}"
