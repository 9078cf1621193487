import pytest
import os
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

import fitout.models  # noqa: F401
from fitout.core.deps import get_db
from fitout.db.base import Base
from fitout.db.session import build_engine, build_session_factory
from fitout.main import app


@pytest.fixture()
def test_context():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    session_local = build_session_factory(engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, session_local

    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
