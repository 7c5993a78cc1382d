import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.index import Base
from main import app
from config.database import get_db
from utils.deps import get_classifier, get_report_store
from api.detection.image_classifier import RandomImageClassifier
from api.reports.reports_repository import InMemoryReportRepository, SqlAlchemyReportRepository
from api.reports.reports_service import ReportStore
from api.rewards.rewards_service import RewardService


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = make_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def sql_store(session_factory):
    return ReportStore(SqlAlchemyReportRepository(session_factory))


@pytest.fixture
def memory_store():
    return ReportStore(InMemoryReportRepository())


@pytest.fixture(params=["database", "memory"])
def store(request, session_factory):
    """The same contract checked against both storage strategies."""
    if request.param == "database":
        return ReportStore(SqlAlchemyReportRepository(session_factory))
    return ReportStore(InMemoryReportRepository())


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(120, 200, 80)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def client(sql_store, session_factory):
    seed_session = session_factory()
    RewardService(seed_session).seed_gifts()
    seed_session.close()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    classifier = RandomImageClassifier(delay_seconds=0, trash_probability=1.0)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_report_store] = lambda: sql_store
    app.dependency_overrides[get_classifier] = lambda: classifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
