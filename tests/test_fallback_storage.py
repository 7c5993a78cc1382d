import logging

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from api.reports import reports_repository
from api.reports.reports_model import ReportStatus, TrashReport
from api.reports.reports_repository import (
    FallbackReportRepository,
    InMemoryReportRepository,
    SqlAlchemyReportRepository,
)
from api.reports.reports_service import ReportStore, build_report_store, build_repository
from api.user.user_schema import ReportUser
from config.settings import Settings

from conftest import make_engine


@pytest.fixture
def broken_factory():
    # no tables were created, so every statement fails
    engine = make_engine()
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_backend_failure_downgrades_to_memory(broken_factory, caplog):
    repository = FallbackReportRepository(SqlAlchemyReportRepository(broken_factory))
    store = ReportStore(repository)

    with caplog.at_level(logging.WARNING):
        report = store.add_report(
            latitude=28.6139,
            longitude=77.2090,
            description="plastic near well",
            user=ReportUser(name="Asha", email="asha@village.com"),
        )

    assert repository.fallback_used
    assert report.status == ReportStatus.PENDING
    assert report.user.email == "asha@village.com"
    assert len(repository.fallback) == 1
    assert "using fallback storage" in caplog.text

    cleaned = store.add_cleaning(report.id, "after.jpg")
    assert cleaned.status == ReportStatus.COMPLETED
    assert [r.id for r in store.list_reports_by_status(ReportStatus.COMPLETED)] == [report.id]


def test_healthy_backend_never_touches_memory(session_factory):
    repository = FallbackReportRepository(SqlAlchemyReportRepository(session_factory))
    store = ReportStore(repository)

    report = store.add_report(latitude=1.0, longitude=2.0)

    assert not repository.fallback_used
    assert len(repository.fallback) == 0
    assert store.get_report(report.id) == report


def test_stores_diverge_after_outage(session_factory):
    primary = SqlAlchemyReportRepository(session_factory)
    fallback = InMemoryReportRepository()
    repository = FallbackReportRepository(primary, fallback)
    store = ReportStore(repository)
    stored = store.add_report(latitude=1.0, longitude=2.0)
    only_in_memory = ReportStore(fallback).add_report(latitude=3.0, longitude=4.0)

    # the database answers, so the memory-only report is invisible
    assert [r.id for r in store.list_reports()] == [stored.id]
    assert store.update_status(only_in_memory.id, ReportStatus.IN_PROGRESS) is None
    assert fallback.get_report(only_in_memory.id).status == ReportStatus.PENDING


def test_build_repository_by_name(session_factory):
    assert isinstance(build_repository("memory", session_factory), InMemoryReportRepository)
    assert isinstance(build_repository("database", session_factory), SqlAlchemyReportRepository)
    fallback = build_repository("fallback", session_factory)
    assert isinstance(fallback, FallbackReportRepository)
    assert isinstance(fallback.primary, SqlAlchemyReportRepository)

    with pytest.raises(ValueError):
        build_repository("redis", session_factory)


def test_build_report_store_follows_settings(session_factory):
    store = build_report_store(Settings(STORAGE_BACKEND="memory"), session_factory)
    assert isinstance(store.repository, InMemoryReportRepository)


def failing_award(*args, **kwargs):
    raise OperationalError("UPDATE users", {}, Exception("database is locked"))


def test_failed_point_award_leaves_no_database_report(session_factory, monkeypatch):
    monkeypatch.setattr(reports_repository, "award_points", failing_award)
    repository = FallbackReportRepository(SqlAlchemyReportRepository(session_factory))
    store = ReportStore(repository)

    report = store.add_report(
        latitude=1.0, longitude=2.0, user=ReportUser(name="Asha", email="asha@village.com")
    )

    with session_factory() as session:
        assert session.query(TrashReport).count() == 0
    assert repository.fallback_used
    assert [r.id for r in repository.fallback.list_reports()] == [report.id]


def test_failed_point_award_leaves_report_uncleaned(session_factory, monkeypatch):
    repository = FallbackReportRepository(SqlAlchemyReportRepository(session_factory))
    store = ReportStore(repository)
    report = store.add_report(latitude=1.0, longitude=2.0)
    monkeypatch.setattr(reports_repository, "award_points", failing_award)

    result = store.add_cleaning(report.id, "after.jpg", volunteer=ReportUser(email="vol@village.com"))

    # the memory store never saw this report, and the database change rolled back
    assert result is None
    stored = repository.primary.get_report(report.id)
    assert stored.status == ReportStatus.PENDING
    assert stored.cleaning is None
