import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from api.reports.reports_model import ReportStatus
from api.reports.reports_repository import (
    FallbackReportRepository,
    InMemoryReportRepository,
    ReportRepository,
    SqlAlchemyReportRepository,
)
from api.reports.reports_schema import ReportCreate, ReportStats, TrashReportResponse
from api.user.user_schema import ReportUser
from config.settings import Settings

logger = logging.getLogger(__name__)


class ReportStore:
    """
    The one stateful service every page talks to. Owns its repository;
    the application keeps a single instance on ``app.state``.
    """

    def __init__(self, repository: ReportRepository):
        self.repository = repository

    def list_reports(self) -> List[TrashReportResponse]:
        return self.repository.list_reports()

    def list_reports_by_status(self, status: ReportStatus) -> List[TrashReportResponse]:
        return self.repository.list_reports_by_status(status)

    def list_reports_by_user(self, email: str) -> List[TrashReportResponse]:
        return self.repository.list_reports_by_user(email)

    def get_report(self, report_id: str) -> Optional[TrashReportResponse]:
        return self.repository.get_report(report_id)

    def add_report(
        self,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        status: ReportStatus = ReportStatus.PENDING,
        user: Optional[ReportUser] = None,
    ) -> TrashReportResponse:
        data = ReportCreate(
            description=description,
            latitude=latitude,
            longitude=longitude,
            image_url=image_url,
            status=status,
            user=user or ReportUser(),
        )
        report = self.repository.add_report(data)
        logger.info("Trash report %s saved at (%s, %s)", report.id, report.latitude, report.longitude)
        return report

    def update_status(self, report_id: str, status: ReportStatus) -> Optional[TrashReportResponse]:
        return self.repository.update_status(report_id, status)

    def add_cleaning(
        self,
        report_id: str,
        after_image_url: Optional[str],
        volunteer: Optional[ReportUser] = None,
    ) -> Optional[TrashReportResponse]:
        report = self.repository.add_cleaning(report_id, after_image_url, volunteer)
        if report:
            logger.info("Report %s completed with cleaning %s", report.id, report.cleaning.id)
        return report

    def stats(self) -> ReportStats:
        reports = self.list_reports()
        counts = {status: 0 for status in ReportStatus}
        for report in reports:
            counts[report.status] += 1
        return ReportStats(
            total=len(reports),
            pending=counts[ReportStatus.PENDING],
            in_progress=counts[ReportStatus.IN_PROGRESS],
            completed=counts[ReportStatus.COMPLETED],
        )


def build_repository(backend: str, session_factory: Callable[[], Session]) -> ReportRepository:
    if backend == "memory":
        return InMemoryReportRepository()
    if backend == "database":
        return SqlAlchemyReportRepository(session_factory)
    if backend == "fallback":
        return FallbackReportRepository(SqlAlchemyReportRepository(session_factory))
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_report_store(settings: Settings, session_factory: Callable[[], Session]) -> ReportStore:
    repository = build_repository(settings.STORAGE_BACKEND, session_factory)
    logger.info("Report store using %s storage", settings.STORAGE_BACKEND)
    return ReportStore(repository)
