"""
Storage strategies behind the report store.

``SqlAlchemyReportRepository`` talks to the relational backend,
``InMemoryReportRepository`` keeps a process-local list, and
``FallbackReportRepository`` runs every call against the first and, when the
backend raises, repeats it against the second. The two copies are never
synchronised.
"""
import abc
import logging
import random
import string
import time
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from api.reports.cleanings_model import Cleaning
from api.reports.reports_model import ReportStatus, TrashReport
from api.reports.reports_schema import (
    CleaningResponse,
    ReportCreate,
    TrashReportResponse,
)
from api.user.user_model import User, UserRole
from api.user.user_schema import ReportUser
from api.user.user_service import award_points, find_or_create_user
from config.points_config import PointReason

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _generate_id(prefix: str) -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def generate_report_id() -> str:
    return _generate_id("report")


def generate_cleaning_id() -> str:
    return _generate_id("cleaning")


class InvalidStatusTransition(ValueError):
    """Raised when a status change would break the cleaning/COMPLETED pairing."""


def ensure_status_transition(current: ReportStatus, has_cleaning: bool, new: ReportStatus) -> None:
    if new == ReportStatus.COMPLETED:
        raise InvalidStatusTransition("COMPLETED is reached only by attaching a cleaning")
    if has_cleaning or current == ReportStatus.COMPLETED:
        raise InvalidStatusTransition("Report is already completed")


class ReportRepository(abc.ABC):
    """Contract shared by every storage strategy."""

    @abc.abstractmethod
    def list_reports(self) -> List[TrashReportResponse]:
        ...

    @abc.abstractmethod
    def list_reports_by_status(self, status: ReportStatus) -> List[TrashReportResponse]:
        ...

    @abc.abstractmethod
    def list_reports_by_user(self, email: str) -> List[TrashReportResponse]:
        ...

    @abc.abstractmethod
    def get_report(self, report_id: str) -> Optional[TrashReportResponse]:
        ...

    @abc.abstractmethod
    def add_report(self, data: ReportCreate) -> TrashReportResponse:
        ...

    @abc.abstractmethod
    def update_status(self, report_id: str, status: ReportStatus) -> Optional[TrashReportResponse]:
        ...

    @abc.abstractmethod
    def add_cleaning(
        self,
        report_id: str,
        after_image_url: Optional[str],
        volunteer: Optional[ReportUser] = None,
    ) -> Optional[TrashReportResponse]:
        ...


class SqlAlchemyReportRepository(ReportRepository):
    """Reports, cleanings and their users stored through the ORM."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    @staticmethod
    def _base_query(db: Session):
        return (
            db.query(TrashReport)
              .options(joinedload(TrashReport.user), joinedload(TrashReport.cleaning))
              .order_by(desc(TrashReport.created_at), desc(TrashReport.id))
        )

    @staticmethod
    def _to_response(report: TrashReport) -> TrashReportResponse:
        return TrashReportResponse.model_validate(report)

    def list_reports(self) -> List[TrashReportResponse]:
        with self.session_factory() as db:
            return [self._to_response(r) for r in self._base_query(db).all()]

    def list_reports_by_status(self, status: ReportStatus) -> List[TrashReportResponse]:
        with self.session_factory() as db:
            reports = self._base_query(db).filter(TrashReport.status == status).all()
            return [self._to_response(r) for r in reports]

    def list_reports_by_user(self, email: str) -> List[TrashReportResponse]:
        with self.session_factory() as db:
            reports = (
                self._base_query(db)
                  .join(User, TrashReport.user_id == User.id)
                  .filter(User.email == email)
                  .all()
            )
            return [self._to_response(r) for r in reports]

    def get_report(self, report_id: str) -> Optional[TrashReportResponse]:
        with self.session_factory() as db:
            report = self._base_query(db).filter(TrashReport.id == report_id).first()
            return self._to_response(report) if report else None

    def add_report(self, data: ReportCreate) -> TrashReportResponse:
        with self.session_factory() as db:
            # the user row commits on its own; report and points share one commit
            user = find_or_create_user(db, name=data.user.name, email=data.user.email)

            report = TrashReport(
                id=generate_report_id(),
                user_id=user.id if user else None,
                description=data.description,
                latitude=data.latitude,
                longitude=data.longitude,
                image_url=data.image_url,
                status=data.status,
                created_at=datetime.utcnow(),
            )
            db.add(report)
            if user:
                award_points(db, user.id, PointReason.reported_trash, commit=False)
            db.commit()

            db.refresh(report)
            return self._to_response(report)

    def update_status(self, report_id: str, status: ReportStatus) -> Optional[TrashReportResponse]:
        with self.session_factory() as db:
            report = db.get(TrashReport, report_id)
            if not report:
                return None

            ensure_status_transition(report.status, report.cleaning is not None, status)
            report.status = status
            db.commit()
            db.refresh(report)
            return self._to_response(report)

    def add_cleaning(
        self,
        report_id: str,
        after_image_url: Optional[str],
        volunteer: Optional[ReportUser] = None,
    ) -> Optional[TrashReportResponse]:
        with self.session_factory() as db:
            report = db.get(TrashReport, report_id)
            if not report:
                return None

            volunteer_user = None
            if volunteer is not None:
                volunteer_user = find_or_create_user(
                    db, name=volunteer.name, email=volunteer.email, role=UserRole.volunteer
                )

            # completion never predates creation, even across clock adjustments
            cleaned_at = max(datetime.utcnow(), report.created_at)
            if report.cleaning is None:
                report.cleaning = Cleaning(
                    id=generate_cleaning_id(),
                    after_image_url=after_image_url,
                    cleaned_at=cleaned_at,
                )
            else:
                report.cleaning.after_image_url = after_image_url
                report.cleaning.cleaned_at = cleaned_at
            if volunteer_user:
                report.cleaning.volunteer_id = volunteer_user.id

            report.status = ReportStatus.COMPLETED
            if volunteer_user:
                award_points(db, volunteer_user.id, PointReason.cleaned_area, commit=False)
            db.commit()

            db.refresh(report)
            return self._to_response(report)


class InMemoryReportRepository(ReportRepository):
    """Process-local list, newest report first. Users and points are not tracked."""

    def __init__(self):
        self._reports: List[TrashReportResponse] = []

    def __len__(self) -> int:
        return len(self._reports)

    def _find(self, report_id: str) -> Optional[TrashReportResponse]:
        return next((r for r in self._reports if r.id == report_id), None)

    @staticmethod
    def _copy(reports: List[TrashReportResponse]) -> List[TrashReportResponse]:
        return [r.model_copy(deep=True) for r in reports]

    def list_reports(self) -> List[TrashReportResponse]:
        return self._copy(self._reports)

    def list_reports_by_status(self, status: ReportStatus) -> List[TrashReportResponse]:
        return self._copy([r for r in self._reports if r.status == status])

    def list_reports_by_user(self, email: str) -> List[TrashReportResponse]:
        return self._copy([r for r in self._reports if r.user.email == email])

    def get_report(self, report_id: str) -> Optional[TrashReportResponse]:
        report = self._find(report_id)
        return report.model_copy(deep=True) if report else None

    def add_report(self, data: ReportCreate) -> TrashReportResponse:
        report = TrashReportResponse(
            id=generate_report_id(),
            description=data.description,
            latitude=data.latitude,
            longitude=data.longitude,
            image_url=data.image_url,
            status=data.status,
            created_at=datetime.utcnow(),
            user=data.user.model_copy(),
        )
        self._reports.insert(0, report)
        return report.model_copy(deep=True)

    def update_status(self, report_id: str, status: ReportStatus) -> Optional[TrashReportResponse]:
        report = self._find(report_id)
        if not report:
            return None

        ensure_status_transition(report.status, report.cleaning is not None, status)
        report.status = status
        return report.model_copy(deep=True)

    def add_cleaning(
        self,
        report_id: str,
        after_image_url: Optional[str],
        volunteer: Optional[ReportUser] = None,
    ) -> Optional[TrashReportResponse]:
        report = self._find(report_id)
        if not report:
            return None

        report.cleaning = CleaningResponse(
            id=report.cleaning.id if report.cleaning else generate_cleaning_id(),
            after_image_url=after_image_url,
            cleaned_at=max(datetime.utcnow(), report.created_at),
        )
        report.status = ReportStatus.COMPLETED
        return report.model_copy(deep=True)


class FallbackReportRepository(ReportRepository):
    """
    Database first; on a backend error the same call is replayed against the
    owned in-memory repository. Nothing is reconciled once the database
    comes back, so the two stores may diverge.
    """

    def __init__(self, primary: ReportRepository, fallback: Optional[ReportRepository] = None):
        self.primary = primary
        self.fallback = fallback if fallback is not None else InMemoryReportRepository()
        self.fallback_used = False

    def _run(self, operation: str, *args, **kwargs):
        try:
            return getattr(self.primary, operation)(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.warning(
                "Database unavailable during %s, using fallback storage: %s", operation, exc
            )
            self.fallback_used = True
            return getattr(self.fallback, operation)(*args, **kwargs)

    def list_reports(self) -> List[TrashReportResponse]:
        return self._run("list_reports")

    def list_reports_by_status(self, status: ReportStatus) -> List[TrashReportResponse]:
        return self._run("list_reports_by_status", status)

    def list_reports_by_user(self, email: str) -> List[TrashReportResponse]:
        return self._run("list_reports_by_user", email)

    def get_report(self, report_id: str) -> Optional[TrashReportResponse]:
        return self._run("get_report", report_id)

    def add_report(self, data: ReportCreate) -> TrashReportResponse:
        return self._run("add_report", data)

    def update_status(self, report_id: str, status: ReportStatus) -> Optional[TrashReportResponse]:
        return self._run("update_status", report_id, status)

    def add_cleaning(
        self,
        report_id: str,
        after_image_url: Optional[str],
        volunteer: Optional[ReportUser] = None,
    ) -> Optional[TrashReportResponse]:
        return self._run("add_cleaning", report_id, after_image_url, volunteer)
