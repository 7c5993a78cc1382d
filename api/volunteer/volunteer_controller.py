from typing import Optional
from fastapi import HTTPException, status as http_status

from api.reports.reports_model import ReportStatus
from api.reports.reports_repository import InvalidStatusTransition
from api.reports.reports_schema import TrashReportResponse
from api.reports.reports_service import ReportStore
from api.volunteer.volunteer_schema import AfterPhotoSubmit, VolunteerDashboardResponse
from config.settings import settings


def dashboard_controller(store: ReportStore, status: Optional[ReportStatus] = None) -> VolunteerDashboardResponse:
    """
    Everything the volunteer screen shows on one poll: the (optionally
    filtered) report list, counts across all reports and the poll interval.
    """
    reports = store.list_reports()
    stats = store.stats()
    if status:
        reports = [r for r in reports if r.status == status]

    return VolunteerDashboardResponse(
        filter=status.value if status else "all",
        reports=reports,
        stats=stats,
        refresh_interval_seconds=settings.POLL_INTERVAL_SECONDS,
    )


def start_cleaning_controller(report_id: str, store: ReportStore) -> TrashReportResponse:
    try:
        report = store.update_status(report_id, ReportStatus.IN_PROGRESS)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=http_status.HTTP_409_CONFLICT, detail=str(e))
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


def submit_after_photo_controller(
    report_id: str,
    payload: AfterPhotoSubmit,
    store: ReportStore,
) -> TrashReportResponse:
    report = store.add_cleaning(report_id, payload.after_image_url, payload.volunteer)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report
