from typing import Optional
from fastapi import HTTPException, status as http_status
from api.reports.reports_model import ReportStatus
from api.reports.reports_repository import InvalidStatusTransition
from api.reports.reports_schema import (
    CleaningCreate,
    ReportSubmit,
    TrashReportListResponse,
    TrashReportResponse,
)
from api.reports.reports_service import ReportStore


def submit_report_controller(payload: ReportSubmit, store: ReportStore) -> TrashReportResponse:
    """
    Persist a villager's report. Photo, location and the trash check are
    already enforced by the schema, so anything reaching here is stored.
    """
    data = payload.to_create()
    return store.add_report(
        latitude=data.latitude,
        longitude=data.longitude,
        description=data.description,
        image_url=data.image_url,
        status=data.status,
        user=data.user,
    )


def list_reports_controller(
    store: ReportStore,
    status: Optional[ReportStatus] = None,
    email: Optional[str] = None,
) -> TrashReportListResponse:
    if email:
        reports = store.list_reports_by_user(email)
        if status:
            reports = [r for r in reports if r.status == status]
    elif status:
        reports = store.list_reports_by_status(status)
    else:
        reports = store.list_reports()

    return TrashReportListResponse(total_count=len(reports), reports=reports)


def get_report_controller(report_id: str, store: ReportStore) -> TrashReportResponse:
    report = store.get_report(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


def update_status_controller(
    report_id: str,
    new_status: ReportStatus,
    store: ReportStore,
) -> TrashReportResponse:
    try:
        report = store.update_status(report_id, new_status)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=http_status.HTTP_409_CONFLICT, detail=str(e))
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


def add_cleaning_controller(
    report_id: str,
    cleaning: CleaningCreate,
    store: ReportStore,
) -> TrashReportResponse:
    report = store.add_cleaning(report_id, cleaning.after_image_url, cleaning.volunteer)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report
