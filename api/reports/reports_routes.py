from typing import Optional
from fastapi import APIRouter, Depends, Query, status as http_status

from api.reports.reports_controller import (
    submit_report_controller,
    list_reports_controller,
    get_report_controller,
    update_status_controller,
    add_cleaning_controller,
)
from api.reports.reports_model import ReportStatus
from api.reports.reports_schema import (
    CleaningCreate,
    ReportStatusUpdate,
    ReportSubmit,
    TrashReportListResponse,
    TrashReportResponse,
)
from api.reports.reports_service import ReportStore
from utils.deps import get_report_store

router = APIRouter(prefix="/reports", tags=["Trash Reports"])


@router.post(
    "",
    response_model=TrashReportResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Submit a trash report",
)
def submit_trash_report(
    payload: ReportSubmit,
    store: ReportStore = Depends(get_report_store),
):
    """
    Create a PENDING report from a photo reference and a location.
    Rejected with 422 when the attached analysis found no trash.
    """
    return submit_report_controller(payload, store)


@router.get("", response_model=TrashReportListResponse, summary="List trash reports, newest first")
def list_trash_reports(
    status: Optional[ReportStatus] = Query(None, description="Filter by report status"),
    email: Optional[str] = Query(None, description="Only reports filed by this email"),
    store: ReportStore = Depends(get_report_store),
):
    return list_reports_controller(store, status=status, email=email)


@router.get("/{report_id}", response_model=TrashReportResponse, summary="Get a single trash report")
def get_trash_report(
    report_id: str,
    store: ReportStore = Depends(get_report_store),
):
    return get_report_controller(report_id, store)


@router.patch("/{report_id}/status", response_model=TrashReportResponse, summary="Change a report's status")
def update_trash_report_status(
    report_id: str,
    update: ReportStatusUpdate,
    store: ReportStore = Depends(get_report_store),
):
    return update_status_controller(report_id, update.status, store)


@router.post("/{report_id}/cleaning", response_model=TrashReportResponse, summary="Attach a cleaning record")
def add_report_cleaning(
    report_id: str,
    cleaning: CleaningCreate,
    store: ReportStore = Depends(get_report_store),
):
    """Stores the after-photo and marks the report COMPLETED."""
    return add_cleaning_controller(report_id, cleaning, store)
