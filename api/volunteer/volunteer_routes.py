from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from api.reports.reports_model import ReportStatus
from api.reports.reports_schema import TrashReportResponse
from api.reports.reports_service import ReportStore
from api.volunteer.volunteer_controller import (
    dashboard_controller,
    start_cleaning_controller,
    submit_after_photo_controller,
)
from api.volunteer.volunteer_schema import AfterPhotoSubmit, VolunteerDashboardResponse
from utils.deps import get_report_store

router = APIRouter(prefix="/volunteer", tags=["Volunteer"])


@router.get("/dashboard", response_model=VolunteerDashboardResponse, summary="Volunteer dashboard data")
def volunteer_dashboard(
    filter: str = Query("all", description="all, PENDING, IN_PROGRESS or COMPLETED"),
    store: ReportStore = Depends(get_report_store),
):
    status: Optional[ReportStatus] = None
    if filter != "all":
        try:
            status = ReportStatus(filter)
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unknown filter: {filter}")
    return dashboard_controller(store, status)


@router.post("/reports/{report_id}/start", response_model=TrashReportResponse, summary="Start cleaning a report")
def start_cleaning(
    report_id: str,
    store: ReportStore = Depends(get_report_store),
):
    return start_cleaning_controller(report_id, store)


@router.post("/reports/{report_id}/after-photo", response_model=TrashReportResponse, summary="Upload the after-photo")
def submit_after_photo(
    report_id: str,
    payload: AfterPhotoSubmit,
    store: ReportStore = Depends(get_report_store),
):
    return submit_after_photo_controller(report_id, payload, store)
