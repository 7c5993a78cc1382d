from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from api.map.map_schema import MapMarker
from api.reports.reports_model import ReportStatus
from api.reports.reports_service import ReportStore
from utils.deps import get_report_store

router = APIRouter(prefix="/map", tags=["Map"])


@router.get("/markers", response_model=List[MapMarker], summary="Report markers for the map")
def list_map_markers(
    status: Optional[ReportStatus] = Query(None, description="Only markers with this status"),
    store: ReportStore = Depends(get_report_store),
):
    reports = store.list_reports_by_status(status) if status else store.list_reports()
    return [
        MapMarker(id=r.id, lat=r.latitude, lng=r.longitude, status=r.status)
        for r in reports
    ]
