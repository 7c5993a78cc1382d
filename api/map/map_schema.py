from pydantic import BaseModel
from api.reports.reports_model import ReportStatus


class MapMarker(BaseModel):
    id: str
    lat: float
    lng: float
    status: ReportStatus
