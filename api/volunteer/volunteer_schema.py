from typing import List, Optional
from pydantic import BaseModel, Field
from api.reports.reports_schema import ReportStats, TrashReportResponse
from api.user.user_schema import ReportUser


class VolunteerDashboardResponse(BaseModel):
    filter: str
    reports: List[TrashReportResponse]
    stats: ReportStats
    refresh_interval_seconds: int


class AfterPhotoSubmit(BaseModel):
    after_image_url: str = Field(..., min_length=1)
    volunteer: Optional[ReportUser] = None
