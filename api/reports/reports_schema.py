from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from api.reports.reports_model import ReportStatus
from api.user.user_schema import ReportUser
from api.detection.detection_schema import ClassificationResult

DEFAULT_DESCRIPTION = "Trash reported by villager"


class CleaningResponse(BaseModel):
    id: str
    after_image_url: Optional[str] = None
    cleaned_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TrashReportResponse(BaseModel):
    id: str
    description: Optional[str] = None
    latitude: float
    longitude: float
    image_url: Optional[str] = None
    status: ReportStatus
    created_at: datetime
    user: ReportUser = Field(default_factory=ReportUser)
    cleaning: Optional[CleaningResponse] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("user", mode="before")
    @classmethod
    def anonymous_user(cls, v):
        # anonymous submissions have no user row
        return ReportUser() if v is None else v


class ReportCreate(BaseModel):
    description: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    image_url: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    user: ReportUser = Field(default_factory=ReportUser)


class ReportSubmit(BaseModel):
    """Body of the report form: a photo and a location are mandatory."""
    description: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    image_url: str = Field(..., min_length=1)
    user: Optional[ReportUser] = None
    analysis: Optional[ClassificationResult] = None

    @model_validator(mode="after")
    def require_detected_trash(self):
        if self.analysis is not None and not self.analysis.has_trash:
            raise ValueError(
                "AI analysis detected no trash in this photo. "
                "Please upload a photo showing actual trash."
            )
        return self

    def to_create(self) -> ReportCreate:
        return ReportCreate(
            description=self.description or DEFAULT_DESCRIPTION,
            latitude=self.latitude,
            longitude=self.longitude,
            image_url=self.image_url,
            user=self.user or ReportUser(),
        )


class ReportStatusUpdate(BaseModel):
    status: ReportStatus

    @field_validator("status")
    @classmethod
    def not_completed(cls, v):
        if v == ReportStatus.COMPLETED:
            raise ValueError("COMPLETED is reached by attaching a cleaning")
        return v


class CleaningCreate(BaseModel):
    after_image_url: str = Field(..., min_length=1)
    volunteer: Optional[ReportUser] = None


class ReportStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


class TrashReportListResponse(BaseModel):
    total_count: int
    reports: List[TrashReportResponse]
