from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ReportUser(BaseModel):
    """Who filed (or cleaned) a report. Both fields are optional."""
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(from_attributes=True)


class PointsLogResponse(BaseModel):
    delta: int
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
