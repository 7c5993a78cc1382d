from pydantic import BaseModel, Field


class ClassificationResult(BaseModel):
    has_trash: bool
    confidence: int = Field(..., ge=0, le=100, description="Confidence in percent")
    message: str = ""
