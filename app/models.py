"""Pydantic request/response models for the Scam Guard API."""

from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List, Optional


class CheckRequest(BaseModel):
    """Incoming payload on POST /api/check."""

    model_config = ConfigDict(extra="ignore")

    text: str = Field(...)

    @field_validator("text")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        """Blank messages are skipped, never classified."""
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class CheckResponse(BaseModel):
    """Verdict for one message plus the advice a warning would show."""

    suspicious: bool = Field(...)
    reasons: List[str] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)
    score: int = Field(default=0)
    riskLabel: Optional[str] = Field(default=None)
    advice: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "online"
    service: str = "Scam Guard"
    version: str = "1.0.0"
