from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Verdict(str, Enum):
    ORIGINAL = "LIKELY ORIGINAL / AUTHENTIC"
    PIRATED = "LIKELY PIRATED / UNAUTHORIZED COPY"
    INCONCLUSIVE = "INCONCLUSIVE – MORE DATA NEEDED"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class EngineScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    score: float = Field(allow_inf_nan=False)   # 0-100


class ForensicReport(BaseModel):
    """Structured verdict returned by Gemini. Immutable once parsed."""
    model_config = ConfigDict(frozen=True)

    case_id: str
    verdict: Verdict
    confidence_score: float = Field(allow_inf_nan=False, description="Score from 0 to 100")
    summary: str
    key_evidence: List[str] = Field(default_factory=list)
    risk_level: RiskLevel
    suspicious_urls: List[str] = Field(default_factory=list)
    probable_original_sources: List[str] = Field(default_factory=list)
    data_gaps: List[str] = Field(default_factory=list)
    recommended_actions: List[str] = Field(default_factory=list)
    engine_scores: Optional[List[EngineScore]] = None

    @field_validator(
        "key_evidence",
        "suspicious_urls",
        "probable_original_sources",
        "data_gaps",
        "recommended_actions",
        mode="before",
    )
    @classmethod
    def _null_list_is_empty(cls, value):
        # Gemini occasionally emits explicit nulls for optional arrays
        return [] if value is None else value


class ChartSlice(BaseModel):
    name: str
    value: float


class ReportResponse(BaseModel):
    report: ForensicReport
    engine_chart: List[EngineScore]
    confidence_breakdown: List[ChartSlice]
