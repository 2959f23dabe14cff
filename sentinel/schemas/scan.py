"""
Application state models.

One variant per state, each carrying only the data valid in that state.
Serialized with a `state` discriminator so the front end can switch views.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sentinel.schemas.report import ForensicReport


class AppState(str, Enum):
    IDLE = "IDLE"
    SCANNING = "SCANNING"
    REPORT_READY = "REPORT_READY"
    ERROR = "ERROR"


class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal[AppState.IDLE] = AppState.IDLE


class ScanningState(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal[AppState.SCANNING] = AppState.SCANNING
    scan_id: str
    display_elapsed: bool = False
    # Held until the display signal arrives; never sent to the client early.
    report: Optional[ForensicReport] = Field(default=None, exclude=True)

    @computed_field
    @property
    def result_ready(self) -> bool:
        return self.report is not None


class ReportReadyState(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal[AppState.REPORT_READY] = AppState.REPORT_READY
    scan_id: str
    report: ForensicReport


class ErrorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal[AppState.ERROR] = AppState.ERROR
    scan_id: str
    message: str


ScanState = Annotated[
    Union[IdleState, ScanningState, ReportReadyState, ErrorState],
    Field(discriminator="state"),
]


class SubmitResponse(BaseModel):
    scan_id: str
    state: AppState


class ScanStep(BaseModel):
    id: str
    label: str


class ScanStepsResponse(BaseModel):
    steps: List[ScanStep]
    min_display_sec: float
