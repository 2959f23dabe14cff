from sentinel.schemas.asset import (
    Asset,
    AssetKind,
    BinaryPart,
    FileAsset,
    Part,
    RequestPayload,
    TextPart,
    UrlAsset,
)
from sentinel.schemas.report import (
    ChartSlice,
    EngineScore,
    ForensicReport,
    ReportResponse,
    RiskLevel,
    Verdict,
)
from sentinel.schemas.scan import (
    AppState,
    ErrorState,
    IdleState,
    ReportReadyState,
    ScanState,
    ScanStep,
    ScanStepsResponse,
    ScanningState,
    SubmitResponse,
)

__all__ = [
    "Asset",
    "AssetKind",
    "BinaryPart",
    "FileAsset",
    "Part",
    "RequestPayload",
    "TextPart",
    "UrlAsset",
    "ChartSlice",
    "EngineScore",
    "ForensicReport",
    "ReportResponse",
    "RiskLevel",
    "Verdict",
    "AppState",
    "ErrorState",
    "IdleState",
    "ReportReadyState",
    "ScanState",
    "ScanStep",
    "ScanStepsResponse",
    "ScanningState",
    "SubmitResponse",
]
