"""
ScanController: the single owner of application state.

    IDLE ──submit──▶ SCANNING ──result_ready + display_elapsed──▶ REPORT_READY
                        │
                        └──fail──▶ ERROR

`reset()` returns to IDLE from any state. Scan results and display signals are
joined here so the outcome never depends on which arrives first. Signals tagged
with a scan id other than the one currently scanning (e.g. a response landing
after a reset) are dropped.

`scan_controller` is a module-level singleton for use in route handlers.
"""

import logging
import secrets
import string
from typing import Optional

from fastapi import HTTPException

from sentinel.config import settings
from sentinel.core.file_validator import validate_asset
from sentinel.schemas.asset import Asset, UrlAsset
from sentinel.schemas.report import ForensicReport
from sentinel.schemas.scan import (
    ErrorState,
    IdleState,
    ReportReadyState,
    ScanningState,
    ScanState,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unknown error occurred."


def _generate_scan_id(length: int = settings.scan_id_length) -> str:
    alphabet = string.ascii_letters + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))


class ScanController:
    """Four-state machine driving which view the front end shows."""

    def __init__(self) -> None:
        self._state: ScanState = IdleState()
        self._asset: Optional[Asset] = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def asset(self) -> Optional[Asset]:
        return self._asset

    @property
    def url_text(self) -> str:
        return self._asset.url if isinstance(self._asset, UrlAsset) else ""

    def submit(self, asset: Optional[Asset]) -> str:
        """Accept an asset and enter SCANNING. Returns the new scan id."""
        if not isinstance(self._state, IdleState):
            raise HTTPException(status_code=409, detail="A scan is already in progress. Reset first.")

        validate_asset(asset)

        scan_id = _generate_scan_id()
        self._asset = asset
        self._state = ScanningState(scan_id=scan_id)
        logger.info(f"[SCAN] {scan_id} started")
        return scan_id

    def result_ready(self, scan_id: str, report: ForensicReport) -> None:
        scanning = self._current_scan(scan_id, "result_ready")
        if scanning is None:
            return
        self._state = scanning.model_copy(update={"report": report})
        self._maybe_finalize()

    def display_elapsed(self, scan_id: str) -> None:
        """The front end's progress sequence finished (or the server timer fired)."""
        scanning = self._current_scan(scan_id, "display_elapsed")
        if scanning is None:
            return
        self._state = scanning.model_copy(update={"display_elapsed": True})
        self._maybe_finalize()

    def fail(self, scan_id: str, message: Optional[str] = None) -> None:
        """Move to ERROR regardless of display progress."""
        if self._current_scan(scan_id, "fail") is None:
            return
        self._state = ErrorState(scan_id=scan_id, message=message or DEFAULT_ERROR_MESSAGE)
        self._asset = None
        logger.info(f"[SCAN] {scan_id} failed")

    def reset(self) -> ScanState:
        if not isinstance(self._state, IdleState):
            logger.info(f"[SCAN] Reset from {self._state.state.value}")
        self._state = IdleState()
        self._asset = None
        return self._state

    def _current_scan(self, scan_id: str, signal: str) -> Optional[ScanningState]:
        state = self._state
        if isinstance(state, ScanningState) and state.scan_id == scan_id:
            return state
        logger.debug(f"[SCAN] Ignoring stale {signal} for {scan_id}")
        return None

    def _maybe_finalize(self) -> None:
        state = self._state
        if isinstance(state, ScanningState) and state.report is not None and state.display_elapsed:
            self._state = ReportReadyState(scan_id=state.scan_id, report=state.report)
            self._asset = None
            logger.info(f"[SCAN] {state.scan_id} report ready")


scan_controller = ScanController()
