"""
Scan routes: submit an asset, poll state, signal display completion, reset,
and fetch the finished report.

POST /api/v1/scan accepts multipart/form-data with a 'file' or 'url' field
(a plain urlencoded form works for 'url'), or a JSON payload { "url": "https://..." }.
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from starlette.datastructures import UploadFile

from sentinel.config import settings
from sentinel.core.state import scan_controller
from sentinel.schemas.asset import Asset, FileAsset, UrlAsset
from sentinel.schemas.report import ReportResponse
from sentinel.schemas.scan import ReportReadyState, ScanStepsResponse, SubmitResponse
from sentinel.services.scan_service import (
    SCAN_STEPS,
    confidence_breakdown,
    engine_chart,
    log_memory,
    run_submission,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scan", tags=["Scan"])


async def _read_asset(request: Request) -> Optional[Asset]:
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str):
            return None
        return UrlAsset(url=url)

    if "multipart/form-data" in content_type or "application/x-www-form-urlencoded" in content_type:
        form = await request.form()
        file_obj = form.get("file")
        url_obj = form.get("url")

        if isinstance(file_obj, UploadFile) and file_obj.filename:
            data = await file_obj.read()
            return FileAsset(
                name=file_obj.filename,
                mime_type=file_obj.content_type or "",
                data=data,
            )
        if isinstance(url_obj, str):
            return UrlAsset(url=url_obj)
        return None

    raise HTTPException(
        status_code=415,
        detail="Unsupported Media Type. Use multipart/form-data, a urlencoded form or application/json"
    )


@router.get("")
async def get_scan_state():
    """Current application state; the front end picks its view from `state`."""
    return scan_controller.state


@router.post("", response_model=SubmitResponse, status_code=202)
async def submit_scan(request: Request, background_tasks: BackgroundTasks):
    """
    Starts a forensic scan. The report is produced in the background; poll
    GET /api/v1/scan until the state leaves SCANNING.
    """
    asset = await _read_asset(request)
    log_memory("Pre-Submit")

    scan_id = scan_controller.submit(asset)
    background_tasks.add_task(
        run_submission, scan_controller, scan_id, asset, settings.scan_min_display_sec
    )
    return SubmitResponse(scan_id=scan_id, state=scan_controller.state.state)


@router.post("/reset")
async def reset_scan():
    return scan_controller.reset()


@router.post("/{scan_id}/animation-complete")
async def animation_complete(scan_id: str):
    """The front end finished its progress sequence for `scan_id`."""
    scan_controller.display_elapsed(scan_id)
    return scan_controller.state


@router.get("/report", response_model=ReportResponse)
async def get_report():
    state = scan_controller.state
    if not isinstance(state, ReportReadyState):
        raise HTTPException(status_code=404, detail="No report available.")
    return ReportResponse(
        report=state.report,
        engine_chart=engine_chart(state.report),
        confidence_breakdown=confidence_breakdown(state.report),
    )


@router.get("/steps", response_model=ScanStepsResponse)
async def get_scan_steps():
    return ScanStepsResponse(steps=SCAN_STEPS, min_display_sec=settings.scan_min_display_sec)
