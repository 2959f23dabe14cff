"""
Scan orchestration: normalize → request → deliver one terminal signal to the
controller. Also holds the chart data and progress steps the front end renders.
"""

import asyncio
import logging
import os
from typing import List

import psutil
from fastapi.concurrency import run_in_threadpool

from sentinel.core.state import ScanController
from sentinel.integrations.gemini.client import request_report
from sentinel.schemas.asset import Asset
from sentinel.schemas.report import ChartSlice, EngineScore, ForensicReport
from sentinel.schemas.scan import ScanStep
from sentinel.services.asset_service import build_payload

logger = logging.getLogger(__name__)

SCAN_FAILED_MESSAGE = "Failed to generate report. Please try again."

SCAN_STEPS: List[ScanStep] = [
    ScanStep(id="upload", label="Initializing Secure Analysis Environment"),
    ScanStep(id="hash", label="Generating Content Fingerprints / Embeddings"),
    ScanStep(id="tineye", label="Querying Global Index & Reverse Search"),
    ScanStep(id="yandex", label="Cross-referencing Visual/Text Databases"),
    ScanStep(id="meta", label="Analyzing Pattern & Metadata Anomalies"),
    ScanStep(id="gemini", label="Synthesizing Forensic Report (Gemini AI)"),
]

# Synthesized per-engine weights when Gemini omits engine_scores.
FALLBACK_ENGINE_WEIGHTS = (
    ("TinEye", 1.0),
    ("Yandex", 0.9),
    ("Bing", 0.85),
    ("Meta", 0.95),
)


def log_memory(stage: str) -> None:
    """Log current process and system memory usage. Only runs when DEBUG logging is active."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    sys_mem = psutil.virtual_memory()
    logger.debug(
        f"[MEMORY] {stage} | "
        f"PID: {os.getpid()} | "
        f"Process RSS: {mem_info.rss / 1024 / 1024:.2f} MB | "
        f"System Available: {sys_mem.available / 1024 / 1024:.2f} MB / {sys_mem.total / 1024 / 1024:.2f} MB"
    )


async def run_scan(controller: ScanController, scan_id: str, asset: Asset) -> None:
    """
    Runs one submission to completion and signals the controller exactly once.

    Failures from either the normalizer or the requester end in `fail` with a
    generic message; the detail only goes to the log.
    """
    try:
        log_memory(f"Pre-Normalize: {scan_id}")
        parts = await run_in_threadpool(build_payload, asset)
        report = await request_report(parts)
    except Exception as e:
        logger.error(f"[SCAN] {scan_id} failed: {type(e).__name__}: {e}")
        controller.fail(scan_id, SCAN_FAILED_MESSAGE)
        return
    finally:
        log_memory(f"Post-Request: {scan_id}")

    logger.info(f"[SCAN] {scan_id} verdict={report.verdict.value} confidence={report.confidence_score}")
    controller.result_ready(scan_id, report)


async def signal_display_after(controller: ScanController, scan_id: str, delay: float) -> None:
    """Server-side stand-in for the front end's 'animation complete' signal."""
    await asyncio.sleep(delay)
    controller.display_elapsed(scan_id)


def engine_chart(report: ForensicReport) -> List[EngineScore]:
    if report.engine_scores is not None:
        return list(report.engine_scores)
    return [
        EngineScore(name=name, score=report.confidence_score * weight)
        for name, weight in FALLBACK_ENGINE_WEIGHTS
    ]


def confidence_breakdown(report: ForensicReport) -> List[ChartSlice]:
    return [
        ChartSlice(name="Confidence", value=report.confidence_score),
        ChartSlice(name="Uncertainty", value=100 - report.confidence_score),
    ]


async def run_submission(controller: ScanController, scan_id: str, asset: Asset, min_display_sec: float) -> None:
    """Background entry point: the scan, joined with the server display timer when one is configured."""
    if min_display_sec > 0:
        await asyncio.gather(
            run_scan(controller, scan_id, asset),
            signal_display_after(controller, scan_id, min_display_sec),
        )
    else:
        await run_scan(controller, scan_id, asset)
