"""
Pure unit tests for sentinel/core/state.py: the ScanController state machine.
"""

import pytest
from fastapi import HTTPException

from sentinel.config import settings
from sentinel.core.state import DEFAULT_ERROR_MESSAGE
from sentinel.schemas.asset import FileAsset, UrlAsset
from sentinel.schemas.scan import (
    AppState,
    ErrorState,
    IdleState,
    ReportReadyState,
    ScanningState,
)
from tests.conftest import make_report

URL = UrlAsset(url="https://stream.example/movie")


def test_initial_state_is_idle(controller):
    assert isinstance(controller.state, IdleState)
    assert controller.asset is None
    assert controller.url_text == ""


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


def test_submit_enters_scanning(controller):
    scan_id = controller.submit(URL)

    assert isinstance(controller.state, ScanningState)
    assert controller.state.scan_id == scan_id
    assert len(scan_id) == settings.scan_id_length
    assert controller.asset == URL
    assert controller.url_text == URL.url


def test_submit_empty_url_blocked(controller):
    with pytest.raises(HTTPException) as exc:
        controller.submit(UrlAsset(url=""))
    assert exc.value.status_code == 400
    assert isinstance(controller.state, IdleState)


def test_submit_missing_asset_blocked(controller):
    with pytest.raises(HTTPException):
        controller.submit(None)
    assert isinstance(controller.state, IdleState)


def test_submit_oversized_file_blocked(controller, monkeypatch):
    monkeypatch.setattr(settings, "max_asset_mb", 1)
    big = FileAsset(name="movie.mp4", mime_type="video/mp4", data=b"0" * (1024 * 1024 + 1))

    with pytest.raises(HTTPException) as exc:
        controller.submit(big)
    assert exc.value.status_code == 413
    assert isinstance(controller.state, IdleState)
    assert controller.asset is None


def test_submit_while_scanning_rejected(controller):
    scan_id = controller.submit(URL)

    with pytest.raises(HTTPException) as exc:
        controller.submit(UrlAsset(url="https://other.example"))
    assert exc.value.status_code == 409
    assert controller.state.scan_id == scan_id


# ---------------------------------------------------------------------------
# result_ready / display_elapsed join
# ---------------------------------------------------------------------------


def test_result_then_display_reaches_report_ready(controller):
    report = make_report()
    scan_id = controller.submit(URL)

    controller.result_ready(scan_id, report)
    assert isinstance(controller.state, ScanningState)
    assert controller.state.result_ready is True

    controller.display_elapsed(scan_id)
    assert isinstance(controller.state, ReportReadyState)
    assert controller.state.report is report


def test_display_then_result_reaches_report_ready(controller):
    report = make_report()
    scan_id = controller.submit(URL)

    controller.display_elapsed(scan_id)
    assert isinstance(controller.state, ScanningState)
    assert controller.state.display_elapsed is True

    controller.result_ready(scan_id, report)
    assert isinstance(controller.state, ReportReadyState)
    assert controller.state.report is report


def test_scanning_state_does_not_serialize_held_report(controller):
    scan_id = controller.submit(URL)
    controller.result_ready(scan_id, make_report())

    dumped = controller.state.model_dump(mode="json")
    assert dumped["state"] == "SCANNING"
    assert dumped["result_ready"] is True
    assert "report" not in dumped


# ---------------------------------------------------------------------------
# fail
# ---------------------------------------------------------------------------


def test_fail_before_display(controller):
    scan_id = controller.submit(URL)
    controller.fail(scan_id, "Failed to generate report. Please try again.")

    assert isinstance(controller.state, ErrorState)
    assert controller.state.message == "Failed to generate report. Please try again."


def test_fail_after_display_elapsed(controller):
    scan_id = controller.submit(URL)
    controller.display_elapsed(scan_id)
    controller.fail(scan_id)

    assert isinstance(controller.state, ErrorState)
    assert controller.state.message == DEFAULT_ERROR_MESSAGE


def test_fail_outside_scanning_ignored(controller):
    controller.fail("nope1234", "boom")
    assert isinstance(controller.state, IdleState)


# ---------------------------------------------------------------------------
# reset
# ---------------------------------------------------------------------------


def test_reset_from_idle_is_noop(controller):
    state = controller.reset()
    assert isinstance(state, IdleState)
    assert controller.state.state is AppState.IDLE


def test_reset_from_report_ready(controller):
    scan_id = controller.submit(URL)
    controller.result_ready(scan_id, make_report())
    controller.display_elapsed(scan_id)

    controller.reset()

    assert isinstance(controller.state, IdleState)
    assert controller.asset is None
    assert controller.url_text == ""


def test_reset_from_error(controller):
    scan_id = controller.submit(URL)
    controller.fail(scan_id, "boom")

    controller.reset()

    assert isinstance(controller.state, IdleState)
    assert controller.asset is None


def test_late_result_after_reset_is_discarded(controller):
    scan_id = controller.submit(URL)
    controller.reset()

    controller.result_ready(scan_id, make_report())
    controller.display_elapsed(scan_id)
    controller.fail(scan_id, "late failure")

    assert isinstance(controller.state, IdleState)


def test_late_result_from_previous_scan_ignored(controller):
    old_id = controller.submit(URL)
    controller.reset()
    new_id = controller.submit(UrlAsset(url="https://new.example"))

    controller.result_ready(old_id, make_report(case_id="OLD"))
    controller.display_elapsed(new_id)

    assert isinstance(controller.state, ScanningState)
    assert controller.state.scan_id == new_id
    assert controller.state.result_ready is False
