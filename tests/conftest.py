"""
Shared pytest fixtures for all test modules.

Real API calls never happen in tests; the Gemini client and request
functions are mocked in every test that reaches them.
"""

import os

# A non-empty stub so get_client() passes its credential check; the client
# itself is always replaced before use.
os.environ.setdefault("GEMINI_API_KEY", "stub-key-for-tests")

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sentinel.core.state import ScanController, scan_controller
from sentinel.main import app  # noqa: E402
from sentinel.schemas.report import ForensicReport


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def controller() -> ScanController:
    """A fresh, isolated state machine."""
    return ScanController()


@pytest.fixture(autouse=True)
def reset_shared_controller():
    """The routes share one module-level controller; start every test from IDLE."""
    scan_controller.reset()
    yield
    scan_controller.reset()


@pytest.fixture
def mock_request_report():
    """Patch the Gemini request used by the scan service."""
    with patch("sentinel.services.scan_service.request_report") as mock:
        mock.return_value = make_report()
        yield mock


@pytest.fixture
def client(mock_request_report):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


MOCK_REPORT = {
    "case_id": "DCX-2025-0042",
    "verdict": "LIKELY PIRATED / UNAUTHORIZED COPY",
    "confidence_score": 87,
    "summary": "The asset closely matches a licensed stock image distributed by Shutterstock.",
    "key_evidence": ["98% match on Shutterstock", "EXIF data stripped"],
    "risk_level": "HIGH",
    "suspicious_urls": ["https://free-wallpapers.example/img/4411"],
    "probable_original_sources": ["Shutterstock #118822"],
    "data_gaps": ["No original RAW file available"],
    "recommended_actions": ["File a DMCA takedown notice"],
}


def make_report(**overrides) -> ForensicReport:
    return ForensicReport.model_validate({**MOCK_REPORT, **overrides})
