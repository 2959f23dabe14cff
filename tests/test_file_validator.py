"""
Pure unit tests for sentinel/core/file_validator.py.
"""

import pytest
from fastapi import HTTPException

from sentinel.config import settings
from sentinel.core.file_validator import validate_asset
from sentinel.schemas.asset import FileAsset, UrlAsset


def test_valid_url_passes():
    assert validate_asset(UrlAsset(url="https://example.com/movie")) is True


def test_valid_file_passes():
    assert validate_asset(FileAsset(name="photo.jpg", mime_type="image/jpeg", data=b"abc")) is True


def test_missing_asset_raises_400():
    with pytest.raises(HTTPException) as exc:
        validate_asset(None)
    assert exc.value.status_code == 400


def test_blank_url_raises_400():
    with pytest.raises(HTTPException) as exc:
        validate_asset(UrlAsset(url="   "))
    assert exc.value.status_code == 400


def test_file_at_limit_passes(monkeypatch):
    monkeypatch.setattr(settings, "max_asset_mb", 1)
    asset = FileAsset(name="clip.mp4", mime_type="video/mp4", data=b"x" * settings.max_asset_bytes)
    assert validate_asset(asset) is True


def test_file_over_limit_raises_413(monkeypatch):
    monkeypatch.setattr(settings, "max_asset_mb", 1)
    asset = FileAsset(name="clip.mp4", mime_type="video/mp4", data=b"x" * (settings.max_asset_bytes + 1))
    with pytest.raises(HTTPException) as exc:
        validate_asset(asset)
    assert exc.value.status_code == 413
    assert "1MB" in exc.value.detail


def test_default_limit_is_50_mib():
    assert settings.max_asset_bytes == 50 * 1024 * 1024
