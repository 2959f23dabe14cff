"""
Asset validation: runs before a submission is accepted, so nothing invalid
ever reaches the normalizer or the network.
"""

import logging
from typing import Optional

from fastapi import HTTPException

from sentinel.config import settings
from sentinel.schemas.asset import Asset, FileAsset, UrlAsset

logger = logging.getLogger(__name__)


def validate_asset(asset: Optional[Asset]) -> bool:
    """Reject missing/empty assets (400) and files over the size ceiling (413)."""
    if asset is None:
        raise HTTPException(status_code=400, detail="Must provide a file or a URL.")

    if isinstance(asset, UrlAsset):
        if not asset.url.strip():
            raise HTTPException(status_code=400, detail="URL must not be empty.")
        return True

    if isinstance(asset, FileAsset):
        if asset.size > settings.max_asset_bytes:
            logger.info(f"[VALIDATE] Rejected {asset.name}: {asset.size} bytes")
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Please upload a file smaller than {settings.max_asset_mb}MB."
            )
        return True

    raise HTTPException(status_code=415, detail="Unsupported asset type.")
