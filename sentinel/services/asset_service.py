"""
Input normalizer: turns a submitted asset into the ordered parts sent to Gemini.

    URL               → one text part
    text-like file    → one text part with the decoded content
    PDF/image/video   → base64 inline-data part + instruction text part
    anything else     → one text part describing name/size/type (content unread)
"""

import base64
import binascii
import logging

from sentinel.integrations.gemini.prompts import (
    BINARY_TEMPLATE,
    METADATA_TEMPLATE,
    TEXT_TEMPLATE,
    URL_TEMPLATE,
)
from sentinel.schemas.asset import (
    Asset,
    AssetKind,
    BinaryPart,
    FileAsset,
    RequestPayload,
    TextPart,
    UrlAsset,
)

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ('.txt', '.md', '.csv', '.json')


class AssetReadError(Exception):
    """The file's bytes could not be turned into text or base64."""


def is_text_like(mime_type: str, name: str) -> bool:
    return mime_type.startswith('text/') or name.lower().endswith(TEXT_EXTENSIONS)


def is_supported_binary(mime_type: str) -> bool:
    return (
        mime_type == 'application/pdf'
        or mime_type.startswith('image/')
        or mime_type.startswith('video/')
    )


def classify_asset(asset: Asset) -> AssetKind:
    if isinstance(asset, UrlAsset):
        return AssetKind.URL
    if is_text_like(asset.mime_type, asset.name):
        return AssetKind.TEXT
    if is_supported_binary(asset.mime_type):
        return AssetKind.BINARY
    return AssetKind.METADATA


def _read_text(asset: FileAsset) -> str:
    try:
        return asset.data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise AssetReadError(f"Could not decode {asset.name} as text") from e


def _read_base64(asset: FileAsset) -> str:
    try:
        return base64.b64encode(asset.data).decode('ascii')
    except (binascii.Error, TypeError) as e:
        raise AssetReadError(f"Could not encode {asset.name}") from e


def build_payload(asset: Asset) -> RequestPayload:
    """Build the request parts for `asset`. Raises AssetReadError on read failures."""
    kind = classify_asset(asset)
    logger.info(f"[NORMALIZE] Asset classified as {kind.value}")

    if kind is AssetKind.URL:
        return (TextPart(text=URL_TEMPLATE.format(url=asset.url)),)

    if kind is AssetKind.TEXT:
        return (TextPart(text=TEXT_TEMPLATE.format(content=_read_text(asset))),)

    if kind is AssetKind.BINARY:
        return (
            BinaryPart(mime_type=asset.mime_type, base64_data=_read_base64(asset)),
            TextPart(text=BINARY_TEMPLATE.format(mime_type=asset.mime_type)),
        )

    return (
        TextPart(
            text=METADATA_TEMPLATE.format(name=asset.name, size=asset.size, mime_type=asset.mime_type)
        ),
    )
