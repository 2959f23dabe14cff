from enum import Enum
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict


class AssetKind(str, Enum):
    URL = "url"
    TEXT = "text"           # decoded and sent inline as text
    BINARY = "binary"       # sent as base64 inline data (PDF, image, video)
    METADATA = "metadata"   # content never read; name/size/type only


class UrlAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class FileAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str = ""
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


Asset = Union[UrlAsset, FileAsset]


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class BinaryPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    mime_type: str
    base64_data: str


Part = Union[TextPart, BinaryPart]
RequestPayload = Tuple[Part, ...]
