import enum
from dataclasses import dataclass
from typing import Mapping, Optional
from xml.etree.ElementTree import Element


class HttpMethod(str, enum.Enum):
    GET = "GET"


@dataclass(frozen=True)
class RawHttpResult:
    status_code: Optional[int]
    body: bytes = b""
    xml: Optional[Element] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class NormalizedResponse:
    success: bool
    message: str
    raw: RawHttpResult


class BaseGateway:
    name: str

    def notify(self, message: str, options: Optional[Mapping[str, str]] = None) -> NormalizedResponse:  # pragma: no cover - interface
        raise NotImplementedError
