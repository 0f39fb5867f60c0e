"""Errors raised by the fetch and parse stages."""

from enum import Enum
from typing import Optional


class FetchErrorKind(str, Enum):
    """Why a page could not be fetched."""
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "httpStatus"
    CANCELLED = "cancelled"
    INVALID_URL = "invalidUrl"


class SEOProfileError(Exception):
    """Base class for errors that stop the pipeline for a URL."""

    kind: str = "error"

    def __init__(self, message: str, url: str = ""):
        self.message = message
        self.url = url
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "kind": self.kind,
            "url": self.url,
            "message": self.message,
        }


class FetchError(SEOProfileError):
    """Raised when a page cannot be retrieved."""

    def __init__(
        self,
        message: str,
        url: str = "",
        kind: FetchErrorKind = FetchErrorKind.NETWORK,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, url)
        self.kind = FetchErrorKind(kind).value
        self.status_code = status_code

    @property
    def cause(self) -> str:
        """Short cause tag, e.g. ``timeout`` or ``httpStatus:404``."""
        if self.status_code is not None:
            return f"{self.kind}:{self.status_code}"
        return self.kind

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["cause"] = self.cause
        data["status_code"] = self.status_code
        return data


class ParseError(SEOProfileError):
    """Raised when a payload cannot be turned into a document tree."""

    kind = "unparseable"
