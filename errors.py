from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
}


class CatalogError(Exception):
    """Error handed to the application's error handler.

    The kind decides the HTTP status the handler answers with. Validation
    problems never travel this way; they are rendered inline by the handlers.
    """

    def __init__(self, kind: ErrorKind, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.metadata = metadata or {}

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    @classmethod
    def not_found(cls, message: str, **metadata: Any) -> "CatalogError":
        return cls(ErrorKind.NOT_FOUND, message, metadata)

    @classmethod
    def store_failure(cls, message: str, **metadata: Any) -> "CatalogError":
        return cls(ErrorKind.STORE_FAILURE, message, metadata)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"CatalogError(kind={self.kind.value!r}, message={self.message!r})"
