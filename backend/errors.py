"""Error model shared by the API client and the tool router.

Every failure is a single ``ServiceError`` tagged with an ``ErrorKind``.
Callers branch on ``error.kind`` instead of on exception subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from models import ErrorInfo


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    TIMEOUT = "timeout"
    API = "api"
    UNEXPECTED = "unexpected"


class ServiceError(Exception):
    """A classified failure with an HTTP-equivalent status and optional detail."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        code: str,
        status_code: int = 500,
        detail: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail

    @classmethod
    def validation(cls, message: str, detail: Any = None) -> ServiceError:
        return cls(ErrorKind.VALIDATION, message, "VALIDATION_ERROR", 400, detail)

    @classmethod
    def timeout(cls, message: str = "Operation timed out", detail: Any = None) -> ServiceError:
        return cls(ErrorKind.TIMEOUT, message, "TIMEOUT_ERROR", 408, detail)

    @classmethod
    def api(cls, message: str, status_code: int | None = None, detail: Any = None) -> ServiceError:
        return cls(ErrorKind.API, message, "API_ERROR", status_code or 500, detail)

    @classmethod
    def unexpected(cls, exc: BaseException) -> ServiceError:
        message = str(exc) or exc.__class__.__name__
        return cls(
            ErrorKind.UNEXPECTED,
            message,
            "TOOL_EXECUTION_ERROR",
            500,
            {"type": exc.__class__.__name__},
        )

    @classmethod
    def wrap(cls, exc: BaseException) -> ServiceError:
        """Return ``exc`` unchanged if already classified, else wrap it."""
        if isinstance(exc, ServiceError):
            return exc
        return cls.unexpected(exc)

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(
            kind=self.kind.value,
            message=self.message,
            code=self.code,
            status_code=self.status_code,
            detail=self.detail,
        )

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, code={self.code!r}, status_code={self.status_code}, message={self.message!r})"
