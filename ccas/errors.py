"""
Error types raised by the browser primitives and steps.
"""
from __future__ import annotations
from enum import Enum
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from typing import Optional


class ErrorKind(str, Enum):
    TIMEOUT = "timeout"
    HTTP_RESPONSE_FAILURE = "http_response_failure"
    NAVIGATION = "navigation"
    CHECK_FAILED = "check_failed"
    UNKNOWN = "unknown"


class AutomationError(Exception):
    """A browser interaction failed. `kind` tells callers how it failed."""

    def __init__(self, kind: ErrorKind, message: str, selector: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.selector = selector

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.args[0]}"


def classify_error(error: Exception) -> ErrorKind:
    """
    Map a Playwright error to an ErrorKind.

    Args:
        error: Exception raised by a Playwright call

    Returns:
        Matching ErrorKind
    """
    if isinstance(error, AutomationError):
        return error.kind
    if isinstance(error, PlaywrightTimeoutError):
        return ErrorKind.TIMEOUT

    message = str(error)
    if "ERR_HTTP_RESPONSE_CODE_FAILURE" in message:
        return ErrorKind.HTTP_RESPONSE_FAILURE
    if "net::ERR_" in message or "NS_ERROR_" in message:
        return ErrorKind.NAVIGATION
    return ErrorKind.UNKNOWN
