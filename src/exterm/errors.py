"""Error types raised by the selection and clipboard layers.

Every error carries a machine-readable ``error_code`` so hosts can report
failures without matching on message text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


class ErrorCode:
    """Constants for error codes used in failure events."""

    IDENTIFIER_MISSING = "identifier_missing"
    CLIPBOARD_ACCESS_DENIED = "clipboard_access_denied"


@dataclass
class ExtermError(Exception):
    """Base exception class for clipboard bridge errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    severity: ClassVar[str] = "error"

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for event payloads and logs."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class IdentifierMissing(ExtermError):
    """A selection endpoint does not resolve to a parsable cell identifier.

    Copy handlers abort on this error and leave the clipboard payload empty.
    """

    error_code: str = field(default=ErrorCode.IDENTIFIER_MISSING)
    message: str = field(default="Selection endpoint has no cell identifier")
    details: dict[str, Any] = field(default_factory=dict)

    identifier: str | None = field(default=None)

    severity: ClassVar[str] = "warning"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.identifier is not None:
            self.details.setdefault("identifier", self.identifier)


@dataclass
class ClipboardAccessDenied(ExtermError):
    """The platform refused access to the system clipboard."""

    error_code: str = field(default=ErrorCode.CLIPBOARD_ACCESS_DENIED)
    message: str = field(default="Clipboard access was denied by the platform")
    details: dict[str, Any] = field(default_factory=dict)

    operation: str = field(default="")

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.operation:
            self.details.setdefault("operation", self.operation)


__all__ = [
    "ErrorCode",
    "ExtermError",
    "IdentifierMissing",
    "ClipboardAccessDenied",
]
