from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .cart import CartLinkResult

"""Upload outcome models and the error taxonomy.

An upload moves through UploadStatus:

    idle -> processing -> (success | failed) -> (next upload) processing ...

UploadOutcome is the only thing the presentation layer receives. It carries
either a CartLinkResult or an ErrorKind with its fixed user-facing message,
never both.
"""

__all__ = [
    "DROP_REJECTED_MESSAGE",
    "ErrorKind",
    "UploadOutcome",
    "UploadStatus",
]

DROP_REJECTED_MESSAGE = (
    "Only CSV or Excel (.xlsx, .xls) files are accepted. Please upload a valid file."
)
_NO_VALID_QUANTITIES_MESSAGE = "No valid products found with quantity > 0"


class UploadStatus(Enum):
    """Lifecycle of the session's current upload slot.

    - IDLE: nothing uploaded yet
    - PROCESSING: an upload is being parsed
    - SUCCESS: a cart link was produced
    - FAILED: the upload ended with an ErrorKind
    """
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


class ErrorKind(Enum):
    """Terminal failure kinds for a single upload. None are retried."""
    DROP_REJECTED = "DROP_REJECTED"
    EMPTY_INPUT = "EMPTY_INPUT"
    NO_VALID_QUANTITIES = "NO_VALID_QUANTITIES"
    NO_VALID_VARIANT_IDS = "NO_VALID_VARIANT_IDS"
    MALFORMED_FILE = "MALFORMED_FILE"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


# EMPTY_INPUT は利用者から見ると NO_VALID_QUANTITIES と同じ文言
_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DROP_REJECTED: DROP_REJECTED_MESSAGE,
    ErrorKind.EMPTY_INPUT: _NO_VALID_QUANTITIES_MESSAGE,
    ErrorKind.NO_VALID_QUANTITIES: _NO_VALID_QUANTITIES_MESSAGE,
    ErrorKind.NO_VALID_VARIANT_IDS: "Could not extract valid variant IDs from CSV/Excel file",
    ErrorKind.MALFORMED_FILE: "Error processing CSV/Excel file. Please check the format.",
}


@dataclass(frozen=True)
class UploadOutcome:
    """State of one upload as seen by the presentation layer.

    generation is the session token the outcome was produced under (0 when the
    pipeline ran outside a session).
    """
    file_name: str | None
    status: UploadStatus = UploadStatus.IDLE
    result: CartLinkResult | None = None
    error_kind: ErrorKind | None = None
    generation: int = 0

    @staticmethod
    def idle() -> UploadOutcome:
        return UploadOutcome(file_name=None)

    @staticmethod
    def processing(file_name: str, generation: int = 0) -> UploadOutcome:
        return UploadOutcome(
            file_name=file_name, status=UploadStatus.PROCESSING, generation=generation
        )

    @staticmethod
    def success(file_name: str, result: CartLinkResult, generation: int = 0) -> UploadOutcome:
        return UploadOutcome(
            file_name=file_name,
            status=UploadStatus.SUCCESS,
            result=result,
            generation=generation,
        )

    @staticmethod
    def failed(file_name: str, kind: ErrorKind, generation: int = 0) -> UploadOutcome:
        return UploadOutcome(
            file_name=file_name,
            status=UploadStatus.FAILED,
            error_kind=kind,
            generation=generation,
        )

    @property
    def error_message(self) -> str | None:
        return self.error_kind.message if self.error_kind is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Render as {"url", "itemCount"} or {"errorMessage"}.

        Raises:
            ValueError: If the outcome is not terminal (idle or processing).
        """
        if self.result is not None:
            return {"url": self.result.url, "itemCount": self.result.item_count}
        if self.error_kind is not None:
            return {"errorMessage": self.error_kind.message}
        raise ValueError(f"outcome is not terminal: {self.status.value}")
