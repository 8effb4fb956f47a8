"""Domain models for the order-file -> cart link tool.

This package contains the value types that flow between the parser, the
normalizer, the cart link builder and the upload orchestrator.
"""

from .cart import CartItem, CartLinkResult
from .error_record import ErrorRecord
from .processing_result import BatchResult, FileStat
from .row_record import RowRecord
from .upload import DROP_REJECTED_MESSAGE, ErrorKind, UploadOutcome, UploadStatus

__all__ = [
    # Tabular models
    "RowRecord",
    # Cart models
    "CartItem",
    "CartLinkResult",
    # Upload models
    "DROP_REJECTED_MESSAGE",
    "ErrorKind",
    "UploadOutcome",
    "UploadStatus",
    # Reporting models
    "BatchResult",
    "ErrorRecord",
    "FileStat",
]
