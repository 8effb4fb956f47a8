from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..config.loader import CartLinkConfig
from ..models.cart import CartLinkResult
from ..models.row_record import RowRecord
from ..models.upload import ErrorKind, UploadOutcome, UploadStatus
from ..tabular.delimited import parse_delimited
from ..tabular.detect import TabularFormat, detect_format
from ..tabular.spreadsheet import WorkbookDecodeError, parse_spreadsheet
from .cart_link import build_cart_link
from .normalizer import CartLinkError, normalize_records

logger = logging.getLogger(__name__)

"""Upload orchestration.

process_upload() runs one upload through the whole pipeline:

    detect format -> read file -> parse rows -> normalize -> build cart link

and always returns a terminal UploadOutcome. Every failure, expected or not, is
converted into an ErrorKind here; nothing is raised to the caller.

CartLinkSession adds the single "current outcome" slot the presentation layer
renders, guarded by an upload generation counter so that a slow earlier upload
cannot overwrite the outcome of a later one.
"""

__all__ = [
    "CartLinkSession",
    "InMemoryUpload",
    "LocalUpload",
    "UploadedFile",
    "process_upload",
    "reject_drop",
]


class UploadedFile(Protocol):
    """A file handed over by the upload surface."""

    @property
    def name(self) -> str: ...

    async def read_text(self) -> str: ...

    async def read_bytes(self) -> bytes: ...


@dataclass(frozen=True)
class LocalUpload:
    """UploadedFile backed by a file on disk. Reads run in a worker thread."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    async def read_text(self) -> str:
        # utf-8-sig: Excel で保存された CSV の BOM を除去
        return await asyncio.to_thread(self.path.read_text, encoding="utf-8-sig")

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True)
class InMemoryUpload:
    """UploadedFile over bytes already in memory (e.g. a request body)."""
    name: str
    content: bytes

    async def read_text(self) -> str:
        return self.content.decode("utf-8-sig")

    async def read_bytes(self) -> bytes:
        return self.content


async def _read_rows(upload: UploadedFile, fmt: TabularFormat) -> list[RowRecord]:
    if fmt is TabularFormat.DELIMITED:
        return parse_delimited(await upload.read_text())
    content = await upload.read_bytes()
    # workbook decoding is CPU bound; keep it off the event loop
    return await asyncio.to_thread(parse_spreadsheet, content)


def reject_drop(file_name: str, generation: int = 0) -> UploadOutcome:
    """Outcome for a file whose type the upload surface does not accept."""
    logger.warning(f"{file_name}: rejected, unsupported file type")
    return UploadOutcome.failed(file_name, ErrorKind.DROP_REJECTED, generation)


async def _run_pipeline(upload: UploadedFile, config: CartLinkConfig) -> CartLinkResult:
    fmt = detect_format(upload.name)
    if fmt is None:
        raise CartLinkError(ErrorKind.DROP_REJECTED, f"unsupported file type: {upload.name}")
    rows = await _read_rows(upload, fmt)
    logger.debug(f"{upload.name}: format={fmt.value} rows={len(rows)}")
    items = normalize_records(
        rows,
        variant_column=config.variant_column,
        quantity_column=config.quantity_column,
    )
    return build_cart_link(items, config.shop_domain)


async def process_upload(
    upload: UploadedFile, config: CartLinkConfig, generation: int = 0
) -> UploadOutcome:
    """Run one upload through the pipeline and return its terminal outcome."""
    name = upload.name
    try:
        result = await _run_pipeline(upload, config)
    except CartLinkError as e:
        if e.kind is ErrorKind.DROP_REJECTED:
            return reject_drop(name, generation)
        logger.warning(f"{name}: {e.kind.value} ({e})")
        return UploadOutcome.failed(name, e.kind, generation)
    except WorkbookDecodeError as e:
        logger.error(f"{name}: {e}")
        return UploadOutcome.failed(name, ErrorKind.MALFORMED_FILE, generation)
    except Exception:
        logger.exception(f"{name}: unexpected error while processing upload")
        return UploadOutcome.failed(name, ErrorKind.MALFORMED_FILE, generation)

    logger.info(f"{name}: cart link ready with {result.item_count} item(s)")
    return UploadOutcome.success(name, result, generation)


class CartLinkSession:
    """Holds the current upload outcome for one presentation surface.

    Each process_upload() call takes a new generation token. Its outcome is
    committed to `current` only if no newer upload started meanwhile; a stale
    outcome is still returned to its own caller.
    """

    def __init__(self, config: CartLinkConfig) -> None:
        self.config = config
        self._generation = 0
        self._current = UploadOutcome.idle()

    @property
    def current(self) -> UploadOutcome:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    def _begin(self, file_name: str) -> int:
        self._generation += 1
        self._current = UploadOutcome.processing(file_name, self._generation)
        return self._generation

    def _commit(self, outcome: UploadOutcome) -> bool:
        if outcome.generation != self._generation:
            logger.debug(
                f"{outcome.file_name}: discarding stale outcome "
                f"(generation {outcome.generation} < {self._generation})"
            )
            return False
        self._current = outcome
        return True

    async def process_upload(self, upload: UploadedFile) -> UploadOutcome:
        token = self._begin(upload.name)
        outcome = await process_upload(upload, self.config, generation=token)
        self._commit(outcome)
        return outcome

    def reject_drop(self, file_name: str) -> UploadOutcome:
        token = self._begin(file_name)
        outcome = reject_drop(file_name, generation=token)
        self._commit(outcome)
        return outcome

    @property
    def is_processing(self) -> bool:
        return self._current.status is UploadStatus.PROCESSING
