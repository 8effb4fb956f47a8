from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import CartLinkConfig
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.processing_result import BatchResult, FileStat
from ..models.upload import ErrorKind, UploadOutcome, UploadStatus
from ..tabular.detect import is_accepted
from .orchestrator import CartLinkSession, LocalUpload
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Batch processing of order files for the command line.

Files are processed one at a time through a single CartLinkSession, the same
way consecutive uploads arrive from the upload surface. Failed uploads are
buffered as ErrorRecords and flushed once at the end of the run.
"""


def _file_stat(path: Path, outcome: UploadOutcome, elapsed: float) -> FileStat:
    if outcome.result is not None:
        return FileStat(
            file_name=path.name,
            status=UploadStatus.SUCCESS.value,
            item_count=outcome.result.item_count,
            elapsed_seconds=elapsed,
            url=outcome.result.url,
        )
    return FileStat(
        file_name=path.name,
        status=UploadStatus.FAILED.value,
        item_count=0,
        elapsed_seconds=elapsed,
        error_type=outcome.error_kind.value if outcome.error_kind else None,
    )


async def process_files_async(
    paths: Sequence[Path],
    config: CartLinkConfig,
    error_log: ErrorLogBuffer | None = None,
) -> tuple[BatchResult, list[UploadOutcome]]:
    """Process paths in order and aggregate their outcomes."""
    start_time = datetime.now(UTC)
    session = CartLinkSession(config)
    outcomes: list[UploadOutcome] = []
    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_items = 0

    with ProgressTracker(len(paths), description="Building cart links") as progress:
        for path in paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)

            if not is_accepted(path.name):
                outcome = session.reject_drop(path.name)
            elif not path.is_file():
                logger.error(f"file not found: {path}")
                outcome = UploadOutcome.failed(path.name, ErrorKind.MALFORMED_FILE)
            else:
                outcome = await session.process_upload(LocalUpload(path))

            elapsed = (datetime.now(UTC) - file_start).total_seconds()
            outcomes.append(outcome)
            file_stats.append(_file_stat(path, outcome, elapsed))

            if outcome.status is UploadStatus.SUCCESS and outcome.result is not None:
                success_count += 1
                total_items += outcome.result.item_count
            else:
                failed_count += 1
                if error_log is not None and outcome.error_kind is not None:
                    error_log.append(
                        ErrorRecord.create(
                            file=path.name,
                            row=-1,
                            error_type=outcome.error_kind.value,
                            message=outcome.error_kind.message,
                        )
                    )

            progress.set_postfix(success=success_count, failed=failed_count, items=total_items)
            progress.finish_file(success=outcome.status is UploadStatus.SUCCESS)

    end_time = datetime.now(UTC)
    result = BatchResult(
        success_files=success_count,
        failed_files=failed_count,
        total_items=total_items,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
    return result, outcomes


def process_files(
    paths: Sequence[Path],
    config: CartLinkConfig,
    error_log: ErrorLogBuffer | None = None,
) -> tuple[BatchResult, list[UploadOutcome]]:
    """Synchronous wrapper around process_files_async for the CLI."""
    return asyncio.run(process_files_async(paths, config, error_log))
