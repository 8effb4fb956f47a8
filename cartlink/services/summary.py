from __future__ import annotations

from ..models.processing_result import BatchResult
from ..models.upload import UploadOutcome

"""Output line rendering for the command line runner.

SUMMARY line format:

    SUMMARY files={total} success={success} failed={failed} items={items} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line for a batch run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     success_files=1, failed_files=1, total_items=4,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=2 success=1 failed=1 items=4 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"items={result.total_items} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_outcome_line(outcome: UploadOutcome) -> str:
    """Render one file's outcome: "OK <file> items=<n> url=<url>" or "FAILED <file> <message>"."""
    if outcome.result is not None:
        return f"OK {outcome.file_name} items={outcome.result.item_count} url={outcome.result.url}"
    return f"FAILED {outcome.file_name} {outcome.error_message}"
