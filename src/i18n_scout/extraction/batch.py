"""Run string extraction over many files with a bounded worker pool."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from i18n_scout.extraction.strings import extract

logger = logging.getLogger(__name__)


@dataclass
class ExtractionReport:
    """Aggregated extraction outcome, ordered like the input files."""
    error_files: list[str] = field(default_factory=list)
    strings_found: list[str] = field(default_factory=list)  # duplicates retained
    strings_by_file: dict[str, list[str]] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)  # error file -> reason

    @property
    def unique_strings(self) -> set[str]:
        return set(self.strings_found)


def _process_file(
    file: str,
    extractor_name: str,
    max_file_size: int | None = None,
) -> tuple[list[str] | None, str | None]:
    """Read and extract one file. Returns (strings, None) or (None, reason)."""
    try:
        source = Path(file).read_bytes()
    except OSError as e:
        return None, f"read failed: {e}"
    if max_file_size is not None and len(source) > max_file_size:
        return None, f"skipped: {len(source)} bytes exceeds max_file_size"
    try:
        strings = extract(extractor_name, source, file)
    except Exception as e:
        logger.exception("Extraction error for %s", file)
        return None, f"extraction failed: {e}"
    if strings is None:
        return None, "parse failed"
    return strings, None


def extract_strings(
    files: Iterable[str],
    extractor_name: str,
    *,
    max_workers: int | None = None,
    max_file_size: int | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> ExtractionReport:
    """Extract strings from every file; unreadable or unparseable files go to ``error_files``.

    All files are submitted to a ThreadPoolExecutor of at most ``max_workers``
    threads (the executor default when None). Files larger than
    ``max_file_size`` bytes are reported as skipped. The report is assembled
    after every task has settled, in input order. ``on_progress`` is called
    with each finished file from the calling thread.
    """
    files = list(dict.fromkeys(files))
    outcomes: dict[str, tuple[list[str] | None, str | None]] = {}

    if files:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_file = {
                executor.submit(_process_file, f, extractor_name, max_file_size): f
                for f in files
            }
            for future in as_completed(future_to_file):
                file = future_to_file[future]
                outcomes[file] = future.result()
                if on_progress is not None:
                    on_progress(file)

    report = ExtractionReport()
    for file in files:
        strings, reason = outcomes[file]
        if strings is None:
            logger.warning("Failed to extract strings from %s: %s", file, reason)
            report.error_files.append(file)
            report.failures[file] = reason
            continue
        report.strings_by_file[file] = strings
        report.strings_found.extend(strings)
    return report
