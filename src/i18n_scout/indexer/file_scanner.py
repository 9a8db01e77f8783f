"""Scan a root directory for source files with a recognized extension."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pathspec

from i18n_scout.constants import bare_extension

logger = logging.getLogger(__name__)

SKIP_DIRS: set[str] = {
    ".git",
    ".hg",
    "node_modules",
    "__pycache__",
    ".i18n_scout",
    ".expo",
    "Pods",
}

SKIP_SUFFIXES: set[str] = {
    ".min.js",
    ".map",
    ".d.ts",
}


@dataclass(frozen=True)
class FileInfo:
    """A single scanned source file."""

    path: str  # relative to root, forward-slash separated
    abs_path: Path


def _load_gitignore_spec(root: Path) -> pathspec.PathSpec | None:
    """Parse .gitignore at the root. Returns None if absent."""
    gitignore = root / ".gitignore"
    if not gitignore.is_file():
        return None
    text = gitignore.read_text(encoding="utf-8", errors="replace")
    return pathspec.PathSpec.from_lines("gitwildmatch", text.splitlines())


def _should_skip_dir(name: str) -> bool:
    return name in SKIP_DIRS


def _should_skip_file(name: str) -> bool:
    for suffix in SKIP_SUFFIXES:
        if name.endswith(suffix):
            return True
    return False


def _walk_root(root: Path, gitignore_spec: pathspec.PathSpec | None):
    """Yield (relative_posix_path, abs_path) for every candidate file."""
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except PermissionError as e:
            raise PermissionError(f"Cannot read directory {current}: {e}") from e

        dirs: list[Path] = []
        files: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                dirs.append(entry)
            elif entry.is_file():
                files.append(entry)

        for d in dirs:
            if _should_skip_dir(d.name):
                continue
            rel = d.relative_to(root).as_posix()
            if gitignore_spec is not None and gitignore_spec.match_file(rel + "/"):
                continue
            stack.append(d)

        for f in files:
            rel = f.relative_to(root).as_posix()
            if gitignore_spec is not None and gitignore_spec.match_file(rel):
                continue
            yield rel, f


def scan_root(
    root: Path,
    extensions: Iterable[str],
    *,
    max_file_size: int | None = None,
) -> list[FileInfo]:
    """Scan ``root`` and return a FileInfo for every file with a recognized extension.

    ``extensions`` are bare (``"js"``, not ``".js"``); a platform-qualified
    file such as ``Foo.ios.js`` is recognized through its last suffix.
    Files are also filtered by skip patterns, .gitignore and, when given,
    ``max_file_size``. Results are sorted by relative path.
    """
    root = root.resolve()
    recognized = set(extensions)
    gitignore_spec = _load_gitignore_spec(root)
    results: list[FileInfo] = []

    for rel_path, abs_path in _walk_root(root, gitignore_spec):
        if _should_skip_file(abs_path.name):
            continue

        if bare_extension(rel_path) not in recognized:
            continue

        if max_file_size is not None:
            size = abs_path.stat().st_size
            if size > max_file_size:
                logger.warning("Skipping oversized file (%d bytes): %s", size, rel_path)
                continue

        results.append(FileInfo(path=rel_path, abs_path=abs_path))

    results.sort(key=lambda fi: fi.path)
    return results
