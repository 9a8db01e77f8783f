"""Module map: the per-run index of source files and their raw dependency specifiers."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from i18n_scout.indexer.file_scanner import scan_root
from i18n_scout.parsers.base import ExtractedImport
from i18n_scout.parsers.ts_js_parser import TSJSParser

logger = logging.getLogger(__name__)


class ModuleMap:
    """Index of absolute file paths under one root.

    ``exists`` answers membership in the index. ``is_file`` / ``is_dir`` are
    cached filesystem probes used by resolvers, which may land outside the
    index (e.g. inside ``node_modules``). Dependency specifiers are extracted
    lazily and cached, so each file is read for imports at most once.
    """

    def __init__(self, root: Path, files: Iterable[str], parser: TSJSParser | None = None):
        self.root = str(Path(root).resolve())
        self._files = {os.path.normpath(f) for f in files}
        self._parser = parser or TSJSParser()
        self._imports: dict[str, list[ExtractedImport]] = {}
        self._stat_cache: dict[str, str | None] = {}

    @classmethod
    def build(
        cls,
        root: Path,
        extensions: Iterable[str],
        *,
        max_file_size: int | None = None,
    ) -> "ModuleMap":
        """Scan ``root`` for files with a recognized bare extension."""
        root = Path(root).resolve()
        scanned = scan_root(root, extensions, max_file_size=max_file_size)
        logger.debug("Module map for %s holds %d files", root, len(scanned))
        return cls(root, (str(fi.abs_path) for fi in scanned))

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    @property
    def files(self) -> list[str]:
        return sorted(self._files)

    def exists(self, path: str) -> bool:
        return os.path.normpath(path) in self._files

    def _stat_kind(self, path: str) -> str | None:
        path = os.path.normpath(path)
        if path in self._files:
            return "file"
        if path not in self._stat_cache:
            if os.path.isfile(path):
                kind = "file"
            elif os.path.isdir(path):
                kind = "dir"
            else:
                kind = None
            self._stat_cache[path] = kind
        return self._stat_cache[path]

    def is_file(self, path: str) -> bool:
        return self._stat_kind(path) == "file"

    def is_dir(self, path: str) -> bool:
        return self._stat_kind(path) == "dir"

    def get_imports(self, path: str) -> list[ExtractedImport]:
        """Return the imports of ``path``, first occurrence of each specifier, in source order.

        Files outside the index have no imports.
        """
        path = os.path.normpath(path)
        if path not in self._files:
            return []
        if path not in self._imports:
            self._imports[path] = self._read_imports(path)
        return self._imports[path]

    def get_dependencies(self, path: str) -> list[str]:
        """Return the raw import specifiers of ``path``, deduplicated in source order."""
        return [imp.module for imp in self.get_imports(path)]

    def _read_imports(self, path: str) -> list[ExtractedImport]:
        try:
            source = Path(path).read_bytes()
        except OSError as e:
            logger.warning("Failed to read %s for imports: %s", path, e)
            return []
        imports: list[ExtractedImport] = []
        seen: set[str] = set()
        for imp in self._parser.extract_imports(source, path):
            if imp.module and imp.module not in seen:
                seen.add(imp.module)
                imports.append(imp)
        return imports
