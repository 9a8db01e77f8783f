"""End-to-end run: module map -> resolvers -> traversal -> string extraction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from i18n_scout.constants import DEFAULT_EXTENSIONS, DEFAULT_EXTRACTOR_FUNCTION_NAME
from i18n_scout.extraction.batch import extract_strings
from i18n_scout.indexer.module_map import ModuleMap
from i18n_scout.resolution.multi_resolver import MultiResolver
from i18n_scout.resolution.platform_resolver import (
    Resolution,
    ResolverConfig,
    build_platform_extensions,
    create_resolver_set,
    module_paths_from_tsconfig,
)
from i18n_scout.traversal import traverse, validate_entry_points

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """Inputs of one run. Relative paths are taken relative to ``cwd``."""
    entry_points: list[str]
    root_dir: str
    platforms: list[str] = field(default_factory=list)
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    extractor_function_name: str = DEFAULT_EXTRACTOR_FUNCTION_NAME
    max_workers: int | None = None
    max_file_size: int | None = None
    has_core_modules: bool = True
    cwd: str | None = None

    def __post_init__(self):
        if not self.entry_points:
            raise ValueError("entry_points must be non-empty")
        if not self.root_dir:
            raise ValueError("root_dir must be non-empty")
        self.extensions = [ext.lstrip(".") for ext in self.extensions]
        if not self.extensions or not all(self.extensions):
            raise ValueError(f"extensions must be non-empty, got {self.extensions!r}")
        self.platforms = [p.strip(".") for p in self.platforms]
        if not all(self.platforms):
            raise ValueError(f"platforms must not contain empty names, got {self.platforms!r}")
        if not self.extractor_function_name:
            raise ValueError("extractor_function_name must be non-empty")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be > 0, got {self.max_workers}")
        if self.max_file_size is not None and self.max_file_size <= 0:
            raise ValueError(f"max_file_size must be > 0, got {self.max_file_size}")


@dataclass
class ScanReport:
    reachable_files: list[str]
    error_files: list[str]
    strings_found: list[str]
    strings_by_file: dict[str, list[str]] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    unresolved: list[Resolution] = field(default_factory=list)

    @property
    def reachable_file_count(self) -> int:
        return len(self.reachable_files)

    @property
    def unique_strings(self) -> set[str]:
        return set(self.strings_found)


def find_strings_to_translate(
    options: ScanOptions,
    *,
    on_files_found: Callable[[int], None] | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> ScanReport:
    """Collect every extractor-call string reachable from the entry points.

    Raises ValueError for a root tsconfig.json that cannot be read as JSON,
    and EntryPointError when an entry point is not in the module map. Both
    happen before anything is read for extraction. Every later failure is
    reported in the returned ScanReport. ``on_files_found`` receives the
    reachable file count before extraction starts; ``on_progress`` is
    forwarded to ``extract_strings``.
    """
    cwd = Path(options.cwd) if options.cwd else Path.cwd()
    root = (cwd / options.root_dir).resolve()

    module_paths = module_paths_from_tsconfig(root)

    logger.info("Building module map for directory %s", root)
    module_map = ModuleMap.build(root, options.extensions, max_file_size=options.max_file_size)
    entry_points = validate_entry_points(options.entry_points, module_map, cwd)

    platform_extensions = build_platform_extensions(options.platforms, options.extensions)
    logger.info("Resolving dependencies recursively for %s", ", ".join(platform_extensions))
    config = ResolverConfig(
        root_dir=str(root),
        has_core_modules=options.has_core_modules,
        module_paths=module_paths,
    )
    resolvers = create_resolver_set(platform_extensions, module_map, config)
    traversal = traverse(entry_points, options.extensions, MultiResolver(resolvers, module_map))
    logger.info("Found %d files", len(traversal.files))
    if on_files_found is not None:
        on_files_found(len(traversal.files))

    extraction = extract_strings(
        traversal.files,
        options.extractor_function_name,
        max_workers=options.max_workers,
        max_file_size=options.max_file_size,
        on_progress=on_progress,
    )
    logger.info("%d files failed to parse", len(extraction.error_files))
    logger.info(
        "Found %d strings out of which %d are unique",
        len(extraction.strings_found), len(extraction.unique_strings),
    )

    return ScanReport(
        reachable_files=traversal.files,
        error_files=extraction.error_files,
        strings_found=extraction.strings_found,
        strings_by_file=extraction.strings_by_file,
        failures=extraction.failures,
        unresolved=traversal.unresolved,
    )
