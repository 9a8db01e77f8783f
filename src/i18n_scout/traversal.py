"""Reachability traversal over the multi-platform dependency graph."""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from i18n_scout.constants import bare_extension
from i18n_scout.indexer.module_map import ModuleMap
from i18n_scout.resolution.multi_resolver import MultiResolver
from i18n_scout.resolution.platform_resolver import Resolution

logger = logging.getLogger(__name__)


class EntryPointError(FileNotFoundError):
    """An entry point is not part of the module map."""


@dataclass
class TraversalState:
    """Worklist and visited set of one traversal run.

    The same path may sit in ``queue`` several times; duplicates are dropped
    when dequeued, so each path is visited at most once.
    """
    queue: deque[str] = field(default_factory=deque)
    visited: set[str] = field(default_factory=set)
    order: list[str] = field(default_factory=list)
    unresolved: list[Resolution] = field(default_factory=list)

    @classmethod
    def start(cls, entry_points: Iterable[str]) -> TraversalState:
        return cls(queue=deque(entry_points))

    @property
    def done(self) -> bool:
        return not self.queue


@dataclass
class TraversalResult:
    files: list[str]  # visit order
    unresolved: list[Resolution] = field(default_factory=list)

    @property
    def file_set(self) -> frozenset[str]:
        return frozenset(self.files)


def validate_entry_points(
    entry_points: Sequence[str],
    module_map: ModuleMap,
    cwd: Path | None = None,
) -> list[str]:
    """Make entry points absolute (relative to ``cwd``) and check the module map holds them.

    Raises EntryPointError on the first missing entry point.
    """
    base = str(cwd) if cwd is not None else os.getcwd()
    absolute = []
    for entry_point in entry_points:
        path = os.path.normpath(os.path.join(base, entry_point))
        if not module_map.exists(path):
            # The module map is keyed under the resolved root
            path = os.path.realpath(path)
        if not module_map.exists(path):
            raise EntryPointError(
                f"{entry_point} does not exist. Please provide a path to a valid file"
            )
        absolute.append(path)
    return absolute


def step(state: TraversalState, extension_filter: frozenset[str], multi_resolver: MultiResolver) -> str | None:
    """Process the head of the worklist. Returns the visited path, or None if it was skipped."""
    module = state.queue.popleft()
    if module in state.visited or bare_extension(module) not in extension_filter:
        return None

    state.visited.add(module)
    state.order.append(module)
    resolution = multi_resolver.multi_resolve(module)
    state.queue.extend(resolution.resolved)
    state.unresolved.extend(resolution.errors)
    return module


def traverse(
    entry_points: Iterable[str],
    extension_filter: Iterable[str],
    multi_resolver: MultiResolver,
) -> TraversalResult:
    """Visit every file reachable from ``entry_points`` whose extension is recognized."""
    extensions = frozenset(extension_filter)
    state = TraversalState.start(entry_points)
    while not state.done:
        step(state, extensions, multi_resolver)

    logger.debug(
        "Traversal visited %d files, %d unresolved specifiers",
        len(state.order), len(state.unresolved),
    )
    return TraversalResult(files=state.order, unresolved=state.unresolved)
