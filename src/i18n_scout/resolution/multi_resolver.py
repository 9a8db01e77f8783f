"""Union of per-extension resolutions for every dependency of a file.

An import of ``./hello`` yields ``hello.android.js``, ``hello.ios.js`` and
``hello.js`` when all of them exist: every variant that might ship on some
platform is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from i18n_scout.indexer.module_map import ModuleMap
from i18n_scout.resolution.platform_resolver import (
    REASON_CORE_MODULE,
    PlatformResolver,
    Resolution,
)

logger = logging.getLogger(__name__)


@dataclass
class MultiResolution:
    """Resolved paths for one file, in specifier then resolver order.

    ``errors`` holds one failure per specifier that no resolver could map to
    a file (core modules excluded). It is diagnostic only.
    """
    resolved: list[str] = field(default_factory=list)
    errors: list[Resolution] = field(default_factory=list)


class MultiResolver:
    def __init__(self, resolvers: Sequence[PlatformResolver], module_map: ModuleMap):
        self.resolvers = list(resolvers)
        self._module_map = module_map

    def multi_resolve(self, file: str) -> MultiResolution:
        """Resolve every raw specifier of ``file`` under every resolver. Never raises."""
        result = MultiResolution()
        for specifier in self._module_map.get_dependencies(file):
            failures: list[Resolution] = []
            for resolver in self.resolvers:
                resolution = resolver.resolve(file, specifier)
                if resolution.ok:
                    result.resolved.append(resolution.path)
                else:
                    failures.append(resolution)

            if not failures or len(failures) < len(self.resolvers):
                continue
            if all(f.reason == REASON_CORE_MODULE for f in failures):
                continue
            logger.debug("Unresolved %r from %s under %d extensions", specifier, file, len(failures))
            result.errors.append(failures[0])
        return result
