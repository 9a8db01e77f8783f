"""Per-extension module resolution.

One ``PlatformResolver`` exists per platform-qualified extension (``ios.js``,
``android.tsx``, ``js`` ...). Each resolves a specifier the way Node/Jest
would if that single extension were the only one configured.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from i18n_scout.constants import NODE_CORE_MODULES
from i18n_scout.indexer.module_map import ModuleMap

logger = logging.getLogger(__name__)

REASON_CORE_MODULE = "core module"
REASON_NOT_FOUND = "not found"


@dataclass(frozen=True)
class ResolverConfig:
    """Resolution settings shared by every resolver of one run."""
    root_dir: str
    extensions: tuple[str, ...] = ()
    has_core_modules: bool = True
    module_paths: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not os.path.isabs(self.root_dir):
            raise ValueError(f"root_dir must be absolute, got {self.root_dir!r}")
        for ext in self.extensions:
            if not ext or ext.startswith("."):
                raise ValueError(f"extensions must be bare (no leading dot), got {ext!r}")


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one specifier under one resolver.

    Exactly one of ``path`` / ``reason`` is set.
    """
    specifier: str
    from_file: str
    extension: str
    path: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.path is not None


class ResolutionError(LookupError):
    """Raised by ``PlatformResolver.resolve_module`` when a specifier has no file."""

    def __init__(self, resolution: Resolution):
        self.resolution = resolution
        super().__init__(
            f"Cannot resolve {resolution.specifier!r} from {resolution.from_file} "
            f"with extension .{resolution.extension}: {resolution.reason}"
        )


def build_platform_extensions(platforms: Sequence[str], extensions: Sequence[str]) -> list[str]:
    """Cross product of platforms x extensions (platform-major), then the bare extensions.

    >>> build_platform_extensions(["ios", "web"], ["js", "ts"])
    ['ios.js', 'ios.ts', 'web.js', 'web.ts', 'js', 'ts']
    """
    qualified = [f"{platform}.{ext}" for platform in platforms for ext in extensions]
    return qualified + list(extensions)


def is_core_module(specifier: str) -> bool:
    """True for Node builtins: ``fs``, ``fs/promises``, ``node:anything``."""
    if specifier.startswith("node:"):
        return True
    return specifier.split("/", 1)[0] in NODE_CORE_MODULES


def _is_path_specifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def _node_modules_dirs(start_dir: str) -> Iterable[str]:
    """Yield ``<dir>/node_modules`` for ``start_dir`` and each ancestor."""
    current = start_dir
    while True:
        if os.path.basename(current) != "node_modules":
            yield os.path.join(current, "node_modules")
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


class PlatformResolver:
    """Resolves specifiers to absolute paths using only ``config.extensions``."""

    def __init__(self, module_map: ModuleMap, config: ResolverConfig):
        if not config.extensions:
            raise ValueError("PlatformResolver needs at least one extension")
        self._module_map = module_map
        self.config = config
        self._package_mains: dict[str, str | None] = {}

    @property
    def extension(self) -> str:
        return ",".join(self.config.extensions)

    def __repr__(self) -> str:
        return f"PlatformResolver({self.extension!r})"

    def resolve(self, from_file: str, specifier: str) -> Resolution:
        """Resolve ``specifier`` as imported by ``from_file``. Never raises."""
        if self.config.has_core_modules and not _is_path_specifier(specifier) and is_core_module(specifier):
            return self._failure(from_file, specifier, REASON_CORE_MODULE)

        for base in self._candidate_bases(from_file, specifier):
            path = self._resolve_base(base)
            if path is not None:
                return Resolution(
                    specifier=specifier,
                    from_file=from_file,
                    extension=self.extension,
                    path=path,
                )
        return self._failure(from_file, specifier, REASON_NOT_FOUND)

    def resolve_module(self, from_file: str, specifier: str) -> str:
        """Resolve to an absolute path or raise ``ResolutionError``."""
        resolution = self.resolve(from_file, specifier)
        if not resolution.ok:
            raise ResolutionError(resolution)
        return resolution.path

    def _failure(self, from_file: str, specifier: str, reason: str) -> Resolution:
        return Resolution(
            specifier=specifier,
            from_file=from_file,
            extension=self.extension,
            reason=reason,
        )

    def _candidate_bases(self, from_file: str, specifier: str) -> Iterable[str]:
        if _is_path_specifier(specifier):
            yield os.path.normpath(os.path.join(os.path.dirname(from_file), specifier))
            return
        if os.path.isabs(specifier):
            yield os.path.normpath(specifier)
            return
        for module_path in self.config.module_paths:
            yield os.path.normpath(os.path.join(module_path, specifier))
        for node_modules in _node_modules_dirs(os.path.dirname(from_file)):
            yield os.path.normpath(os.path.join(node_modules, specifier))

    def _resolve_base(self, base: str) -> str | None:
        """File as-is, then ``base.<ext>``, then directory main / index."""
        mm = self._module_map
        if mm.is_file(base):
            return base
        for ext in self.config.extensions:
            candidate = f"{base}.{ext}"
            if mm.is_file(candidate):
                return candidate
        if not mm.is_dir(base):
            return None

        main = self._package_main(base)
        if main:
            main_path = os.path.normpath(os.path.join(base, main))
            if mm.is_file(main_path):
                return main_path
            for ext in self.config.extensions:
                candidate = f"{main_path}.{ext}"
                if mm.is_file(candidate):
                    return candidate
            for ext in self.config.extensions:
                candidate = os.path.join(main_path, f"index.{ext}")
                if mm.is_file(candidate):
                    return candidate

        for ext in self.config.extensions:
            candidate = os.path.join(base, f"index.{ext}")
            if mm.is_file(candidate):
                return candidate
        return None

    def _package_main(self, directory: str) -> str | None:
        """Return ``main`` from ``<directory>/package.json``, or None."""
        if directory not in self._package_mains:
            self._package_mains[directory] = _read_package_main(directory)
        return self._package_mains[directory]


def _read_package_main(directory: str) -> str | None:
    manifest = Path(directory) / "package.json"
    if not manifest.is_file():
        return None
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable package manifest %s: %s", manifest, e)
        return None
    main = data.get("main") if isinstance(data, dict) else None
    return main if isinstance(main, str) and main else None


def create_resolver_set(
    platform_extensions: Sequence[str],
    module_map: ModuleMap,
    config: ResolverConfig,
) -> list[PlatformResolver]:
    """One resolver per platform-qualified extension, in the given order."""
    return [
        PlatformResolver(module_map, dataclasses.replace(config, extensions=(ext,)))
        for ext in platform_extensions
    ]


def _strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside string literals.

    tsconfig.json is JSONC: ``tsc --init`` writes a commented file.
    """
    result = []
    i = 0
    in_string = False
    while i < len(text):
        char = text[i]
        if in_string:
            result.append(char)
            if char == "\\" and i + 1 < len(text):
                result.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue
        if char == '"':
            in_string = True
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
            continue
        result.append(char)
        i += 1
    return "".join(result)


_CLOSING_BRACKET = re.compile(r"\s*[}\]]")


def _strip_trailing_commas(text: str) -> str:
    """Drop commas directly followed by ``}`` or ``]``, outside string literals."""
    result = []
    in_string = False
    escape_next = False
    for i, char in enumerate(text):
        if in_string:
            if escape_next:
                escape_next = False
            elif char == "\\":
                escape_next = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "," and _CLOSING_BRACKET.match(text, i + 1):
            continue
        result.append(char)
    return "".join(result)


def module_paths_from_tsconfig(root_dir: Path) -> tuple[str, ...]:
    """Return ``compilerOptions.baseUrl`` from ``<root>/tsconfig.json`` as a module path.

    Comments and trailing commas are accepted, as tsc accepts them. Raises
    ValueError (json.JSONDecodeError included) when the file is still not
    valid JSON or does not have the shape of a tsconfig.
    """
    tsconfig = Path(root_dir) / "tsconfig.json"
    if not tsconfig.exists():
        return ()
    text = _strip_trailing_commas(_strip_json_comments(tsconfig.read_text(encoding="utf-8")))
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"{tsconfig}: top level must be an object, got {type(data).__name__}")
    compiler_options = data.get("compilerOptions", {})
    if not isinstance(compiler_options, dict):
        raise ValueError(
            f"{tsconfig}: compilerOptions must be an object, got {type(compiler_options).__name__}"
        )
    base_url = compiler_options.get("baseUrl", "")
    if not isinstance(base_url, str):
        raise ValueError(f"{tsconfig}: compilerOptions.baseUrl must be a string")
    if not base_url:
        return ()
    return (os.path.normpath(os.path.join(str(root_dir), base_url)),)
