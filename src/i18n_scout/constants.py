"""Centralized extension / platform / grammar constants."""

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx")

DEFAULT_PLATFORMS: tuple[str, ...] = ("web", "android", "ios", "native", "shared")

DEFAULT_EXTRACTOR_FUNCTION_NAME = "t"

# Grammar names understood by parsers.base.get_language
GRAMMAR_MAP: dict[str, tuple[str, ...]] = {
    "ts": ("typescript",),
    "mts": ("typescript",),
    "cts": ("typescript",),
    "tsx": ("tsx",),
    # Plain JS files in React Native code bases frequently carry Flow or
    # TS-style annotations; TSX is the second dialect tried.
    "js": ("javascript", "tsx"),
    "jsx": ("javascript", "tsx"),
    "mjs": ("javascript", "tsx"),
    "cjs": ("javascript", "tsx"),
}

# Node builtins recognized when a resolver has core modules enabled
NODE_CORE_MODULES: frozenset[str] = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi", "worker_threads",
    "zlib",
})


def bare_extension(file_path: str) -> str:
    """Return the text after the last dot of a path ("" when there is none).

    ``Foo.ios.js`` -> ``js``.
    """
    name = file_path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def grammars_for(file_path: str) -> tuple[str, ...]:
    """Map a file path to the grammars tried when parsing it, in order."""
    return GRAMMAR_MAP.get(bare_extension(file_path), ("javascript", "tsx"))
