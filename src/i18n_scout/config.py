"""TOML config loader and validation."""

import tomllib
from pathlib import Path

CONFIG_DIR = ".i18n_scout"
CONFIG_FILE = "config.toml"

# [scan] keys and the types they must have
_SCAN_KEYS: dict[str, type] = {
    "entry_points": list,
    "root_dir": str,
    "platforms": list,
    "extensions": list,
    "extractor_function_name": str,
    "max_workers": int,
    "max_file_size": int,
    "has_core_modules": bool,
}


def config_path(repo_path: Path) -> Path:
    return repo_path / CONFIG_DIR / CONFIG_FILE


def load_config(repo_path: Path) -> dict | None:
    """Load .i18n_scout/config.toml. Returns None if the file doesn't exist."""
    config_file = config_path(repo_path)
    if not config_file.exists():
        return None
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def require_config_section(config: dict | None, section: str) -> dict:
    """Extract a config section or raise a hard error."""
    if config is None:
        raise RuntimeError(
            "No config file found. Run 'i18n-scout init' to create .i18n_scout/config.toml"
        )
    value = config.get(section)
    if value is None:
        raise RuntimeError(
            f"Missing [{section}] section in .i18n_scout/config.toml. "
            f"Run 'i18n-scout init' to create a default config."
        )
    if not isinstance(value, dict):
        raise RuntimeError(
            f"[{section}] in config.toml must be a table, got {type(value).__name__}"
        )
    return value


def scan_config(config: dict | None) -> dict:
    """Return the validated [scan] section, or {} when there is no config.

    Unknown keys and values of the wrong type are hard errors.
    """
    if config is None or "scan" not in config:
        return {}
    section = require_config_section(config, "scan")
    for key, value in section.items():
        expected = _SCAN_KEYS.get(key)
        if expected is None:
            raise ValueError(
                f"Unknown key {key!r} in [scan] config. "
                f"Valid keys: {', '.join(sorted(_SCAN_KEYS))}"
            )
        # bool is an int subclass; max_workers = true is not a count
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(
                f"[scan] {key} must be {expected.__name__}, got {type(value).__name__}"
            )
        if expected is list and not all(isinstance(v, str) for v in value):
            raise ValueError(f"[scan] {key} must be a list of strings")
    return section


def create_default_config(repo_path: Path) -> Path:
    """Create a default config.toml in .i18n_scout/. Returns the path."""
    config_dir = repo_path / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / CONFIG_FILE
    if path.exists():
        raise FileExistsError(f"Config already exists: {path}")
    path.write_text(
        '[scan]\n'
        '# Entry points, relative to the directory i18n-scout is run from\n'
        'entry_points = ["index.js"]\n'
        'root_dir = "."\n'
        '\n'
        '# Every platform variant (Foo.ios.js, Foo.web.js ...) of an import is\n'
        '# followed. Leave empty for single-platform code bases.\n'
        'platforms = ["web", "android", "ios", "native", "shared"]\n'
        'extensions = ["js", "jsx", "ts", "tsx"]\n'
        '\n'
        '# Calls t("...") and obj.t("...") are collected\n'
        'extractor_function_name = "t"\n'
        '\n'
        '# max_workers = 8  # extraction threads; defaults to the executor default\n'
        '# max_file_size = 1000000  # skip larger source files (bytes)\n'
        '# has_core_modules = true  # treat Node builtins (fs, path ...) as external\n'
    )
    return path
