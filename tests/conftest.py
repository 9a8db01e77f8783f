"""Shared test fixtures."""

import pytest


def write_tree(root, files):
    """Write {relative_path: content} under root, creating parent dirs as needed."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def repo(tmp_path):
    """A temporary directory acting as an app root (symlinks resolved)."""
    return tmp_path.resolve()


@pytest.fixture
def make_repo(repo):
    """Return a function writing a file tree into the temp app root."""
    def _make(files):
        return write_tree(repo, files)
    return _make
