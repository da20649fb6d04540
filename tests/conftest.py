"""
Shared pytest fixtures for remutable tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import remutable.config as config
import remutable.constants as constants
import remutable.tree as tree
import remutable.update as update


class CountingCloner:
    """
    Cloner wrapper that records every container it copies.

    Example:
        >>> cloner = CountingCloner()
        >>> updater = tree.Updater(clone=cloner)
        >>> updater.set({"a": 1}, "b", 2)
        {'a': 1, 'b': 2}
        >>> cloner.count
        1
    """

    def __init__(self, clone: tree.Cloner = tree.shallow_clone) -> None:
        self._clone = clone
        self.cloned: list[_typing.Any] = []
        self.__name__ = "CountingCloner"

    @property
    def count(self) -> int:
        return len(self.cloned)

    def __call__(self, value: _typing.Any) -> _typing.Any:
        self.cloned.append(value)
        return self._clone(value)


# =============================================================================
# Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: _pytest.MonkeyPatch,
    tmp_path: _pathlib.Path,
) -> _typing.Iterator[_pathlib.Path]:
    """
    Isolate every test from REMUTABLE_* variables and ./remutable.yaml.

    Runs each test in an empty temporary directory with a fresh default
    updater. Yields the temporary directory.
    """
    for key in list(_os.environ):
        if key.startswith(constants.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    update.reset_default_updater()
    yield tmp_path
    update.reset_default_updater()


@_pytest.fixture
def clean_settings() -> config.Settings:
    """Settings with every field at its default."""
    return config.Settings()


# =============================================================================
# Engine fixtures
# =============================================================================


@_pytest.fixture
def counting_cloner() -> CountingCloner:
    """A fresh cloner that counts its calls."""
    return CountingCloner()


@_pytest.fixture
def counting_updater(counting_cloner: CountingCloner) -> tree.Updater:
    """Updater whose clones are recorded by counting_cloner."""
    return tree.Updater(clone=counting_cloner)


@_pytest.fixture
def people() -> dict[str, _typing.Any]:
    """A small tree with a list of records."""
    return {
        "list": [
            {"id": 1, "name": "henry"},
            {"id": 2, "name": "omar"},
            {"id": 3, "name": "zoe"},
        ],
        "meta": {"count": 3, "tags": ["a", "b"]},
    }
