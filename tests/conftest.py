"""Shared pytest fixtures for create-package tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from create_package import vcs
from create_package.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config, tokens and git credentials out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "CREATE_PACKAGE_CONFIG",
        "CREATE_PACKAGE_GITHUB",
        "CREATE_PACKAGE_TEMPLATE",
        "CREATE_PACKAGE_LOG_LEVEL",
        "GITHUB_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_console_logging() -> Generator[None, None, None]:
    """Drop console handlers installed by the CLI so they never outlive a captured stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in logger.handlers[:]:
        if getattr(h, "_create_package_console", False):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    d = tmp_path / "acme-widget"
    d.mkdir()
    return d


class GitRecorder:
    """Stands in for the git/npm/travis commands, recording each call."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self.calls: list[tuple[Any, ...]] = []
        for name in (
            "init",
            "npm_install",
            "add",
            "unstage",
            "commit",
            "rename_branch",
            "add_remote",
            "push",
            "travis_encrypt",
        ):
            monkeypatch.setattr(vcs, name, self._recorder(name))

    def _recorder(self, name: str):
        def record(directory: Path, *args: Any, **kwargs: Any) -> None:
            self.calls.append((name, *args, *sorted(kwargs.items())))

        return record

    @property
    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def git(monkeypatch: pytest.MonkeyPatch) -> GitRecorder:
    return GitRecorder(monkeypatch)
