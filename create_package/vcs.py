"""
vcs.py

Responsibility: Run git / npm / travis commands for a package directory.

Every command is an argument list passed to `subprocess.run`; nothing is interpolated into
a shell string, so descriptor fields like `description` can contain any characters.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

log = logging.getLogger(__name__)


class VcsError(RuntimeError):
    pass


def _run(
    cmd: list[str],
    *,
    cwd: Path,
    env: dict[str, str] | None = None,
    input_text: str | None = None,
) -> str:
    """
    Run a subprocess command and return its stdout, raising a VcsError on failure.
    """
    log.debug("$ %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            input=input_text,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as e:
        raise VcsError(f"Command not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise VcsError(f"Command failed: {' '.join(cmd)}\n\n{e.stdout}") from e
    return result.stdout


def has_local_repo(directory: Path) -> bool:
    return (directory / ".git").exists()


def remote_origin_url(directory: Path) -> str | None:
    """Return the configured `origin` URL, or None when there is no such remote."""
    try:
        out = _run(["git", "remote", "get-url", "origin"], cwd=directory)
    except VcsError as e:
        log.debug("No origin remote in %s: %s", directory, e)
        return None
    return out.strip() or None


def init(directory: Path) -> None:
    _run(["git", "init"], cwd=directory)


def npm_install(directory: Path) -> None:
    _run(["npm", "install"], cwd=directory)


def add(directory: Path, paths: Sequence[str] = (".",)) -> None:
    _run(["git", "add", *paths], cwd=directory)


def unstage(directory: Path, paths: Sequence[str]) -> None:
    existing = [p for p in paths if (directory / p).exists()]
    if existing:
        _run(["git", "reset", "--quiet", "--", *existing], cwd=directory)


def commit(directory: Path, *messages: str) -> None:
    cmd = ["git", "commit", "--quiet"]
    for message in messages:
        cmd += ["-m", message]
    _run(cmd, cwd=directory)


def rename_branch(directory: Path, branch: str) -> None:
    _run(["git", "branch", "-M", branch], cwd=directory)


def add_remote(directory: Path, url: str, name: str = "origin") -> None:
    _run(["git", "remote", "add", name, url], cwd=directory)


def push(directory: Path, remote: str | None = None, branch: str | None = None) -> None:
    cmd = ["git", "push"]
    if remote and branch:
        cmd += ["-u", remote, branch]
    _run(cmd, cwd=directory)


def travis_encrypt(directory: Path, *, name: str, value: str, repo_path: str) -> None:
    """Encrypt `name=value` for Travis CI and add it to `.travis.yml`."""
    _run(
        ["travis", "encrypt", f"{name}={value}", "--add", "--no-interactive", "-r", repo_path],
        cwd=directory,
    )


def credential_fill(directory: Path, host: str) -> dict[str, str]:
    """
    Ask git's configured credential helper for `https://<host>` credentials.

    Returns the helper's key/value answer (typically `username` and `password`).
    """
    out = _run(
        ["git", "credential", "fill"],
        cwd=directory,
        env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        input_text=f"protocol=https\nhost={host}\n\n",
    )
    answer: dict[str, str] = {}
    for line in out.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            answer[key.strip()] = value
    return answer
