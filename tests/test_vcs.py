import subprocess
from pathlib import Path
from typing import Any

import pytest

from create_package import vcs


class FakeRun:
    def __init__(self, stdout: str = "", fail: bool = False) -> None:
        self.calls: list[dict[str, Any]] = []
        self.stdout = stdout
        self.fail = fail

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append({"cmd": cmd, **kwargs})
        if self.fail:
            raise subprocess.CalledProcessError(1, cmd, output="fatal: nope")
        return subprocess.CompletedProcess(cmd, 0, stdout=self.stdout)


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(vcs.subprocess, "run", fake)
    return fake


def test_commands_are_argument_lists(tmp_path: Path, fake_run: FakeRun) -> None:
    vcs.commit(tmp_path, "Initial commit", 'has "quotes" && $(rm -rf)')
    call = fake_run.calls[0]
    assert call["cmd"] == ["git", "commit", "--quiet", "-m", "Initial commit", "-m", 'has "quotes" && $(rm -rf)']
    assert call["cwd"] == str(tmp_path)
    assert call["check"] is True
    assert "shell" not in call


def test_failure_raises_vcs_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(vcs.subprocess, "run", FakeRun(fail=True))
    with pytest.raises(vcs.VcsError, match="fatal: nope"):
        vcs.init(tmp_path)


def test_missing_binary_raises_vcs_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def run(cmd: list[str], **kwargs: Any) -> None:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(vcs.subprocess, "run", run)
    with pytest.raises(vcs.VcsError, match="Command not found: travis"):
        vcs.travis_encrypt(tmp_path, name="GH_TOKEN", value="t", repo_path="acme/tool")


def test_remote_origin_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(vcs.subprocess, "run", FakeRun(stdout="https://github.com/acme/tool.git\n"))
    assert vcs.remote_origin_url(tmp_path) == "https://github.com/acme/tool.git"
    monkeypatch.setattr(vcs.subprocess, "run", FakeRun(fail=True))
    assert vcs.remote_origin_url(tmp_path) is None


def test_unstage_only_existing_paths(tmp_path: Path, fake_run: FakeRun) -> None:
    (tmp_path / "index.js").write_text("", encoding="utf-8")
    vcs.unstage(tmp_path, ["index.js", "test/test.js"])
    assert fake_run.calls[0]["cmd"] == ["git", "reset", "--quiet", "--", "index.js"]
    vcs.unstage(tmp_path, ["missing.js"])
    assert len(fake_run.calls) == 1


def test_push_with_upstream(tmp_path: Path, fake_run: FakeRun) -> None:
    vcs.push(tmp_path, "origin", "latest")
    vcs.push(tmp_path)
    assert [c["cmd"] for c in fake_run.calls] == [["git", "push", "-u", "origin", "latest"], ["git", "push"]]


def test_travis_encrypt(tmp_path: Path, fake_run: FakeRun) -> None:
    vcs.travis_encrypt(tmp_path, name="GH_TOKEN", value="s3cr3t", repo_path="acme/tool")
    assert fake_run.calls[0]["cmd"] == [
        "travis", "encrypt", "GH_TOKEN=s3cr3t", "--add", "--no-interactive", "-r", "acme/tool",
    ]


def test_credential_fill(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeRun(stdout="protocol=https\nhost=github.com\nusername=me\npassword=tok=en\n")
    monkeypatch.setattr(vcs.subprocess, "run", fake)
    answer = vcs.credential_fill(tmp_path, "github.com")
    assert answer["username"] == "me"
    assert answer["password"] == "tok=en"
    assert fake.calls[0]["input"] == "protocol=https\nhost=github.com\n\n"
    assert fake.calls[0]["env"]["GIT_TERMINAL_PROMPT"] == "0"


def test_has_local_repo(tmp_path: Path) -> None:
    assert not vcs.has_local_repo(tmp_path)
    (tmp_path / ".git").mkdir()
    assert vcs.has_local_repo(tmp_path)
