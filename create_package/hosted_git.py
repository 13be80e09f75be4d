"""
hosted_git.py

Responsibility: Recognize repository URLs on known hosting providers.

`resolve_url` turns the many spellings npm accepts for `repository.url` into a `HostedRepo`
(owner, project, provider) or `None` when the URL is not on a known host.

`RepoCache` memoizes lookups for the duration of one run. It is created by the caller and
passed explicitly; nothing here holds module-level state.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class _Provider:
    host_type: str
    domain: str
    bugs_template: str


_PROVIDERS: dict[str, _Provider] = {
    "github": _Provider("github", "github.com", "https://{domain}/{owner}/{project}/issues"),
    "gitlab": _Provider("gitlab", "gitlab.com", "https://{domain}/{owner}/{project}/issues"),
    "bitbucket": _Provider("bitbucket", "bitbucket.org", "https://{domain}/{owner}/{project}/issues"),
}
_BY_DOMAIN = {p.domain: p for p in _PROVIDERS.values()}

_SCP_LIKE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>(?!/).+)$")
_BARE_SHORTCUT = re.compile(r"^(?P<owner>[\w.-]+)/(?P<project>[\w.-]+?)(?:\.git)?(?:#.*)?$")


@dataclass(frozen=True)
class HostedRepo:
    host_type: str
    domain: str
    owner: str
    project: str

    @property
    def path(self) -> str:
        return f"{self.owner}/{self.project}"

    @property
    def https_url(self) -> str:
        return f"https://{self.domain}/{self.path}.git"

    @property
    def browse_url(self) -> str:
        return f"https://{self.domain}/{self.path}"

    @property
    def bugs_url(self) -> str:
        provider = _PROVIDERS[self.host_type]
        return provider.bugs_template.format(domain=self.domain, owner=self.owner, project=self.project)


def _from_path(provider: _Provider, path: str) -> HostedRepo | None:
    path = path.split("#", 1)[0].strip("/")
    parts = [p for p in path.split("/") if p]
    if len(parts) < 2:
        return None
    owner, project = parts[0], parts[1]
    if project.endswith(".git"):
        project = project[: -len(".git")]
    if not owner or not project:
        return None
    return HostedRepo(provider.host_type, provider.domain, owner, project)


def _provider_for(host: str, extra_hosts: Sequence[str]) -> _Provider | None:
    provider = _BY_DOMAIN.get(host)
    if provider is None and host in (h.lower() for h in extra_hosts):
        # Self-hosted domains are GitHub Enterprise installs.
        github = _PROVIDERS["github"]
        provider = _Provider(github.host_type, host, github.bugs_template)
    return provider


def resolve_url(url: str | None, extra_hosts: Sequence[str] = ()) -> HostedRepo | None:
    """
    Parse a repository URL or shorthand.

    Recognized forms include `https://github.com/o/p.git`, `git+ssh://git@github.com/o/p.git`,
    `git@github.com:o/p.git`, `github:o/p`, `gitlab:o/p`, `bitbucket:o/p` and bare `o/p`
    (GitHub). URLs on any of `extra_hosts` are read as GitHub Enterprise repositories.
    Returns `None` for anything else.
    """
    if not url:
        return None
    url = url.strip()

    shortcut, sep, rest = url.partition(":")
    if sep and shortcut in _PROVIDERS and not rest.startswith("//"):
        return _from_path(_PROVIDERS[shortcut], rest)

    m = _BARE_SHORTCUT.match(url)
    if m and "://" not in url and ":" not in url:
        return _from_path(_PROVIDERS["github"], f"{m.group('owner')}/{m.group('project')}")

    if "://" in url:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https", "git", "ssh", "git+https", "git+http", "git+ssh"):
            return None
        host = (parts.hostname or "").lower()
        if host.startswith("www."):
            host = host[len("www.") :]
        provider = _provider_for(host, extra_hosts)
        if provider is None:
            return None
        return _from_path(provider, parts.path)

    m = _SCP_LIKE.match(url)
    if m:
        provider = _provider_for(m.group("host").lower(), extra_hosts)
        if provider is None:
            return None
        return _from_path(provider, m.group("path"))

    return None


class RepoCache:
    """Memoizes `resolve_url` results, including misses, for one run."""

    def __init__(self, extra_hosts: Sequence[str] = ()) -> None:
        self._extra_hosts = tuple(extra_hosts)
        self._entries: dict[str, HostedRepo | None] = {}

    def resolve(self, url: str) -> HostedRepo | None:
        if url not in self._entries:
            self._entries[url] = resolve_url(url, self._extra_hosts)
        return self._entries[url]

    def __len__(self) -> int:
        return len(self._entries)
