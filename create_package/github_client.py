"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads
- Works out which token to authenticate with
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from create_package import vcs

log = logging.getLogger(__name__)


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    name: str
    html_url: str
    clone_url: str
    default_branch: str


def _repo_info(owner: str, name: str, data: Mapping[str, Any]) -> RepoInfo:
    return RepoInfo(
        owner=owner,
        name=name,
        html_url=data["html_url"],
        clone_url=data["clone_url"],
        default_branch=data.get("default_branch") or "main",
    )


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com") -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "create-package",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), json=json_body, timeout=30)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {payload.get('message', payload)}")
        if r.status_code == 204:
            return None
        return r.json()

    def get_repo(self, owner: str, name: str) -> RepoInfo | None:
        """
        Return RepoInfo if the repo exists and is accessible; otherwise None.
        """
        try:
            data = self._request("GET", f"/repos/{owner}/{name}")
        except GitHubError as e:
            msg = str(e).lower()
            if "404" in msg or "not found" in msg:
                return None
            raise
        return _repo_info(owner, name, data)

    def create_repo(
        self,
        *,
        owner: str,
        name: str,
        private: bool,
        description: str = "",
        homepage: str | None = None,
    ) -> RepoInfo:
        """
        Create a new repository under either:
        - the authenticated user (if owner matches the viewer login), OR
        - an organization (if owner is an org).
        """
        viewer = self._request("GET", "/user")
        viewer_login = str(viewer.get("login") or "")

        body: dict[str, Any] = {
            "name": name,
            "private": private,
            "description": description,
            "auto_init": False,
            "has_issues": True,
            "has_projects": False,
            "has_wiki": False,
        }
        if homepage:
            body["homepage"] = homepage

        if owner == viewer_login:
            data = self._request("POST", "/user/repos", json_body=body)
        else:
            data = self._request("POST", f"/orgs/{owner}/repos", json_body=body)
        return _repo_info(owner, name, data)

    def ensure_repo(self, **kwargs: Any) -> RepoInfo:
        """Return the existing repository, creating it first if needed."""
        existing = self.get_repo(kwargs["owner"], kwargs["name"])
        if existing is not None:
            log.info("  Using existing GitHub repository %s", existing.html_url)
            return existing
        repo = self.create_repo(**kwargs)
        log.info("  Created GitHub repository %s", repo.html_url)
        return repo


def api_base_for(domain: str) -> str:
    """REST base URL for github.com or a GitHub Enterprise `domain`."""
    if domain == "github.com":
        return "https://api.github.com"
    return f"https://{domain}/api/v3"


def find_token(directory: Path, host: str, env: Mapping[str, str]) -> str | None:
    """
    Look up a GitHub token: `GITHUB_TOKEN`, then git's credential helper for `host`.
    """
    token = (env.get("GITHUB_TOKEN") or "").strip()
    if token:
        return token
    try:
        answer = vcs.credential_fill(directory, host)
    except vcs.VcsError as e:
        log.debug("No stored credentials for %s: %s", host, e)
        return None
    return answer.get("password") or None
