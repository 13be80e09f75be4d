"""
merger.py

Responsibility: Reconcile an existing package descriptor with the template's defaults.

Every step only fills what is absent, so merging an already merged descriptor with the
same context changes nothing. Steps run in a fixed order because later ones read fields
fixed by earlier ones (the repository slug needs the final name, `homepage` needs the
repository URL).

This module does no I/O of its own. Reading the local `origin` remote is delegated to
the `read_origin` collaborator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from create_package import vcs
from create_package.descriptor import Bugs, Descriptor, Repository
from create_package.hosted_git import RepoCache
from create_package.naming import derive_name, repo_slug

log = logging.getLogger(__name__)

DESCRIPTION_PLACEHOLDER = "🆕"
DEFAULT_LICENSE = "GPL-3.0"
DEFAULT_HOST = "github.com"
DEFAULT_REGISTRY_URL = "https://npmjs.com/package/"


@dataclass(frozen=True)
class MergeContext:
    directory: Path
    remote_account: str | None = None
    naming_prefixes: Sequence[str] = ()
    has_local_repo: bool = False
    host: str = DEFAULT_HOST
    registry_url: str = DEFAULT_REGISTRY_URL
    default_license: str = DEFAULT_LICENSE


def _fill_missing_keys(existing: dict | None, defaults: dict | None) -> dict | None:
    if not defaults:
        return existing
    merged = dict(existing) if existing is not None else {}
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
    return merged


def synthesize_repo_url(host: str, account: str, name: str) -> str:
    return f"https://{host}/{account}/{repo_slug(name)}.git"


def _resolve_repository(
    pj: Descriptor,
    context: MergeContext,
    read_origin: Callable[[Path], str | None],
) -> Repository:
    url: str | None = None
    if context.has_local_repo:
        try:
            url = read_origin(context.directory)
        except vcs.VcsError as e:
            log.warning("Could not read origin remote: %s", e)
        url = url.strip() if url else None
    if not url and context.remote_account and pj.name:
        url = synthesize_repo_url(context.host, context.remote_account, pj.name)
    # No url at all rather than an empty one.
    return Repository(type="git", url=url or None)


def merge(
    existing: Descriptor,
    template: Descriptor,
    context: MergeContext,
    *,
    cache: RepoCache | None = None,
    read_origin: Callable[[Path], str | None] | None = None,
) -> Descriptor:
    """
    Return `existing` completed with defaults from `template`.

    Neither input is modified. Present values always win over template values, including
    individual keys of `scripts`, `devDependencies` and `config`.
    """
    pj = existing.copy()
    read_origin = read_origin or vcs.remote_origin_url
    cache = cache if cache is not None else RepoCache(extra_hosts=(context.host,))

    if pj.name is None:
        pj.name = derive_name(context.directory, context.naming_prefixes)

    if pj.description is None:
        pj.description = DESCRIPTION_PLACEHOLDER

    if pj.author is None and template.author is not None:
        pj.author = template.copy().author

    if pj.license is None:
        pj.license = template.license or context.default_license

    pj.scripts = _fill_missing_keys(pj.scripts, template.scripts)
    pj.dev_dependencies = _fill_missing_keys(pj.dev_dependencies, template.dev_dependencies)
    pj.config = _fill_missing_keys(pj.config, template.config)

    if pj.repository is None:
        pj.repository = _resolve_repository(pj, context, read_origin)

    if pj.repository.url:
        repo = cache.resolve(pj.repository.url)
        if repo is None:
            log.warning("Unrecognized repository URL %r; not deriving bugs/homepage", pj.repository.url)
        else:
            if pj.bugs is None:
                pj.bugs = Bugs(url=repo.bugs_url)
            if pj.homepage is None:
                pj.homepage = f"{context.registry_url}{pj.name}"

    return pj
