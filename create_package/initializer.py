"""
initializer.py

Responsibility: Run the package initialisation flow end to end.

High-level flow:
1) Load `package.json` from the package and the template (missing -> empty)
2) (Interactive) confirm name and description
3) Merge -> write `package.json` (interactive runs ask before writing)
4) Copy boilerplate and generate README, never overwriting
5) For a package with a hosted repository URL and no local git repo yet:
   git init, install, commit, create the GitHub repo, push, add the CI token

One `RepoCache` is created per run and handed to every step that resolves the repository URL.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from create_package import descriptor as descriptor_io
from create_package import vcs
from create_package.config import Config
from create_package.descriptor import Descriptor
from create_package.github_client import GitHubClient, api_base_for, find_token
from create_package.hosted_git import HostedRepo, RepoCache
from create_package.merger import DESCRIPTION_PLACEHOLDER, MergeContext, merge
from create_package.naming import derive_name
from create_package.prompt import Aborted, InputFn, ask, confirm
from create_package.renderer import copy_boilerplate, default_boilerplate, write_readme

log = logging.getLogger(__name__)

COMMIT_TRAILER = "Automatically generated by create-package"
# Scaffolded entry files stay out of the initial commit.
UNCOMMITTED_FILES = ("index.js", "test/test.js")


def _headline(msg: str, *args: object) -> None:
    log.info(msg, *args, extra={"headline": True})


def _ask_name_and_description(pj: Descriptor, context: MergeContext, input_fn: InputFn | None) -> None:
    name = pj.name or derive_name(context.directory, context.naming_prefixes)
    pj.name = ask("package name:", name, input_fn=input_fn)
    pj.description = ask("description:", pj.description or DESCRIPTION_PLACEHOLDER, input_fn=input_fn)


def write_descriptor(pj: Descriptor, package_dir: Path, *, interactive: bool, input_fn: InputFn | None = None) -> Path:
    """
    Persist the merged descriptor. Interactive runs show it first and raise Aborted on "no".
    """
    text = descriptor_io.dumps(pj)
    path = package_dir / descriptor_io.DESCRIPTOR_FILENAME
    if interactive:
        log.info("About to write to %s:\n\n%s", path, text)
        if not confirm("Is this OK?", input_fn=input_fn):
            raise Aborted("Aborted.")
    descriptor_io.save(pj, package_dir)
    if interactive:
        log.info("  Saved %s", descriptor_io.DESCRIPTOR_FILENAME)
    else:
        log.info("  Wrote to %s:\n\n%s", path, text)
    return path


def add_ci_token(package_dir: Path, repo: HostedRepo, token: str) -> bool:
    """Store the token as an encrypted Travis-CI variable and push the config change."""
    try:
        vcs.travis_encrypt(package_dir, name="GH_TOKEN", value=token, repo_path=repo.path)
        _headline("Added encrypted GitHub access token to Travis-CI config")
        vcs.add(package_dir, [".travis.yml"])
        vcs.commit(package_dir, "ci(Travis): Add GitHub access token to config", COMMIT_TRAILER)
        vcs.push(package_dir)
    except vcs.VcsError as e:
        log.error("Could not add CI token: %s", e)
        return False
    return True


def setup_repository(
    pj: Descriptor,
    package_dir: Path,
    *,
    config: Config,
    cache: RepoCache,
    env: Mapping[str, str],
) -> bool:
    """
    Initialise git and the hosted repository. Returns False when there was nothing to do.

    Git failures raise VcsError and GitHub API failures raise GitHubError.
    """
    repo = None
    if pj.repository is not None and pj.repository.url:
        repo = cache.resolve(pj.repository.url)
    if pj.repository is None or pj.repository.type != "git" or repo is None:
        return False
    if vcs.has_local_repo(package_dir):
        return False

    log.info("")
    _headline("Setting up project...")
    vcs.init(package_dir)
    try:
        vcs.npm_install(package_dir)
    except vcs.VcsError as e:
        log.warning("Skipping dependency install: %s", e)
    vcs.add(package_dir)
    vcs.unstage(package_dir, UNCOMMITTED_FILES)
    vcs.commit(package_dir, "Initial commit", COMMIT_TRAILER)
    vcs.rename_branch(package_dir, config.branch)
    vcs.add_remote(package_dir, repo.https_url)

    if repo.host_type != "github":
        log.info("  Not a GitHub repository; create %s and push manually", repo.browse_url)
        return True
    token = find_token(package_dir, repo.domain, env)
    if not token:
        log.warning("No GitHub token found (set GITHUB_TOKEN); skipping repository creation and push")
        return True

    client = GitHubClient(token, api_base=api_base_for(repo.domain))
    client.ensure_repo(
        owner=repo.owner,
        name=repo.project,
        private=config.private,
        description=pj.description or "",
        homepage=pj.homepage,
    )
    vcs.push(package_dir, "origin", config.branch)
    add_ci_token(package_dir, repo, token)
    return True


def run(
    package_dir: str | Path,
    *,
    config: Config,
    interactive: bool = True,
    input_fn: InputFn | None = None,
    env: Mapping[str, str] | None = None,
) -> Descriptor:
    """
    Initialise the package in `package_dir` from `config.template`. Returns the written descriptor.

    Raises PromptError if input cannot be read and Aborted if the user declines.
    """
    env = os.environ if env is None else env
    package_dir = Path(package_dir).resolve()
    template_dir = Path(config.template)

    _headline("Setting up project with create-package defaults...")
    log.info("  Press ^C at any time to quit.\n")

    existing = descriptor_io.load(package_dir)
    template = descriptor_io.load(template_dir)
    cache = RepoCache(extra_hosts=(config.host,))
    context = MergeContext(
        directory=package_dir,
        remote_account=config.github,
        naming_prefixes=config.namespaces,
        has_local_repo=vcs.has_local_repo(package_dir),
        host=config.host,
        registry_url=config.registry_url,
        default_license=config.default_license,
    )

    if interactive:
        _ask_name_and_description(existing, context, input_fn)
    pj = merge(existing, template, context, cache=cache)

    write_descriptor(pj, package_dir, interactive=interactive, input_fn=input_fn)

    copy_boilerplate(default_boilerplate(pj.license), template_dir=template_dir, package_dir=package_dir)
    write_readme(pj, template_dir=template_dir, package_dir=package_dir, cache=cache)

    setup_repository(pj, package_dir, config=config, cache=cache, env=env)
    log.info("")
    _headline("Done.")
    return pj
