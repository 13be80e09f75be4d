"""
renderer.py

Responsibility: Copy boilerplate from the template directory and generate the README.

Rules:
- A destination that already exists is never overwritten.
- A copy failure is reported for that file only; the remaining files are still copied.
- README placeholders are `{{dotted.path}}` references into the descriptor. Placeholders
  with no matching value are left as they are.

This module intentionally does NOT know about git, GitHub, or prompting.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from create_package.descriptor import Descriptor
from create_package.hosted_git import RepoCache

log = logging.getLogger(__name__)

README_FILENAME = "README.md"


class CopyError(RuntimeError):
    pass


@dataclass(frozen=True)
class Boilerplate:
    """A template file and where it lands in the package."""

    src: str
    dest: str
    message: str | None = None


def default_boilerplate(license_id: str | None) -> list[Boilerplate]:
    files: list[Boilerplate] = []
    if license_id:
        files.append(Boilerplate(f"LICENSE-{license_id}", "LICENSE"))
    files += [
        Boilerplate("gitignore", ".gitignore"),
        Boilerplate("travis.yml", ".travis.yml"),
        Boilerplate("index.js", "index.js"),
        Boilerplate("test.js", "test/test.js"),
        Boilerplate("CODE_OF_CONDUCT.md", "CODE_OF_CONDUCT.md", message="Copied Code of Conduct"),
    ]
    return files


def copy_file(item: Boilerplate, *, template_dir: Path, package_dir: Path) -> bool:
    """
    Copy one template file. Returns False if the destination already existed.
    """
    src = template_dir / item.src
    dst = package_dir / item.dest
    if dst.exists():
        log.debug("Keeping existing %s", dst)
        return False
    if not src.is_file():
        raise CopyError(f"Template file not found: {src}")
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as e:
        raise CopyError(f"Failed copying {src} -> {dst}: {e}") from e
    log.info("  %s", item.message or f"Copied “{item.dest}”")
    return True


def copy_boilerplate(items: Iterable[Boilerplate], *, template_dir: Path, package_dir: Path) -> list[str]:
    """
    Copy every item, logging (not raising) individual failures.

    Returns the destinations that were written.
    """
    written: list[str] = []
    for item in items:
        try:
            if copy_file(item, template_dir=template_dir, package_dir=package_dir):
                written.append(item.dest)
        except CopyError as e:
            log.warning("%s", e)
    return written


def _to_text(value: Any) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(v) for v in value)
    return str(value)


def fill(template: str, values: Mapping[str, Any], parent: str = "") -> str:
    """
    Replace `{{dotted.path}}` placeholders with values from a nested mapping.

    >>> fill("{{name}} by {{author.name}}", {"name": "x", "author": {"name": "me"}})
    'x by me'
    """
    for key, value in values.items():
        path = f"{parent}.{key}" if parent else str(key)
        if isinstance(value, Mapping):
            template = fill(template, value, path)
            continue
        text = _to_text(value)
        template = template.replace("{{" + path + "}}", text)
    return template


def make_readme(descriptor: Descriptor, template_dir: Path, *, cache: RepoCache) -> str:
    readme = (template_dir / README_FILENAME).read_text(encoding="utf-8")
    readme = fill(readme, descriptor.to_json())
    repo = None
    if descriptor.repository is not None and descriptor.repository.url:
        repo = cache.resolve(descriptor.repository.url)
    if repo is not None:
        readme = fill(readme, {"repoPath": repo.path})
    return readme


def write_readme(descriptor: Descriptor, *, template_dir: Path, package_dir: Path, cache: RepoCache) -> bool:
    """Generate README.md unless the package already has one."""
    dst = package_dir / README_FILENAME
    if dst.exists():
        return False
    try:
        text = make_readme(descriptor, template_dir, cache=cache)
    except OSError as e:
        log.warning("Could not read README template: %s", e)
        return False
    dst.write_text(text, encoding="utf-8", newline="\n")
    log.info("  Generated README")
    return True
