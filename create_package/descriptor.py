"""
descriptor.py

Responsibility: Typed model of a package descriptor (`package.json`) and its JSON I/O.

The descriptor is an explicit record with optional fields. Absence is always `None`
(never an empty string), so callers test presence with `is None`.

Keys this tool does not reason about (`version`, `main`, `dependencies`, ...) are kept
in `extra` and written back in their original position.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "package.json"

# Canonical order for known keys that were not present in the source file.
_KNOWN_KEYS = (
    "name",
    "description",
    "author",
    "license",
    "scripts",
    "devDependencies",
    "config",
    "repository",
    "bugs",
    "homepage",
)


class DescriptorError(ValueError):
    pass


@dataclass
class Repository:
    type: str | None = None
    url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Any) -> Repository:
        # npm allows the shorthand string form, e.g. "github:owner/project".
        if isinstance(raw, str):
            return cls(type="git", url=raw)
        if not isinstance(raw, dict):
            raise DescriptorError("`repository` must be a string or an object.")
        rest = {k: v for k, v in raw.items() if k not in ("type", "url")}
        return cls(type=raw.get("type"), url=raw.get("url"), extra=rest)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type is not None:
            out["type"] = self.type
        if self.url is not None:
            out["url"] = self.url
        out.update(self.extra)
        return out


@dataclass
class Bugs:
    url: str | None = None
    email: str | None = None

    @classmethod
    def from_json(cls, raw: Any) -> Bugs:
        if isinstance(raw, str):
            return cls(url=raw)
        if not isinstance(raw, dict):
            raise DescriptorError("`bugs` must be a string or an object.")
        return cls(url=raw.get("url"), email=raw.get("email"))

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.url is not None:
            out["url"] = self.url
        if self.email is not None:
            out["email"] = self.email
        return out


@dataclass
class Descriptor:
    """Package metadata. Every field is optional; `None` means the key is absent."""

    name: str | None = None
    description: str | None = None
    author: str | dict[str, Any] | None = None
    license: str | None = None
    scripts: dict[str, str] | None = None
    dev_dependencies: dict[str, str] | None = None
    config: dict[str, Any] | None = None
    repository: Repository | None = None
    bugs: Bugs | None = None
    homepage: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    # Top-level key order as read from disk; used to write keys back in place.
    key_order: list[str] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> Descriptor:
        if not isinstance(data, dict):
            raise DescriptorError("Package descriptor must be a JSON object at the top level.")

        def _mapping(key: str) -> dict[str, Any] | None:
            value = data.get(key)
            if value is None:
                return None
            if not isinstance(value, dict):
                raise DescriptorError(f"`{key}` must be an object when provided.")
            return dict(value)

        repository = data.get("repository")
        bugs = data.get("bugs")
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            author=data.get("author"),
            license=data.get("license"),
            scripts=_mapping("scripts"),
            dev_dependencies=_mapping("devDependencies"),
            config=_mapping("config"),
            repository=Repository.from_json(repository) if repository is not None else None,
            bugs=Bugs.from_json(bugs) if bugs is not None else None,
            homepage=data.get("homepage"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            key_order=list(data.keys()),
        )

    def _known_values(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "license": self.license,
            "scripts": self.scripts,
            "devDependencies": self.dev_dependencies,
            "config": self.config,
            "repository": self.repository.to_json() if self.repository is not None else None,
            "bugs": self.bugs.to_json() if self.bugs is not None else None,
            "homepage": self.homepage,
        }

    def to_json(self) -> dict[str, Any]:
        """
        Return a plain JSON-ready mapping.

        Keys read from disk keep their position; newly filled keys follow in canonical order.
        """
        known = {k: v for k, v in self._known_values().items() if v is not None}
        out: dict[str, Any] = {}
        for key in self.key_order:
            if key in known:
                out[key] = known[key]
            elif key in self.extra:
                out[key] = self.extra[key]
        for key in _KNOWN_KEYS:
            if key in known and key not in out:
                out[key] = known[key]
        for key, value in self.extra.items():
            if key not in out:
                out[key] = value
        return out

    def copy(self) -> Descriptor:
        return copy.deepcopy(self)


def dumps(descriptor: Descriptor) -> str:
    return json.dumps(descriptor.to_json(), indent=2, ensure_ascii=False) + "\n"


def load(directory: str | Path) -> Descriptor:
    """
    Read `package.json` from `directory`.

    A missing or unparsable file yields an empty descriptor.
    """
    path = Path(directory) / DESCRIPTOR_FILENAME
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("No descriptor at %s", path)
        return Descriptor()
    try:
        return Descriptor.from_json(json.loads(text))
    except (json.JSONDecodeError, DescriptorError) as e:
        log.warning("Ignoring unreadable descriptor %s: %s", path, e)
        return Descriptor()


def save(descriptor: Descriptor, directory: str | Path) -> Path:
    path = Path(directory) / DESCRIPTOR_FILENAME
    path.write_text(dumps(descriptor), encoding="utf-8", newline="\n")
    return path
