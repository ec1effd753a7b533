"""Saved template profiles.

A profile is a named base source or a named explicit template/config pair.
The store also remembers which profile is the default. Persisted layout::

    {
      "templates": {
        "work": {"type": "base", "baseSource": "https://github.com/o/r"},
        "docs": {"type": "explicit", "templateSource": "...", "configSource": "..."}
      },
      "defaultTemplateName": "work"
    }
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, TypeAlias, override

from readmegen.core.errors import (
    NotFoundError,
    ProfileExistsError,
    ReadError,
    SchemaError,
    UsageError,
    WriteError,
)
from readmegen.core.sources import normalize_source
from readmegen.core.types import BUILTIN_NAME, ProfileType

logger = logging.getLogger(__name__)


@dataclass(kw_only=True, frozen=True)
class ExplicitProfile:
    """Profile pointing at a template source and a config source."""

    template_source: str
    config_source: str

    @property
    def type(self) -> ProfileType:
        return ProfileType.EXPLICIT

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "templateSource": self.template_source,
            "configSource": self.config_source,
        }


@dataclass(kw_only=True, frozen=True)
class BaseProfile:
    """Profile pointing at a directory or repository holding both files."""

    base_source: str

    @property
    def type(self) -> ProfileType:
        return ProfileType.BASE

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "baseSource": self.base_source}


Profile: TypeAlias = ExplicitProfile | BaseProfile


def profile_from_dict(name: str, raw: Any) -> Profile:
    """Rebuild a profile from its persisted form."""
    if not isinstance(raw, dict):
        raise SchemaError(f"Saved template {name!r} is not an object.")
    kind = raw.get("type")
    if kind == ProfileType.EXPLICIT.value:
        template_source, config_source = raw.get("templateSource"), raw.get("configSource")
        if isinstance(template_source, str) and isinstance(config_source, str):
            return ExplicitProfile(template_source=template_source, config_source=config_source)
    elif kind == ProfileType.BASE.value:
        base_source = raw.get("baseSource")
        if isinstance(base_source, str):
            return BaseProfile(base_source=base_source)
    raise SchemaError(f"Saved template {name!r} has an invalid shape: {raw!r}")


@dataclass(kw_only=True)
class StoreData:
    """In-memory image of the persisted store."""

    templates: dict[str, Profile]
    default_name: str = ""


class ProfileStore(ABC):
    """CRUD over saved profiles. Subclasses decide where the data lives."""

    @abstractmethod
    def _load(self) -> StoreData: ...

    @abstractmethod
    def _save(self, data: StoreData) -> None: ...

    def exists(self, name: str) -> bool:
        return name in self._load().templates

    def get(self, name: str) -> Profile:
        """Return the profile saved under ``name``."""
        if name == BUILTIN_NAME:
            raise UsageError(
                f"{BUILTIN_NAME!r} is the built-in template and cannot be requested by name. "
                "Run without any template options to use it."
            )
        try:
            return self._load().templates[name]
        except KeyError:
            raise NotFoundError(f'Template "{name}" not found.') from None

    def list(self) -> dict[str, Profile]:
        return dict(self._load().templates)

    def add(self, name: str, source: str, config_source: str | None = None) -> Profile:
        """Save a profile.

        With both sources the profile is explicit, with one it is a base
        profile. The first profile ever saved becomes the default.
        """
        if name == BUILTIN_NAME:
            raise UsageError(f"{BUILTIN_NAME!r} is reserved and cannot be used as a template name.")
        if not name:
            raise UsageError("Template name must not be empty.")

        data = self._load()
        if name in data.templates:
            raise ProfileExistsError(
                f'Template name "{name}" already exists. Remove it first or choose another name.'
            )

        profile: Profile
        if config_source is not None:
            profile = ExplicitProfile(
                template_source=normalize_source(source),
                config_source=normalize_source(config_source),
            )
        else:
            profile = BaseProfile(base_source=normalize_source(source))

        data.templates[name] = profile
        if len(data.templates) == 1:
            data.default_name = name
        self._save(data)
        logger.debug("Saved template %r as %s", name, profile.type.value)
        return profile

    def remove(self, name: str) -> bool:
        """Delete a profile. Returns whether it was the default."""
        if name == BUILTIN_NAME:
            raise UsageError(f"{BUILTIN_NAME!r} is the built-in template and cannot be removed.")

        data = self._load()
        if name not in data.templates:
            raise NotFoundError(f'Template "{name}" not found.')

        del data.templates[name]
        was_default = data.default_name == name
        if was_default:
            data.default_name = ""
        self._save(data)
        return was_default

    def default_name(self) -> str:
        """Name of the default profile, or ``""`` when none is set."""
        data = self._load()
        if data.default_name and data.default_name not in data.templates:
            logger.warning(
                'Default template "%s" no longer exists. Clearing default setting.',
                data.default_name,
            )
            data.default_name = ""
            self._save(data)
        return data.default_name

    def default(self) -> Profile | None:
        name = self.default_name()
        return self._load().templates[name] if name else None

    def set_default(self, name: str) -> None:
        if name == BUILTIN_NAME:
            raise UsageError(
                f"{BUILTIN_NAME!r} cannot be set as default; it is used when no default is set."
            )
        data = self._load()
        if name not in data.templates:
            raise NotFoundError(f'Template "{name}" not found. Cannot set as default.')
        data.default_name = name
        self._save(data)


class MemoryProfileStore(ProfileStore):
    """Store kept in memory only."""

    def __init__(self) -> None:
        self._data = StoreData(templates={})

    @override
    def _load(self) -> StoreData:
        return StoreData(templates=dict(self._data.templates), default_name=self._data.default_name)

    @override
    def _save(self, data: StoreData) -> None:
        self._data = StoreData(templates=dict(data.templates), default_name=data.default_name)


class JsonProfileStore(ProfileStore):
    """Store persisted as a JSON file, created on first write."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @override
    def _load(self) -> StoreData:
        if not self.path.exists():
            return StoreData(templates={})
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Failed to read saved templates file: {self.path}") from exc
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Saved templates file is not valid JSON: {self.path}") from exc

        if not isinstance(raw, dict):
            raise SchemaError(f"Saved templates file must hold a JSON object: {self.path}")
        templates = raw.get("templates", {})
        if not isinstance(templates, dict):
            raise SchemaError(f"'templates' must be an object in {self.path}")
        default_name = raw.get("defaultTemplateName", "")

        return StoreData(
            templates={name: profile_from_dict(name, t) for name, t in templates.items()},
            default_name=default_name if isinstance(default_name, str) else "",
        )

    @override
    def _save(self, data: StoreData) -> None:
        payload = {
            "templates": {name: p.to_dict() for name, p in data.templates.items()},
            "defaultTemplateName": data.default_name,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Failed to save templates file: {self.path}") from exc
