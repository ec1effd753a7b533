"""Decide which template and config sources a run uses."""

from __future__ import annotations

from dataclasses import dataclass
import importlib.resources as ilr
import logging
from pathlib import Path
import re
from typing import TYPE_CHECKING

from readmegen.core.errors import UnsupportedSourceError, UsageError
from readmegen.core.types import (
    BUILTIN_NAME,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_TEMPLATE_FILENAME,
    ProfileType,
)

if TYPE_CHECKING:
    from readmegen.core.profiles import Profile, ProfileStore

logger = logging.getLogger(__name__)

_GITHUB_REPO_RE = re.compile(r"^https?://github\.com/([^/]+/[^/]+?)(?:\.git)?/?$", re.IGNORECASE)
_RAW_GITHUB_BASE = "https://raw.githubusercontent.com/{repo}/main/"


def is_url(source: str) -> bool:
    """Whether ``source`` is an HTTP(S) URL rather than a local path."""
    return source.startswith(("http://", "https://"))


def normalize_source(source: str) -> str:
    """Leave URLs alone and turn local paths into absolute paths."""
    if is_url(source):
        return source
    return str(Path(source).expanduser().resolve())


def raw_github_base(url: str) -> str | None:
    """Map a GitHub repository URL to its raw-content base on branch ``main``."""
    match = _GITHUB_REPO_RE.match(url)
    if match is None:
        return None
    return _RAW_GITHUB_BASE.format(repo=match.group(1))


def resolve_from_base(base: str) -> tuple[str, str]:
    """Derive the template and config sources from a single base source.

    Returns:
        The ``(template_source, config_source)`` pair.

    Raises:
        UnsupportedSourceError: ``base`` is a URL but not a GitHub repository.
    """
    if is_url(base):
        raw_base = raw_github_base(base)
        if raw_base is None:
            raise UnsupportedSourceError(
                f"Invalid or unsupported GitHub repository URL format: {base}\n"
                "Expected format like: https://github.com/username/repository"
            )
        return raw_base + DEFAULT_TEMPLATE_FILENAME, raw_base + DEFAULT_CONFIG_FILENAME

    directory = Path(base).expanduser().resolve()
    return str(directory / DEFAULT_TEMPLATE_FILENAME), str(directory / DEFAULT_CONFIG_FILENAME)


def builtin_directory() -> Path:
    """Directory of the template pair shipped with the package."""
    return Path(str(ilr.files("readmegen.templates")))


@dataclass(kw_only=True)
class SourceRequest:
    """
    What the user asked for. At most one sourcing mode may be set.

    Attributes:
        template: Explicit template source.
        config: Explicit config source.
        name: Saved profile name.
        base: Base directory or repository URL.
    """

    template: str | None = None
    config: str | None = None
    name: str | None = None
    base: str | None = None

    def validate(self) -> None:
        if (self.template is None) != (self.config is None):
            raise UsageError("--template and --config must be used together.")

        modes = [
            flag
            for flag, given in (
                ("--template/--config", self.template is not None),
                ("--name", self.name is not None),
                ("a base source argument", self.base is not None),
            )
            if given
        ]
        if len(modes) > 1:
            raise UsageError(f"Cannot combine {' and '.join(modes)}; choose one template source.")


@dataclass(kw_only=True, frozen=True)
class ResolvedSources:
    """
    The concrete pair of sources a run will fetch.

    Attributes:
        template_source: Local path or URL of the template.
        config_source: Local path or URL of the config.
        description: Where the pair came from, for display.
        builtin: Whether this is the pair shipped with the package.
    """

    template_source: str
    config_source: str
    description: str
    builtin: bool = False


def _from_profile(name: str, profile: Profile, label: str) -> ResolvedSources:
    if profile.type is ProfileType.BASE:
        template, config = resolve_from_base(profile.base_source)  # type: ignore[union-attr]
    else:
        template = profile.template_source  # type: ignore[union-attr]
        config = profile.config_source  # type: ignore[union-attr]
    return ResolvedSources(
        template_source=template,
        config_source=config,
        description=f'{label} "{name}"',
    )


def resolve_sources(
    request: SourceRequest,
    store: ProfileStore,
    *,
    builtin_dir: Path | None = None,
) -> ResolvedSources:
    """Pick the template and config sources for a run.

    Order: named profile, explicit pair, base source, default profile and
    finally the built-in pair.

    Raises:
        UsageError: Conflicting inputs or the reserved built-in name.
        NotFoundError: The named profile does not exist.
        UnsupportedSourceError: A base URL is not a GitHub repository.
    """
    request.validate()

    if request.name is not None:
        return _from_profile(request.name, store.get(request.name), "saved template")

    if request.template is not None and request.config is not None:
        return ResolvedSources(
            template_source=normalize_source(request.template),
            config_source=normalize_source(request.config),
            description="explicit sources",
        )

    if request.base is not None:
        template, config = resolve_from_base(request.base)
        return ResolvedSources(
            template_source=template,
            config_source=config,
            description=f"base source {request.base}",
        )

    default_name = store.default_name()
    if default_name:
        return _from_profile(default_name, store.get(default_name), "default template")

    directory = builtin_directory() if builtin_dir is None else builtin_dir
    logger.debug("No template selected; using the built-in pair in %s", directory)
    return ResolvedSources(
        template_source=str(directory / DEFAULT_TEMPLATE_FILENAME),
        config_source=str(directory / DEFAULT_CONFIG_FILENAME),
        description=f"{BUILTIN_NAME} template",
        builtin=True,
    )
