"""Runtime settings for readme-gen."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path

import typer

from readmegen.core.errors import UsageError

APP_NAME = "readme-gen"

CONFIG_DIR_ENV = "READMEGEN_CONFIG_DIR"
TIMEOUT_ENV = "READMEGEN_TIMEOUT"

DEFAULT_OUTPUT = "README.md"
DEFAULT_TIMEOUT = 30.0
STORE_FILENAME = "config.json"


def _default_config_dir() -> Path:
    return Path(typer.get_app_dir(APP_NAME))


@dataclass(kw_only=True)
class Settings:
    """
    Settings for a readme-gen session.

    Attributes:
        config_dir: Directory holding the saved-profile store.
        timeout: Timeout in seconds applied to every HTTP request.
        default_output: Output path used when none is given.
    """

    config_dir: Path = field(default_factory=_default_config_dir)
    timeout: float = DEFAULT_TIMEOUT
    default_output: str = DEFAULT_OUTPUT

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}.")
        if not self.default_output:
            raise ValueError("default_output must not be empty.")

    @property
    def store_path(self) -> Path:
        return self.config_dir / STORE_FILENAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``READMEGEN_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        config_dir = env.get(CONFIG_DIR_ENV)
        if config_dir:
            kwargs["config_dir"] = Path(config_dir).expanduser()

        raw_timeout = env.get(TIMEOUT_ENV)
        if raw_timeout:
            try:
                kwargs["timeout"] = float(raw_timeout)
            except ValueError:
                raise UsageError(
                    f"{TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}."
                ) from None

        try:
            return cls(**kwargs)  # type: ignore[arg-type]
        except ValueError as exc:
            raise UsageError(str(exc)) from exc
