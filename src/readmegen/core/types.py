"""Shared enums and aliases."""

from __future__ import annotations

from enum import Enum
from typing import Any, Final, TypeAlias

Answers: TypeAlias = dict[str, Any]
"""Prompt name to answer, in prompt order."""

DEFAULT_TEMPLATE_FILENAME: Final = "readme-template.md"
DEFAULT_CONFIG_FILENAME: Final = "readme-config.json"
BUILTIN_NAME: Final = "<built-in>"
DEFAULT_SEPARATOR: Final = ", "


class PromptType(str, Enum):
    """Kinds of interactive prompt a config document may declare."""

    TEXT = "text"
    CONFIRM = "confirm"
    SELECT = "select"
    MULTISELECT = "multiselect"

    @property
    def needs_options(self) -> bool:
        return self in (PromptType.SELECT, PromptType.MULTISELECT)


class ProfileType(str, Enum):
    """Shapes a saved profile can take."""

    EXPLICIT = "explicit"
    BASE = "base"

    @property
    def label(self) -> str:
        labels: dict[ProfileType, str] = {
            ProfileType.EXPLICIT: "Explicit Sources",
            ProfileType.BASE: "Base Source",
        }
        return labels[self]


class Cancel(Enum):
    """Single-member enum used as the cancellation token."""

    TOKEN = "cancel"


CANCEL: Final = Cancel.TOKEN
