"""Shared fixtures for the readme-gen test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from readmegen.core.config import PromptSpec
from readmegen.core.profiles import MemoryProfileStore
from readmegen.core.types import DEFAULT_CONFIG_FILENAME, DEFAULT_TEMPLATE_FILENAME, Cancel


class ScriptedUI:
    """Prompt UI answering from a fixed mapping of prompt name to answer."""

    def __init__(self, answers: dict[str, Any]) -> None:
        self.answers = answers
        self.asked: list[str] = []

    def _answer(self, spec: PromptSpec) -> Any:
        self.asked.append(spec.name)
        return self.answers[spec.name]

    def text(self, spec: PromptSpec) -> str | Cancel:
        return self._answer(spec)

    def confirm(self, spec: PromptSpec) -> bool | Cancel:
        return self._answer(spec)

    def select(self, spec: PromptSpec) -> Any | Cancel:
        return self._answer(spec)

    def multiselect(self, spec: PromptSpec) -> list[Any] | Cancel:
        return self._answer(spec)


@pytest.fixture
def store() -> MemoryProfileStore:
    return MemoryProfileStore()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """A base directory holding a small template/config pair."""
    directory = tmp_path / "base"
    directory.mkdir()
    (directory / DEFAULT_TEMPLATE_FILENAME).write_text(
        "# ${title}\n<!--IF:{beta}-->\n> beta software\n<!--ENDIF:{beta}-->\nTags: ${tags}\n",
        encoding="utf-8",
    )
    config = {
        "prompts": [
            {"name": "title", "type": "text", "message": "Title?"},
            {"name": "beta", "type": "confirm", "message": "Beta?"},
            {
                "name": "tags",
                "type": "multiselect",
                "message": "Tags?",
                "options": ["cli", "web", "docs"],
                "separator": " | ",
            },
        ]
    }
    (directory / DEFAULT_CONFIG_FILENAME).write_text(json.dumps(config), encoding="utf-8")
    return directory


BUILTIN_ANSWERS: dict[str, Any] = {
    "projectName": "widget",
    "description": "Makes widgets.",
    "features": ["Fast", "Simple"],
    "includeInstall": True,
    "installCommand": "pip install widget",
    "includeContributing": False,
    "license": "MIT",
    "author": "Sam",
}

BUILTIN_EXPECTED = """\
# widget

Makes widgets.

## Features

- Fast
- Simple

## Installation

```bash
pip install widget
```

## Usage

Describe how to use widget here.

## License

MIT

---

Maintained by Sam.
"""


@pytest.fixture
def scripted_ui() -> type[ScriptedUI]:
    return ScriptedUI


@pytest.fixture
def builtin_answers() -> dict[str, Any]:
    return dict(BUILTIN_ANSWERS)


@pytest.fixture
def builtin_expected() -> str:
    return BUILTIN_EXPECTED
