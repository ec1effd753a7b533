"""Generation config documents and prompt specifications."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
from typing import Any

from readmegen.core.errors import ConfigSyntaxError, PromptExecutionError, SchemaError
from readmegen.core.types import DEFAULT_SEPARATOR, PromptType

_REQUIRED_KEYS = ("name", "type", "message")


@dataclass(kw_only=True, frozen=True)
class PromptOption:
    """
    One choice of a select or multiselect prompt.

    Attributes:
        value: Value stored in the answer set when chosen.
        label: Text shown to the user.
        hint: Optional extra description.
    """

    value: Any
    label: str
    hint: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> PromptOption:
        if isinstance(raw, str):
            return cls(value=raw, label=raw)
        if isinstance(raw, Mapping) and "value" in raw:
            value = raw["value"]
            label = raw.get("label")
            hint = raw.get("hint")
            return cls(
                value=value,
                label=str(value) if label is None else str(label),
                hint=None if hint is None else str(hint),
            )
        raise ValueError(f"option must be a string or an object with a 'value', got {raw!r}.")


@dataclass(kw_only=True)
class PromptSpec:
    """
    A single prompt declared in a config document.

    Attributes:
        name: Answer key and template variable name.
        type: Kind of prompt.
        message: Question shown to the user.
        placeholder: Hint shown in an empty text input.
        initial_value: Pre-filled answer.
        required: Whether an empty answer is rejected.
        options: Choices of select and multiselect prompts.
        separator: String used to join multiselect answers in the template.
    """

    name: str
    type: PromptType
    message: str
    placeholder: str | None = None
    initial_value: Any = None
    required: bool = False
    options: list[PromptOption] = field(default_factory=list)
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        if self.type.needs_options and not self.options:
            raise ValueError(f"'options' must be a non-empty list for {self.type.value} prompts.")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PromptSpec:
        """Build a spec from a well-formed prompt entry.

        Raises:
            PromptExecutionError: The entry declares an unsupported type or
                invalid options.
        """
        name = str(raw["name"])
        try:
            prompt_type = PromptType(str(raw["type"]).lower())
        except ValueError:
            raise PromptExecutionError(
                f"Unsupported prompt type {raw['type']!r} for '{name}'.", name
            ) from None

        raw_options = raw.get("options")
        if raw_options is not None and not isinstance(raw_options, list):
            raise PromptExecutionError(f"'options' must be a list for prompt '{name}'.", name)

        separator = raw.get("separator")
        placeholder = raw.get("placeholder")
        try:
            return cls(
                name=name,
                type=prompt_type,
                message=str(raw["message"]),
                placeholder=None if placeholder is None else str(placeholder),
                initial_value=raw.get("initialValue"),
                required=raw.get("required") is True,
                options=[PromptOption.from_raw(o) for o in raw_options or []],
                separator=DEFAULT_SEPARATOR if separator is None else str(separator),
            )
        except ValueError as exc:
            raise PromptExecutionError(f"Invalid prompt '{name}': {exc}", name) from exc


def is_well_formed(raw: Any) -> bool:
    """Whether a prompt entry has the keys needed to run it at all."""
    return isinstance(raw, Mapping) and all(raw.get(k) for k in _REQUIRED_KEYS)


@dataclass(kw_only=True)
class GenerationConfig:
    """
    A parsed config document.

    Attributes:
        prompts: Raw prompt entries in document order.
        source: Where the document was read from.
    """

    prompts: list[Any]
    source: str = "<config>"


def parse_config(text: str, source: str = "<config>") -> GenerationConfig:
    """Parse a config document.

    Only the top-level shape is checked; individual prompt entries are
    validated when they run.

    Raises:
        ConfigSyntaxError: ``text`` is not valid JSON.
        SchemaError: The root is not an object with a ``prompts`` list.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigSyntaxError(f"Invalid JSON syntax in configuration file: {source}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("prompts"), list):
        raise SchemaError(
            f"Invalid config format in {source}: JSON must be an object with a 'prompts' array."
        )

    return GenerationConfig(prompts=list(data["prompts"]), source=source)
