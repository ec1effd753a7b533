"""Render a template from an answer set.

The marker structure of the raw template is checked first. Blocks do not
nest: a start marker inside an open block, an end marker for another name,
an unclosed block or a stray end marker is a :class:`TemplateSyntaxError`
reporting the template line.

Two passes then run over the whole document:

1. ``${name}`` placeholders are replaced by the formatted answer for
   ``name``. Placeholders without an answer are left as they are.
2. Conditional blocks ``<!--IF:{name}-->...<!--ENDIF:{name}-->`` keep their
   inner content when ``name`` answered ``True`` and are dropped otherwise.
   A start marker pairs with the nearest end marker of the same name;
   unpaired marker text coming from an answer stays as it is.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from typing import Any

from readmegen.core.config import PromptSpec
from readmegen.core.errors import InternalError, TemplateSyntaxError
from readmegen.core.types import DEFAULT_SEPARATOR

_MARKER_RE = re.compile(r"<!--\s*(IF|ENDIF):\{([^{}]+)\}\s*-->")
_BLOCK_RE = re.compile(
    r"<!--\s*IF:\{([^{}]+)\}\s*-->(.*?)<!--\s*ENDIF:\{\1\}\s*-->",
    re.DOTALL,
)


def format_value(value: Any, separator: str = DEFAULT_SEPARATOR) -> str:
    """String form of an answer as it appears in the rendered output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return separator.join(format_value(v, separator) for v in value)
    return str(value)


def substitute(template: str, answers: Mapping[str, Any], separators: Mapping[str, str]) -> str:
    """Replace every ``${key}`` for the keys of ``answers`` in a single pass."""
    if not answers:
        return template

    replacements = {
        f"${{{key}}}": format_value(value, separators.get(key, DEFAULT_SEPARATOR))
        for key, value in answers.items()
    }
    # Longest first so a key never shadows a longer key sharing its prefix.
    pattern = re.compile(
        "|".join(re.escape(p) for p in sorted(replacements, key=len, reverse=True))
    )
    return pattern.sub(lambda m: replacements[m.group(0)], template)


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def check_markers(template: str) -> None:
    """Raise :class:`TemplateSyntaxError` unless every block is opened and closed in order."""
    open_name: str | None = None
    open_line = 0

    for marker in _MARKER_RE.finditer(template):
        kind, name = marker.group(1), marker.group(2)
        line = _line_of(template, marker.start())

        if open_name is None:
            if kind == "ENDIF":
                raise TemplateSyntaxError(f"'ENDIF:{{{name}}}' has no matching 'IF:{{{name}}}'", line)
            open_name, open_line = name, line
            continue

        if kind == "IF":
            raise TemplateSyntaxError(
                f"'IF:{{{name}}}' opened inside 'IF:{{{open_name}}}' from line {open_line}; "
                "conditional blocks cannot be nested",
                line,
            )
        if name != open_name:
            raise TemplateSyntaxError(
                f"'ENDIF:{{{name}}}' closes a block opened as 'IF:{{{open_name}}}' "
                f"on line {open_line}",
                line,
            )
        open_name = None

    if open_name is not None:
        raise TemplateSyntaxError(f"'IF:{{{open_name}}}' is never closed", open_line)


def apply_conditionals(text: str, answers: Mapping[str, Any]) -> str:
    """Keep or drop every conditional block depending on its boolean answer."""
    return _BLOCK_RE.sub(lambda m: m.group(2) if answers.get(m.group(1)) is True else "", text)


def render(
    template: str,
    answers: Mapping[str, Any],
    prompts: Iterable[PromptSpec] = (),
) -> str:
    """Render ``template`` with ``answers``.

    Args:
        template: Template text.
        answers: Prompt name to answer.
        prompts: Specs the answers came from; only their ``separator`` is used.

    Returns:
        The rendered text.
    """
    if not isinstance(template, str):
        raise InternalError(f"template must be a string, got {type(template).__name__}.")
    if not isinstance(answers, Mapping):
        raise InternalError(f"answers must be a mapping, got {type(answers).__name__}.")

    check_markers(template)
    separators = {p.name: p.separator for p in prompts}
    return apply_conditionals(substitute(template, answers, separators), answers)
