"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from readmegen.core.config import PromptOption, PromptSpec
from readmegen.core.types import CANCEL, Cancel

_console = Console()


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _done(question: str, display: str) -> None:
    _console.print(f"[bold green]◇[/]  {escape(question)}")
    _console.print(f"[dim]│[/]  {escape(display)}")
    _print_bar()


def _cancelled(question: str) -> Cancel:
    _console.print(f"[bold red]■[/]  {escape(question)}")
    _print_bar()
    return CANCEL


def _menu_label(option: PromptOption) -> str:
    # simple-term-menu treats "|" as the start of preview data.
    label = option.label.replace("|", "\\|")
    return f"{label}  ({option.hint})" if option.hint else label


def _input(prefix: str) -> str | None:
    try:
        return input(prefix)
    except (EOFError, KeyboardInterrupt):
        return None


class TerminalPromptUI:
    """Asks prompts on the terminal. Esc, Ctrl-C or Ctrl-D cancel."""

    def text(self, spec: PromptSpec) -> str | Cancel:
        _console.print(f"[bold cyan]◆[/]  {escape(spec.message)}")
        _print_bar()

        default = "" if spec.initial_value is None else str(spec.initial_value)
        hint = default or spec.placeholder or ""
        if hint:
            _console.print(f"[dim]│  {escape(hint)}[/]")

        lines = 3 if hint else 2
        while True:
            _console.print("[dim]│[/]  ", end="")
            raw = _input("")
            lines += 1
            if raw is None:
                _clear_lines(lines)
                return _cancelled(spec.message)

            answer = raw.strip() or default
            if answer or not spec.required:
                break
            _console.print(f"[dim]│[/]  [red]{escape(spec.name)} is required![/]")
            lines += 1

        _clear_lines(lines)
        _done(spec.message, answer)
        return answer

    def confirm(self, spec: PromptSpec) -> bool | Cancel:
        default = spec.initial_value if isinstance(spec.initial_value, bool) else False

        _console.print(f"[bold cyan]◆[/]  {escape(spec.message)}")
        _print_bar()

        suffix = " [Y/n] " if default else " [y/N] "
        _console.print("[dim]│[/]  ", end="")
        raw = _input(suffix)

        # Overwrite the ◆ question + │ bar + │ [Y/n] input line
        _clear_lines(3)

        if raw is None:
            return _cancelled(spec.message)

        answer = raw.strip().lower()
        result = default if answer == "" else answer in ("y", "yes")
        _done(spec.message, "Yes" if result else "No")
        return result

    def select(self, spec: PromptSpec) -> Any | Cancel:
        _console.print(f"[bold cyan]◆[/]  {escape(spec.message)}")
        _print_bar()

        values = [o.value for o in spec.options]
        cursor = values.index(spec.initial_value) if spec.initial_value in values else 0
        menu = TerminalMenu(
            [_menu_label(o) for o in spec.options],
            cursor_index=cursor,
            menu_cursor="│  ● ",
            menu_cursor_style=("fg_cyan", "bold"),
            menu_highlight_style=("fg_cyan",),
        )
        raw_index = menu.show()

        # Overwrite the ◆ question + │ bar that stayed on screen
        _clear_lines(2)

        if raw_index is None:
            return _cancelled(spec.message)

        index = int(raw_index)  # type: ignore[arg-type]
        _console.print(f"[bold green]◇[/]  {escape(spec.message)}")
        for i, option in enumerate(spec.options):
            if i == index:
                _console.print(f"[dim]│[/]  [bold green]●[/] {escape(option.label)}")
            else:
                _console.print(f"[dim]│[/]    [dim s]{escape(option.label)}[/]")
        _print_bar()

        return spec.options[index].value

    def multiselect(self, spec: PromptSpec) -> list[Any] | Cancel:
        _console.print(f"[bold cyan]◆[/]  {escape(spec.message)}")
        _print_bar()

        initial = spec.initial_value if isinstance(spec.initial_value, list) else []
        preselected = [i for i, o in enumerate(spec.options) if o.value in initial]
        menu = TerminalMenu(
            [_menu_label(o) for o in spec.options],
            multi_select=True,
            multi_select_select_on_accept=False,
            multi_select_empty_ok=not spec.required,
            show_multi_select_hint=True,
            preselected_entries=preselected or None,
            menu_cursor="│  ● ",
            menu_cursor_style=("fg_cyan", "bold"),
            menu_highlight_style=("fg_cyan",),
        )
        raw_indices = menu.show()

        _clear_lines(2)

        if raw_indices is None:
            return _cancelled(spec.message)

        indices = sorted(raw_indices)  # type: ignore[arg-type]
        chosen = [spec.options[i] for i in indices]
        _done(spec.message, ", ".join(o.label for o in chosen) or "(none)")
        return [o.value for o in chosen]
