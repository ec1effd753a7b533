"""Typer CLI application for readme-gen."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Annotated

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Argument, Exit, Option, Typer
from typer.core import TyperGroup

import readmegen
from readmegen.cli._prompts import TerminalPromptUI
from readmegen.core.errors import ReadmeGenError, UsageError
from readmegen.core.generator import complete as complete_generation
from readmegen.core.generator import load as load_template
from readmegen.core.profiles import BaseProfile, JsonProfileStore, Profile
from readmegen.core.settings import Settings
from readmegen.core.sources import ResolvedSources, SourceRequest, is_url
from readmegen.core.types import BUILTIN_NAME, DEFAULT_CONFIG_FILENAME, DEFAULT_TEMPLATE_FILENAME

_DEFAULT_COMMAND = "generate"

_console = Console()
_err_console = Console(stderr=True)


class _DefaultCommandGroup(TyperGroup):
    """Runs ``generate`` when the first argument is neither a subcommand nor a group option."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        own_options = {name for param in self.get_params(ctx) for name in param.opts}
        if not args or (args[0] not in self.commands and args[0] not in own_options):
            args = [_DEFAULT_COMMAND, *args]
        return super().parse_args(ctx, args)


app = Typer(
    cls=_DefaultCommandGroup,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
template_app = Typer(
    help="Manage saved templates.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(template_app, name="template")


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"readme-gen {readmegen.__version__}")
        raise Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        Option(
            "--version",
            "-V",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """readme-gen: generate files from custom templates and interactive prompts."""


def _setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=_err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("readmegen")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _fail(error: ReadmeGenError) -> None:
    _err_console.print(f"[bold red]Error:[/] {escape(str(error))}")
    cause = error.__cause__
    if cause is not None:
        _err_console.print(f"[dim]Cause: {escape(str(cause) or type(cause).__name__)}[/]")


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except ReadmeGenError as exc:
        _fail(exc)
        raise Exit(code=1) from exc


def _store(settings: Settings) -> JsonProfileStore:
    return JsonProfileStore(settings.store_path)


def _interpret_arguments(
    arguments: list[str],
    template: str | None,
    config: str | None,
    name: str | None,
    default_output: str,
) -> tuple[SourceRequest, str]:
    """Split positionals into a base source and an output path."""
    if len(arguments) > 2:
        raise UsageError("Expected at most two arguments: [BASE_SOURCE] [OUTPUT_PATH].")

    has_flags = template is not None or config is not None or name is not None
    base: str | None = None
    output: str | None = None

    if len(arguments) == 2:
        base, output = arguments
    elif len(arguments) == 1:
        (argument,) = arguments
        if not has_flags and (is_url(argument) or Path(argument).expanduser().is_dir()):
            base = argument
        else:
            output = argument

    request = SourceRequest(template=template, config=config, name=name, base=base)
    request.validate()
    return request, output or default_output


def _print_sources(sources: ResolvedSources) -> None:
    _console.print("[bold green]◇[/]  Template")
    _console.print(f"[dim]│[/]  {escape(sources.description)}")
    _console.print("[dim]│[/]")


@app.command()
def generate(
    arguments: Annotated[
        list[str] | None,
        Argument(
            metavar="[BASE_SOURCE] [OUTPUT_PATH]",
            help="Base directory or GitHub repository URL, and/or the output file path.",
            show_default=False,
        ),
    ] = None,
    template: Annotated[
        str | None,
        Option("--template", "-t", help="Path or URL to the template file.", show_default=False),
    ] = None,
    config: Annotated[
        str | None,
        Option("--config", "-c", help="Path or URL to the config file.", show_default=False),
    ] = None,
    name: Annotated[
        str | None,
        Option("--name", "-n", help="Name of a saved template.", show_default=False),
    ] = None,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show debug logging.")] = False,
) -> None:
    """Generate a file from a template and interactive prompts."""
    _setup_logging(verbose)

    with _handle_errors():
        settings = Settings.from_env()
        request, output = _interpret_arguments(
            arguments or [], template, config, name, settings.default_output
        )

        # Header
        _console.print()
        _console.print(f"[bold cyan]●[/]  readme-gen v{readmegen.__version__}")
        _console.print("[dim]│[/]")

        loaded = asyncio.run(
            load_template(
                request, store=_store(settings), settings=settings, on_resolved=_print_sources
            )
        )
        # Prompts block on the terminal, so they run after the event loop has closed.
        result = complete_generation(loaded, output, TerminalPromptUI())

    if result.cancelled:
        _console.print("[bold yellow]●[/]  Operation cancelled by user.")
        _console.print()
        return

    shown = _relative(result.output_path) if result.output_path else output
    _console.print(f"[bold cyan]●[/]  Done! Output saved to [cyan]{escape(shown)}[/]")
    _console.print()


def _relative(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _print_profile(name: str, profile: Profile, is_default: bool) -> None:
    marker = " [green](default)[/]" if is_default else ""
    _console.print(f"[dim]│[/]  [bold cyan]{escape(name)}[/]{marker}")
    _console.print(f"[dim]│[/]    Type:     {profile.type.label}")
    if isinstance(profile, BaseProfile):
        _console.print(f"[dim]│[/]    Source:   [dim]{escape(profile.base_source)}[/]")
        _console.print(
            f"[dim]│[/]    Assumes:  [dim]{DEFAULT_TEMPLATE_FILENAME}, {DEFAULT_CONFIG_FILENAME}[/]"
        )
    else:
        _console.print(f"[dim]│[/]    Template: [dim]{escape(profile.template_source)}[/]")
        _console.print(f"[dim]│[/]    Config:   [dim]{escape(profile.config_source)}[/]")
    _console.print("[dim]│[/]")


@template_app.command("add")
def template_add(
    name: Annotated[str, Argument(help="Unique name for the template.")],
    source: Annotated[
        str,
        Argument(help="Base source, or the template source when CONFIG_SOURCE is given."),
    ],
    config_source: Annotated[
        str | None, Argument(help="Config source (path or URL).", show_default=False)
    ] = None,
) -> None:
    """Save a template under a name."""
    _setup_logging(False)
    with _handle_errors():
        store = _store(Settings.from_env())
        profile = store.add(name, source, config_source)
        is_default = store.default_name() == name

    _console.print(f"[bold green]◇[/]  Added template [bold]{escape(name)}[/] ({profile.type.label})")
    if isinstance(profile, BaseProfile):
        _console.print(
            f"[dim]│  Assumes: {DEFAULT_TEMPLATE_FILENAME}, {DEFAULT_CONFIG_FILENAME}[/]"
        )
    if is_default:
        _console.print(f"[dim]│[/]  Template '{escape(name)}' also set as default.")
    else:
        _console.print(
            f"[dim]│[/]  Use 'readme-gen template default {escape(name)}' to set it as default."
        )


@template_app.command("list")
@template_app.command("ls", hidden=True)
def template_list() -> None:
    """List saved templates."""
    _setup_logging(False)
    with _handle_errors():
        store = _store(Settings.from_env())
        profiles = store.list()
        default_name = store.default_name()

    if not profiles:
        _console.print("No templates saved yet. Use 'readme-gen template add <name> ...'")
        return

    _console.print()
    _console.print("[bold cyan]◆[/]  Saved templates")
    _console.print("[dim]│[/]")
    for profile_name, profile in profiles.items():
        _print_profile(profile_name, profile, profile_name == default_name)
    _console.print()


@template_app.command("remove")
@template_app.command("rm", hidden=True)
def template_remove(
    name: Annotated[str, Argument(help="Name of the template to remove.")],
) -> None:
    """Remove a saved template."""
    _setup_logging(False)
    with _handle_errors():
        was_default = _store(Settings.from_env()).remove(name)

    _console.print(f"[bold green]◇[/]  Template '{escape(name)}' removed.")
    if was_default:
        _console.print(
            f"[yellow]Default template '{escape(name)}' was removed. No default template set.[/]"
        )


@template_app.command("default")
def template_default(
    name: Annotated[
        str | None, Argument(help="Template to use by default.", show_default=False)
    ] = None,
) -> None:
    """Set the default template, or show it when no name is given."""
    _setup_logging(False)
    with _handle_errors():
        store = _store(Settings.from_env())
        if name is not None:
            store.set_default(name)
        current = store.default_name()

    if name is not None:
        _console.print(f"[bold green]◇[/]  Template '{escape(name)}' set as default.")
    elif current:
        _console.print(f"Default template: [bold cyan]{escape(current)}[/]")
    else:
        _console.print(f"No default template set; the {BUILTIN_NAME} template is used.")


