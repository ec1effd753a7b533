"""End-to-end generation: resolve, fetch, prompt, render, write.

Loading is asynchronous; prompting, rendering and writing are not. Callers
with a blocking terminal UI run :func:`load` under an event loop and then
call :func:`complete` outside of it, so no prompt ever blocks the loop.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from pathlib import Path

import httpx

from readmegen.core.config import GenerationConfig, parse_config
from readmegen.core.fetcher import fetch_pair
from readmegen.core.profiles import ProfileStore
from readmegen.core.prompting import PromptUI, run_prompts
from readmegen.core.renderer import render
from readmegen.core.settings import Settings
from readmegen.core.sources import ResolvedSources, SourceRequest, resolve_sources
from readmegen.core.types import Answers
from readmegen.core.writer import write_output

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class LoadedTemplate:
    """
    A template and its parsed config, ready for prompting.

    Attributes:
        sources: The sources both documents came from.
        template: Raw template text.
        config: Parsed config document.
    """

    sources: ResolvedSources
    template: str
    config: GenerationConfig


@dataclass(kw_only=True)
class GenerationResult:
    """
    Outcome of one run.

    Attributes:
        sources: The sources that were used.
        output_path: Written file, or ``None`` when the run was cancelled.
        cancelled: Whether the user aborted during the prompts.
        answers: Answers collected before the run ended.
    """

    sources: ResolvedSources
    output_path: Path | None = None
    cancelled: bool = False
    answers: Answers = field(default_factory=dict)


async def load(
    request: SourceRequest,
    *,
    store: ProfileStore,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    on_resolved: Callable[[ResolvedSources], None] | None = None,
) -> LoadedTemplate:
    """Resolve the sources of ``request``, then fetch and parse both documents.

    Args:
        request: Which template the user asked for.
        store: Saved profiles.
        settings: Session settings; defaults are used when omitted.
        client: HTTP client for remote sources.
        on_resolved: Called with the chosen sources before anything is fetched.
    """
    settings = settings or Settings()

    sources = resolve_sources(request, store)
    logger.info("Using %s", sources.description)
    if on_resolved is not None:
        on_resolved(sources)

    template_text, config_text = await fetch_pair(sources, client=client, timeout=settings.timeout)
    config = parse_config(config_text, sources.config_source)
    return LoadedTemplate(sources=sources, template=template_text, config=config)


def complete(loaded: LoadedTemplate, output_path: Path | str, ui: PromptUI) -> GenerationResult:
    """Ask the prompts of ``loaded``, then render and write the output.

    Nothing is written when the user cancels or any step fails.
    """
    run = run_prompts(loaded.config, ui)
    if run.cancelled:
        return GenerationResult(sources=loaded.sources, cancelled=True, answers=run.answers)

    content = render(loaded.template, run.answers, run.specs)
    written = write_output(output_path, content)
    logger.info("Wrote %d characters to %s", len(content), written)

    return GenerationResult(sources=loaded.sources, output_path=written, answers=run.answers)


async def generate(
    request: SourceRequest,
    output_path: Path | str,
    *,
    store: ProfileStore,
    ui: PromptUI,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    on_resolved: Callable[[ResolvedSources], None] | None = None,
) -> GenerationResult:
    """Generate one file with :func:`load` followed by :func:`complete`.

    ``ui`` is called on the event loop thread, which suits scripted or other
    non-blocking UIs.
    """
    loaded = await load(
        request, store=store, settings=settings, client=client, on_resolved=on_resolved
    )
    return complete(loaded, output_path, ui)
