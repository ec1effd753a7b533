"""Run the prompts of a config document against an interactive UI."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from typing import Any, Protocol

from readmegen.core.config import GenerationConfig, PromptSpec, is_well_formed
from readmegen.core.errors import PromptExecutionError
from readmegen.core.types import CANCEL, Answers, Cancel, PromptType

logger = logging.getLogger(__name__)


class PromptUI(Protocol):
    """Something that can ask the user a question.

    Each method returns the answer, or ``CANCEL`` when the user aborts.
    """

    def text(self, spec: PromptSpec) -> str | Cancel: ...

    def confirm(self, spec: PromptSpec) -> bool | Cancel: ...

    def select(self, spec: PromptSpec) -> Any | Cancel: ...

    def multiselect(self, spec: PromptSpec) -> list[Any] | Cancel: ...


@dataclass(kw_only=True)
class PromptRun:
    """
    Outcome of running every prompt.

    Attributes:
        answers: Answers in prompt order.
        specs: Specs of the prompts that ran.
        cancelled: Whether the user aborted. ``answers`` is then partial.
    """

    answers: Answers = field(default_factory=dict)
    specs: list[PromptSpec] = field(default_factory=list)
    cancelled: bool = False


def _ask(ui: PromptUI, spec: PromptSpec) -> Any:
    match spec.type:
        case PromptType.TEXT:
            return ui.text(spec)
        case PromptType.CONFIRM:
            return ui.confirm(spec)
        case PromptType.SELECT:
            return ui.select(spec)
        case PromptType.MULTISELECT:
            return ui.multiselect(spec)


def run_prompts(config: GenerationConfig, ui: PromptUI) -> PromptRun:
    """Ask every prompt of ``config`` in order.

    Entries without a name, type or message are skipped with a warning. The
    run stops at the first cancellation.

    Raises:
        PromptExecutionError: A prompt is invalid or the UI failed on it.
    """
    run = PromptRun()

    for raw in config.prompts:
        if not is_well_formed(raw):
            logger.warning("Skipping invalid prompt definition: %s", json.dumps(raw, default=str))
            continue

        spec = PromptSpec.from_dict(raw)
        try:
            value = _ask(ui, spec)
        except PromptExecutionError:
            raise
        except Exception as exc:
            raise PromptExecutionError(
                f"Error during prompt for '{spec.name}': {exc}", spec.name
            ) from exc

        if value is CANCEL:
            logger.debug("Prompt %r cancelled", spec.name)
            run.cancelled = True
            return run

        run.answers[spec.name] = value
        run.specs.append(spec)

    return run
