"""Template resolution and rendering pipeline."""

from readmegen.core.config import GenerationConfig, PromptOption, PromptSpec, parse_config
from readmegen.core.errors import (
    ConfigSyntaxError,
    HttpStatusError,
    InstallationError,
    InternalError,
    NetworkError,
    NotFoundError,
    ProfileExistsError,
    PromptExecutionError,
    ReadError,
    ReadmeGenError,
    SchemaError,
    TemplateSyntaxError,
    UnsupportedSourceError,
    UsageError,
    WriteError,
)
from readmegen.core.fetcher import fetch_pair, get_content
from readmegen.core.generator import GenerationResult, LoadedTemplate, complete, generate, load
from readmegen.core.profiles import (
    BaseProfile,
    ExplicitProfile,
    JsonProfileStore,
    MemoryProfileStore,
    Profile,
    ProfileStore,
)
from readmegen.core.prompting import PromptRun, PromptUI, run_prompts
from readmegen.core.renderer import format_value, render
from readmegen.core.settings import Settings
from readmegen.core.sources import (
    ResolvedSources,
    SourceRequest,
    is_url,
    resolve_from_base,
    resolve_sources,
)
from readmegen.core.types import BUILTIN_NAME, CANCEL, Answers, Cancel, PromptType
from readmegen.core.writer import write_output

__all__ = [
    "BUILTIN_NAME",
    "CANCEL",
    "Answers",
    "BaseProfile",
    "Cancel",
    "ConfigSyntaxError",
    "ExplicitProfile",
    "GenerationConfig",
    "GenerationResult",
    "HttpStatusError",
    "InstallationError",
    "InternalError",
    "LoadedTemplate",
    "JsonProfileStore",
    "MemoryProfileStore",
    "NetworkError",
    "NotFoundError",
    "Profile",
    "ProfileExistsError",
    "ProfileStore",
    "PromptExecutionError",
    "PromptOption",
    "PromptRun",
    "PromptSpec",
    "PromptType",
    "PromptUI",
    "ReadError",
    "ReadmeGenError",
    "ResolvedSources",
    "SchemaError",
    "Settings",
    "SourceRequest",
    "TemplateSyntaxError",
    "UnsupportedSourceError",
    "UsageError",
    "WriteError",
    "complete",
    "fetch_pair",
    "format_value",
    "generate",
    "get_content",
    "is_url",
    "load",
    "parse_config",
    "render",
    "resolve_from_base",
    "resolve_sources",
    "run_prompts",
    "write_output",
]
