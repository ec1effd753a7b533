"""Error hierarchy for readme-gen.

Every failure the pipeline can surface derives from :class:`ReadmeGenError`.
Underlying causes are chained with ``raise ... from exc`` so the CLI can show
them next to the message.
"""

from __future__ import annotations


class ReadmeGenError(Exception):
    """Base class for all readme-gen errors."""


class UsageError(ReadmeGenError):
    """Invalid combination of user inputs, detected before any I/O."""


class NotFoundError(ReadmeGenError):
    """A local file or a saved profile does not exist."""


class ProfileExistsError(ReadmeGenError):
    """A profile with the same name is already saved."""


class UnsupportedSourceError(ReadmeGenError):
    """A base source URL is not a recognised repository URL."""


class NetworkError(ReadmeGenError):
    """A remote source could not be reached."""


class HttpStatusError(ReadmeGenError):
    """A remote source answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ReadError(ReadmeGenError):
    """Content was fetched but could not be read as text."""


class InstallationError(ReadmeGenError):
    """The built-in template files are missing from the installation."""


class ConfigSyntaxError(ReadmeGenError):
    """The config document is not valid JSON."""


class SchemaError(ReadmeGenError):
    """A JSON document parsed but does not have the expected shape."""


class PromptExecutionError(ReadmeGenError):
    """A prompt could not be executed."""

    def __init__(self, message: str, prompt_name: str) -> None:
        super().__init__(message)
        self.prompt_name = prompt_name


class TemplateSyntaxError(ReadmeGenError):
    """Conditional markup in a template is malformed."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"{message} (line {line})")
        self.line = line


class WriteError(ReadmeGenError):
    """The output file could not be written."""


class InternalError(ReadmeGenError):
    """A type contract was violated by the caller."""
