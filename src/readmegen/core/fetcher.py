"""Fetch template and config text from local files or HTTP(S) URLs."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from readmegen.core.errors import (
    HttpStatusError,
    InstallationError,
    NetworkError,
    NotFoundError,
    ReadError,
)
from readmegen.core.settings import DEFAULT_TIMEOUT
from readmegen.core.sources import ResolvedSources, is_url

logger = logging.getLogger(__name__)


async def _fetch_url(url: str, kind: str, client: httpx.AsyncClient) -> str:
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(f"Network error while fetching {kind} URL: {url}") from exc

    if not response.is_success:
        raise HttpStatusError(
            f"HTTP error {response.status_code} fetching {kind} URL: {url}",
            response.status_code,
        )

    try:
        return response.content.decode(response.encoding or "utf-8")
    except (UnicodeDecodeError, LookupError) as exc:
        raise ReadError(f"Failed to read response body from {kind} URL: {url}") from exc


def _read_file(path: str, kind: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"Cannot find {kind} source file locally: {path}") from exc
    # ValueError covers undecodable bytes and paths with NUL characters
    except (OSError, ValueError) as exc:
        raise ReadError(f"Failed to read {kind} source file: {path}") from exc


async def get_content(
    source: str,
    kind: str = "file",
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Return the text behind ``source``, whether it is a URL or a local path.

    Args:
        source: Local path or ``http(s)://`` URL.
        kind: What the source holds, used in error messages.
        client: Client to issue requests with. A short-lived one is created
            when omitted.
        timeout: Request timeout in seconds for a created client.
    """
    if not is_url(source):
        logger.debug("Reading %s from %s", kind, source)
        return await asyncio.to_thread(_read_file, source, kind)

    logger.debug("Fetching %s from %s", kind, source)
    if client is not None:
        return await _fetch_url(source, kind, client)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
        return await _fetch_url(source, kind, own_client)


async def fetch_pair(
    sources: ResolvedSources,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[str, str]:
    """Fetch the template and the config concurrently.

    Returns:
        ``(template_text, config_text)``.

    Raises:
        InstallationError: The built-in pair is missing on disk.
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                return await _gather(sources, own_client)
        return await _gather(sources, client)
    except NotFoundError as exc:
        if sources.builtin:
            raise InstallationError(
                "The built-in template files are missing; the installation looks broken. "
                "Try reinstalling readme-gen."
            ) from exc
        raise


async def _gather(sources: ResolvedSources, client: httpx.AsyncClient) -> tuple[str, str]:
    # The first failure cancels the other fetch.
    try:
        async with asyncio.TaskGroup() as group:
            template = group.create_task(
                get_content(sources.template_source, "template", client=client)
            )
            config = group.create_task(get_content(sources.config_source, "config", client=client))
    except ExceptionGroup as failures:
        raise failures.exceptions[0]  # noqa: B904  (keeps the original __cause__)
    return template.result(), config.result()
