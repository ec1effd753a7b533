"""Write rendered output to disk."""

from __future__ import annotations

from pathlib import Path

from readmegen.core.errors import InternalError, WriteError


def write_output(path: Path | str, content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8, creating parent directories.

    An existing file is overwritten. Returns the absolute output path.
    """
    if not isinstance(content, str):
        raise InternalError(f"content must be a string, got {type(content).__name__}.")

    output = Path(path).expanduser().absolute()
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise WriteError(f"Failed to write output file to: {output}") from exc
    return output
