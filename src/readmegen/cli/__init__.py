"""Command-line interface for readme-gen."""

from readmegen.cli.app import app

__all__ = ["app"]
