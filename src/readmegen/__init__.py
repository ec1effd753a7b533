"""readme-gen: scaffold README files from templates and interactive prompts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("readme-gen")
except PackageNotFoundError:
    __version__ = "0.0.0"
