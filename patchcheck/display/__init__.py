"""Display layer for patchcheck - console output and prompts."""

from .base import Display
from .cli import CLIDisplay
from .context import get_display

__all__ = [
    "Display",
    "CLIDisplay",
    "get_display",
]
