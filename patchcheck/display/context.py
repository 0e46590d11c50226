"""Display factory."""

from .base import Display
from .cli import CLIDisplay


def get_display() -> Display:
    """Get the display implementation for the current process."""
    return CLIDisplay()
