"""CLI display implementation using Rich library."""

import shutil
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.text import Text

from ..constants import MAX_DISPLAY_WIDTH
from .base import Display


class CLIDisplay(Display):
    """Rich-backed console output."""

    def __init__(self, console: Console | None = None, stderr_console: Console | None = None):
        # Limit console width to MAX_DISPLAY_WIDTH for consistent display
        detected_width = shutil.get_terminal_size(fallback=(MAX_DISPLAY_WIDTH, 24)).columns
        console_width = min(detected_width, MAX_DISPLAY_WIDTH)
        self.console = console or Console(width=console_width)
        self.stderr_console = stderr_console or Console(file=sys.stderr, width=console_width)

    def status(self, message: str, **kwargs) -> None:
        """Display a status message in blue."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str, **kwargs) -> None:
        """Display a success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str, **kwargs) -> None:
        """Display an error message in red (to STDERR)."""
        self.stderr_console.print(f"[red]✗[/red] {escape(message)}")
        details = kwargs.get("details", "")
        if details:
            self.stderr_console.print(f"  [dim]{escape(details)}[/dim]")

    def warning(self, message: str, **kwargs) -> None:
        """Display a warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def info(self, message: str, style: str | None = None, **kwargs) -> None:
        """Display an informational message, optionally colored."""
        self.console.print(Text(message, style=style or ""))

    def confirm(self, question: str, default: bool = False) -> bool:
        """Prompt for yes/no using rich."""
        return Confirm.ask(question, default=default, console=self.console)

    def spinner_start(self, description: str = "", **kwargs) -> Any:
        """Start a spinner (outputs to STDERR)."""
        status = self.stderr_console.status(description, spinner="dots")
        status.start()
        return status

    def spinner_finish(self, handle: Any, message: str = "", **kwargs) -> None:
        """Stop spinner."""
        if handle:
            handle.stop()
        if message:
            self.success(message)
