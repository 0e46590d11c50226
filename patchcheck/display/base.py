"""Abstract base class for display implementations."""

from abc import ABC, abstractmethod
from typing import Any


class Display(ABC):
    """Abstract console surface used by the verification pipeline."""

    @abstractmethod
    def status(self, message: str, **kwargs) -> None:
        """Display a status message.

        Args:
            message: Status text to display
            kwargs: Implementation-specific options
        """
        pass

    @abstractmethod
    def success(self, message: str, **kwargs) -> None:
        """Display a success message."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs) -> None:
        """Display an error message.

        Args:
            message: Error text
            kwargs: Implementation-specific options (e.g., details)
        """
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs) -> None:
        """Display a warning message."""
        pass

    @abstractmethod
    def info(self, message: str, style: str | None = None, **kwargs) -> None:
        """Display an informational message.

        Args:
            message: Info text, shown verbatim (no markup interpretation)
            style: Optional color/style name, e.g. "yellow"
            kwargs: Implementation-specific options
        """
        pass

    @abstractmethod
    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question and block until answered.

        Callers must check that interactive input is available first.
        """
        pass

    @abstractmethod
    def spinner_start(self, description: str = "", **kwargs) -> Any:
        """Start a spinner for indeterminate operations.

        Returns:
            Spinner handle for spinner_finish
        """
        pass

    @abstractmethod
    def spinner_finish(self, handle: Any, message: str = "", **kwargs) -> None:
        """Finish/stop spinner.

        Args:
            handle: Spinner handle from spinner_start
            message: Final message to display
        """
        pass
