"""Project and process environment lookups."""

import os
import sys
from pathlib import Path
from typing import TextIO

from .constants import PROJECT_MARKER


class ProjectEnvironment:
    """Resolves the project root and whether the user can be prompted."""

    def __init__(self, start_dir: Path | None = None, stdin: TextIO | None = None):
        """Initialize environment.

        Args:
            start_dir: Directory to start the project root search from
                (defaults to the current working directory)
            stdin: Input stream used for prompts (defaults to sys.stdin)
        """
        self.start_dir = start_dir
        self.stdin = stdin

    def project_root(self) -> Path | None:
        """Return the nearest ancestor containing shorebird.yaml, if any."""
        current = (self.start_dir or Path.cwd()).resolve()
        for candidate in (current, *current.parents):
            if (candidate / PROJECT_MARKER).is_file():
                return candidate
        return None

    @property
    def can_accept_user_input(self) -> bool:
        """Whether an interactive input source is attached."""
        if os.environ.get("PATCHCHECK_NON_INTERACTIVE"):
            return False
        stream = self.stdin if self.stdin is not None else sys.stdin
        if stream is None:
            return False
        try:
            return stream.isatty()
        except ValueError:
            # closed stream
            return False
