"""Diff engines for comparing asset files."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

# Extensions whose content is diffed line by line; everything else is binary
TEXT_EXTENSIONS = frozenset(
    {
        ".txt",
        ".json",
        ".xml",
        ".yaml",
        ".yml",
        ".md",
        ".html",
        ".css",
        ".js",
        ".dart",
        ".java",
        ".kt",
        ".swift",
        ".m",
        ".h",
        ".cpp",
        ".c",
        ".properties",
        ".gradle",
        ".plist",
        ".strings",
        ".arb",
    }
)


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text on \\n, \\r\\n and \\r only, dropping one trailing empty line.

    Other characters str.splitlines() treats as breaks (form feed, U+2028)
    stay inside their line.
    """
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


class DiffEngine(ABC):
    """Base class for diff engines."""

    name: str = ""

    @abstractmethod
    def diff(self, file1: Path, file2: Path, options: dict) -> str:
        """Compute diff between two files.

        Args:
            file1: Old file path
            file2: New file path
            options: Engine-specific options

        Returns:
            Diff output as string

        Raises:
            OSError: If either file cannot be read
            UnicodeDecodeError: If a text engine is given non UTF-8 content
        """
        pass


class PositionalLineEngine(DiffEngine):
    """Line diff that pairs lines by index instead of aligning content."""

    name = "positional"

    def diff(self, file1: Path, file2: Path, options: dict) -> str:
        """Compute a positional unified diff.

        Args:
            file1: Old file path
            file2: New file path
            options: Options ("label" names the file in the header,
                defaults to file1's name)

        Returns:
            Unified diff text, one line per emitted entry
        """
        old_lines = split_lines(file1.read_text(encoding="utf-8"))
        new_lines = split_lines(file2.read_text(encoding="utf-8"))
        return unified_line_diff(old_lines, new_lines, options.get("label", file1.name))


class BinaryCompareEngine(DiffEngine):
    """Size and equality comparison for binary files."""

    name = "binary"

    def diff(self, file1: Path, file2: Path, options: dict) -> str:  # noqa: ARG002
        """Compare two files by size, then content when sizes match."""
        old_size = file1.stat().st_size
        new_size = file2.stat().st_size
        if old_size != new_size:
            return _binary_report(old_size, new_size, identical=None)
        return compare_bytes(file1.read_bytes(), file2.read_bytes())


def unified_line_diff(old_lines: Sequence[str], new_lines: Sequence[str], file_name: str) -> str:
    """Generate a unified diff between two line sequences.

    Lines are compared at the same index only. An insertion or deletion
    shifts every later line out of alignment, so each misaligned pair is
    reported as a removal followed by an addition.

    Args:
        old_lines: Lines before the change
        new_lines: Lines after the change
        file_name: Name used in the ``---``/``+++`` header

    Returns:
        Diff text ending in a newline
    """
    out = [f"--- {file_name} (old)", f"+++ {file_name} (new)"]

    i = 0
    j = 0
    while i < len(old_lines) or j < len(new_lines):
        if i >= len(old_lines):
            out.append(f"+{new_lines[j]}")
            j += 1
        elif j >= len(new_lines):
            out.append(f"-{old_lines[i]}")
            i += 1
        elif old_lines[i] == new_lines[j]:
            out.append(f" {old_lines[i]}")
            i += 1
            j += 1
        else:
            out.append(f"-{old_lines[i]}")
            out.append(f"+{new_lines[j]}")
            i += 1
            j += 1

    return "\n".join(out) + "\n"


def compare_bytes(old: bytes, new: bytes) -> str:
    """Describe how two byte sequences differ.

    A size mismatch is reported without looking at the content. Equal
    sizes are scanned byte by byte, stopping at the first mismatch.
    """
    if len(old) != len(new):
        return _binary_report(len(old), len(new), identical=None)

    identical = True
    for a, b in zip(old, new):
        if a != b:
            identical = False
            break
    return _binary_report(len(old), len(new), identical=identical)


def _binary_report(old_size: int, new_size: int, identical: bool | None) -> str:
    lines = [
        "Binary file comparison:",
        f"Old size: {old_size} bytes",
        f"New size: {new_size} bytes",
        f"Size change: {new_size - old_size} bytes",
    ]
    if identical is None:
        lines.append("Binary content differs (files have different sizes)")
    elif identical:
        lines.append("Binary content is identical")
    else:
        lines.append("Binary content differs (same size, different content)")
    return "\n".join(lines) + "\n"


def is_text_file(asset_path: str) -> bool:
    """Whether an asset path has a text extension (case-insensitive)."""
    return PurePosixPath(asset_path).suffix.lower() in TEXT_EXTENSIONS


# Registry of available engines
ENGINES: dict[str, DiffEngine] = {
    PositionalLineEngine.name: PositionalLineEngine(),
    BinaryCompareEngine.name: BinaryCompareEngine(),
}


def get_engine(name: str) -> DiffEngine | None:
    """Get diff engine by name.

    Args:
        name: Engine name ("positional" or "binary")

    Returns:
        Engine instance or None if not found
    """
    return ENGINES.get(name)


def engine_for_path(asset_path: str) -> DiffEngine:
    """Pick the engine for an asset based on its extension."""
    return ENGINES["positional"] if is_text_file(asset_path) else ENGINES["binary"]
