"""File-set diff dataclass."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class FileSetDiff:
    """Paths added, changed and removed between two archives.

    The three collections are disjoint and sorted.
    """

    added_paths: tuple[str, ...] = ()
    changed_paths: tuple[str, ...] = ()
    removed_paths: tuple[str, ...] = ()

    @classmethod
    def from_paths(
        cls,
        added: Iterable[str] = (),
        changed: Iterable[str] = (),
        removed: Iterable[str] = (),
    ) -> FileSetDiff:
        """Build a diff from unordered path collections."""
        return cls(
            added_paths=tuple(sorted(set(added))),
            changed_paths=tuple(sorted(set(changed))),
            removed_paths=tuple(sorted(set(removed))),
        )

    @classmethod
    def from_path_hashes(cls, old: Mapping[str, str], new: Mapping[str, str]) -> FileSetDiff:
        """Partition two ``{path: digest}`` maps into a file-set diff.

        Args:
            old: Digests of the release archive members
            new: Digests of the patch archive members
        """
        old_paths = set(old)
        new_paths = set(new)
        return cls.from_paths(
            added=new_paths - old_paths,
            changed=(p for p in old_paths & new_paths if old[p] != new[p]),
            removed=old_paths - new_paths,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.added_paths or self.changed_paths or self.removed_paths)

    def filter(self, predicate: Callable[[str], bool]) -> FileSetDiff:
        """Return the subset of this diff whose paths satisfy predicate."""
        return FileSetDiff(
            added_paths=tuple(p for p in self.added_paths if predicate(p)),
            changed_paths=tuple(p for p in self.changed_paths if predicate(p)),
            removed_paths=tuple(p for p in self.removed_paths if predicate(p)),
        )

    @property
    def pretty_string(self) -> str:
        """Indented, titled listing of the non-empty sections."""
        sections = [
            ("Added files", self.added_paths),
            ("Removed files", self.removed_paths),
            ("Changed files", self.changed_paths),
        ]
        return "\n".join(_pretty_section(title, paths) for title, paths in sections if paths)


def _pretty_section(title: str, paths: tuple[str, ...]) -> str:
    lines = [f"    {title}:"]
    lines.extend(f"        {path}" for path in paths)
    return "\n".join(lines)
