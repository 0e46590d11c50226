"""Archive inspection - structural diffs between release and patch archives."""

from .differ import ArchiveDiffer, ArchiveError, ZipArchiveDiffer
from .file_set_diff import FileSetDiff

__all__ = [
    "ArchiveDiffer",
    "ArchiveError",
    "FileSetDiff",
    "ZipArchiveDiffer",
]
