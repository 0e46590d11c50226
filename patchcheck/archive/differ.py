"""Archive differs: structural comparison and classification of archive members."""

from __future__ import annotations

import logging
import zipfile
import zlib
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from ..config import ArchiveConfig
from ..utils import stream_checksum
from .file_set_diff import FileSetDiff

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when an archive cannot be read."""


class ArchiveDiffer(ABC):
    """Base class for archive differs.

    Subclasses decide how an archive is read and which member paths count
    as assets or native code; classification helpers are shared.
    """

    @abstractmethod
    def changed_files(self, old_archive: Path, new_archive: Path) -> FileSetDiff:
        """Compute the structural diff between two archives.

        Args:
            old_archive: Release archive path
            new_archive: Patch archive path

        Raises:
            ArchiveError: If either archive cannot be read
        """
        pass

    @abstractmethod
    def is_asset_path(self, path: str) -> bool:
        """Whether an archive member is a bundled asset."""
        pass

    @abstractmethod
    def is_native_path(self, path: str) -> bool:
        """Whether an archive member is native code a patch cannot replace."""
        pass

    @abstractmethod
    def extract_asset_contents(self, archive: Path) -> dict[str, bytes]:
        """Read the bytes of every asset member of an archive.

        Returns:
            Mapping from archive-relative path to content
        """
        pass

    def asset_file_set_diff(self, file_set_diff: FileSetDiff) -> FileSetDiff:
        return file_set_diff.filter(self.is_asset_path)

    def native_file_set_diff(self, file_set_diff: FileSetDiff) -> FileSetDiff:
        return file_set_diff.filter(self.is_native_path)

    def contains_potentially_breaking_asset_diffs(self, file_set_diff: FileSetDiff) -> bool:
        return not self.asset_file_set_diff(file_set_diff).is_empty

    def contains_potentially_breaking_native_diffs(self, file_set_diff: FileSetDiff) -> bool:
        return not self.native_file_set_diff(file_set_diff).is_empty


class ZipArchiveDiffer(ArchiveDiffer):
    """Differ for zip-based archives (aab, apk, zipped xcarchive)."""

    def __init__(self, config: ArchiveConfig | None = None):
        self.config = config or ArchiveConfig()

    def changed_files(self, old_archive: Path, new_archive: Path) -> FileSetDiff:
        old_hashes = self._member_hashes(old_archive)
        new_hashes = self._member_hashes(new_archive)
        diff = FileSetDiff.from_path_hashes(old_hashes, new_hashes)
        logger.info(
            "Archive diff %s -> %s: %d added, %d changed, %d removed",
            old_archive,
            new_archive,
            len(diff.added_paths),
            len(diff.changed_paths),
            len(diff.removed_paths),
        )
        return diff

    def is_asset_path(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.config.asset_prefixes)

    def is_native_path(self, path: str) -> bool:
        member = PurePosixPath(path)
        if member.name in self.config.ignored_native_names:
            return False
        return member.suffix.lower() in self.config.native_suffixes

    def extract_asset_contents(self, archive: Path) -> dict[str, bytes]:
        with self._open(archive) as zf:
            try:
                return {
                    info.filename: zf.read(info)
                    for info in zf.infolist()
                    if not info.is_dir() and self.is_asset_path(info.filename)
                }
            except (zipfile.BadZipFile, zlib.error) as exc:
                raise ArchiveError(f"Corrupt member in archive {archive}: {exc}") from exc

    def _member_hashes(self, archive: Path) -> dict[str, str]:
        hashes: dict[str, str] = {}
        with self._open(archive) as zf:
            try:
                for info in zf.infolist():
                    if info.is_dir():
                        continue
                    with zf.open(info) as fh:
                        hashes[info.filename] = stream_checksum(fh)
            except (zipfile.BadZipFile, zlib.error) as exc:
                raise ArchiveError(f"Corrupt member in archive {archive}: {exc}") from exc
        return hashes

    def _open(self, archive: Path) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(archive)
        except FileNotFoundError as exc:
            raise ArchiveError(f"Archive not found: {archive}") from exc
        except (zipfile.BadZipFile, OSError) as exc:
            raise ArchiveError(f"Cannot read archive {archive}: {exc}") from exc
