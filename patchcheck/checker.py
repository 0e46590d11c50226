"""Patch diff checker: decides whether a patch may be applied to its release."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from .archive.differ import ArchiveDiffer
from .config import ExportConfig
from .constants import TROUBLESHOOTING_URL
from .diff.exporter import AssetDiffExporter
from .display.base import Display
from .environment import ProjectEnvironment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffStatus:
    """Types of changes detected between a patch and its release."""

    has_asset_changes: bool
    has_native_changes: bool


class PatchCheckError(Exception):
    """Base class for verification outcomes that stop the patch."""


class UnpatchableChangeError(PatchCheckError):
    """Unpatchable change detected where the user cannot be prompted."""

    def __init__(self, message: str = "Unpatchable change detected and no interactive input is available"):
        super().__init__(message)


class UserCancelledError(PatchCheckError):
    """The user declined to continue after being prompted."""

    def __init__(self, message: str = "Cancelled by user"):
        super().__init__(message)


def confirm_or_raise(allowed: bool, can_accept_user_input: bool, confirm: Callable[[], bool]) -> None:
    """Gate a detected change class on policy and, if needed, the user.

    Args:
        allowed: Whether policy lets this change class through
        can_accept_user_input: Whether confirm may be called
        confirm: Blocking yes/no prompt

    Raises:
        UnpatchableChangeError: Not allowed and no interactive input
        UserCancelledError: Not allowed and the user declined
    """
    if allowed:
        return
    if not can_accept_user_input:
        raise UnpatchableChangeError()
    if not confirm():
        raise UserCancelledError()


class PatchDiffChecker:
    """Verifies that a patch can successfully be applied to a release artifact."""

    def __init__(
        self,
        display: Display,
        environment: ProjectEnvironment,
        exporter: AssetDiffExporter | None = None,
        export_config: ExportConfig | None = None,
    ):
        """Initialize checker.

        Args:
            display: Console surface for warnings and prompts
            environment: Resolves the project root and interactivity
            exporter: Asset diff exporter (built from display and
                environment when omitted)
            export_config: Export options for the default exporter
        """
        self.display = display
        self.environment = environment
        self.exporter = exporter or AssetDiffExporter(environment, display, export_config)

    def confirm_unpatchable_diffs_if_necessary(
        self,
        local_archive: Path,
        release_archive: Path,
        archive_differ: ArchiveDiffer,
        allow_asset_changes: bool,
        allow_native_changes: bool,
        confirm_native_changes: bool = True,
    ) -> DiffStatus:
        """Check for differences that could break applying the patch.

        Asset diffs are exported before the asset gate runs, so the files
        stay on disk even if the patch is then refused.

        Raises:
            UnpatchableChangeError: A disallowed change in a non-interactive run
            UserCancelledError: The user declined to continue
            ArchiveError: Either archive cannot be read
        """
        with self._progress("Verifying patch can be applied to release"):
            content_diffs = archive_differ.changed_files(release_archive, local_archive)

        status = DiffStatus(
            has_asset_changes=archive_differ.contains_potentially_breaking_asset_diffs(content_diffs),
            has_native_changes=archive_differ.contains_potentially_breaking_native_diffs(content_diffs),
        )
        logger.info(
            "Diff status for %s: assets=%s native=%s",
            local_archive,
            status.has_asset_changes,
            status.has_native_changes,
        )

        if status.has_native_changes and confirm_native_changes:
            self.display.warning("Your app contains native changes, which cannot be applied with a patch.")
            self.display.info(archive_differ.native_file_set_diff(content_diffs).pretty_string, style="yellow")
            self.display.info(
                "\nIf you don't know why you're seeing this error, visit our troubleshooting page at "
                f"{TROUBLESHOOTING_URL}",
                style="yellow",
            )
            self._gate("native", allow_native_changes)

        if status.has_asset_changes:
            self.display.warning("Your app contains asset changes, which will not be included in the patch.")
            self.display.info(archive_differ.asset_file_set_diff(content_diffs).pretty_string, style="yellow")
            self.exporter.export(
                release_archive=release_archive,
                local_archive=local_archive,
                archive_differ=archive_differ,
                content_diffs=content_diffs,
            )
            self._gate("asset", allow_asset_changes)

        return status

    def _gate(self, kind: str, allowed: bool) -> None:
        try:
            confirm_or_raise(
                allowed,
                self.environment.can_accept_user_input,
                lambda: self.display.confirm("Continue anyway?"),
            )
        except UnpatchableChangeError:
            logger.warning("Refusing %s changes: not allowed and no interactive input", kind)
            raise
        except UserCancelledError:
            logger.info("User declined to continue with %s changes", kind)
            raise

    @contextmanager
    def _progress(self, description: str) -> Iterator[None]:
        handle = self.display.spinner_start(description)
        completed = False
        try:
            yield
            completed = True
        finally:
            self.display.spinner_finish(handle, description if completed else "")
