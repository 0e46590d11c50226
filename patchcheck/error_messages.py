"""Helpful error messages for verification failures."""

import logging
import sys

logger = logging.getLogger(__name__)


def _emit_error(*lines: str) -> None:
    """Write error message lines to STDERR."""
    for line in lines:
        sys.stderr.write(line + "\n")


def unpatchable_change_message(archive: str) -> None:
    """Explain why a non-interactive run refused the patch."""
    logger.error(f"Unpatchable change in {archive} without interactive input")
    _emit_error(
        "",
        "=" * 70,
        "PATCH CANNOT BE APPLIED",
        "=" * 70,
        f"\nThe patch built from {archive} contains changes that a patch",
        "cannot deliver, and no terminal is available to confirm them.",
        "\nPossible solutions:",
        "  1. Create a new release instead of a patch",
        "  2. Re-run interactively to review and confirm the changes",
        "  3. Allow the change class explicitly:",
        "     patchcheck verify ... --allow-asset-diffs",
        "     patchcheck verify ... --allow-native-diffs",
        "=" * 70,
        "",
    )


def user_cancelled_message() -> None:
    logger.info("Verification cancelled by user")
    _emit_error("Exiting.")


def archive_error_message(original_error: Exception) -> None:
    """Explain an unreadable archive."""
    logger.error(f"Archive error: {original_error}")
    _emit_error(
        "",
        "=" * 70,
        "ARCHIVE ERROR",
        "=" * 70,
        f"\n{original_error}",
        "\nVerify that both paths point to zip-based build archives (aab, apk, zip).",
        "=" * 70,
        "",
    )


def config_error_message(config_path: str, original_error: Exception) -> None:
    """Explain an invalid configuration file."""
    logger.error(f"Config error in {config_path}: {original_error}")
    _emit_error(
        "",
        "=" * 70,
        "INVALID CONFIGURATION",
        "=" * 70,
        f"\nCouldn't load: {config_path}",
        f"\n{original_error}",
        "\nFix or remove the file to use the defaults.",
        "=" * 70,
        "",
    )
