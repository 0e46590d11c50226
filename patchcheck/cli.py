"""patchcheck CLI - main entry point."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import click
import typer

from . import error_messages
from .archive.differ import ArchiveError, ZipArchiveDiffer
from .checker import PatchDiffChecker, UnpatchableChangeError, UserCancelledError
from .config import ConfigError, PatchCheckConfig
from .display.context import get_display
from .environment import ProjectEnvironment
from .logging_config import configure_logging, get_logger
from .utils import get_package_version

# sysexits.h EX_SOFTWARE
EXIT_UNPATCHABLE = 70
EXIT_ARCHIVE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"patchcheck {get_package_version()}")
        raise typer.Exit()


def _create_app() -> typer.Typer:
    """Create and configure the patchcheck Typer app."""
    app = typer.Typer(
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        help="Verify that a patch can be applied to a published release",
        context_settings={"help_option_names": ["-h", "--help"]},
        no_args_is_help=True,
    )

    @app.callback()
    def main_callback(
        version: Annotated[
            bool,
            typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit"),
        ] = False,
    ) -> None:
        configure_logging()

    @app.command("verify")
    def verify(
        release_archive: Annotated[Path, typer.Argument(help="Archive of the published release")],
        patch_archive: Annotated[Path, typer.Argument(help="Archive of the new build")],
        allow_asset_diffs: Annotated[
            bool | None,
            typer.Option("--allow-asset-diffs/--no-allow-asset-diffs", help="Proceed despite asset changes"),
        ] = None,
        allow_native_diffs: Annotated[
            bool | None,
            typer.Option("--allow-native-diffs/--no-allow-native-diffs", help="Proceed despite native changes"),
        ] = None,
        confirm_native_diffs: Annotated[
            bool | None,
            typer.Option("--confirm-native-diffs/--no-confirm-native-diffs", help="Report and gate native changes"),
        ] = None,
        estimate_deltas: Annotated[
            bool, typer.Option("--estimate-deltas", help="Add bsdiff patch size estimates to the summary")
        ] = False,
        project_dir: Annotated[
            Path | None, typer.Option("--project-dir", help="Directory to search for shorebird.yaml from")
        ] = None,
    ) -> None:
        """Compare RELEASE_ARCHIVE with PATCH_ARCHIVE and gate the patch."""
        logger = get_logger("cli")
        display = get_display()
        environment = ProjectEnvironment(start_dir=project_dir)
        project_root = environment.project_root()
        if project_root is None:
            display.status("No shorebird.yaml found; asset diffs will not be saved")
        else:
            display.status(f"Project root: {project_root}")

        try:
            config = PatchCheckConfig.load(project_root)
        except ConfigError as exc:
            config_path = PatchCheckConfig.get_config_path(project_root) if project_root else "<none>"
            display.error("Invalid configuration", details=str(exc))
            error_messages.config_error_message(str(config_path), exc)
            raise typer.Exit(EXIT_CONFIG_ERROR) from exc

        policy = config.policy
        if allow_asset_diffs is not None:
            policy.allow_asset_changes = allow_asset_diffs
        if allow_native_diffs is not None:
            policy.allow_native_changes = allow_native_diffs
        if confirm_native_diffs is not None:
            policy.confirm_native_changes = confirm_native_diffs
        if estimate_deltas:
            config.export.estimate_patch_size = True

        checker = PatchDiffChecker(display, environment, export_config=config.export)
        logger.info("Verifying %s against %s with %s", patch_archive, release_archive, policy)

        try:
            status = checker.confirm_unpatchable_diffs_if_necessary(
                local_archive=patch_archive,
                release_archive=release_archive,
                archive_differ=ZipArchiveDiffer(config.archive),
                allow_asset_changes=policy.allow_asset_changes,
                allow_native_changes=policy.allow_native_changes,
                confirm_native_changes=policy.confirm_native_changes,
            )
        except ArchiveError as exc:
            display.error("Cannot read archive", details=str(exc))
            error_messages.archive_error_message(exc)
            raise typer.Exit(EXIT_ARCHIVE_ERROR) from exc
        except UnpatchableChangeError as exc:
            display.error("Patch cannot be applied to this release")
            error_messages.unpatchable_change_message(str(patch_archive))
            raise typer.Exit(EXIT_UNPATCHABLE) from exc
        except UserCancelledError as exc:
            error_messages.user_cancelled_message()
            raise typer.Exit(0) from exc

        if not (status.has_asset_changes or status.has_native_changes):
            display.success("No asset or native changes detected")
        else:
            display.success("Patch may proceed")

    return app


app = _create_app()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        rv = app(argv, standalone_mode=False)
    except click.exceptions.Abort:
        return 1
    except click.exceptions.UsageError as e:
        typer.echo(f"Usage error: {e}", err=True)
        return 2
    # click returns the exit code of typer.Exit when not in standalone mode
    return rv if isinstance(rv, int) else 0
