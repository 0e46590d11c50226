"""Tests for patchcheck/checker.py."""

from unittest.mock import MagicMock

import pytest

from patchcheck.archive.differ import ArchiveError, ZipArchiveDiffer
from patchcheck.checker import (
    DiffStatus,
    PatchDiffChecker,
    UnpatchableChangeError,
    UserCancelledError,
    confirm_or_raise,
)
from tests.conftest import FakeEnvironment, RecordingDisplay, make_archive

ASSET = "base/assets/flutter_assets/assets/logo.png"
NATIVE = "base/lib/arm64-v8a/libplugin.so"


class TestConfirmOrRaise:
    """Test the confirmation gate."""

    def test_allowed_never_prompts(self):
        confirm = MagicMock()

        confirm_or_raise(True, False, confirm)

        confirm.assert_not_called()

    def test_disallowed_without_input(self):
        confirm = MagicMock()

        with pytest.raises(UnpatchableChangeError):
            confirm_or_raise(False, False, confirm)

        confirm.assert_not_called()

    def test_disallowed_and_declined(self):
        with pytest.raises(UserCancelledError):
            confirm_or_raise(False, True, lambda: False)

    def test_disallowed_and_confirmed(self):
        confirm_or_raise(False, True, lambda: True)


def _archives(tmp_path, old_members, new_members):
    release = make_archive(tmp_path / "release.aab", old_members)
    local = make_archive(tmp_path / "patch.aab", new_members)
    return release, local


def _check(tmp_path, environment, display, old_members, new_members, **policy):
    release, local = _archives(tmp_path, old_members, new_members)
    checker = PatchDiffChecker(display, environment)
    return checker.confirm_unpatchable_diffs_if_necessary(
        local_archive=local,
        release_archive=release,
        archive_differ=ZipArchiveDiffer(),
        **{"allow_asset_changes": False, "allow_native_changes": False, **policy},
    )


class TestPatchDiffChecker:
    """Test the verification flow."""

    def test_no_changes(self, tmp_path, project_root, display):
        members = {ASSET: b"same", NATIVE: b"same"}

        status = _check(tmp_path, FakeEnvironment(project_root, interactive=True), display, members, members)

        assert status == DiffStatus(has_asset_changes=False, has_native_changes=False)
        assert display.questions == []
        assert display.texts("warning") == []
        assert not (project_root / ".shorebird").exists()
        assert display.spinners_open == 0

    def test_native_change_non_interactive_is_unpatchable(self, tmp_path, project_root, display):
        with pytest.raises(UnpatchableChangeError):
            _check(
                tmp_path,
                FakeEnvironment(project_root, interactive=False),
                display,
                {NATIVE: b"v1"},
                {NATIVE: b"v2"},
                confirm_native_changes=True,
            )

        assert display.texts("warning") == ["Your app contains native changes, which cannot be applied with a patch."]
        assert any(NATIVE in text for text in display.texts("info"))
        assert not (project_root / ".shorebird").exists()

    def test_native_change_confirmed(self, tmp_path, project_root):
        display = RecordingDisplay(answers=[True])

        status = _check(
            tmp_path, FakeEnvironment(project_root, interactive=True), display, {NATIVE: b"v1"}, {NATIVE: b"v2"}
        )

        assert status == DiffStatus(has_asset_changes=False, has_native_changes=True)
        assert display.questions == ["Continue anyway?"]

    def test_native_change_allowed(self, tmp_path, project_root, display):
        status = _check(
            tmp_path,
            FakeEnvironment(project_root, interactive=False),
            display,
            {NATIVE: b"v1"},
            {NATIVE: b"v2"},
            allow_native_changes=True,
        )

        assert status.has_native_changes is True
        assert len(display.texts("warning")) == 1

    def test_native_change_unconfirmed_is_silent(self, tmp_path, project_root, display):
        status = _check(
            tmp_path,
            FakeEnvironment(project_root, interactive=False),
            display,
            {NATIVE: b"v1"},
            {NATIVE: b"v2"},
            confirm_native_changes=False,
        )

        assert status.has_native_changes is True
        assert display.texts("warning") == []

    def test_asset_change_declined_keeps_export(self, tmp_path, project_root):
        display = RecordingDisplay(answers=[False])

        with pytest.raises(UserCancelledError):
            _check(
                tmp_path, FakeEnvironment(project_root, interactive=True), display, {ASSET: b"a"}, {ASSET: b"bb"}
            )

        output_dir = project_root / ".shorebird" / "asset_diffs"
        assert (output_dir / "changed_assets.txt").read_text() == f"CHANGED: {ASSET}"
        assert (output_dir / "asset_changes_summary.txt").exists()
        assert display.texts("warning") == [
            "Your app contains asset changes, which will not be included in the patch."
        ]

    def test_asset_change_allowed_still_exports(self, tmp_path, project_root, display):
        status = _check(
            tmp_path,
            FakeEnvironment(project_root, interactive=False),
            display,
            {ASSET: b"a"},
            {ASSET: b"b"},
            allow_asset_changes=True,
        )

        assert status == DiffStatus(has_asset_changes=True, has_native_changes=False)
        assert (project_root / ".shorebird" / "asset_diffs" / "changed_assets.txt").exists()

    def test_native_decline_stops_before_asset_export(self, tmp_path, project_root):
        display = RecordingDisplay(answers=[False])

        with pytest.raises(UserCancelledError):
            _check(
                tmp_path,
                FakeEnvironment(project_root, interactive=True),
                display,
                {NATIVE: b"v1", ASSET: b"a"},
                {NATIVE: b"v2", ASSET: b"b"},
            )

        assert display.questions == ["Continue anyway?"]
        assert not (project_root / ".shorebird").exists()

    def test_both_confirmed(self, tmp_path, project_root):
        display = RecordingDisplay(answers=[True, True])

        status = _check(
            tmp_path,
            FakeEnvironment(project_root, interactive=True),
            display,
            {NATIVE: b"v1", ASSET: b"a"},
            {NATIVE: b"v2", ASSET: b"b"},
        )

        assert status == DiffStatus(has_asset_changes=True, has_native_changes=True)
        assert display.questions == ["Continue anyway?", "Continue anyway?"]

    def test_progress_released_on_archive_error(self, tmp_path, project_root, display):
        checker = PatchDiffChecker(display, FakeEnvironment(project_root))

        with pytest.raises(ArchiveError):
            checker.confirm_unpatchable_diffs_if_necessary(
                local_archive=tmp_path / "missing.aab",
                release_archive=tmp_path / "missing-too.aab",
                archive_differ=ZipArchiveDiffer(),
                allow_asset_changes=True,
                allow_native_changes=True,
            )

        assert display.spinners_open == 0

    def test_uses_injected_exporter(self, tmp_path, project_root, display):
        exporter = MagicMock()
        release, local = _archives(tmp_path, {ASSET: b"a"}, {ASSET: b"b"})
        differ = ZipArchiveDiffer()
        checker = PatchDiffChecker(display, FakeEnvironment(project_root), exporter=exporter)

        checker.confirm_unpatchable_diffs_if_necessary(
            local_archive=local,
            release_archive=release,
            archive_differ=differ,
            allow_asset_changes=True,
            allow_native_changes=False,
        )

        exporter.export.assert_called_once()
        kwargs = exporter.export.call_args.kwargs
        assert kwargs["release_archive"] == release
        assert kwargs["local_archive"] == local
        assert kwargs["content_diffs"].changed_paths == (ASSET,)
