"""Tests for patchcheck/config.py."""

import json

import pytest

from patchcheck.config import ArchiveConfig, ConfigError, ExportConfig, PatchCheckConfig, PolicyConfig


class TestPatchCheckConfig:
    """Test loading and validation."""

    def test_defaults(self):
        cfg = PatchCheckConfig()

        assert cfg.policy == PolicyConfig(
            allow_asset_changes=False, allow_native_changes=False, confirm_native_changes=True
        )
        assert cfg.export.output_dir == ".shorebird/asset_diffs"
        assert cfg.export.estimate_patch_size is False
        assert "libapp.so" in cfg.archive.ignored_native_names

    def test_load_without_project(self):
        assert PatchCheckConfig.load(None) == PatchCheckConfig()

    def test_load_without_file(self, project_root):
        assert PatchCheckConfig.load(project_root) == PatchCheckConfig()

    def test_load_from_file(self, project_root):
        path = PatchCheckConfig.get_config_path(project_root)
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"policy": {"allow_asset_changes": True}, "export": {"estimate_patch_size": True}}))

        cfg = PatchCheckConfig.load(project_root)

        assert cfg.policy.allow_asset_changes is True
        assert cfg.policy.allow_native_changes is False
        assert cfg.export.estimate_patch_size is True

    def test_invalid_json(self, project_root):
        path = PatchCheckConfig.get_config_path(project_root)
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            PatchCheckConfig.load(project_root)

    def test_non_object_json(self, project_root):
        path = PatchCheckConfig.get_config_path(project_root)
        path.parent.mkdir(parents=True)
        path.write_text("[]")

        with pytest.raises(ConfigError, match="JSON object"):
            PatchCheckConfig.load(project_root)

    def test_unknown_field(self):
        with pytest.raises(ConfigError, match="policy.allow_everything"):
            PatchCheckConfig.from_dict({"policy": {"allow_everything": True}})


class TestSectionValidation:
    """Test per-section validators."""

    def test_native_suffix_needs_dot(self):
        with pytest.raises(ValueError):
            ArchiveConfig(native_suffixes=["so"])

    def test_native_suffixes_lowercased(self):
        assert ArchiveConfig(native_suffixes=[".SO"]).native_suffixes == [".so"]

    def test_blank_asset_prefix(self):
        with pytest.raises(ValueError):
            ArchiveConfig(asset_prefixes=[""])

    def test_absolute_output_dir(self):
        with pytest.raises(ValueError):
            ExportConfig(output_dir="/tmp/out")
