"""Top-level patchcheck configuration."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import ASSET_DIFFS_DIR, CONFIG_FILE_NAME, PROJECT_STATE_DIR

DEFAULT_ASSET_PREFIXES = [
    "base/assets/flutter_assets/",
    "assets/flutter_assets/",
    "Frameworks/App.framework/flutter_assets/",
]

DEFAULT_NATIVE_SUFFIXES = [".so", ".dex", ".dylib"]

# Compiled Dart code is exactly what a patch replaces
DEFAULT_IGNORED_NATIVE_NAMES = ["libapp.so"]


class ConfigError(Exception):
    """Raised when patchcheck configuration is invalid."""


class PolicyConfig(BaseModel):
    """Which change classes may ship without confirmation."""

    model_config = ConfigDict(extra="forbid")

    allow_asset_changes: bool = False
    allow_native_changes: bool = False
    confirm_native_changes: bool = True


class ArchiveConfig(BaseModel):
    """Rules the zip archive differ uses to classify member paths."""

    model_config = ConfigDict(extra="forbid")

    asset_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSET_PREFIXES))
    native_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_NATIVE_SUFFIXES))
    ignored_native_names: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_NATIVE_NAMES))

    @field_validator("asset_prefixes")
    @classmethod
    def _prefixes_not_blank(cls, value: list[str]) -> list[str]:
        if any(not prefix for prefix in value):
            raise ValueError("asset prefixes must be non-empty strings")
        return value

    @field_validator("native_suffixes")
    @classmethod
    def _suffixes_are_extensions(cls, value: list[str]) -> list[str]:
        bad = [suffix for suffix in value if not suffix.startswith(".")]
        if bad:
            raise ValueError(f"native suffixes must start with '.' (found: {bad})")
        return [suffix.lower() for suffix in value]


class ExportConfig(BaseModel):
    """Where and how asset diff artifacts are written."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = ASSET_DIFFS_DIR
    estimate_patch_size: bool = False

    @field_validator("output_dir")
    @classmethod
    def _output_dir_relative(cls, value: str) -> str:
        if not value or Path(value).is_absolute():
            raise ValueError("output_dir must be a non-empty path relative to the project root")
        return value


class PatchCheckConfig(BaseModel):
    """Configuration for a verification run."""

    model_config = ConfigDict(extra="forbid")

    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @classmethod
    def get_config_path(cls, project_root: Path) -> Path:
        """Path of the optional per-project config file."""
        return project_root / PROJECT_STATE_DIR / CONFIG_FILE_NAME

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PatchCheckConfig":
        """Build a config from a parsed JSON dict.

        Raises:
            ConfigError: If any field fails validation
        """
        try:
            return cls(**raw)
        except ValidationError as e:
            error_list = e.errors() or [{"msg": str(e), "loc": ()}]
            first = error_list[0]
            error_msg = first.get("msg", str(e))
            loc = first.get("loc", ())
            field = ".".join(str(x) for x in loc) if isinstance(loc, (list, tuple)) else ""
            detail = f"{field}: {error_msg}" if field else error_msg
            raise ConfigError(f"Configuration validation error: {detail}") from e

    @classmethod
    def load(cls, project_root: Path | None) -> "PatchCheckConfig":
        """Load config for a project, falling back to defaults.

        A project without a config file (or no project at all) uses the
        defaults.

        Raises:
            ConfigError: If the file exists but is not valid JSON or fails validation
        """
        if project_root is None:
            return cls()

        path = cls.get_config_path(project_root)
        if not path.exists():
            return cls()

        try:
            with path.open() as fh:
                raw = json.load(fh)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

        return cls.from_dict(raw)
