"""Export asset diffs to disk for developer inspection."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import bsdiff4

from ..archive.differ import ArchiveDiffer
from ..archive.file_set_diff import FileSetDiff
from ..config import ExportConfig
from ..constants import CHANGED_ASSETS_FILE, SUMMARY_FILE
from ..display.base import Display
from ..environment import ProjectEnvironment
from ..templating import render_template
from .engines import engine_for_path

logger = logging.getLogger(__name__)

# Characters that cannot appear in a per-asset directory name
_UNSAFE_CHARS = '/\\: <>|?*"'
_SANITIZE_TABLE = str.maketrans({ch: "_" for ch in _UNSAFE_CHARS})

RULE = "=" * 60

SUMMARY_TEMPLATE = """\
Asset File Changes Summary
Generated: {{ generated }}
Release Archive: {{ release_archive }}
Patch Archive: {{ patch_archive }}
{{ rule }}

{% for section in sections %}
{{ section.title }} ({{ section.count }}):
{% for entry in section.entries %}
{% if entry.kind == "CHANGED" %}
  {{ entry.path }} ({{ entry.old_size }} -> {{ entry.new_size }} bytes)
    Directory: {{ entry.directory }}
    Files: old, new, diff.txt
{% if entry.patch_size is not none %}
    Patch estimate: {{ entry.patch_size }} bytes
{% endif %}
{% else %}
  {{ entry.path }} ({{ entry.size }} bytes) -> {{ entry.directory }}
{% endif %}
{% endfor %}

{% endfor %}
Total asset changes: {{ total }}

Files saved to: {{ output_dir }}
"""


@dataclass
class _SummaryEntry:
    kind: str
    path: str
    directory: Path
    size: int | None = None
    old_size: int | None = None
    new_size: int | None = None
    patch_size: int | None = None


@dataclass
class _SummarySection:
    title: str
    count: int
    entries: list[_SummaryEntry]


def sanitize_file_name(file_path: str) -> str:
    """Make an archive path safe to use as a single directory name.

    Distinct paths may map to the same name; the last one written wins.
    """
    return file_path.translate(_SANITIZE_TABLE)


class AssetDiffExporter:
    """Writes old/new copies and diffs of changed assets under the project root."""

    def __init__(
        self,
        environment: ProjectEnvironment,
        display: Display,
        config: ExportConfig | None = None,
    ):
        self.environment = environment
        self.display = display
        self.config = config or ExportConfig()

    def export(
        self,
        release_archive: Path,
        local_archive: Path,
        archive_differ: ArchiveDiffer,
        content_diffs: FileSetDiff,
    ) -> Path | None:
        """Save asset diff files to disk.

        The output directory is replaced on every call.

        Args:
            release_archive: Release archive path
            local_archive: Patch archive path
            archive_differ: Differ used to classify and extract assets
            content_diffs: Structural diff of the two archives

        Returns:
            The output directory, or None when there was nothing to export
            or no project root could be found
        """
        asset_diffs = archive_differ.asset_file_set_diff(content_diffs)
        if asset_diffs.is_empty:
            return None

        project_root = self.environment.project_root()
        if project_root is None:
            logger.info("No project root found; skipping asset diff export")
            return None

        output_dir = project_root / self.config.output_dir
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)

        release_assets = archive_differ.extract_asset_contents(release_archive)
        local_assets = archive_differ.extract_asset_contents(local_archive)

        changed_assets: list[str] = []
        sections: list[_SummarySection] = []

        if asset_diffs.added_paths:
            entries = []
            for asset_path in asset_diffs.added_paths:
                changed_assets.append(f"ADDED: {asset_path}")
                content = local_assets.get(asset_path)
                if content is None:
                    continue
                asset_dir = self._asset_dir(output_dir, asset_path)
                (asset_dir / "new").write_bytes(content)
                entries.append(_SummaryEntry("ADDED", asset_path, asset_dir, size=len(content)))
            sections.append(_SummarySection("ADDED FILES", len(asset_diffs.added_paths), entries))

        if asset_diffs.changed_paths:
            entries = []
            for asset_path in asset_diffs.changed_paths:
                changed_assets.append(f"CHANGED: {asset_path}")
                old_content = release_assets.get(asset_path)
                new_content = local_assets.get(asset_path)
                if old_content is None or new_content is None:
                    continue
                asset_dir = self._asset_dir(output_dir, asset_path)
                old_file = asset_dir / "old"
                new_file = asset_dir / "new"
                old_file.write_bytes(old_content)
                new_file.write_bytes(new_content)
                self._write_diff_file(old_file, new_file, asset_dir / "diff.txt", asset_path)
                entries.append(
                    _SummaryEntry(
                        "CHANGED",
                        asset_path,
                        asset_dir,
                        old_size=len(old_content),
                        new_size=len(new_content),
                        patch_size=self._estimate_patch_size(old_content, new_content),
                    )
                )
            sections.append(_SummarySection("CHANGED FILES", len(asset_diffs.changed_paths), entries))

        if asset_diffs.removed_paths:
            entries = []
            for asset_path in asset_diffs.removed_paths:
                changed_assets.append(f"REMOVED: {asset_path}")
                content = release_assets.get(asset_path)
                if content is None:
                    continue
                asset_dir = self._asset_dir(output_dir, asset_path)
                (asset_dir / "old").write_bytes(content)
                entries.append(_SummaryEntry("REMOVED", asset_path, asset_dir, size=len(content)))
            sections.append(_SummarySection("REMOVED FILES", len(asset_diffs.removed_paths), entries))

        total = sum(len(section.entries) for section in sections)

        changed_assets_file = output_dir / CHANGED_ASSETS_FILE
        changed_assets_file.write_text("\n".join(changed_assets), encoding="utf-8")

        summary_file = output_dir / SUMMARY_FILE
        summary_file.write_text(
            render_template(
                SUMMARY_TEMPLATE,
                {
                    "generated": datetime.now().isoformat(),
                    "release_archive": release_archive,
                    "patch_archive": local_archive,
                    "rule": RULE,
                    "sections": sections,
                    "total": total,
                    "output_dir": output_dir,
                },
            ),
            encoding="utf-8",
        )

        logger.info("Exported %d asset changes to %s", total, output_dir)
        self.display.info(
            f"📁 Asset diff files saved to: {output_dir}\n"
            f"   📋 Changed assets list: {changed_assets_file}\n"
            f"   📊 Detailed summary: {summary_file}\n"
            "   📂 Asset directories: Each changed asset has its own directory with:\n"
            "      - old: Original file content\n"
            "      - new: Updated file content\n"
            "      - diff.txt: Line-by-line changes\n"
            "   Use these files to review exact changes in your assets."
        )
        return output_dir

    def _asset_dir(self, output_dir: Path, asset_path: str) -> Path:
        asset_dir = output_dir / sanitize_file_name(asset_path)
        asset_dir.mkdir(parents=True, exist_ok=True)
        return asset_dir

    def _estimate_patch_size(self, old_content: bytes, new_content: bytes) -> int | None:
        if not self.config.estimate_patch_size:
            return None
        return len(bsdiff4.diff(old_content, new_content))

    def _write_diff_file(self, old_file: Path, new_file: Path, diff_file: Path, asset_path: str) -> None:
        """Write diff.txt comparing two saved asset files.

        Failures while producing the comparison are recorded in the file
        instead of raised, so one bad asset does not stop the export.
        """
        header = "\n".join(
            [
                f"Asset File Diff: {asset_path}",
                f"Generated: {datetime.now().isoformat()}",
                f"Old file: {old_file}",
                f"New file: {new_file}",
                RULE,
                "",
                "",
            ]
        )

        engine = engine_for_path(asset_path)
        try:
            body = engine.diff(old_file, new_file, {"label": asset_path})
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to diff %s with %s engine: %s", asset_path, engine.name, exc)
            body = f"Error generating diff: {exc}\n"

        diff_file.write_text(header + body, encoding="utf-8")
