"""Diff module - asset comparison and export."""

from .engines import ENGINES, compare_bytes, engine_for_path, get_engine, is_text_file, unified_line_diff
from .exporter import AssetDiffExporter, sanitize_file_name

__all__ = [
    "AssetDiffExporter",
    "ENGINES",
    "compare_bytes",
    "engine_for_path",
    "get_engine",
    "is_text_file",
    "sanitize_file_name",
    "unified_line_diff",
]
