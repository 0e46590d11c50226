"""Shared constants for patchcheck directories and artefact locations."""

PATCHCHECK_HOME_EXT = ".patchcheck"  # user-level log directory suffix

PROJECT_MARKER = "shorebird.yaml"  # file that marks a project root

PROJECT_STATE_DIR = ".shorebird"

ASSET_DIFFS_DIR = f"{PROJECT_STATE_DIR}/asset_diffs"

CONFIG_FILE_NAME = "patchcheck.json"

CHANGED_ASSETS_FILE = "changed_assets.txt"

SUMMARY_FILE = "asset_changes_summary.txt"

# Display width constant - standardize to 80 characters max
MAX_DISPLAY_WIDTH = 80

TROUBLESHOOTING_URL = "https://docs.shorebird.dev/troubleshooting"
