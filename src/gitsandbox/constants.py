"""Constants for the gitsandbox test harness."""

# --- Branches ---
NEW_BRANCH = "new_master"
NEW_BRANCH_REF = f"refs/heads/{NEW_BRANCH}"

# --- Fixture layout ---
# Fixture repos are stored with their metadata directory renamed so the
# enclosing project does not treat them as submodules.
DOTGIT_NAME = "dotgit"
GIT_DIR_NAME = ".git"
DEFAULT_FIXTURE_REPO = "test_repo"

# Config file
CONFIG_FILENAME = ".gitsandbox.json"

SINK_ENCODING = "utf-8"

# Per-test report lines. Kept outside the ``gitsandbox`` logger so its
# console handler does not echo every captured line.
REPORT_LOGGER_NAME = "gitsandbox_report"
