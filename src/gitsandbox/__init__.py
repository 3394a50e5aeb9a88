"""Standardize the public API for the gitsandbox package."""

from .config import DEFAULT_CONFIG, fixture_source, load_config, validate_config
from .constants import CONFIG_FILENAME, DOTGIT_NAME, NEW_BRANCH, NEW_BRANCH_REF
from .git import Commit, GitError, TreeEntry, get_blob_entries, get_commits, get_commits_from_range, resolve_ref
from .reporters import LoggingReporter, OutputAccumulator, ReporterClosedError
from .sink import LineBufferingLogSink
from .utils import setup_logger, setup_report_logger
from .workspace import TempRepo, copy_directory, remove_directory, stage_repository, workspace_name

__version__ = "0.1.0"

__all__ = [
    "load_config",
    "validate_config",
    "fixture_source",
    "DEFAULT_CONFIG",
    "CONFIG_FILENAME",
    "DOTGIT_NAME",
    "NEW_BRANCH",
    "NEW_BRANCH_REF",
    "Commit",
    "TreeEntry",
    "GitError",
    "get_commits",
    "get_commits_from_range",
    "get_blob_entries",
    "resolve_ref",
    "LineBufferingLogSink",
    "LoggingReporter",
    "OutputAccumulator",
    "ReporterClosedError",
    "setup_logger",
    "setup_report_logger",
    "TempRepo",
    "copy_directory",
    "remove_directory",
    "stage_repository",
    "workspace_name",
]
