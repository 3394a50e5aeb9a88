"""Shared pytest fixtures for gitsandbox tests."""

from fixtures.git_fixtures import git_repo, sandbox_config, stored_fixture_repo  # noqa: F401
from fixtures.sink_fixtures import accumulator, call_log, recording_reporter  # noqa: F401
from gitsandbox.plugin import line_reporter, output_sink, sandbox_logger, temp_repo  # noqa: F401
