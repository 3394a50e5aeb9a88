"""pytest fixtures that stage a fixture repository and capture tool output.

Import the fixtures into a ``conftest.py``::

    from gitsandbox.plugin import (  # noqa: F401
        line_reporter,
        output_sink,
        sandbox_config,
        sandbox_logger,
        temp_repo,
    )

The tool under test receives ``temp_repo.sink`` (or ``output_sink``) as its
output stream; nothing redirects ``sys.stdout``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from .config import fixture_source, load_config
from .constants import NEW_BRANCH_REF
from .git import resolve_ref
from .reporters import LoggingReporter, OutputAccumulator
from .sink import LineBufferingLogSink
from .utils import setup_logger, setup_report_logger
from .workspace import TempRepo, stage_repository, workspace_name


def assert_branch_ref(repo: Path, ref: str = NEW_BRANCH_REF) -> str:
    """Assert that ``ref`` exists in ``repo`` and return its target sha."""
    target = resolve_ref(repo, ref)
    assert target is not None, f"Expected ref {ref} in {repo}"
    return target


def _owner_name(request: pytest.FixtureRequest) -> str:
    if request.cls is not None:
        return request.cls.__name__
    return request.module.__name__.rsplit(".", 1)[-1]


@pytest.fixture
def sandbox_config(request: pytest.FixtureRequest) -> Dict[str, Any]:
    """Configuration loaded from the pytest rootdir."""
    return load_config(request.config.rootpath, logging.getLogger("gitsandbox"))


@pytest.fixture
def sandbox_logger(sandbox_config: Dict[str, Any]) -> logging.Logger:
    """The package logger, configured for the session's verbosity."""
    return setup_logger("gitsandbox", verbose=sandbox_config["verbose"])


@pytest.fixture
def line_reporter(
    request: pytest.FixtureRequest,
) -> Generator[LoggingReporter, None, None]:
    """Report channel for the running test; closed once the test is done."""
    reporter = LoggingReporter(request.node.nodeid, setup_report_logger())
    yield reporter
    reporter.finish()


@pytest.fixture
def output_sink(
    line_reporter: LoggingReporter,
) -> Generator[LineBufferingLogSink, None, None]:
    """A sink over the test's reporter and a fresh accumulator."""
    with LineBufferingLogSink(line_reporter, OutputAccumulator()) as sink:
        yield sink


@pytest.fixture
def temp_repo(
    request: pytest.FixtureRequest,
    tmp_path: Path,
    sandbox_config: Dict[str, Any],
    sandbox_logger: logging.Logger,
    line_reporter: LoggingReporter,
) -> Generator[TempRepo, None, None]:
    """Stage the configured fixture repository for one test."""
    source = fixture_source(request.config.rootpath, sandbox_config)
    name = workspace_name(_owner_name(request), request.node.name)

    repo = stage_repository(
        source,
        tmp_path,
        name,
        dotgit_name=sandbox_config["dotgit_name"],
        keep=sandbox_config["keep_workspace"],
        logger=sandbox_logger,
    )
    with repo:
        repo.open_sink(line_reporter)
        yield repo
