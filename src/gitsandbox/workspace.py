"""Ephemeral fixture repository workspaces."""

import logging
import os
import re
import shutil
import stat
from pathlib import Path
from typing import Optional, Union

from .constants import DOTGIT_NAME, GIT_DIR_NAME
from .reporters import OutputAccumulator
from .sink import LineBufferingLogSink, LineReporter

PathLike = Union[str, Path]


def workspace_name(owner: str, test_name: str) -> str:
    """Build a filesystem-safe directory name for one test's workspace.

    Args:
        owner: Name of the test class or module owning the test.
        test_name: Name of the test, possibly parametrised (``test_x[a/b]``).

    Returns:
        ``<owner>_<test_name>`` with characters outside ``[A-Za-z0-9_.-]``
        replaced by ``_``.
    """
    return re.sub(r"[^A-Za-z0-9_.-]", "_", f"{owner}_{test_name}")


def copy_directory(source: PathLike, destination: PathLike, recursive: bool = True) -> None:
    """Copy the files of ``source`` into ``destination``.

    Args:
        source: Directory to copy from.
        destination: Directory to copy into; created if missing.
        recursive: Whether to descend into subdirectories.

    Raises:
        FileNotFoundError: If ``source`` is not an existing directory.
        FileExistsError: If a destination file already exists.
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_dir():
        raise FileNotFoundError(
            f"Source directory does not exist or could not be found: {source}"
        )

    destination.mkdir(parents=True, exist_ok=True)

    with os.scandir(source) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_file():
            target = destination / entry.name
            if target.exists():
                raise FileExistsError(f"Destination file already exists: {target}")
            shutil.copy2(entry.path, target)

    if recursive:
        for entry in entries:
            if entry.is_dir():
                copy_directory(entry.path, destination / entry.name, recursive)


def _make_writable(path: Path) -> None:
    mode = stat.S_IMODE(os.lstat(path).st_mode) | stat.S_IWUSR
    if path.is_dir():
        mode |= stat.S_IRUSR | stat.S_IXUSR
    os.chmod(path, mode)


def _remove(path: Path) -> None:
    if path.is_symlink():
        path.unlink()
        return

    _make_writable(path)
    if path.is_dir():
        with os.scandir(path) as it:
            children = [Path(entry.path) for entry in it]
        for child in children:
            _remove(child)
        path.rmdir()
    else:
        path.unlink()


def remove_directory(path: PathLike) -> None:
    """Recursively delete ``path``, clearing read-only bits along the way.

    Git stores objects read-only, which trips a plain delete on some
    platforms. A missing path is a no-op.
    """
    path = Path(path)
    if not path.exists() and not path.is_symlink():
        return
    _remove(path)


class TempRepo:
    """A staged fixture repository that owns its directory and captured output."""

    def __init__(
        self,
        path: PathLike,
        keep: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the workspace handle.

        Args:
            path: Root of the staged repository.
            keep: Leave the directory on disk when closing.
            logger: Optional logger instance.
        """
        self.path = Path(path)
        self.keep = keep
        self.logger = logger
        self.output_buffer = OutputAccumulator()
        self.sink: Optional[LineBufferingLogSink] = None

    @property
    def output(self) -> str:
        """Text captured from the sink; cached after the first read."""
        return self.output_buffer.text

    def open_sink(self, reporter: LineReporter) -> LineBufferingLogSink:
        """Attach an output sink feeding ``reporter`` and this repo's buffer."""
        if self.sink is not None and not self.sink.closed:
            raise RuntimeError(f"An output sink is already open for {self.path}")
        self.sink = LineBufferingLogSink(reporter, self.output_buffer)
        return self.sink

    def close(self) -> None:
        """Flush the sink and delete the workspace directory."""
        try:
            if self.sink is not None:
                self.sink.close()
        finally:
            if self.keep:
                if self.logger:
                    self.logger.info(f"Keeping workspace: {self.path}")
            else:
                remove_directory(self.path)

    def __enter__(self) -> "TempRepo":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def stage_repository(
    source: PathLike,
    workspace_root: PathLike,
    name: str,
    dotgit_name: str = DOTGIT_NAME,
    keep: bool = False,
    logger: Optional[logging.Logger] = None,
) -> TempRepo:
    """Copy a stored fixture repository into a fresh workspace.

    Fixture repos keep their metadata under ``dotgit_name``; the copy gets
    it renamed back to ``.git``.

    Args:
        source: Fixture repository directory.
        workspace_root: Directory under which the workspace is created.
        name: Workspace directory name (see ``workspace_name``).
        dotgit_name: Name of the stored metadata directory.
        keep: Leave the workspace on disk when the TempRepo is closed.
        logger: Optional logger instance.

    Returns:
        The staged TempRepo.

    Raises:
        FileNotFoundError: If the fixture or its metadata directory is missing.
    """
    repo_path = Path(workspace_root) / name
    if repo_path.exists():
        if logger and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Removing stale workspace: {repo_path}")
        remove_directory(repo_path)
    repo_path.mkdir(parents=True)

    try:
        copy_directory(source, repo_path, recursive=True)
        stored_git_dir = repo_path / dotgit_name
        if not stored_git_dir.is_dir():
            raise FileNotFoundError(
                f"Fixture repository has no '{dotgit_name}' directory: {source}"
            )
        stored_git_dir.rename(repo_path / GIT_DIR_NAME)
    except Exception:
        remove_directory(repo_path)
        raise

    if logger and logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Staged {source} into {repo_path}")

    return TempRepo(repo_path, keep=keep, logger=logger)
