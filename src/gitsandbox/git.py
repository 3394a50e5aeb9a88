"""Read-only git queries used by test assertions."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

# Unit separator between sha, parents and subject. Only the first two are
# split on, so the subject may contain it.
_FIELD_SEP = "\x1f"


class GitError(Exception):
    """Exception raised for Git operation errors."""

    pass


@dataclass
class Commit:
    """A commit as reported by ``git log``.

    Attributes:
        sha: Full object id.
        parents: Parent object ids, first parent first.
        subject: First line of the commit message.
    """
    sha: str
    parents: List[str]
    subject: str


@dataclass
class TreeEntry:
    """A blob reachable from a tree.

    Attributes:
        mode: File mode as printed by git (e.g. ``100644``).
        sha: Blob object id.
        path: Path relative to the tree root, forward slashes.
    """
    mode: str
    sha: str
    path: str


def run_git(
    args: List[str], cwd: Path, check: bool = True
) -> subprocess.CompletedProcess:
    """Run a git command and return the completed process.

    Args:
        args: Arguments following ``git``.
        cwd: Repository to run in.
        check: Raise on a non-zero exit code.

    Raises:
        GitError: If git is missing, or the command exits non-zero and
            ``check`` is set.
    """
    cmd = ["git"] + args
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=check,
        )
    except subprocess.CalledProcessError as e:
        error_msg = e.stderr.strip() if e.stderr else str(e)
        raise GitError(f"Git command failed: {error_msg}") from e
    except FileNotFoundError as e:
        raise GitError("Git is not installed or not in PATH") from e


def _parse_log(stdout: str) -> List[Commit]:
    commits = []
    for record in stdout.split("\0"):
        if not record:
            continue
        sha, parents, subject = record.split(_FIELD_SEP, 2)
        commits.append(Commit(sha=sha, parents=parents.split(), subject=subject))
    return commits


def _log(repo: Path, revision: str) -> List[Commit]:
    result = run_git(
        ["log", "-z", "--topo-order", f"--format=%H{_FIELD_SEP}%P{_FIELD_SEP}%s", revision, "--"],
        repo,
    )
    return _parse_log(result.stdout)


def get_commits(repo: Path, since: Optional[str] = None) -> List[Commit]:
    """List commits reachable from ``since`` (default ``HEAD``), topologically sorted."""
    return _log(repo, since or "HEAD")


def get_commits_from_range(repo: Path, revision_range: str) -> List[Commit]:
    """List commits in a revision range such as ``A..B``, topologically sorted."""
    return _log(repo, revision_range)


def resolve_ref(repo: Path, ref: str) -> Optional[str]:
    """Return the object id a ref points to, or None if it does not exist.

    The ref is not peeled: an annotated tag resolves to the tag object.
    """
    result = run_git(["rev-parse", "--verify", "--quiet", ref], repo, check=False)
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def get_blob_entries(repo: Path, treeish: str = "HEAD") -> Iterator[TreeEntry]:
    """Yield every blob in ``treeish``, descending into subtrees.

    Submodule entries (gitlinks) are skipped.
    """
    result = run_git(["ls-tree", "-r", "-z", treeish], repo)
    for record in result.stdout.split("\0"):
        if not record:
            continue
        meta, path = record.split("\t", 1)
        mode, obj_type, sha = meta.split()
        if obj_type == "blob":
            yield TreeEntry(mode=mode, sha=sha, path=path)
