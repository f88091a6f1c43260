"""
Git gateway component.

This module provides the GitGateway class, the only place that runs the git
executable. Every query is read-only, runs against the local repository state
and is best-effort: a failed query leaves its field at the default value.
"""

import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from ..interfaces import IVersionControlGateway
from ..models.repository import RepositoryStatus
from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    get_error_tracker,
    with_error_handling,
)
from ..utils.logging import get_logger

logger = get_logger("git.gateway")

COMPONENT = "git.gateway"
REMOTE_NAME = "origin"
DEFAULT_TIMEOUT = 30.0


class GitGateway(IVersionControlGateway):
    """
    Read-only git queries for a single repository root.

    Non-zero exit codes are normal answers here (no remote, no upstream,
    not ignored). Only exceptions such as a timeout or a missing git
    executable are recorded as errors.
    """

    def __init__(
        self,
        repo_path: Union[str, Path],
        git_executable: str = "git",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """
        Initialize GitGateway for a repository root.

        Args:
            repo_path: Path to the repository root
            git_executable: Name or path of the git binary
            timeout: Seconds before a git command is abandoned, None for no limit
        """
        self.repo_path = Path(repo_path)
        self.git_executable = git_executable
        self.timeout = timeout

    def _run_git_command(
        self, command: List[str], input_text: Optional[str] = None
    ) -> subprocess.CompletedProcess:
        """
        Run a git command and return the result.

        Args:
            command: Git command as list of strings
            input_text: Optional text written to the command's stdin

        Returns:
            CompletedProcess result
        """
        full_command = [self.git_executable] + command
        logger.debug(
            f"Running git command: {' '.join(full_command)}",
            extra={"repo_path": str(self.repo_path)},
        )

        try:
            return subprocess.run(
                full_command,
                cwd=self.repo_path,
                input=input_text,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Git command timed out",
                extra={"command": full_command, "repo_path": str(self.repo_path)},
            )
            raise

    def _first_line(self, command: List[str]) -> Optional[str]:
        """Run a command and return its first output line, or None on failure."""
        result = self._run_git_command(command)
        if result.returncode != 0:
            return None

        lines = result.stdout.splitlines()
        if not lines or not lines[0].strip():
            return None
        return lines[0].strip()

    @with_error_handling(COMPONENT, ErrorCategory.EXTERNAL_TOOL, suppress_exceptions=True)
    def current_branch(self) -> Optional[str]:
        """
        Get the short name of the current branch.

        Returns:
            Branch name, or None for a detached head or an empty repository
        """
        branch = self._first_line(["rev-parse", "--abbrev-ref", "HEAD"])
        if branch == "HEAD":
            return None
        return branch

    @with_error_handling(COMPONENT, ErrorCategory.EXTERNAL_TOOL, suppress_exceptions=True)
    def remote_url(self) -> Optional[str]:
        """Get the URL of the origin remote, or None when it is not configured."""
        return self._first_line(["remote", "get-url", REMOTE_NAME])

    @with_error_handling(COMPONENT, ErrorCategory.EXTERNAL_TOOL, suppress_exceptions=True)
    def tracking_branch(self) -> Optional[str]:
        """Get the upstream of the current branch, e.g. 'origin/main'."""
        return self._first_line(
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"]
        )

    @with_error_handling(
        COMPONENT, ErrorCategory.EXTERNAL_TOOL, fallback_value=False, suppress_exceptions=True
    )
    def remote_ref_exists(self, branch: str) -> bool:
        """
        Check the cached remote-tracking refs for origin/<branch>.

        No network call is made, so the answer is only as fresh as the
        last fetch.
        """
        ref = f"refs/remotes/{REMOTE_NAME}/{branch}"
        return self._first_line(["rev-parse", "--verify", "--quiet", ref]) is not None

    @with_error_handling(
        COMPONENT, ErrorCategory.EXTERNAL_TOOL, fallback_value=(0, 0), suppress_exceptions=True
    )
    def ahead_behind(self) -> Tuple[int, int]:
        """
        Count commits between HEAD and its upstream.

        Returns:
            (ahead, behind) tuple, (0, 0) when the counts are unavailable
        """
        line = self._first_line(["rev-list", "--left-right", "--count", "HEAD...@{u}"])
        if line is None:
            return 0, 0

        parts = line.split()
        try:
            ahead, behind = (int(part) for part in parts)
        except ValueError as e:
            self._unparseable("rev-list", line, e)
            return 0, 0

        return max(ahead, 0), max(behind, 0)

    def _unparseable(self, command: str, output: str, error: Exception) -> None:
        get_error_tracker().record_error(
            component=COMPONENT,
            category=ErrorCategory.PARSING,
            severity=ErrorSeverity.LOW,
            message=f"Unexpected git {command} output",
            exception=error,
            context={"repo_path": str(self.repo_path), "output": output},
        )

    @with_error_handling(COMPONENT, ErrorCategory.EXTERNAL_TOOL, suppress_exceptions=True)
    def _porcelain_status(self) -> Optional[List[str]]:
        result = self._run_git_command(["status", "--porcelain"])
        if result.returncode != 0:
            logger.debug(
                "git status failed",
                extra={"repo_path": str(self.repo_path), "stderr": result.stderr.strip()},
            )
            return None
        return result.stdout.splitlines()

    def status_lines(self) -> List[str]:
        """Get porcelain status lines; empty when git status fails."""
        return self._porcelain_status() or []

    @with_error_handling(
        COMPONENT, ErrorCategory.EXTERNAL_TOOL, fallback_value=False, suppress_exceptions=True
    )
    def is_ignored(self, path: str) -> bool:
        """
        Check whether a path matches the ignore rules.

        --no-index makes tracked files that match a pattern count as ignored.
        """
        result = self._run_git_command(["check-ignore", "-q", "--no-index", "--", path])
        return result.returncode == 0

    @with_error_handling(COMPONENT, ErrorCategory.EXTERNAL_TOOL, suppress_exceptions=True)
    def _batch_check_ignore(self, paths: List[str]) -> Optional[Set[str]]:
        result = self._run_git_command(
            ["check-ignore", "--no-index", "--stdin", "-z"],
            input_text="".join(f"{path}\0" for path in paths),
        )
        # 0: some paths ignored, 1: none ignored, anything else: fatal
        if result.returncode not in (0, 1):
            return None
        return {entry for entry in result.stdout.split("\0") if entry}

    def check_ignored(self, paths: Iterable[str]) -> Set[str]:
        """
        Return the subset of paths that match the ignore rules.

        Uses a single git invocation. If it fails, falls back to checking
        each path on its own so the outcome per path is unchanged.
        """
        candidates = list(dict.fromkeys(paths))
        if not candidates:
            return set()

        ignored = self._batch_check_ignore(candidates)
        if ignored is None:
            ignored = {path for path in candidates if self.is_ignored(path)}

        return ignored & set(candidates)

    def populate_branch_info(self, repo: RepositoryStatus) -> None:
        """
        Fill branch, remote and upstream information on a repository.

        Args:
            repo: RepositoryStatus being built for this gateway's root
        """
        repo.branch = self.current_branch()

        repo.remote_url = self.remote_url()
        repo.has_remote = repo.remote_url is not None

        repo.tracking_branch = self.tracking_branch()
        if repo.tracking_branch:
            repo.is_pushed = True
            repo.ahead, repo.behind = self.ahead_behind()
        elif repo.has_remote and repo.branch:
            # Heuristic: a same-named branch in the cached remote refs counts
            # as pushed even without an upstream link.
            repo.is_pushed = self.remote_ref_exists(repo.branch)

        logger.debug(
            "Collected branch info",
            extra={
                "repo_path": repo.root_path,
                "branch": repo.branch,
                "tracking_branch": repo.tracking_branch,
                "has_remote": repo.has_remote,
                "is_pushed": repo.is_pushed,
                "ahead": repo.ahead,
                "behind": repo.behind,
            },
        )
