"""
Report rendering component.

This module formats a ScanResult into the boxed terminal report: a page
header, one block per repository and an aggregate footer.
"""

from typing import List, Sequence, Tuple

from ..interfaces import IReportRenderer
from ..models.change import ChangeRecord, ChangeStatus
from ..models.repository import RepositoryStatus, ScanResult

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"
BG_BLUE = "\033[44m"

# Box drawing characters
TOP_LEFT = "╔"
TOP_RIGHT = "╗"
BOT_LEFT = "╚"
BOT_RIGHT = "╝"
HORIZ = "═"
VERT = "║"
T_RIGHT = "╠"
T_LEFT = "╣"

TITLE = "  GIT UNCOMMITTED CHANGES SCANNER  "
PATH_COLUMN_WIDTH = 40
STATUS_COLUMN_WIDTH = 20
ELLIPSIS = "..."

STAGED_LABELS = {
    ChangeStatus.MODIFIED: "modified (staged)",
    ChangeStatus.ADDED: "new file (staged)",
    ChangeStatus.DELETED: "deleted (staged)",
    ChangeStatus.RENAMED: "renamed (staged)",
}

UNSTAGED_LABELS = {
    ChangeStatus.MODIFIED: "modified",
    ChangeStatus.ADDED: "new file",
    ChangeStatus.DELETED: "deleted",
    ChangeStatus.UNTRACKED: "untracked",
    ChangeStatus.RENAMED: "renamed",
}

STATUS_COLORS = {
    ChangeStatus.MODIFIED: YELLOW,
    ChangeStatus.ADDED: GREEN,
    ChangeStatus.DELETED: RED,
    ChangeStatus.UNTRACKED: MAGENTA,
    ChangeStatus.RENAMED: BLUE,
}

# (text, ANSI style) pairs making up one line inside a box
Segments = Sequence[Tuple[str, str]]


def status_label(record: ChangeRecord) -> str:
    """Human-readable label for a change."""
    if record.staged:
        return STAGED_LABELS.get(record.status, "staged")
    return UNSTAGED_LABELS.get(record.status, "unknown")


def status_color(record: ChangeRecord) -> str:
    """ANSI color for a change; everything staged is green."""
    if record.staged:
        return GREEN
    return STATUS_COLORS.get(record.status, WHITE)


def truncate_path(path: str, width: int = PATH_COLUMN_WIDTH) -> str:
    """Shorten a path to width characters, marking the cut with an ellipsis."""
    if len(path) <= width:
        return path
    return path[: width - len(ELLIPSIS)] + ELLIPSIS


class ReportRenderer(IReportRenderer):
    """Formats scan results as a boxed, optionally colored, terminal report."""

    def __init__(self, box_width: int = 80, use_color: bool = True):
        """
        Initialize the renderer.

        Args:
            box_width: Total width of every box, borders included
            use_color: Emit ANSI escape sequences when True
        """
        self.box_width = box_width
        self.use_color = use_color

    def _style(self, text: str, style: str) -> str:
        if not self.use_color or not style:
            return text
        return f"{style}{text}{RESET}"

    def _horizontal_line(self, left: str, right: str) -> str:
        return self._style(left + HORIZ * (self.box_width - 2) + right, CYAN)

    def _row(self, segments: Segments) -> str:
        """One boxed line, padded to the box width by visible length."""
        visible = sum(len(text) for text, _ in segments)
        padding = max(self.box_width - 2 - visible, 0)
        body = "".join(self._style(text, style) for text, style in segments)
        border = self._style(VERT, CYAN)
        return f"{border}{body}{' ' * padding}{border}"

    def _centered_row(self, text: str, style: str = "") -> str:
        inner = self.box_width - 2
        left = max((inner - len(text)) // 2, 0)
        right = max(inner - len(text) - left, 0)
        return self._row([(" " * left, ""), (text, style), (" " * right, "")])

    def render_scanning_banner(self) -> str:
        return self._style("Scanning for git repositories with uncommitted changes...", YELLOW)

    def render_empty(self) -> str:
        message = "✓ No uncommitted changes found in any git repository!"
        return "\n" + self._style(message, BOLD + GREEN) + "\n"

    def render_header(self) -> str:
        """Page header with the report title."""
        lines = [
            "",
            self._horizontal_line(TOP_LEFT, TOP_RIGHT),
            self._centered_row(TITLE, BOLD + BG_BLUE),
            self._horizontal_line(BOT_LEFT, BOT_RIGHT),
            "",
        ]
        return "\n".join(lines)

    def _branch_segments(self, repo: RepositoryStatus) -> List[Tuple[str, str]]:
        segments = [
            ("  ", ""),
            ("Branch:", BOLD),
            (" ", ""),
            (repo.branch or "(unknown)", GREEN),
        ]
        if repo.tracking_branch:
            segments.extend([(" -> ", ""), (repo.tracking_branch, BLUE)])
        return segments

    def _remote_segments(self, repo: RepositoryStatus) -> List[Tuple[str, str]]:
        segments = [("  ", ""), ("Remote:", BOLD), (" ", "")]
        if not repo.has_remote:
            segments.append(("No remote configured", RED))
            return segments

        host = repo.remote_host
        if host:
            segments.append((host, BLUE))
        else:
            segments.append(("Remote configured", GREEN))

        segments.append((" ", ""))
        if repo.is_pushed:
            segments.append(("(pushed)", GREEN))
        else:
            segments.append(("(not pushed)", YELLOW))
        return segments

    def _ahead_behind_segments(self, repo: RepositoryStatus) -> List[Tuple[str, str]]:
        segments = [("  ", "")]
        if repo.ahead > 0:
            segments.append((f"↑ {repo.ahead} ahead", GREEN))
        if repo.ahead > 0 and repo.behind > 0:
            segments.append(("  ", ""))
        if repo.behind > 0:
            segments.append((f"↓ {repo.behind} behind", RED))
        return segments

    def _summary_segments(self, repo: RepositoryStatus) -> List[Tuple[str, str]]:
        segments = [("  ", ""), ("Summary:", BOLD), (" ", "")]
        counts = [
            (repo.staged_count, "staged", GREEN),
            (repo.unstaged_count, "modified", YELLOW),
            (repo.untracked_count, "untracked", MAGENTA),
        ]
        parts = [(f"{count} {label}", color) for count, label, color in counts if count > 0]
        for position, part in enumerate(parts):
            if position:
                segments.append((" ", ""))
            segments.append(part)
        return segments

    def _change_row(self, record: ChangeRecord) -> str:
        color = status_color(record)
        name = truncate_path(record.path)
        return self._row(
            [
                ("  ", ""),
                (f"{name:<{PATH_COLUMN_WIDTH}}", color),
                ("  ", ""),
                (f"{status_label(record):<{STATUS_COLUMN_WIDTH}}", color),
            ]
        )

    def render_repository(self, repo: RepositoryStatus) -> str:
        """Bordered block describing one repository."""
        lines = [
            self._horizontal_line(TOP_LEFT, TOP_RIGHT),
            self._row([(" ", ""), (repo.root_path, BOLD + WHITE)]),
            self._horizontal_line(T_RIGHT, T_LEFT),
            self._row(self._branch_segments(repo)),
            self._row(self._remote_segments(repo)),
        ]

        if repo.ahead > 0 or repo.behind > 0:
            lines.append(self._row(self._ahead_behind_segments(repo)))

        lines.append(self._row(self._summary_segments(repo)))
        lines.append(self._horizontal_line(T_RIGHT, T_LEFT))
        lines.append(
            self._row(
                [
                    ("  ", ""),
                    (f"{'File':<{PATH_COLUMN_WIDTH}}  {'Status':<{STATUS_COLUMN_WIDTH}}", BOLD),
                ]
            )
        )
        lines.extend(self._change_row(record) for record in repo.changes)
        lines.append(self._horizontal_line(BOT_LEFT, BOT_RIGHT))
        lines.append("")
        return "\n".join(lines)

    def render_summary(self, result: ScanResult) -> str:
        """Aggregate footer across every reported repository."""
        title = f"SUMMARY: {result.repository_count} repositories with uncommitted changes"
        lines = [
            self._horizontal_line(TOP_LEFT, TOP_RIGHT),
            self._centered_row(title),
            self._horizontal_line(T_RIGHT, T_LEFT),
            self._row(
                [
                    ("  ", ""),
                    (str(result.total_staged), GREEN),
                    (" staged  |  ", ""),
                    (str(result.total_unstaged), YELLOW),
                    (" modified  |  ", ""),
                    (str(result.total_untracked), MAGENTA),
                    (" untracked", ""),
                ]
            ),
            self._horizontal_line(BOT_LEFT, BOT_RIGHT),
            "",
        ]
        return "\n".join(lines)

    def render(self, result: ScanResult) -> str:
        """
        Render the full report.

        Args:
            result: Scan result to render

        Returns:
            Report text, or the empty-result message when nothing was found
        """
        if not result.repositories:
            return self.render_empty()

        blocks = [self.render_header()]
        blocks.extend(self.render_repository(repo) for repo in result.repositories)
        blocks.append(self.render_summary(result))
        return "\n".join(blocks)
