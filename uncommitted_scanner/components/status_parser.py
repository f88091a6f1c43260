"""
Porcelain status parsing component.

This module turns ``git status --porcelain`` lines into ChangeRecords. Each
line carries an index (staged) code, a worktree (unstaged) code and a path,
so one line yields zero, one or two records.

git writes a path as a C-style quoted string when it holds whitespace,
quotes, control characters or non-ASCII bytes (``"sp ace.log"``,
``"\\303\\274.txt"``). Paths are decoded back to their real names before
they are checked against the ignore rules or stored on a record.
"""

from typing import Callable, Iterable, List, Optional, Set, Tuple

from ..interfaces import IStatusParser
from ..models.change import ChangeRecord, ChangeStatus
from ..models.repository import RepositoryStatus
from ..utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from ..utils.logging import get_logger

logger = get_logger("status.parser")

COMPONENT = "status.parser"

# Two status codes, a separator and at least one path character
MIN_LINE_LENGTH = 4
RENAME_SEPARATOR = " -> "
UNTRACKED_CODE = "?"
QUOTE = '"'
OCTAL_DIGITS = "01234567"

# Single-character escapes git uses inside quoted paths
C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}

IgnoreChecker = Callable[[List[str]], Set[str]]


def _is_change_code(code: str) -> bool:
    return code not in (" ", UNTRACKED_CODE)


def _read_quoted(field: str, start: int) -> Optional[Tuple[str, int]]:
    """
    Decode the quoted path opening at field[start].

    Octal escapes are raw bytes of a UTF-8 name, so they are collected as
    bytes and decoded together.

    Returns:
        (path, index just past the closing quote), or None if the quote
        is never closed
    """
    raw = bytearray()
    i = start + 1
    while i < len(field):
        char = field[i]
        if char == QUOTE:
            return raw.decode("utf-8", errors="replace"), i + 1

        if char != "\\" or i + 1 == len(field):
            raw.extend(char.encode("utf-8"))
            i += 1
            continue

        octal = field[i + 1:i + 4]
        if len(octal) == 3 and all(digit in OCTAL_DIGITS for digit in octal):
            raw.append(int(octal, 8) & 0xFF)
            i += 4
        else:
            escaped = field[i + 1]
            raw.extend(C_ESCAPES.get(escaped, escaped).encode("utf-8"))
            i += 2

    return None


def _read_path(field: str, start: int) -> Tuple[str, int]:
    """Read one path from field[start:], quoted or bare."""
    if field.startswith(QUOTE, start):
        decoded = _read_quoted(field, start)
        if decoded is not None:
            return decoded
        get_error_tracker().record_error(
            component=COMPONENT,
            category=ErrorCategory.PARSING,
            severity=ErrorSeverity.LOW,
            message="Unterminated quoted path in status output",
            context={"field": field},
        )
        return field[start:], len(field)

    # Bare paths contain no spaces, so a separator always marks a rename
    separator = field.find(RENAME_SEPARATOR, start)
    end = len(field) if separator == -1 else separator
    return field[start:end], end


def decode_path_field(field: str) -> Tuple[str, str]:
    """
    Decode the path field of a porcelain status line.

    Args:
        field: Everything after the two status codes and the separator

    Returns:
        (display_path, ignore_path). For renames and copies the display path
        is "old -> new" and the ignore path is the destination.
    """
    source, end = _read_path(field, 0)
    if not field.startswith(RENAME_SEPARATOR, end):
        return source, source

    destination, _ = _read_path(field, end + len(RENAME_SEPARATOR))
    return f"{source}{RENAME_SEPARATOR}{destination}", destination


class StatusParser(IStatusParser):
    """
    Parses porcelain status output for one repository.

    Paths matched by the ignore rules are discarded before any record is
    created, which hides files that became ignored after being tracked.
    """

    def __init__(self, ignore_checker: Optional[IgnoreChecker] = None):
        """
        Initialize the parser.

        Args:
            ignore_checker: Callable taking candidate paths and returning the
                ignored ones. None disables ignore filtering.
        """
        self.ignore_checker = ignore_checker

    @staticmethod
    def split_line(raw_line: str) -> Optional[Tuple[str, str, str, str]]:
        """
        Split a status line into (index_code, worktree_code, path, ignore_path).

        Quoted paths are decoded; ignore_path is the name to test against
        the ignore rules.

        Returns:
            The four fields, or None when the line is too short to hold a path
        """
        line = raw_line.rstrip("\r\n")
        if len(line) < MIN_LINE_LENGTH:
            return None

        path, ignore_path = decode_path_field(line[3:])
        return line[0], line[1], path, ignore_path
    @staticmethod
    def classify(index_code: str, worktree_code: str, path: str) -> List[ChangeRecord]:
        """
        Build the records for one pair of status codes.

        Index and worktree positions are evaluated independently; a file can
        be both staged and modified again in the working tree. A '??' pair is
        a single untracked record.
        """
        records = []

        if _is_change_code(index_code):
            records.append(
                ChangeRecord(path=path, status=ChangeStatus.from_code(index_code), staged=True)
            )

        if _is_change_code(worktree_code):
            records.append(
                ChangeRecord(path=path, status=ChangeStatus.from_code(worktree_code), staged=False)
            )

        if index_code == UNTRACKED_CODE and worktree_code == UNTRACKED_CODE:
            records.append(ChangeRecord(path=path, status=ChangeStatus.UNTRACKED, staged=False))

        return records

    def _ignored(self, paths: List[str]) -> Set[str]:
        if self.ignore_checker is None or not paths:
            return set()
        return self.ignore_checker(paths)

    def parse_line(self, raw_line: str) -> List[ChangeRecord]:
        """
        Parse one porcelain status line.

        Args:
            raw_line: Line from git status --porcelain, with or without newline

        Returns:
            Zero, one or two ChangeRecords
        """
        fields = self.split_line(raw_line)
        if fields is None:
            return []

        index_code, worktree_code, path, target = fields
        if target in self._ignored([target]):
            logger.debug("Skipping ignored path", extra={"path": path})
            return []

        return self.classify(index_code, worktree_code, path)

    def parse_lines(self, raw_lines: Iterable[str]) -> List[ChangeRecord]:
        """
        Parse a full status listing, checking ignore rules in one batch.

        The accept/reject outcome per path is the same as parse_line.
        """
        entries = [fields for fields in map(self.split_line, raw_lines) if fields]
        ignored = self._ignored([target for _, _, _, target in entries])

        records = []
        for index_code, worktree_code, path, target in entries:
            if target in ignored:
                logger.debug("Skipping ignored path", extra={"path": path})
                continue
            records.extend(self.classify(index_code, worktree_code, path))

        return records

    def populate(self, repo: RepositoryStatus, raw_lines: Iterable[str]) -> int:
        """
        Add accepted records to a repository.

        Args:
            repo: Repository receiving the records
            raw_lines: Porcelain status lines for that repository

        Returns:
            Number of records added
        """
        records = self.parse_lines(raw_lines)
        for record in records:
            repo.add_change(record)
        return len(records)
