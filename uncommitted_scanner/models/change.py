"""
Change record models.

A ChangeRecord is the smallest unit of the scan: one path, one status
classification and whether the change lives in the index.
"""

from dataclasses import dataclass
from enum import Enum


class ChangeStatus(Enum):
    """Classification of a single change reported by git."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    UNTRACKED = "?"
    RENAMED = "R"
    UNKNOWN = "X"

    @classmethod
    def from_code(cls, code: str) -> "ChangeStatus":
        """Map a porcelain status character to a ChangeStatus."""
        for status in cls:
            if status is not cls.UNKNOWN and status.value == code:
                return status
        return cls.UNKNOWN


@dataclass(frozen=True)
class ChangeRecord:
    """One change to one path, either in the index or in the working tree."""

    path: str
    status: ChangeStatus
    staged: bool = False

    @property
    def is_untracked(self) -> bool:
        return self.status is ChangeStatus.UNTRACKED

    def validate(self) -> bool:
        """Validate change record data."""
        if not self.path:
            raise ValueError("path cannot be empty")

        if "\n" in self.path:
            raise ValueError("path cannot contain a newline")

        if not isinstance(self.status, ChangeStatus):
            raise ValueError("status must be a ChangeStatus enum")

        if not isinstance(self.staged, bool):
            raise ValueError("staged must be a boolean")

        if self.is_untracked and self.staged:
            raise ValueError("untracked changes cannot be staged")

        return True
